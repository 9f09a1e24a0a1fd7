"""Runtime configuration for the Wordtap backend."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WORDTAP_", extra="ignore")

    dictionary_dir: str = "dictionary/jmdict"
    term_bank_pattern: str = r"^term_bank_\d+\.json$"
    segmenter: str = "janome"
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


settings = Settings()
