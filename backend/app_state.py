"""Backend application state: the dictionary and the services built on it."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from dictionary import Dictionary
from segmenter import Segmenter, create_segmenter
from services import LookupService, ReaderService
from settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


@dataclass
class ReaderServices:
    dictionary: Dictionary
    lookup: LookupService
    reader: ReaderService


class WordtapAppState:
    """Builds the dictionary once, before the first request that needs it."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        dictionary: Optional[Dictionary] = None,
        segmenter: Optional[Segmenter] = None,
    ):
        self._lock = threading.RLock()
        self.settings = settings or default_settings
        self._dictionary = dictionary
        self._segmenter = segmenter
        self._services: Optional[ReaderServices] = None

    def current(self) -> ReaderServices:
        with self._lock:
            if self._services is None:
                self._services = self._build()
            return self._services

    def _build(self) -> ReaderServices:
        dictionary = self._dictionary
        if dictionary is None:
            logger.info("Loading dictionary from %s", self.settings.dictionary_dir)
            dictionary = Dictionary.load(
                self.settings.dictionary_dir, self.settings.term_bank_pattern
            )
        segmenter = self._segmenter or create_segmenter(self.settings.segmenter)

        lookup = LookupService(dictionary)
        reader = ReaderService(segmenter=segmenter, lookup=lookup)
        return ReaderServices(dictionary=dictionary, lookup=lookup, reader=reader)
