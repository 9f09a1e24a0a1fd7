"""Shared API models for the Wordtap backend."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Dictionary payloads

class DefinitionPayload(BaseModel):
    tags: Optional[str] = None
    gloss: List[Any] = Field(default_factory=list)


class DictionaryEntryPayload(BaseModel):
    expression: str
    reading: str
    definitions: List[DefinitionPayload] = Field(default_factory=list)


# Tokenization payloads

class TokenizeRequest(BaseModel):
    text: str


class TokenPayload(BaseModel):
    surface: str
    normalized: str
    start: int
    end: int


class TokenizeResponsePayload(BaseModel):
    tokens: List[TokenPayload] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Click resolution payloads
# ---------------------------------------------------------------------------


class ClickRequest(BaseModel):
    """A caret position inside either HTML markup or pre-split fragments.

    `fragment_index` counts text leaves in document order.
    """

    model_config = ConfigDict(populate_by_name=True)

    html: Optional[str] = None
    fragments: Optional[List[str]] = None
    fragment_index: int = Field(alias="fragment_index", ge=0)
    offset: int = Field(ge=0)
    include_entries: bool = Field(default=True, alias="include_entries")

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "ClickRequest":
        if (self.html is None) == (self.fragments is None):
            raise ValueError("Provide exactly one of 'html' or 'fragments'")
        return self


class SpanPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_fragment: int = Field(alias="start_fragment")
    start_offset: int = Field(alias="start_offset")
    end_fragment: int = Field(alias="end_fragment")
    end_offset: int = Field(alias="end_offset")


class ClickResponsePayload(BaseModel):
    found: bool = False
    term: Optional[str] = None
    surface: Optional[str] = None
    span: Optional[SpanPayload] = None
    entries: List[DictionaryEntryPayload] = Field(default_factory=list)
