"""Service layer for coordinating segmentation, click resolution and lookup."""

from __future__ import annotations

import logging
from typing import List

from dictionary import Dictionary, MergedEntry
from models import (
    ClickRequest,
    ClickResponsePayload,
    DefinitionPayload,
    DictionaryEntryPayload,
    SpanPayload,
    TokenPayload,
)
from resolver import resolve_click
from segmenter import Segmenter, tokenize
from spans import flatten_fragments, flatten_html

logger = logging.getLogger(__name__)


def to_payload(entry: MergedEntry) -> DictionaryEntryPayload:
    return DictionaryEntryPayload(
        expression=entry.expression,
        reading=entry.reading,
        definitions=[
            DefinitionPayload(tags=definition.tags, gloss=definition.gloss)
            for definition in entry.definitions
        ],
    )


class LookupService:
    """Wraps the merged dictionary for API consumers."""

    def __init__(self, dictionary: Dictionary):
        self.dictionary = dictionary

    def lookup(self, term: str) -> List[DictionaryEntryPayload]:
        # Headwords match exactly; only an all-blank term is short-circuited.
        if not term.strip():
            return []

        results = [to_payload(entry) for entry in self.dictionary.lookup(term)]
        logger.info("Sending definitions for %s", [r.expression for r in results])
        return results


class ReaderService:
    """Turns caret positions in reader text into tokens and definitions."""

    def __init__(self, segmenter: Segmenter, lookup: LookupService):
        self.segmenter = segmenter
        self.lookup = lookup

    def tokenize(self, text: str) -> List[TokenPayload]:
        return [
            TokenPayload(surface=t.surface, normalized=t.normalized, start=t.start, end=t.end)
            for t in tokenize(self.segmenter, text)
        ]

    def resolve(self, request: ClickRequest) -> ClickResponsePayload:
        if request.html is not None:
            flat = flatten_html(request.html)
        else:
            flat = flatten_fragments(request.fragments or [])

        fragment = flat.fragment_at(request.fragment_index)
        if fragment is None:
            return ClickResponsePayload(found=False)

        tokens = tokenize(self.segmenter, flat.text)
        clicked = resolve_click(flat, fragment.node, request.offset, tokens)
        if clicked is None:
            return ClickResponsePayload(found=False)

        positions = {id(f): i for i, f in enumerate(flat.fragments)}
        span = clicked.span
        entries = self.lookup.lookup(clicked.term) if request.include_entries else []

        return ClickResponsePayload(
            found=True,
            term=clicked.term,
            surface=clicked.token.surface,
            span=SpanPayload(
                start_fragment=positions[id(span.start_fragment)],
                start_offset=span.start_offset,
                end_fragment=positions[id(span.end_fragment)],
                end_offset=span.end_offset,
            ),
            entries=entries,
        )
