"""
Segmenter adapters for Wordtap.

A segmenter splits a flat string into contiguous surface runs, each carrying a
normalized ("basic") form that is used as the dictionary lookup term. The
resolver only ever sees the `Token` list produced by `tokenize`, so adapters
can be swapped without touching the lookup or click logic.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol

logger = logging.getLogger(__name__)

# Placeholder used by IPADIC-style analyzers when a field is unknown.
_UNKNOWN_FORM = "*"


class SegmentationError(ValueError):
    """Raised when a segmenter does not cover its input exactly."""


@dataclass(frozen=True)
class Segment:
    surface: str
    basic_form: str


@dataclass(frozen=True)
class Token:
    """A segment placed at its logical `[start, end)` range."""

    surface: str
    normalized: str
    start: int
    end: int


class Segmenter(Protocol):
    def segment(self, text: str) -> Iterable[Segment]:
        ...


def tokenize(segmenter: Segmenter, text: str) -> List[Token]:
    """
    Segment text and assign logical offsets.

    Offsets are accumulated from surface lengths rather than taken from the
    analyzer, whose reported positions drift around punctuation runs.

    Raises:
        SegmentationError: if the surfaces do not reproduce `text` exactly
    """
    tokens: List[Token] = []
    offset = 0

    for segment in segmenter.segment(text):
        surface = segment.surface
        if not surface:
            continue
        if text[offset : offset + len(surface)] != surface:
            raise SegmentationError(
                f"Segment {surface!r} does not match input at offset {offset}"
            )
        normalized = segment.basic_form
        if not normalized or normalized == _UNKNOWN_FORM:
            normalized = surface
        tokens.append(
            Token(surface=surface, normalized=normalized, start=offset, end=offset + len(surface))
        )
        offset += len(surface)

    if offset != len(text):
        raise SegmentationError(
            f"Segments cover {offset} of {len(text)} characters"
        )

    return tokens


class JanomeSegmenter:
    """Japanese morphological segmentation backed by Janome."""

    def __init__(self):
        self._tokenizer = None

    def load_model(self):
        """Lazy load the Janome tokenizer and its bundled dictionary."""
        if self._tokenizer is not None:
            return
        try:
            from janome.tokenizer import Tokenizer  # type: ignore
        except ImportError as e:
            raise RuntimeError(
                f"janome is required for Japanese segmentation. Install it with: pip install janome. Reason: {e}"
            ) from e

        logger.info("Loading Janome tokenizer")
        self._tokenizer = Tokenizer()

    def segment(self, text: str) -> Iterable[Segment]:
        if not text:
            return []
        self.load_model()
        return [
            Segment(surface=token.surface, basic_form=token.base_form)
            for token in self._tokenizer.tokenize(text)
        ]


class RegexSegmenter:
    """Splits text into alternating word and non-word runs."""

    def __init__(self, pattern: Optional[str] = None):
        self.pattern = re.compile(pattern or r"\w+|\W+")

    def segment(self, text: str) -> Iterable[Segment]:
        for match in self.pattern.finditer(text):
            surface = match.group(0)
            yield Segment(surface=surface, basic_form=surface.casefold())


def create_segmenter(name: str) -> Segmenter:
    key = name.strip().lower()
    if key == "janome":
        return JanomeSegmenter()
    if key == "regex":
        return RegexSegmenter()
    raise ValueError(f"Unknown segmenter: {name}")
