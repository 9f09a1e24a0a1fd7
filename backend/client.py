"""
Reader-side client for Wordtap.

Mirrors what the browser front end does on each click: drop the previous
highlight, resolve the clicked token, highlight it, and fetch its definitions
over HTTP. Transport failures end up as an inline error display; they never
touch the resolver or the dictionary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Sequence
from urllib.parse import quote

import httpx

from models import DictionaryEntryPayload
from resolver import ResolvedSpan, resolve_click
from segmenter import Token
from spans import FlatText

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Click a word to look up the definition"
EMPTY_MESSAGE = "No dictionary entries found."


class DictionaryClient:
    """Thin httpx wrapper around `GET /dictionary/{term}`."""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:3000",
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._client = httpx.Client(base_url=base_url, transport=transport, timeout=timeout)

    def fetch(self, term: str) -> List[DictionaryEntryPayload]:
        response = self._client.get(f"/dictionary/{quote(term, safe='')}")
        response.raise_for_status()
        return [DictionaryEntryPayload.model_validate(item) for item in response.json()]

    def close(self):
        self._client.close()

    def __enter__(self) -> "DictionaryClient":
        return self

    def __exit__(self, *exc_info):
        self.close()


class DisplayKind(str, Enum):
    DEFAULT = "default"
    ENTRIES = "entries"
    ERROR = "error"


@dataclass
class Display:
    kind: DisplayKind = DisplayKind.DEFAULT
    term: Optional[str] = None
    entries: List[DictionaryEntryPayload] = field(default_factory=list)
    message: str = DEFAULT_MESSAGE


class ReaderSession:
    """Owns the single current-highlight slot for one reader view."""

    def __init__(self, client: DictionaryClient):
        self.client = client
        self.current_highlight: Optional[ResolvedSpan] = None

    def clear_highlight(self):
        self.current_highlight = None

    def click(self, flat: FlatText, node: Any, offset: int, tokens: Sequence[Token]) -> Display:
        self.clear_highlight()

        clicked = resolve_click(flat, node, offset, tokens)
        if clicked is None:
            return Display()

        self.current_highlight = clicked.span

        try:
            entries = self.client.fetch(clicked.term)
        except httpx.HTTPStatusError as exc:
            message = f"Received status code {exc.response.status_code}"
            logger.warning("Lookup for %r failed: %s", clicked.term, message)
            return Display(kind=DisplayKind.ERROR, term=clicked.term, message=f"Error fetching dictionary data: {message}")
        except httpx.HTTPError as exc:
            logger.warning("Lookup for %r failed: %s", clicked.term, exc)
            return Display(kind=DisplayKind.ERROR, term=clicked.term, message=f"Error fetching dictionary data: {exc}")

        return Display(kind=DisplayKind.ENTRIES, term=clicked.term, entries=entries, message="")


def render_text(display: Display) -> str:
    if display.kind != DisplayKind.ENTRIES:
        return display.message

    lines = [f"Search term: {display.term}"]
    if not display.entries:
        lines.append(EMPTY_MESSAGE)
    for entry in display.entries:
        lines.append(f"{entry.expression} ({entry.reading})")
        for definition in entry.definitions:
            lines.append("  - " + ", ".join(str(g) for g in definition.gloss))
    return "\n".join(lines)
