"""
Unit tests for the reader client and its click flow.
"""

import os
import sys
from urllib.parse import unquote

import httpx
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../backend"))

from client import DEFAULT_MESSAGE, DictionaryClient, Display, DisplayKind, ReaderSession, render_text
from models import DictionaryEntryPayload
from segmenter import RegexSegmenter, tokenize
from spans import flatten_fragments

ENTRY = {
    "expression": "quick",
    "reading": "quick",
    "definitions": [{"tags": "adj", "gloss": ["fast", "rapid"]}],
}


def _client(handler):
    return DictionaryClient(base_url="http://wordtap.test", transport=httpx.MockTransport(handler))


class TestDictionaryClient:
    """Test suite for DictionaryClient."""

    def test_fetch_encodes_term(self):
        seen = []

        def handler(request):
            seen.append(request.url.raw_path.decode())
            return httpx.Response(200, json=[ENTRY])

        with _client(handler) as client:
            entries = client.fetch("じしょ")

        assert unquote(seen[0]) == "/dictionary/じしょ"
        assert "%E3%81%98" in seen[0]
        assert entries[0].expression == "quick"
        assert entries[0].definitions[0].gloss == ["fast", "rapid"]

    def test_non_success_status_raises(self):
        with _client(lambda request: httpx.Response(503)) as client:
            with pytest.raises(httpx.HTTPStatusError):
                client.fetch("quick")

    def test_context_manager_closes_transport(self):
        with _client(lambda request: httpx.Response(200, json=[])) as client:
            assert client.fetch("quick") == []

        assert client._client.is_closed


class TestReaderSession:
    """Test suite for the click flow."""

    def setup_method(self):
        """Set up test fixtures."""
        self.flat = flatten_fragments(["so qu", "ick"])
        self.tokens = tokenize(RegexSegmenter(), self.flat.text)
        self.client = None

    def teardown_method(self):
        """Close the client created by the test."""
        if self.client is not None:
            self.client.close()

    def _session(self, handler):
        self.client = _client(handler)
        return ReaderSession(self.client)

    def test_click_highlights_and_fetches(self):
        session = self._session(lambda request: httpx.Response(200, json=[ENTRY]))

        display = session.click(self.flat, self.flat.fragments[1].node, 0, self.tokens)

        assert display.kind is DisplayKind.ENTRIES
        assert display.term == "quick"
        assert session.current_highlight.start_fragment is self.flat.fragments[0]
        assert session.current_highlight.start_offset == 3
        assert session.current_highlight.end_fragment is self.flat.fragments[1]
        assert session.current_highlight.end_offset == 3

    def test_click_outside_text_resets(self):
        session = self._session(lambda request: httpx.Response(200, json=[ENTRY]))
        session.click(self.flat, self.flat.fragments[0].node, 0, self.tokens)

        display = session.click(self.flat, object(), 0, self.tokens)

        assert display.kind is DisplayKind.DEFAULT
        assert display.message == DEFAULT_MESSAGE
        assert session.current_highlight is None

    def test_status_error_becomes_inline_message(self):
        session = self._session(lambda request: httpx.Response(500))

        display = session.click(self.flat, self.flat.fragments[0].node, 0, self.tokens)

        assert display.kind is DisplayKind.ERROR
        assert display.message == "Error fetching dictionary data: Received status code 500"
        assert session.current_highlight is not None

    def test_connection_error_becomes_inline_message(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        session = self._session(handler)

        display = session.click(self.flat, self.flat.fragments[0].node, 0, self.tokens)

        assert display.kind is DisplayKind.ERROR
        assert display.message.startswith("Error fetching dictionary data:")


class TestRenderText:
    def test_entries(self):
        display = Display(
            kind=DisplayKind.ENTRIES,
            term="quick",
            entries=[DictionaryEntryPayload.model_validate(ENTRY)],
        )

        assert render_text(display) == "Search term: quick\nquick (quick)\n  - fast, rapid"

    def test_no_entries(self):
        display = Display(kind=DisplayKind.ENTRIES, term="xyz", entries=[])

        assert render_text(display) == "Search term: xyz\nNo dictionary entries found."

    def test_default(self):
        display = Display()

        assert display.kind == "default"
        assert render_text(display) == DEFAULT_MESSAGE
