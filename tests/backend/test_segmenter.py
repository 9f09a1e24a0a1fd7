"""
Unit tests for the segmenter adapters and token offset assignment.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../backend"))

from segmenter import (
    JanomeSegmenter,
    RegexSegmenter,
    Segment,
    SegmentationError,
    Token,
    create_segmenter,
    tokenize,
)


class FixedSegmenter:
    """Returns a canned segmentation regardless of input."""

    def __init__(self, segments):
        self.segments = segments

    def segment(self, text):
        return list(self.segments)


class TestTokenize:
    """Test suite for tokenize()."""

    def test_offsets_accumulate_from_surfaces(self):
        segmenter = FixedSegmenter(
            [Segment("あ", "あ"), Segment("[.", "[."), Segment("い", "い")]
        )
        tokens = tokenize(segmenter, "あ[.い")

        assert tokens == [
            Token(surface="あ", normalized="あ", start=0, end=1),
            Token(surface="[.", normalized="[.", start=1, end=3),
            Token(surface="い", normalized="い", start=3, end=4),
        ]

    def test_placeholder_basic_form_falls_back_to_surface(self):
        segmenter = FixedSegmenter([Segment("ワードタップ", "*"), Segment("だ", "")])
        tokens = tokenize(segmenter, "ワードタップだ")

        assert [t.normalized for t in tokens] == ["ワードタップ", "だ"]

    def test_empty_text(self):
        assert tokenize(FixedSegmenter([]), "") == []

    def test_mismatched_surface_raises(self):
        segmenter = FixedSegmenter([Segment("あい", "あい")])
        with pytest.raises(SegmentationError):
            tokenize(segmenter, "あう")

    def test_incomplete_coverage_raises(self):
        segmenter = FixedSegmenter([Segment("あ", "あ")])
        with pytest.raises(SegmentationError):
            tokenize(segmenter, "あい")


class TestRegexSegmenter:
    """Test suite for the word/non-word segmenter."""

    def test_covers_text_and_casefolds(self):
        tokens = tokenize(RegexSegmenter(), "Hello, World")

        assert [t.surface for t in tokens] == ["Hello", ", ", "World"]
        assert [t.normalized for t in tokens] == ["hello", ", ", "world"]
        assert tokens[-1].end == len("Hello, World")


class TestCreateSegmenter:
    def test_known_names(self):
        assert isinstance(create_segmenter("regex"), RegexSegmenter)
        assert isinstance(create_segmenter(" Janome "), JanomeSegmenter)

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            create_segmenter("mecab-ko")


@pytest.mark.unit
def test_janome_deinflects_to_basic_form():
    pytest.importorskip("janome")

    tokens = tokenize(JanomeSegmenter(), "辞書を引いた")

    assert "".join(t.surface for t in tokens) == "辞書を引いた"
    assert tokens[0].surface == "辞書"
    assert "引く" in [t.normalized for t in tokens]
