"""
Term-bank loading and indexing for Wordtap.

Term banks follow the Yomitan v3 term schema. Each record is an 8-item array:

    [0] expression        : str
    [1] reading           : str
    [2] definition tags   : str | None
    [3] rule identifiers  : str
    [4] popularity score  : number, higher is more popular
    [5] glossary          : list (plain strings for our dictionaries)
    [6] sequence number   : int, shared by spellings of the same headword
    [7] term tags         : str
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

TERM_BANK_PATTERN = r"^term_bank_\d+\.json$"
RECORD_FIELDS = 8


class MalformedRecordError(ValueError):
    """Raised when term-bank input does not have the expected shape."""


@dataclass(frozen=True)
class DictionaryRecord:
    expression: str
    reading: str
    definition_tags: Optional[str]
    rules: str
    score: float
    glossary: Tuple[Any, ...]
    sequence: int
    term_tags: str

    @classmethod
    def from_raw(cls, raw: Any) -> "DictionaryRecord":
        if not isinstance(raw, (list, tuple)):
            raise MalformedRecordError(
                f"Got non-array entity ({type(raw).__name__}) for entry: {raw!r}"
            )
        if len(raw) != RECORD_FIELDS:
            raise MalformedRecordError(
                f"Expected {RECORD_FIELDS} fields, got {len(raw)} for entry: {raw!r}"
            )
        expression, reading, tags, rules, score, glossary, sequence, term_tags = raw
        if not isinstance(expression, str) or not isinstance(reading, str):
            raise MalformedRecordError(
                f"Expression and reading must be strings for entry: {raw!r}"
            )
        if not isinstance(glossary, (list, tuple)):
            raise MalformedRecordError(
                f"Got non-array glossary ({type(glossary).__name__}) for entry: {raw!r}"
            )
        return cls(
            expression=expression,
            reading=reading,
            definition_tags=tags,
            rules=rules,
            score=score,
            glossary=tuple(glossary),
            sequence=sequence,
            term_tags=term_tags,
        )


@dataclass(frozen=True)
class IndexedRecord:
    id: int
    record: DictionaryRecord


class DictionaryIndex:
    """Read-only mappings from headword to the records filed under it."""

    def __init__(
        self,
        by_expression: Dict[str, Tuple[IndexedRecord, ...]],
        by_reading: Dict[str, Tuple[IndexedRecord, ...]],
    ):
        self.by_expression = by_expression
        self.by_reading = by_reading

    def __len__(self) -> int:
        return sum(len(matches) for matches in self.by_expression.values())

    def candidates(self, term: str) -> Tuple[Tuple[IndexedRecord, ...], Tuple[IndexedRecord, ...]]:
        return self.by_expression.get(term, ()), self.by_reading.get(term, ())

    @classmethod
    def build(cls, records: Iterable[Any]) -> "DictionaryIndex":
        """
        Index records by expression and by reading.

        Each record receives a sequential ID in input order and is filed under
        both of its headwords with that same ID.

        Args:
            records: raw 8-item arrays or DictionaryRecord instances

        Raises:
            MalformedRecordError: if a raw record is not an 8-item array with
                string headwords and an array glossary
        """
        by_expression: Dict[str, List[IndexedRecord]] = {}
        by_reading: Dict[str, List[IndexedRecord]] = {}

        for current_id, raw in enumerate(records):
            record = raw if isinstance(raw, DictionaryRecord) else DictionaryRecord.from_raw(raw)
            indexed = IndexedRecord(id=current_id, record=record)
            by_expression.setdefault(record.expression, []).append(indexed)
            by_reading.setdefault(record.reading, []).append(indexed)

        # The index is read-only once built.
        return cls(
            {key: tuple(matches) for key, matches in by_expression.items()},
            {key: tuple(matches) for key, matches in by_reading.items()},
        )

    @classmethod
    def load(cls, dictionary_dir: str, pattern: str = TERM_BANK_PATTERN) -> "DictionaryIndex":
        """
        Load every term bank in a directory.

        Args:
            dictionary_dir: directory holding `term_bank_N.json` files
            pattern: regular expression a file name must match in full

        Raises:
            FileNotFoundError: if the directory does not exist
            MalformedRecordError: if a bank or one of its records is malformed
        """
        if not os.path.isdir(dictionary_dir):
            raise FileNotFoundError(f"Dictionary directory not found: {dictionary_dir}")

        matcher = re.compile(pattern)
        files = [name for name in sorted(os.listdir(dictionary_dir)) if matcher.match(name)]

        index = cls.build(_iter_bank_records(dictionary_dir, files))
        logger.info("Loaded %d records from %d term banks in %s", len(index), len(files), dictionary_dir)
        return index


def _iter_bank_records(dictionary_dir: str, files: List[str]) -> Iterable[Any]:
    for name in files:
        path = os.path.join(dictionary_dir, name)
        with open(path, "r", encoding="utf-8") as f:
            entries = json.load(f)
        if not isinstance(entries, list):
            raise MalformedRecordError(f"Term bank {name} is not a JSON array")
        logger.debug("Read %d records from %s", len(entries), name)
        yield from entries
