"""Dictionary lookup: merges term-bank matches into ranked headword entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from term_bank import TERM_BANK_PATTERN, DictionaryIndex, DictionaryRecord


@dataclass
class Definition:
    tags: Optional[str]
    gloss: List[Any]


@dataclass
class MergedEntry:
    expression: str
    reading: str
    definitions: List[Definition] = field(default_factory=list)


class Dictionary:
    def __init__(self, index: DictionaryIndex):
        self.index = index

    def lookup(self, term: str) -> List[MergedEntry]:
        """
        Return entries matching `term` by expression or reading.

        Entries are ordered by the popularity of their best record. Records
        sharing a sequence number are merged into one entry.
        """
        by_expression, by_reading = self.index.candidates(term)

        # A record can match both by expression and by reading.
        seen_ids: Set[int] = set()
        unique: List[DictionaryRecord] = []
        for match in [*by_expression, *by_reading]:
            if match.id not in seen_ids:
                seen_ids.add(match.id)
                unique.append(match.record)

        # Stable, so equal scores keep expression-first order.
        unique.sort(key=lambda record: record.score, reverse=True)

        merged: Dict[int, MergedEntry] = {}
        for record in unique:
            definition = Definition(tags=record.definition_tags, gloss=list(record.glossary))
            entry = merged.get(record.sequence)
            if entry is None:
                merged[record.sequence] = MergedEntry(
                    expression=record.expression,
                    reading=record.reading,
                    definitions=[definition],
                )
            elif record.expression == entry.expression:
                entry.definitions.append(definition)
            # Otherwise an archaic or alternate spelling (e.g. これ vs 此れ)
            # whose definitions repeat the canonical form's; the sort above
            # puts the canonical form first.

        return list(merged.values())

    @classmethod
    def load(cls, dictionary_dir: str, pattern: str = TERM_BANK_PATTERN) -> "Dictionary":
        return cls(DictionaryIndex.load(dictionary_dir, pattern))
