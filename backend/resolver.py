"""
Click-to-token resolution.

Given a logical click offset, finds the clicked token and re-expresses its
boundaries in fragment-local coordinates so the caller can highlight exactly
that token even when it straddles several fragments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from segmenter import Token
from spans import FlatText, Fragment, logical_offset_of


class MissingBoundsError(RuntimeError):
    """Raised when a resolved token cannot be placed inside the fragments."""


@dataclass(frozen=True)
class ResolvedSpan:
    start_fragment: Fragment
    start_offset: int
    end_fragment: Fragment
    end_offset: int


@dataclass(frozen=True)
class ClickResult:
    token: Token
    span: ResolvedSpan

    @property
    def term(self) -> str:
        return self.token.normalized


def find_token(offset: int, tokens: Sequence[Token]) -> Optional[Token]:
    if offset < 0:
        return None
    # Tokens are contiguous and left-to-right, so checking the end suffices.
    # An offset sitting exactly on a boundary resolves to the token after it.
    for token in tokens:
        if offset < token.end:
            return token
    return None


def map_bounds(token: Token, fragments: Sequence[Fragment]) -> ResolvedSpan:
    """
    Locate the fragments holding a token's start and end.

    Raises:
        MissingBoundsError: if either bound falls outside every fragment
    """
    start: Optional[Fragment] = None
    end: Optional[Fragment] = None

    for fragment in fragments:
        if start is None and token.start <= fragment.end:
            start = fragment
        if token.end <= fragment.end:
            end = fragment
            break

    if start is None or end is None:
        raise MissingBoundsError(
            f"Missing bounding info for clicked token {token.surface!r}"
        )

    return ResolvedSpan(
        start_fragment=start,
        start_offset=token.start - start.start,
        end_fragment=end,
        end_offset=token.end - end.start,
    )


def resolve(
    offset: int, tokens: Sequence[Token], fragments: Sequence[Fragment]
) -> Optional[ResolvedSpan]:
    token = find_token(offset, tokens)
    if token is None:
        return None
    return map_bounds(token, fragments)


def resolve_click(
    flat: FlatText, node: Any, local_offset: int, tokens: Sequence[Token]
) -> Optional[ClickResult]:
    """Resolve a caret position (text node + offset) to the clicked token."""
    fragment = flat.fragment_for(node)
    if fragment is None:
        return None
    if local_offset < 0 or local_offset > fragment.length:
        return None

    token = find_token(logical_offset_of(fragment, local_offset), tokens)
    if token is None:
        return None

    return ClickResult(token=token, span=map_bounds(token, flat.fragments))
