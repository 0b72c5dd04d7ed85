"""Lazy, random-access token stream over a query, and bracket matching."""

from __future__ import annotations

import copy
import functools
from typing import Iterator, List

from zeitgeist.lexer import Lexer, QueryText, Token, TokenType

_MATCHING_CLOSER = {
    TokenType.OPENING_ROUND_BRACKET: TokenType.CLOSING_ROUND_BRACKET,
    TokenType.OPENING_SQUARE_BRACKET: TokenType.CLOSING_SQUARE_BRACKET,
}
_CLOSERS = frozenset(_MATCHING_CLOSER.values())


class Tokens:
    """Tokens of a query, produced on demand and kept for lookahead of any depth.

    Whitespace and comments are skipped when ``skip_insignificant`` is true.
    Indexing past the end returns the END_OF_STREAM token.
    """

    def __init__(
        self,
        query: QueryText,
        max_query_size: int = 0,
        skip_insignificant: bool = True,
    ) -> None:
        self._lexer = Lexer(query, max_query_size)
        self._skip_insignificant = skip_insignificant
        self._data: List[Token] = []
        self._max_pos = 0

    def __getitem__(self, index: int) -> Token:
        if index < 0:
            raise IndexError("token index must not be negative")
        while True:
            if index < len(self._data):
                self._max_pos = max(self._max_pos, index)
                return self._data[index]
            if self._data and self._data[-1].is_end():
                self._max_pos = len(self._data) - 1
                return self._data[-1]
            token = self._lexer.next_token()
            if not self._skip_insignificant or token.is_significant():
                self._data.append(token)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to, but not including, the end of the stream."""
        index = 0
        while not (token := self[index]).is_end():
            yield token
            index += 1

    def max(self) -> Token:
        """Return the rightmost token looked at so far."""
        if not self._data:
            return self[0]
        return self._data[self._max_pos]

    def reset(self) -> None:
        """Forget how far the stream has been looked at."""
        self._max_pos = 0


@functools.total_ordering
class TokenIterator:
    """A position in a :class:`Tokens` stream."""

    def __init__(self, tokens: Tokens) -> None:
        self._tokens = tokens
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    def get(self) -> Token:
        """Return the token at the current position."""
        return self._tokens[self._index]

    def advance(self) -> "TokenIterator":
        """Move one token forward and return self."""
        self._index += 1
        return self

    def retreat(self) -> "TokenIterator":
        """Move one token back and return self."""
        if self._index == 0:
            raise IndexError("cannot move before the first token")
        self._index -= 1
        return self

    def is_valid(self) -> bool:
        """Return False at the end of the stream or on an error token."""
        return self.get().type < TokenType.END_OF_STREAM

    def max(self) -> Token:
        """Return the rightmost token looked at so far."""
        return self._tokens.max()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenIterator):
            return NotImplemented
        return self._index == other._index

    def __lt__(self, other: "TokenIterator") -> bool:
        if not isinstance(other, TokenIterator):
            return NotImplemented
        return self._index < other._index

    __hash__ = None  # type: ignore[assignment]


def check_unmatched_parentheses(iterator: TokenIterator) -> List[Token]:
    """Return the unmatched brackets from the iterator's position on.

    Scanning stops at the first closing bracket that has no match, which is
    then the last element. An empty list means every bracket is matched.
    The given iterator is not moved.
    """
    it = copy.copy(iterator)
    stack: List[Token] = []
    while it.is_valid():
        token = it.get()
        if token.type in _MATCHING_CLOSER:
            stack.append(token)
        elif token.type in _CLOSERS:
            if not stack or _MATCHING_CLOSER[stack[-1].type] is not token.type:
                stack.append(token)
                return stack
            stack.pop()
        it.advance()
    return stack