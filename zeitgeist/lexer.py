"""Tokenizer for SQL query text.

The lexer works on the UTF-8 bytes of a query. Token offsets are byte
positions into that encoding.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum, auto
from typing import Iterator, List, Optional, Union

from zeitgeist.stringutil import (
    is_hex_digit,
    is_number_separator,
    is_numeric_ascii,
    is_whitespace_ascii,
    is_word_char_ascii,
    skip_whitespaces_utf8,
)

QueryText = Union[str, bytes, bytearray]


class TokenType(IntEnum):
    """Kinds of tokens. Error kinds sort after END_OF_STREAM."""

    WHITESPACE = auto()
    COMMENT = auto()
    BARE_WORD = auto()
    NUMBER = auto()
    STRING_LITERAL = auto()
    QUOTED_IDENTIFIER = auto()
    OPENING_ROUND_BRACKET = auto()
    CLOSING_ROUND_BRACKET = auto()
    OPENING_SQUARE_BRACKET = auto()
    CLOSING_SQUARE_BRACKET = auto()
    OPENING_CURLY_BRACE = auto()
    CLOSING_CURLY_BRACE = auto()
    COMMA = auto()
    SEMICOLON = auto()
    VERTICAL_DELIMITER = auto()
    DOT = auto()
    ASTERISK = auto()
    HERE_DOC = auto()
    DOLLAR_SIGN = auto()
    PLUS = auto()
    MINUS = auto()
    SLASH = auto()
    PERCENT = auto()
    ARROW = auto()
    QUESTION_MARK = auto()
    COLON = auto()
    CARET = auto()
    DOUBLE_COLON = auto()
    EQUALS = auto()
    NOT_EQUALS = auto()
    LESS = auto()
    GREATER = auto()
    LESS_OR_EQUALS = auto()
    GREATER_OR_EQUALS = auto()
    SPACESHIP = auto()
    PIPE_MARK = auto()
    CONCATENATION = auto()
    AT = auto()
    DOUBLE_AT = auto()
    END_OF_STREAM = auto()
    ERROR = auto()
    ERROR_MULTILINE_COMMENT_IS_NOT_CLOSED = auto()
    ERROR_SINGLE_QUOTE_IS_NOT_CLOSED = auto()
    ERROR_DOUBLE_QUOTE_IS_NOT_CLOSED = auto()
    ERROR_BACK_QUOTE_IS_NOT_CLOSED = auto()
    ERROR_SINGLE_EXCLAMATION_MARK = auto()
    ERROR_SINGLE_PIPE_MARK = auto()
    ERROR_WRONG_NUMBER = auto()
    ERROR_MAX_QUERY_SIZE_EXCEEDED = auto()


@dataclass(frozen=True)
class Token:
    """A token: its kind and the byte range it covers in the query."""

    type: TokenType
    begin: int
    end: int
    source: bytes = field(default=b"", repr=False, compare=False)

    @property
    def size(self) -> int:
        return self.end - self.begin

    def is_significant(self) -> bool:
        """Return False for whitespace and comments."""
        return self.type not in (TokenType.WHITESPACE, TokenType.COMMENT)

    def is_error(self) -> bool:
        return self.type > TokenType.END_OF_STREAM

    def is_end(self) -> bool:
        return self.type is TokenType.END_OF_STREAM

    def text(self) -> str:
        """Return the token's text decoded from UTF-8."""
        return self.source[self.begin:self.end].decode("utf-8", errors="replace")


_TOKEN_NAMES = {
    t: "".join(part.capitalize() for part in t.name.split("_")) for t in TokenType
}

_ERROR_DESCRIPTIONS = {
    TokenType.ERROR: "Unrecognized token",
    TokenType.ERROR_MULTILINE_COMMENT_IS_NOT_CLOSED: "Multiline comment is not closed",
    TokenType.ERROR_SINGLE_QUOTE_IS_NOT_CLOSED: "Single quoted string is not closed",
    TokenType.ERROR_DOUBLE_QUOTE_IS_NOT_CLOSED: "Double quoted string is not closed",
    TokenType.ERROR_BACK_QUOTE_IS_NOT_CLOSED: "Back quoted string is not closed",
    TokenType.ERROR_SINGLE_EXCLAMATION_MARK: "Exclamation mark can only occur in != operator",
    TokenType.ERROR_SINGLE_PIPE_MARK: "Pipe symbol could only occur in || operator",
    TokenType.ERROR_WRONG_NUMBER: "Wrong number",
    TokenType.ERROR_MAX_QUERY_SIZE_EXCEEDED: "Max query size exceeded",
}


def token_name(token_type: TokenType) -> str:
    """Return the CamelCase name of a token type, e.g. ``BareWord``."""
    return _TOKEN_NAMES[TokenType(token_type)]


def error_token_description(token_type: TokenType) -> str:
    """Return a human-readable description of an error token type."""
    return _ERROR_DESCRIPTIONS.get(TokenType(token_type), "Not an error")


_SINGLE_CHAR_TOKENS = {
    ord("("): TokenType.OPENING_ROUND_BRACKET,
    ord(")"): TokenType.CLOSING_ROUND_BRACKET,
    ord("["): TokenType.OPENING_SQUARE_BRACKET,
    ord("]"): TokenType.CLOSING_SQUARE_BRACKET,
    ord("{"): TokenType.OPENING_CURLY_BRACE,
    ord("}"): TokenType.CLOSING_CURLY_BRACE,
    ord(","): TokenType.COMMA,
    ord(";"): TokenType.SEMICOLON,
    ord("+"): TokenType.PLUS,
    ord("*"): TokenType.ASTERISK,
    ord("%"): TokenType.PERCENT,
    ord("?"): TokenType.QUESTION_MARK,
    ord("^"): TokenType.CARET,
}

# Two-character operators: first byte -> (second byte, combined, alone).
_PAIR_TOKENS = {
    ord(":"): (ord(":"), TokenType.DOUBLE_COLON, TokenType.COLON),
    ord("|"): (ord("|"), TokenType.CONCATENATION, TokenType.PIPE_MARK),
    ord("@"): (ord("@"), TokenType.DOUBLE_AT, TokenType.AT),
    ord("\\"): (ord("G"), TokenType.VERTICAL_DELIMITER, TokenType.ERROR),
    ord(">"): (ord("="), TokenType.GREATER_OR_EQUALS, TokenType.GREATER),
    ord("!"): (ord("="), TokenType.NOT_EQUALS, TokenType.ERROR_SINGLE_EXCLAMATION_MARK),
}

_QUOTES = {
    ord("'"): (TokenType.STRING_LITERAL, TokenType.ERROR_SINGLE_QUOTE_IS_NOT_CLOSED),
    ord('"'): (TokenType.QUOTED_IDENTIFIER, TokenType.ERROR_DOUBLE_QUOTE_IS_NOT_CLOSED),
    ord("`"): (TokenType.QUOTED_IDENTIFIER, TokenType.ERROR_BACK_QUOTE_IS_NOT_CLOSED),
}

_AFTER_DOT_NUMBER = frozenset(
    {
        TokenType.CLOSING_ROUND_BRACKET,
        TokenType.CLOSING_SQUARE_BRACKET,
        TokenType.BARE_WORD,
        TokenType.QUOTED_IDENTIFIER,
        TokenType.NUMBER,
    }
)


class Lexer:
    """Produces tokens from a query one at a time."""

    def __init__(self, query: QueryText, max_query_size: int = 0) -> None:
        self._data = query.encode("utf-8") if isinstance(query, str) else bytes(query)
        self._end = len(self._data)
        self._pos = 0
        self._max_query_size = max_query_size
        self._prev_significant = TokenType.WHITESPACE

    def next_token(self) -> Token:
        """Return the next token; END_OF_STREAM once the input is exhausted."""
        token = self._next_token_impl()
        if self._max_query_size and token.end > self._max_query_size:
            token = replace(token, type=TokenType.ERROR_MAX_QUERY_SIZE_EXCEEDED)
        if token.is_significant():
            self._prev_significant = token.type
        return token

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to the end of input, stopping after the first error."""
        while True:
            token = self.next_token()
            if token.is_end():
                return
            yield token
            if token.is_error():
                return

    def _token(self, token_type: TokenType, begin: int, end: int) -> Token:
        return Token(token_type, begin, end, self._data)

    def _find_first(self, pos: int, symbols: bytes) -> int:
        data, end = self._data, self._end
        while pos < end and data[pos] not in symbols:
            pos += 1
        return pos

    def _skip_digits(self, start_of_block: bool, hex_digits: bool) -> None:
        data, end = self._data, self._end
        digit = is_hex_digit if hex_digits else is_numeric_ascii
        while self._pos < end and (
            digit(data[self._pos])
            or is_number_separator(start_of_block, hex_digits, data, self._pos)
        ):
            self._pos += 1
            start_of_block = False

    def _skip_exponent(self, markers: bytes) -> None:
        data, end = self._data, self._end
        if self._pos + 1 < end and data[self._pos] in markers:
            self._pos += 1
            if self._pos + 1 < end and data[self._pos] in b"-+":
                self._pos += 1
            self._skip_digits(True, False)

    def _comment_until_end_of_line(self, begin: int) -> Token:
        self._pos = self._find_first(self._pos, b"\n")
        return self._token(TokenType.COMMENT, begin, self._pos)

    def _quoted_string(self, begin: int, quote: int, success: TokenType, error: TokenType) -> Token:
        data, end = self._data, self._end
        self._pos += 1
        while True:
            self._pos = self._find_first(self._pos, bytes((quote, 0x5C)))
            if self._pos >= end:
                return self._token(error, begin, end)
            if data[self._pos] == quote:
                self._pos += 1
                if self._pos < end and data[self._pos] == quote:
                    self._pos += 1
                    continue
                return self._token(success, begin, self._pos)
            self._pos += 1
            if self._pos >= end:
                return self._token(error, begin, end)
            self._pos += 1

    def _unicode_quoted_string(
        self, begin: int, expected_end_byte: int, success: TokenType, error: TokenType
    ) -> Token:
        data, end = self._data, self._end
        while True:
            self._pos = self._find_first(self._pos, b"\xe2")
            if self._pos + 2 >= end:
                return self._token(error, begin, end)
            if data[self._pos + 1] == 0x80 and data[self._pos + 2] == expected_end_byte:
                self._pos += 3
                return self._token(success, begin, self._pos)
            self._pos += 1

    def _hex_or_bin_string(self, begin: int) -> Token:
        data, end = self._data, self._end
        hex_digits = data[self._pos] in b"xX"
        self._pos += 2
        allowed = is_hex_digit if hex_digits else (lambda c: c in b"01")
        while self._pos < end and allowed(data[self._pos]):
            self._pos += 1
        if self._pos >= end or data[self._pos] != 0x27:
            self._pos = end
            return self._token(TokenType.ERROR_SINGLE_QUOTE_IS_NOT_CLOSED, begin, end)
        self._pos += 1
        return self._token(TokenType.STRING_LITERAL, begin, self._pos)

    def _number(self, begin: int) -> Token:
        data, end = self._data, self._end
        if self._prev_significant is TokenType.DOT:
            # Only a plain integer after a dot, so that x.1.1 is x . 1 . 1
            self._pos += 1
            self._skip_digits(False, False)
        else:
            start_of_block = False
            hex_digits = False
            pos = self._pos
            if pos + 2 < end and data[pos] == 0x30 and data[pos + 1] in b"xbXB":
                is_valid = False
                if data[pos + 1] in b"xX":
                    if is_hex_digit(data[pos + 2]):
                        hex_digits = True
                        is_valid = True
                elif data[pos + 2] in b"01":
                    is_valid = True
                if is_valid:
                    self._pos += 2
                    start_of_block = True
                else:
                    self._pos += 1
            else:
                self._pos += 1

            self._skip_digits(start_of_block, hex_digits)
            if self._pos < end and data[self._pos] == 0x2E:
                self._pos += 1
                self._skip_digits(True, hex_digits)
            self._skip_exponent(b"pP" if hex_digits else b"eE")

        if self._pos < end and is_word_char_ascii(data[self._pos]):
            self._pos += 1
            while self._pos < end and is_word_char_ascii(data[self._pos]):
                self._pos += 1
            if any(not is_word_char_ascii(c) and c != 0x24 for c in data[begin:self._pos]):
                return self._token(TokenType.ERROR_WRONG_NUMBER, begin, self._pos)
            return self._token(TokenType.BARE_WORD, begin, self._pos)
        return self._token(TokenType.NUMBER, begin, self._pos)

    def _dot(self, begin: int) -> Token:
        data, end = self._data, self._end
        pos = self._pos
        if pos > 0 and (
            not (pos + 1 < end and is_numeric_ascii(data[pos + 1]))
            or self._prev_significant in _AFTER_DOT_NUMBER
        ):
            self._pos += 1
            return self._token(TokenType.DOT, begin, self._pos)
        self._pos += 1
        self._skip_digits(True, False)
        self._skip_exponent(b"eE")
        return self._token(TokenType.NUMBER, begin, self._pos)

    def _slash(self, begin: int) -> Token:
        data, end = self._data, self._end
        self._pos += 1
        if self._pos < end and data[self._pos] == 0x2F:
            self._pos += 1
            return self._comment_until_end_of_line(begin)
        if self._pos < end and data[self._pos] == 0x2A:
            self._pos += 1
            nesting = 1
            while self._pos + 2 <= end:
                pair = data[self._pos:self._pos + 2]
                if pair == b"/*":
                    self._pos += 2
                    nesting += 1
                elif pair == b"*/":
                    self._pos += 2
                    nesting -= 1
                    if nesting == 0:
                        return self._token(TokenType.COMMENT, begin, self._pos)
                else:
                    self._pos += 1
            self._pos = end
            return self._token(TokenType.ERROR_MULTILINE_COMMENT_IS_NOT_CLOSED, begin, end)
        return self._token(TokenType.SLASH, begin, self._pos)

    def _unicode_lead(self, begin: int) -> Optional[Token]:
        data, end = self._data, self._end
        pos = self._pos
        if pos + 3 <= end and data[pos + 1] == 0x88 and data[pos + 2] == 0x92:
            self._pos += 3
            return self._token(TokenType.MINUS, begin, self._pos)
        if pos + 5 < end and data[pos + 1] == 0x80 and data[pos + 2] in (0x98, 0x9C):
            single = data[pos + 2] == 0x98
            success = TokenType.STRING_LITERAL if single else TokenType.QUOTED_IDENTIFIER
            error = (
                TokenType.ERROR_SINGLE_QUOTE_IS_NOT_CLOSED
                if single
                else TokenType.ERROR_DOUBLE_QUOTE_IS_NOT_CLOSED
            )
            expected = data[pos + 2] + 1
            self._pos += 3
            return self._unicode_quoted_string(begin, expected, success, error)
        return None

    def _default(self, begin: int) -> Token:
        data, end = self._data, self._end
        pos = self._pos
        c = data[pos]
        if c == 0x24:
            stream = data[pos:end]
            name_end = stream.find(b"$", 1)
            if name_end != -1:
                heredoc_size = name_end + 1
                heredoc = stream[:heredoc_size]
                heredoc_end = stream.find(heredoc, heredoc_size)
                if heredoc_end != -1:
                    self._pos += heredoc_end + heredoc_size
                    return self._token(TokenType.HERE_DOC, begin, self._pos)
            if pos + 1 == end or (pos + 1 < end and not is_word_char_ascii(data[pos + 1])):
                self._pos += 1
                return self._token(TokenType.DOLLAR_SIGN, begin, self._pos)

        if pos + 2 < end and data[pos + 1] == 0x27 and c in b"xbXB":
            return self._hex_or_bin_string(begin)

        if is_word_char_ascii(c) or c == 0x24:
            self._pos += 1
            while self._pos < end and (
                is_word_char_ascii(data[self._pos]) or data[self._pos] == 0x24
            ):
                self._pos += 1
            return self._token(TokenType.BARE_WORD, begin, self._pos)

        self._pos = skip_whitespaces_utf8(data, pos)
        if self._pos > begin:
            return self._token(TokenType.WHITESPACE, begin, self._pos)
        self._pos += 1
        return self._token(TokenType.ERROR, begin, self._pos)

    def _next_token_impl(self) -> Token:
        data, end = self._data, self._end
        if self._pos >= end:
            return self._token(TokenType.END_OF_STREAM, end, end)

        begin = self._pos
        c = data[begin]

        if is_whitespace_ascii(c):
            self._pos += 1
            while self._pos < end and is_whitespace_ascii(data[self._pos]):
                self._pos += 1
            return self._token(TokenType.WHITESPACE, begin, self._pos)

        if is_numeric_ascii(c):
            return self._number(begin)

        if c in _QUOTES:
            success, error = _QUOTES[c]
            return self._quoted_string(begin, c, success, error)

        if c in _SINGLE_CHAR_TOKENS:
            self._pos += 1
            return self._token(_SINGLE_CHAR_TOKENS[c], begin, self._pos)

        if c in _PAIR_TOKENS:
            second, combined, alone = _PAIR_TOKENS[c]
            self._pos += 1
            if self._pos < end and data[self._pos] == second:
                self._pos += 1
                return self._token(combined, begin, self._pos)
            return self._token(alone, begin, self._pos)

        if c == 0x2E:
            return self._dot(begin)

        if c == 0x2D:
            self._pos += 1
            if self._pos < end and data[self._pos] == 0x3E:
                self._pos += 1
                return self._token(TokenType.ARROW, begin, self._pos)
            if self._pos < end and data[self._pos] == 0x2D:
                self._pos += 1
                return self._comment_until_end_of_line(begin)
            return self._token(TokenType.MINUS, begin, self._pos)

        if c == 0x2F:
            return self._slash(begin)

        if c == 0x23:
            # Only "# " and "#!" start a comment.
            self._pos += 1
            if self._pos < end and data[self._pos] in b" !":
                return self._comment_until_end_of_line(begin)
            return self._token(TokenType.ERROR, begin, self._pos)

        if c == 0x3D:
            self._pos += 1
            if self._pos < end and data[self._pos] == 0x3D:
                self._pos += 1
            return self._token(TokenType.EQUALS, begin, self._pos)

        if c == 0x3C:
            self._pos += 1
            if self._pos + 1 < end and data[self._pos:self._pos + 2] == b"=>":
                self._pos += 2
                return self._token(TokenType.SPACESHIP, begin, self._pos)
            if self._pos < end and data[self._pos] == 0x3D:
                self._pos += 1
                return self._token(TokenType.LESS_OR_EQUALS, begin, self._pos)
            if self._pos < end and data[self._pos] == 0x3E:
                self._pos += 1
                return self._token(TokenType.NOT_EQUALS, begin, self._pos)
            return self._token(TokenType.LESS, begin, self._pos)

        if c == 0xE2:
            token = self._unicode_lead(begin)
            if token is not None:
                return token

        return self._default(begin)


def tokenize(query: QueryText, max_query_size: int = 0) -> List[Token]:
    """Return all tokens of ``query``, ending early after the first error token."""
    return list(Lexer(query, max_query_size))