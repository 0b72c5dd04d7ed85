import pytest

from zeitgeist.lexer import (
    Lexer,
    Token,
    TokenType,
    error_token_description,
    token_name,
    tokenize,
)


def types(query):
    return [t.type for t in tokenize(query)]


def significant_types(query):
    return [t.type for t in tokenize(query) if t.is_significant()]


@pytest.mark.parametrize(
    "query",
    [
        "SELECT 1",
        "create table t (a INT, b INT);",
        "x.1.1 + 0x1F - 1.5e-3",
        "a -- comment\nb",
        "/* a /* b */ c */ d",
        "'it''s' \"q\" `b`",
        "$doc$body$doc$ $ x'1F'",
        "a <=> b <> c != d || e",
    ],
)
def test_tokens_cover_query_contiguously(query):
    tokens = tokenize(query)
    assert "".join(t.text() for t in tokens) == query
    assert tokens[0].begin == 0
    for prev, cur in zip(tokens, tokens[1:]):
        assert prev.end == cur.begin
    assert not any(t.is_error() for t in tokens)


def test_simple_select():
    tokens = tokenize("SELECT 1")
    assert [t.type for t in tokens] == [
        TokenType.BARE_WORD,
        TokenType.WHITESPACE,
        TokenType.NUMBER,
    ]
    assert tokens[0].text() == "SELECT"
    assert tokens[2].text() == "1"


def test_end_of_stream_repeats():
    lexer = Lexer("a")
    assert lexer.next_token().type is TokenType.BARE_WORD
    first_end = lexer.next_token()
    second_end = lexer.next_token()
    assert first_end.is_end() and second_end.is_end()
    assert first_end.begin == first_end.end == len("a")


def test_empty_query_has_no_tokens():
    assert tokenize("") == []


@pytest.mark.parametrize(
    "text,expected",
    [
        ("->", TokenType.ARROW),
        ("<=>", TokenType.SPACESHIP),
        ("<>", TokenType.NOT_EQUALS),
        ("!=", TokenType.NOT_EQUALS),
        ("!", TokenType.ERROR_SINGLE_EXCLAMATION_MARK),
        ("::", TokenType.DOUBLE_COLON),
        (":", TokenType.COLON),
        ("||", TokenType.CONCATENATION),
        ("|", TokenType.PIPE_MARK),
        ("@@", TokenType.DOUBLE_AT),
        ("@", TokenType.AT),
        ("\\G", TokenType.VERTICAL_DELIMITER),
        ("\\", TokenType.ERROR),
        ("==", TokenType.EQUALS),
        ("=", TokenType.EQUALS),
        ("<=", TokenType.LESS_OR_EQUALS),
        (">=", TokenType.GREATER_OR_EQUALS),
        ("<", TokenType.LESS),
        (">", TokenType.GREATER),
        ("(", TokenType.OPENING_ROUND_BRACKET),
        ("]", TokenType.CLOSING_SQUARE_BRACKET),
        ("{", TokenType.OPENING_CURLY_BRACE),
        (";", TokenType.SEMICOLON),
        ("*", TokenType.ASTERISK),
        ("/", TokenType.SLASH),
        ("%", TokenType.PERCENT),
        ("?", TokenType.QUESTION_MARK),
        ("^", TokenType.CARET),
    ],
)
def test_operators(text, expected):
    tokens = tokenize(text)
    assert len(tokens) == 1
    assert tokens[0].type is expected
    assert tokens[0].text() == text


def test_line_comment():
    tokens = tokenize("-- hi\nx")
    assert tokens[0].type is TokenType.COMMENT
    assert tokens[0].text() == "-- hi"
    assert tokens[-1].text() == "x"


def test_slash_slash_comment():
    tokens = tokenize("// note\ny")
    assert tokens[0].type is TokenType.COMMENT
    assert tokens[0].text() == "// note"


def test_nested_multiline_comment():
    query = "/* a /* b */ c */"
    tokens = tokenize(query)
    assert [t.type for t in tokens] == [TokenType.COMMENT]
    assert tokens[0].text() == query


def test_unclosed_multiline_comment():
    tokens = tokenize("/* a /* b */")
    assert tokens[-1].type is TokenType.ERROR_MULTILINE_COMMENT_IS_NOT_CLOSED
    assert tokens[-1].is_error()


def test_hash_comment_requires_space():
    assert types("# c") == [TokenType.COMMENT]
    assert types("#!shebang") == [TokenType.COMMENT]
    assert types("#x")[0] is TokenType.ERROR


def test_string_literal_with_doubled_quote():
    tokens = tokenize("'it''s'")
    assert [t.type for t in tokens] == [TokenType.STRING_LITERAL]
    assert tokens[0].text() == "'it''s'"


def test_string_literal_with_escape():
    tokens = tokenize(r"'a\'b'")
    assert [t.type for t in tokens] == [TokenType.STRING_LITERAL]


@pytest.mark.parametrize(
    "query,expected",
    [
        ("'abc", TokenType.ERROR_SINGLE_QUOTE_IS_NOT_CLOSED),
        ('"abc', TokenType.ERROR_DOUBLE_QUOTE_IS_NOT_CLOSED),
        ("`abc", TokenType.ERROR_BACK_QUOTE_IS_NOT_CLOSED),
        ("'abc\\", TokenType.ERROR_SINGLE_QUOTE_IS_NOT_CLOSED),
    ],
)
def test_unclosed_quotes(query, expected):
    tokens = tokenize(query)
    assert tokens[-1].type is expected
    assert tokens[-1].end == len(query)


def test_quoted_identifiers():
    assert types('"col"') == [TokenType.QUOTED_IDENTIFIER]
    assert types("`col`") == [TokenType.QUOTED_IDENTIFIER]


@pytest.mark.parametrize("query", ["123", "0x1F", "0b101", "1_000", "1.5e-3", "1.5", ".5", "0x1.8p3"])
def test_numbers(query):
    tokens = tokenize(query)
    assert [t.type for t in tokens] == [TokenType.NUMBER]
    assert tokens[0].text() == query


def test_number_followed_by_word_is_bare_word():
    assert types("123abc") == [TokenType.BARE_WORD]


def test_wrong_number():
    assert types("1.5abc") == [TokenType.ERROR_WRONG_NUMBER]


def test_chained_tuple_access():
    tokens = tokenize("x.1.1")
    assert [t.type for t in tokens] == [
        TokenType.BARE_WORD,
        TokenType.DOT,
        TokenType.NUMBER,
        TokenType.DOT,
        TokenType.NUMBER,
    ]
    assert [t.text() for t in tokens] == ["x", ".", "1", ".", "1"]


def test_hex_and_binary_strings():
    assert types("x'1F'") == [TokenType.STRING_LITERAL]
    assert types("b'101'") == [TokenType.STRING_LITERAL]
    assert types("b'102'") == [TokenType.ERROR_SINGLE_QUOTE_IS_NOT_CLOSED]


def test_heredoc_and_dollar():
    tokens = tokenize("$doc$hello$doc$")
    assert [t.type for t in tokens] == [TokenType.HERE_DOC]
    assert significant_types("$ x")[0] is TokenType.DOLLAR_SIGN
    assert types("$") == [TokenType.DOLLAR_SIGN]
    assert types("$abc") == [TokenType.BARE_WORD]


def test_unicode_minus_and_quotes():
    assert types("\u2212") == [TokenType.MINUS]
    single = tokenize("\u2018hi\u2019")
    assert [t.type for t in single] == [TokenType.STRING_LITERAL]
    assert single[0].text() == "\u2018hi\u2019"
    assert types("\u201cid\u201d") == [TokenType.QUOTED_IDENTIFIER]


def test_unicode_whitespace():
    assert types("\u00a0") == [TokenType.WHITESPACE]
    assert types("a\u3000b") == [
        TokenType.BARE_WORD,
        TokenType.WHITESPACE,
        TokenType.BARE_WORD,
    ]


def test_unrecognized_byte_is_error():
    assert types("\u00e9")[0] is TokenType.ERROR


def test_max_query_size_exceeded():
    lexer = Lexer("SELECT abc", 3)
    token = lexer.next_token()
    assert token.type is TokenType.ERROR_MAX_QUERY_SIZE_EXCEEDED
    assert token.is_error()


def test_max_query_size_not_exceeded():
    assert Lexer("ab", 2).next_token().type is TokenType.BARE_WORD


def test_tokenize_stops_after_error():
    tokens = tokenize("a 'b")
    assert tokens[-1].type is TokenType.ERROR_SINGLE_QUOTE_IS_NOT_CLOSED
    assert sum(t.is_error() for t in tokens) == 1


def test_iteration_matches_next_token():
    query = "CREATE TABLE t (a INT);"
    lexer = Lexer(query)
    manual = []
    while True:
        token = lexer.next_token()
        if token.is_end():
            break
        manual.append(token)
    assert list(Lexer(query)) == manual


def test_bytes_input():
    assert [t.text() for t in tokenize(b"use db")] == ["use", " ", "db"]


def test_token_predicates():
    space = Token(TokenType.WHITESPACE, 0, 1)
    comment = Token(TokenType.COMMENT, 0, 1)
    word = Token(TokenType.BARE_WORD, 0, 1)
    end = Token(TokenType.END_OF_STREAM, 1, 1)
    assert not space.is_significant()
    assert not comment.is_significant()
    assert word.is_significant()
    assert end.is_end() and not end.is_error()
    assert Token(TokenType.ERROR, 0, 1).is_error()
    assert not word.is_error()


def test_token_name():
    assert token_name(TokenType.BARE_WORD) == "BareWord"
    assert token_name(TokenType.END_OF_STREAM) == "EndOfStream"
    assert token_name(TokenType.ERROR_MAX_QUERY_SIZE_EXCEEDED) == "ErrorMaxQuerySizeExceeded"


def test_error_token_description():
    assert error_token_description(TokenType.ERROR) == "Unrecognized token"
    assert (
        error_token_description(TokenType.ERROR_SINGLE_QUOTE_IS_NOT_CLOSED)
        == "Single quoted string is not closed"
    )
    assert error_token_description(TokenType.ERROR_WRONG_NUMBER) == "Wrong number"
    assert error_token_description(TokenType.BARE_WORD) == "Not an error"