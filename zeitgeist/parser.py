"""Statement parsing: keyword lookup and execution of simple SQL statements."""

from __future__ import annotations

from enum import Enum, auto
from typing import Dict, List, Optional

from zeitgeist.database import Database, QueryContext
from zeitgeist.lexer import Lexer, Token, TokenType
from zeitgeist.result_set import ResultSet
from zeitgeist.status import DBError, ErrorCode
from zeitgeist.stringutil import is_alpha, to_upper
from zeitgeist.trie import Trie
from zeitgeist.types import ColumnVector, ColumnWithNameType, IntType

MAX_QUERY_SIZE = 1000
_SYNTAX_ERROR = "Your sql have syntax error"


class StatementType(Enum):
    """Kinds of parsed statements."""

    INVALID_STATEMENT = auto()
    CREATE_STATEMENT = auto()
    SELECT_STATEMENT = auto()


class SQLStatement:
    """Base class of parsed statements."""

    TYPE = StatementType.INVALID_STATEMENT

    def __init__(self, statement_type: StatementType) -> None:
        self.type = statement_type


class CreateStatement(SQLStatement):
    """A CREATE statement."""

    class CreateType(Enum):
        TABLE = auto()

    TYPE = StatementType.INVALID_STATEMENT

    def __init__(
        self, query: str = "", create_type: "CreateStatement.CreateType" = CreateType.TABLE
    ) -> None:
        super().__init__(StatementType.CREATE_STATEMENT)
        self.query = query
        self.create_type = create_type


class SelectStatement(SQLStatement):
    """A SELECT statement."""

    TYPE = StatementType.SELECT_STATEMENT

    def __init__(self) -> None:
        super().__init__(StatementType.SELECT_STATEMENT)


class Function:
    """Implementation of a registered SQL function."""


class Checker:
    """Registry of keywords and functions, looked up case-insensitively."""

    def __init__(self) -> None:
        self._keywords = Trie()
        self._functions = Trie()
        self._func_impl: Dict[str, Optional[Function]] = {}

    def register_keyword(self, keyword: str) -> None:
        self._keywords.insert(keyword)

    def register_function(self, name: str, impl: Optional[Function]) -> None:
        self._functions.insert(name)
        self._func_impl.setdefault(name, impl)

    def is_keyword(self, word: str) -> bool:
        """Return True if the upper-cased word is a registered keyword."""
        return self._keywords.exists(to_upper(word))

    def is_function(self, name: str) -> bool:
        """Return True if the upper-cased name is a registered function."""
        return self._functions.exists(to_upper(name))

    def function_impl(self, name: str) -> Optional[Function]:
        """Return the implementation registered under ``name``, or None."""
        return self._func_impl.get(name)


def _skip_whitespace(lexer: Lexer, token: Token) -> Token:
    while token.type is TokenType.WHITESPACE:
        token = lexer.next_token()
    return token


class Parser:
    """Parses a query and carries out the statements it understands."""

    _KEYWORDS = (
        "CREATE",
        "DROP",
        "SHOW",
        "DATABASE",
        "DATABASES",
        "USE",
        "SELECT",
        "TABLE",
        "INT",
    )

    def __init__(self) -> None:
        self.checker = Checker()
        for keyword in self._KEYWORDS:
            self.checker.register_keyword(keyword)

    def parse(self, query: str, context: QueryContext) -> Optional[ResultSet]:
        """Execute ``query``; raise DBError on failure. Unknown statements do nothing."""
        lexer = Lexer(query, MAX_QUERY_SIZE)
        word = lexer.next_token().text()
        if not self.checker.is_keyword(word):
            return None
        handlers = {
            "CREATE": self.parse_create,
            "DROP": self.parse_drop,
            "SHOW": self.parse_show,
            "USE": self.parse_use,
        }
        handler = handlers.get(to_upper(word))
        return handler(lexer, context) if handler is not None else None

    def parse_create(self, lexer: Lexer, context: QueryContext) -> None:
        """Handle CREATE DATABASE and CREATE TABLE."""
        word = _skip_whitespace(lexer, lexer.next_token()).text()
        if not self.checker.is_keyword(word):
            return
        word = to_upper(word)
        lexer.next_token()
        if word == "DATABASE":
            name = lexer.next_token().text()
            if not is_alpha(name):
                raise DBError(
                    ErrorCode.CREATE_ERROR,
                    "Please use English letters for the database name.",
                )
            context.disk_manager.create_database(name)
        elif word == "TABLE":
            if context.database is None:
                raise DBError(ErrorCode.CREATE_ERROR, "You have not choose database")
            self.create_table(lexer, context)

    def create_table(self, lexer: Lexer, context: QueryContext) -> None:
        """Parse ``name(col type, ...)`` and create the table in the current database."""
        if context.database is None:
            raise DBError(ErrorCode.CREATE_ERROR, "You have not choose database")
        table_name = lexer.next_token().text()
        if lexer.next_token().type is not TokenType.OPENING_ROUND_BRACKET:
            raise DBError(ErrorCode.SYNTAX_ERROR, _SYNTAX_ERROR)
        columns: List[ColumnWithNameType] = []
        token = lexer.next_token()
        while True:
            token = _skip_whitespace(lexer, token)
            col_name = token.text() if token.type is TokenType.BARE_WORD else ""
            if lexer.next_token().type is not TokenType.WHITESPACE:
                raise DBError(ErrorCode.SYNTAX_ERROR, _SYNTAX_ERROR)
            token = lexer.next_token()
            if token.type is not TokenType.BARE_WORD or not self.checker.is_keyword(
                token.text()
            ):
                raise DBError(ErrorCode.SYNTAX_ERROR, _SYNTAX_ERROR)
            if to_upper(token.text()) != "INT":
                raise DBError(ErrorCode.SYNTAX_ERROR, _SYNTAX_ERROR)
            columns.append(ColumnWithNameType(ColumnVector(), col_name, IntType()))
            token = lexer.next_token()
            if token.type is TokenType.CLOSING_ROUND_BRACKET:
                break
            token = lexer.next_token()
        context.database.create_table(table_name, columns)

    def parse_use(self, lexer: Lexer, context: QueryContext) -> None:
        """Handle USE <name>: make the named database current."""
        name = _skip_whitespace(lexer, lexer.next_token()).text()
        if not is_alpha(name):
            raise DBError(
                ErrorCode.DATABASE_NOT_EXISTS, f"The name {name} is not correctly."
            )
        disk_manager = context.disk_manager
        disk_manager.open_database(name)
        context.database = Database(disk_manager.path / name, disk_manager)

    def parse_drop(self, lexer: Lexer, context: QueryContext) -> None:
        """Handle DROP DATABASE <name>."""
        word = _skip_whitespace(lexer, lexer.next_token()).text()
        if not self.checker.is_keyword(word) or to_upper(word) != "DATABASE":
            return
        lexer.next_token()
        name = lexer.next_token().text()
        if is_alpha(name):
            context.disk_manager.drop_database(name)

    def parse_show(self, lexer: Lexer, context: QueryContext) -> Optional[ResultSet]:
        """Handle SHOW DATABASES: print the databases and return them."""
        word = _skip_whitespace(lexer, lexer.next_token()).text()
        if not self.checker.is_keyword(word) or to_upper(word) != "DATABASES":
            return None
        rows = context.disk_manager.show_databases()
        return ResultSet("Database", list(rows))


class Binder:
    """Front end that hands queries to a parser."""

    def __init__(self) -> None:
        self._parser = Parser()

    def parse(self, query: str, context: QueryContext) -> Optional[ResultSet]:
        return self._parser.parse(query, context)