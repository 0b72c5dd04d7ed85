"""Error codes and the exception raised when a query cannot be executed."""

from __future__ import annotations

from enum import Enum, auto


class ErrorCode(Enum):
    """Kinds of failures reported by the database engine."""

    OK = auto()
    CREATE_ERROR = auto()
    DATABASE_NOT_EXISTS = auto()
    DROP_ERROR = auto()
    SYNTAX_ERROR = auto()


class DBError(Exception):
    """Raised when a database operation fails; carries an error code and message."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        if not isinstance(code, ErrorCode):
            raise TypeError(f"code must be an ErrorCode, not {type(code).__name__}")
        if code is ErrorCode.OK:
            raise ValueError("an error cannot carry the OK code")
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"DBError({self.code.name}, {self.message!r})"