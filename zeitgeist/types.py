"""Value types and in-memory columns."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Generic, Iterator, List, TypeVar

T = TypeVar("T")


class TypeId(Enum):
    """Identifier of a value type."""

    INT = auto()
    NULL = auto()


class ValueType(ABC):
    """A column's value type: its identifier, byte size and name."""

    def __init__(self, type_id: TypeId = TypeId.NULL, size: int = 0) -> None:
        self.type_id = type_id
        self.size = size

    def is_variable_size(self) -> bool:
        return False

    @property
    @abstractmethod
    def name(self) -> str:
        """The type's name as written in table metadata."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueType):
            return NotImplemented
        return (type(self), self.type_id, self.size) == (
            type(other),
            other.type_id,
            other.size,
        )

    def __hash__(self) -> int:
        return hash((type(self), self.type_id, self.size))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class IntType(ValueType):
    """A fixed-size 32-bit integer type."""

    def __init__(self) -> None:
        super().__init__(TypeId.INT, 4)

    def is_variable_size(self) -> bool:
        return False

    @property
    def name(self) -> str:
        return "int"


class Column:
    """Base class of column storage."""

    def is_const(self) -> bool:
        return False

    def is_nullable(self) -> bool:
        return True


class ColumnVector(Column, Generic[T]):
    """A column holding its values in a list."""

    def __init__(self) -> None:
        self._data: List[T] = []

    def is_const(self) -> bool:
        return False

    def is_nullable(self) -> bool:
        return True

    def insert(self, value: T) -> None:
        """Append a value to the column."""
        self._data.append(value)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[T]:
        return iter(self._data)


class ColumnConst(Column):
    """A column of one repeated value."""


@dataclass
class ColumnWithNameType:
    """A column together with its name and value type."""

    column: Any
    name: str
    type: ValueType = field(default_factory=IntType)