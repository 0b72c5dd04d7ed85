"""Rows of a query result and their boxed text rendering."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import IO, Iterable, List, Optional, Sequence, Union


@dataclass(frozen=True)
class Row:
    """One line of a result."""

    message: str


RowLike = Union[Row, str]


def _message(row: RowLike) -> str:
    return row.message if isinstance(row, Row) else row


def max_width(rows: Iterable[RowLike], header: str) -> int:
    """Return the width of the widest of the header and the rows."""
    return max([len(header), *(len(_message(row)) for row in rows)])


def format_table(rows: Sequence[RowLike], header: str) -> str:
    """Render a one-column boxed table, each line ending with a newline."""
    width = max_width(rows, header)
    border = "+" + "-" * (width + 2) + "+"
    lines = [border, f"| {header.ljust(width)} |", border]
    lines.extend(f"| {_message(row).ljust(width)} |" for row in rows)
    lines.append(border)
    return "".join(line + "\n" for line in lines)


def print_table(
    rows: Sequence[RowLike], header: str, file: Optional[IO[str]] = None
) -> None:
    """Write the table to ``file`` (standard output by default)."""
    print(format_table(rows, header), end="", file=file or sys.stdout)


@dataclass
class ResultSet:
    """A titled list of result rows."""

    header: str = ""
    rows: List[Row] = field(default_factory=list)

    def __str__(self) -> str:
        return format_table(self.rows, self.header)