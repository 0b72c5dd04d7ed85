"""Table metadata and its JSON form."""

from __future__ import annotations

import json
from os import PathLike
from pathlib import Path
from typing import Dict, Iterable, List, Union

from zeitgeist.types import ColumnVector, ColumnWithNameType, IntType

DEFAULT_META_NAME = "table_meta.json"


class TableMeta:
    """Name and columns of a table."""

    def __init__(self, table_name: str, columns: Iterable[ColumnWithNameType]) -> None:
        self._table_name = table_name
        self._columns: List[ColumnWithNameType] = list(columns)
        self._index: Dict[str, int] = {}
        for idx, column in enumerate(self._columns):
            self._index.setdefault(column.name, idx)

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def columns(self) -> List[ColumnWithNameType]:
        return list(self._columns)

    @classmethod
    def load(cls, table_path: Union[str, PathLike]) -> "TableMeta":
        """Read metadata from the table directory; columns of unknown type are skipped."""
        text = (Path(table_path) / DEFAULT_META_NAME).read_text(encoding="utf-8")
        document = json.loads(text)
        columns = [
            ColumnWithNameType(ColumnVector(), column["name"], IntType())
            for column in document["columns"]
            if column["type"] == "int"
        ]
        return cls(document["table_name"], columns)

    def serialize(self) -> str:
        """Return the metadata as compact JSON."""
        document = {
            "table_name": self._table_name,
            "columns": [
                {"name": column.name, "type": column.type.name}
                for column in self._columns
            ],
        }
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False)

    def column(self, name: str) -> ColumnWithNameType:
        """Return the column called ``name``; raise KeyError if there is none."""
        return self._columns[self._index[name]]

    def __repr__(self) -> str:
        names = [column.name for column in self._columns]
        return f"TableMeta({self._table_name!r}, {names!r})"