"""An opened database and the state shared by the queries of a session."""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from zeitgeist.disk import DiskManager
from zeitgeist.table_meta import TableMeta
from zeitgeist.types import ColumnWithNameType


class Database:
    """A database directory and the metadata of the tables created in it."""

    def __init__(self, path: Union[str, PathLike], disk_manager: DiskManager) -> None:
        self.path = Path(path)
        self.disk_manager = disk_manager
        self._table_metas: Dict[str, TableMeta] = {}

    @property
    def tables(self) -> Mapping[str, TableMeta]:
        return dict(self._table_metas)

    def create_table(
        self, table_name: str, columns: Iterable[ColumnWithNameType]
    ) -> TableMeta:
        """Create a table on disk and record its metadata."""
        meta = TableMeta(table_name, columns)
        self.disk_manager.create_table(self.path / table_name, meta.serialize())
        self._table_metas[table_name] = meta
        return meta


class QueryContext:
    """Per-session state: the disk manager, the database in use, the statement."""

    def __init__(self, disk_manager: Optional[DiskManager] = None) -> None:
        self.disk_manager = disk_manager if disk_manager is not None else DiskManager()
        self.database: Optional[Database] = None
        self.sql_statement: Optional[Any] = None