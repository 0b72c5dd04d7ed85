"""On-disk layout of databases and tables."""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import IO, List, Optional, Union

from zeitgeist.result_set import Row, print_table
from zeitgeist.status import DBError, ErrorCode

DEFAULT_DATABASES_DIR = ".ZeitgeistDB"
TABLE_META_FILE = "meta.json"

PathArg = Union[str, PathLike]


class DiskManager:
    """Creates, lists and removes database and table directories under a root."""

    def __init__(self, root: Optional[PathArg] = None) -> None:
        self._path = Path(DEFAULT_DATABASES_DIR if root is None else root)
        self._path.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def create_database(self, name: str) -> Path:
        """Create the directory of a new database and return its path."""
        path = self._path / name
        try:
            path.mkdir()
        except FileExistsError:
            raise DBError(ErrorCode.CREATE_ERROR, "The Database Already Exists") from None
        except OSError as exc:
            raise DBError(
                ErrorCode.CREATE_ERROR, f"Error creating database: {exc}"
            ) from exc
        return path

    def drop_database(self, name: str) -> None:
        """Remove a database; it must exist and be empty."""
        path = self._path / name
        if not path.exists():
            raise DBError(ErrorCode.DROP_ERROR, "The Database Is not Exist")
        try:
            if path.is_dir():
                path.rmdir()
            else:
                path.unlink()
        except FileNotFoundError:
            raise DBError(ErrorCode.DROP_ERROR, "The Database can't be dropped") from None
        except OSError as exc:
            raise DBError(
                ErrorCode.DROP_ERROR, f"Error dropping database: {exc}"
            ) from exc

    def show_databases(self, file: Optional[IO[str]] = None) -> List[Row]:
        """Print the databases as a table and return them as rows."""
        if not self._path.exists():
            raise DBError(ErrorCode.CREATE_ERROR, "The Database Is not Exist")
        rows = [Row(entry.name) for entry in sorted(self._path.iterdir())]
        print_table(rows, "Database", file)
        return rows

    def open_database(self, name: str) -> Path:
        """Return the path of the named database."""
        if not name:
            raise DBError(ErrorCode.DATABASE_NOT_EXISTS, "The database now exists")
        return self._path / name

    def create_table(self, table_path: PathArg, table_meta: str) -> Path:
        """Create a table directory and write its metadata into it."""
        path = Path(table_path)
        try:
            path.mkdir()
        except FileExistsError:
            raise DBError(ErrorCode.CREATE_ERROR, "The Table Already Exists") from None
        (path / TABLE_META_FILE).write_bytes(table_meta.encode("utf-8"))
        return path