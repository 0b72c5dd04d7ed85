"""The database engine entry point that runs query text."""

from __future__ import annotations

from os import PathLike
from typing import Optional, Union

from zeitgeist.database import QueryContext
from zeitgeist.disk import DiskManager
from zeitgeist.parser import Binder
from zeitgeist.result_set import ResultSet


class ZeitgeistDB:
    """A session: holds the query context and executes queries against it."""

    def __init__(self, root: Optional[Union[str, PathLike]] = None) -> None:
        self.context = QueryContext(DiskManager(root))

    def execute_query(self, query: str) -> Optional[ResultSet]:
        """Run one query whose last character (the terminator) is dropped.

        Raises DBError when the query fails.
        """
        result = Binder().parse(query[:-1], self.context)
        self.context.sql_statement = None
        return result