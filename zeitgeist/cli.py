"""Interactive shell for the database."""

from __future__ import annotations

import argparse
import time
from typing import Callable, List, Optional

from zeitgeist.engine import ZeitgeistDB
from zeitgeist.status import DBError
from zeitgeist.stringutil import ends_with, starts_with

PROMPT = "ZeitgeistDB > "
CONTINUATION_PROMPT = "        ... > "


def _read_line(prompt: str) -> Optional[str]:
    try:
        return input(prompt)
    except EOFError:
        return None


def read_query(read_line: Callable[[str], Optional[str]]) -> Optional[str]:
    """Read lines until one ends with ';' or the query starts with '\\'.

    Lines are joined with single spaces. Returns None at end of input.
    """
    query = ""
    prompt = PROMPT
    while True:
        line = read_line(prompt)
        if line is None:
            return None
        query += line
        if ends_with(query, ";") or starts_with(query, "\\"):
            return query
        query += " "
        prompt = CONTINUATION_PROMPT


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="zeitgeist", description="ZeitgeistDB shell")
    parser.add_argument("--data-dir", default=None, help="directory holding the databases")
    args = parser.parse_args(argv)

    try:
        import readline

        readline.set_history_length(1024)
    except ImportError:
        pass

    db = ZeitgeistDB(args.data_dir)
    print("Welcome to ZeitgeistDB!\n")

    while True:
        query = read_query(_read_line)
        if query is None:
            return 0
        if query in ("quit;", "exit;"):
            break
        start = time.perf_counter()
        try:
            db.execute_query(query)
        except DBError as exc:
            print(exc.message)
        else:
            print("Execute Success")
        elapsed = time.perf_counter() - start
        print(f"Execute : {elapsed:.9f}s")

    print("Bye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())