# zeitgeist

A small SQL database engine with an interactive shell. Databases are kept as
directories under a data directory (`.ZeitgeistDB` in the current working
directory unless another is given). Each table is a directory inside its
database and holds a `meta.json` file that names the table and its columns,
for example:

```
{"table_name":"items","columns":[{"name":"id","type":"int"}]}
```

## Install

```
pip install .
```

## The shell

```
zeitgeist
zeitgeist --data-dir data
```

`--data-dir` chooses the directory that holds the databases; it is created
if it does not exist.

The shell prints `ZeitgeistDB > ` when it waits for a statement. A statement
ends with `;`. Input that starts with `\` is sent at once, without waiting for
a `;`. When a statement runs over several lines, the lines are joined with
spaces and the shell prints `        ... > ` for each further line. After every
statement the shell prints `Execute Success` or the error message, followed
by the time it took, e.g. `Execute : 0.000153201s`. To leave, type `quit;` or
`exit;`, or send end of input.

The shell understands these statements (keywords in any case):

```
create database Shop;
use Shop;
create table items(id INT, count INT);
show databases;
drop database Shop;
```

- Database names may contain only letters and underscores.
- `use` makes a database current; `create table` needs a current database.
- In `create table`, the opening bracket follows the table name directly,
  each column is a name, one space and a type, and `INT` is the only type.
- `show databases` prints the databases as a boxed table, sorted by name.
- `drop database` removes only an empty database; one that holds tables
  reports an error.

## Using it from Python

```python
from zeitgeist.engine import ZeitgeistDB
from zeitgeist.status import DBError

db = ZeitgeistDB(root="data")
db.execute_query("create database Shop;")
try:
    db.execute_query("create database Shop;")
except DBError as err:
    print(err)  # The Database Already Exists
```

`execute_query` drops the last character of the query (the `;`) before
parsing it. A failed statement raises `DBError`, which carries an
`ErrorCode` in `code` and the text in `message`. `show databases` returns a
`ResultSet` with the rows it printed; other statements return `None`.

The building blocks are separate modules:

- `zeitgeist.lexer`: the SQL tokenizer (`tokenize`, `Lexer`, `Token`,
  `TokenType`, `token_name`, `error_token_description`).
- `zeitgeist.tokens`: a token stream with lookahead (`Tokens`,
  `TokenIterator`) and `check_unmatched_parentheses`.
- `zeitgeist.parser`: keyword registry (`Checker`), `Parser` and `Binder`.
- `zeitgeist.disk`: `DiskManager`, which creates and removes database and
  table directories.
- `zeitgeist.database`: `Database` and `QueryContext`.
- `zeitgeist.table_meta`: `TableMeta`, table metadata as JSON.
- `zeitgeist.types`: `IntType`, `ColumnVector`, `ColumnWithNameType`.
- `zeitgeist.trie`: a prefix tree (`Trie`) used to store keywords.
- `zeitgeist.result_set`: boxed result tables (`format_table`,
  `print_table`, `ResultSet`, `Row`).
- `zeitgeist.stringutil`: ASCII string and character helpers.
- `zeitgeist.tasksys`: `TaskSystem`, a thread pool that runs groups of tasks
  with dependencies between groups, plus `submit` for single calls.

## What it does not do

- It stores no rows: there is no `insert`, and `select` is recognised as a
  keyword but does nothing.
- Statements it does not understand are accepted and do nothing, so the
  shell reports `Execute Success` for them.
- `use` does not check that the database exists.
- Tables created in a session are not read back from disk when a database is
  used again, and there is no statement that lists or drops tables.

## Tests

```
pip install .[test]
pytest
```