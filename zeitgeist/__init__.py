"""A small SQL database engine: lexer, parser, on-disk catalog, shell and task pool."""

__version__ = "0.1.0"