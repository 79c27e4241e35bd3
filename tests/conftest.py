from __future__ import annotations

import sqlite3
from collections.abc import Generator
from pathlib import Path

import pytest

from sqlforge.escaping import LiteralEscaper

here = Path(__file__).parent
root_path = here.parent


@pytest.fixture
def escaper() -> LiteralEscaper:
    return LiteralEscaper()


@pytest.fixture
def sqlite_connection() -> Generator[sqlite3.Connection, None, None]:
    connection = sqlite3.connect(":memory:")
    connection.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, age INTEGER)")
    connection.executemany(
        "INSERT INTO users (id, name, age) VALUES (?, ?, ?)",
        [(1, "alice", 31), (2, "bob", 25), (3, "carol", 47), (4, "dave", 19)],
    )
    connection.commit()
    try:
        yield connection
    finally:
        connection.close()
