"""
Shared fixtures: typed test columns and a mocked contract connection.
"""

from unittest.mock import MagicMock

import pytest

from fluentcon.cursor import RowCursor
from fluentsql import Column, SqlType


class Cols:
    VAR_CHAR = Column('varCharCol', SqlType.VARCHAR)
    INT = Column('intCol', SqlType.INTEGER)
    ARRAY = Column('arrayCol', SqlType.ARRAY)
    DOUBLE = Column('doubleCol', SqlType.DOUBLE)
    BOOL = Column('boolCol', SqlType.BOOLEAN)


class MockDB:
    """Mock connection whose statement returns canned rows and counts row reads."""

    def __init__(self, names=None, rows=None, rowcount=1, generated_key=2):
        self.names = names or ['varCharCol', 'intCol', 'arrayCol']
        self.rows = rows if rows is not None else [
            ('val1', 1, ['col1', 'col2']),
            ('val2', 2, ['col1', 'col2']),
        ]
        self.fetched = 0
        self.connection = MagicMock(name='connection')
        self.statement = MagicMock(name='statement')
        self.statement.__enter__.return_value = self.statement
        self.connection.prepare.return_value = self.statement
        self.statement.execute_update.return_value = rowcount
        self.statement.execute_query.side_effect = self._cursor
        keys = [(generated_key,)] if generated_key is not None else []
        self.statement.generated_keys.side_effect = lambda: RowCursor.from_rows(['id'], keys)

    def _fetch(self):
        if self.fetched >= len(self.rows):
            return None
        self.fetched += 1
        return self.rows[self.fetched - 1]

    def _cursor(self):
        return RowCursor(self.names, self._fetch)

    def bind_calls(self):
        """bind/bind_null calls on the statement in the order they were made."""
        return [c for c in self.statement.method_calls if c[0] in ('bind', 'bind_null')]


@pytest.fixture
def mock_db():
    return MockDB()


@pytest.fixture
def sqlite_url(tmp_path):
    """URL of a file SQLite database with a people table."""
    import sqlite3
    path = tmp_path / 'test.db'
    with sqlite3.connect(path) as conn:
        conn.execute(
            'CREATE TABLE people (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT, '
            'age INTEGER, score REAL, active BOOLEAN)'
        )
        conn.executemany(
            'INSERT INTO people (name, age, score, active) VALUES (?, ?, ?, ?)',
            [('Alice', 30, 1.5, 1), ('Bob', 25, 2.5, 0), ('Carol', None, None, 1)],
        )
    return f'sqlite:///{path}'
