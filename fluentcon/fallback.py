"""Contract connection over raw DB-API drivers, used when SQLAlchemy is bypassed."""

import sqlite3
import psycopg2
from sqlalchemy.engine.url import make_url
from typing import Any, Optional
from fluentsql.adapt_sql import adapt_sql
from .audit import Audit, audited
from .cursor import BaseStatement, RowCursor
import logging

logger = logging.getLogger(__name__)


class DbApiStatement(BaseStatement):
    """Prepared statement executed on a DB-API cursor.

    DB-API has no bind type tags, so the SQL type only documents the binding;
    typed nulls are sent as plain None.
    """
    def __init__(self, raw, sql: str, paramstyle: str, return_generated_keys: bool = False,
                 audit: Optional[Audit] = None):
        super().__init__(sql, return_generated_keys)
        self.raw = raw
        self.paramstyle = paramstyle
        self.audit_obj = audit
        self._cursor = None

    def _execute(self):
        if self._cursor is None:
            self._cursor = self.raw.cursor()
        params = [value for value, _ in self.bindings()]
        logger.debug(f'SQL: {self.sql} | Params: {params}')
        self._cursor.execute(adapt_sql(self.sql, self.paramstyle), params)
        return self._cursor

    @audited
    def execute_update(self) -> int:
        return self._execute().rowcount

    @audited
    def execute_query(self) -> RowCursor:
        cur = self._execute()
        names = [d[0] for d in cur.description] if cur.description else []
        return RowCursor(names, cur.fetchone)

    def generated_keys(self) -> RowCursor:
        if not self.return_generated_keys:
            raise ValueError('Statement was not prepared with return_generated_keys')
        if self._cursor is None:
            raise ValueError('Statement has not been executed')
        key = getattr(self._cursor, 'lastrowid', None)
        return RowCursor.from_rows(['id'], [(key,)] if key else [])

    def close(self):
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None


class DbApiConnection:
    """Wraps a raw DB-API connection; the caller commits and closes it."""
    def __init__(self, raw, paramstyle: str = 'qmark', audit: Optional[Audit] = None):
        self.raw = raw
        self.paramstyle = paramstyle
        self.audit_obj = audit

    def prepare(self, sql: str, return_generated_keys: bool = False) -> DbApiStatement:
        return DbApiStatement(self.raw, sql, self.paramstyle, return_generated_keys, self.audit_obj)

    def commit(self):
        self.raw.commit()

    def rollback(self):
        self.raw.rollback()

    def close(self):
        self.raw.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, *args):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()
        self.close()


def _sqlite(url) -> DbApiConnection:
    """Open SQLite connection."""
    return DbApiConnection(sqlite3.connect(url.database or ':memory:'), sqlite3.paramstyle)


def _postgres(url) -> DbApiConnection:
    """Open PostgreSQL connection."""
    raw = psycopg2.connect(
        dbname=url.database, user=url.username, password=url.password,
        host=url.host, port=url.port or 5432, sslmode='prefer'
    )
    return DbApiConnection(raw, psycopg2.paramstyle)


def connect_raw(conn: Any) -> DbApiConnection:
    """Open a contract connection for a SQLAlchemy-style URL using the raw driver."""
    url = make_url(conn)
    db = url.drivername.split('+')[0]
    if db == 'sqlite':
        return _sqlite(url)
    if db in ('postgres', 'postgresql'):
        return _postgres(url)
    raise NotImplementedError(f'Unsupported database: {db}')
