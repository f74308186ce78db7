"""SQLAlchemy-backed connection implementing the builder connection contract."""

from contextlib import contextmanager
from typing import Any, Optional
from sqlalchemy import bindparam, create_engine, text
from sqlalchemy.engine import Connection
from sqlalchemy.engine.url import make_url
from sqlalchemy.pool import QueuePool
from fluentsql.adapt_sql import adapt_sql, param_name
from fluentsql.mappings import alchemy_type
from .audit import Audit, audited
from .cursor import BaseStatement, RowCursor
import logging

logger = logging.getLogger(__name__)


class AlchemyStatement(BaseStatement):
    """Prepared statement executed through sqlalchemy.text with typed bind parameters."""
    def __init__(self, conn: Connection, sql: str, return_generated_keys: bool = False,
                 audit: Optional[Audit] = None, debug: bool = False):
        super().__init__(sql, return_generated_keys)
        self.conn = conn
        self.audit_obj = audit
        self.debug = debug
        self._result = None

    def _log(self, params: Any):
        """Log SQL and params if debug enabled."""
        if self.debug:
            logger.debug(f'SQL: {self.sql} | Params: {params}')

    def _clause(self):
        """text() clause with ? rewritten to :pN and each value bound with its SQL type."""
        params = [
            bindparam(param_name(i), value, type_=alchemy_type(sql_type))
            for i, (value, sql_type) in enumerate(self.bindings(), 1)
        ]
        self._log([p.value for p in params])
        return text(adapt_sql(self.sql, 'named')).bindparams(*params)

    @audited
    def execute_update(self) -> int:
        """Execute DML and return the affected row count."""
        self._result = self.conn.execute(self._clause())
        return self._result.rowcount

    @audited
    def execute_query(self) -> RowCursor:
        """Execute a query and return a cursor over its rows."""
        result = self.conn.execute(self._clause())
        self._result = result
        return RowCursor(list(result.keys()), result.fetchone, result.close)

    def generated_keys(self) -> RowCursor:
        """Cursor holding the last inserted row id, empty if the driver reported none."""
        if not self.return_generated_keys:
            raise ValueError('Statement was not prepared with return_generated_keys')
        if self._result is None:
            raise ValueError('Statement has not been executed')
        key = self._result.lastrowid
        return RowCursor.from_rows(['id'], [(key,)] if key else [])

    def close(self):
        if self._result is not None:
            self._result.close()
            self._result = None


class AlchemyConnection:
    """Wraps a SQLAlchemy Connection; transaction control stays with the caller."""
    def __init__(self, conn: Connection, audit: Optional[Audit] = None, debug: bool = False):
        self.conn = conn
        self.audit_obj = audit
        self.debug = debug

    def prepare(self, sql: str, return_generated_keys: bool = False) -> AlchemyStatement:
        return AlchemyStatement(self.conn, sql, return_generated_keys, self.audit_obj, self.debug)

    def commit(self):
        self.conn.commit()

    def rollback(self):
        self.conn.rollback()


class SqlCon:
    """SQL engine wrapper handing out contract connections."""
    def __init__(
        self, conn: str, pool_size: int = 5, pool_timeout: int = 30,
        echo: bool = False, debug: bool = False, audit_db: Optional[str] = None
    ):
        self.url = make_url(conn)
        self.db = self.url.get_backend_name()
        self.db = self.db if self.db != 'postgres' else 'postgresql'
        self.debug = debug
        self.audit_obj = Audit(audit_db) if audit_db else None
        kwargs: dict = {'echo': echo}
        if self.db != 'sqlite':
            kwargs.update(poolclass=QueuePool, pool_size=pool_size,
                          pool_timeout=pool_timeout, pool_recycle=3600)
        self.engine = create_engine(conn, **kwargs)
        with self.engine.connect():
            pass

    def _wrap(self, conn: Connection) -> AlchemyConnection:
        return AlchemyConnection(conn, self.audit_obj, self.debug)

    @contextmanager
    def connect(self):
        """Context-managed connection; caller commits."""
        with self.engine.connect() as conn:
            yield self._wrap(conn)

    @contextmanager
    def begin(self):
        """Context-managed connection inside a transaction committed on exit."""
        with self.engine.begin() as conn:
            yield self._wrap(conn)

    def close(self):
        """Dispose of engine resources."""
        self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
