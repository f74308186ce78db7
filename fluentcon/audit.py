"""Audit logging of executed statements to an SQLite database."""

import sqlite3
import logging
import functools
from threading import Lock
from typing import Optional

logger = logging.getLogger(__name__)


class Audit:
    """Manages audit logging to an SQLite database."""
    def __init__(self, db: str = 'audit.db'):
        self.db = db
        self.lock = Lock()
        self._init()

    def _init(self):
        """Initialize audit table."""
        with self.lock, sqlite3.connect(self.db) as conn:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS audit (
                    id INTEGER PRIMARY KEY,
                    ts TEXT DEFAULT CURRENT_TIMESTAMP,
                    fn TEXT,
                    sql TEXT,
                    params TEXT,
                    ok INTEGER,
                    err TEXT
                )
            ''')

    def log(self, fn: str, sql: str, params: str, ok: bool, err: Optional[str]):
        """Log a statement execution to the audit table."""
        with self.lock, sqlite3.connect(self.db) as conn:
            conn.execute('''
                INSERT INTO audit (fn, sql, params, ok, err)
                VALUES (?, ?, ?, ?, ?)
            ''', (fn, sql, params, int(ok), err))

    def entries(self):
        """All audit rows as dicts, oldest first."""
        with self.lock, sqlite3.connect(self.db) as conn:
            conn.row_factory = sqlite3.Row
            return [dict(r) for r in conn.execute('SELECT * FROM audit ORDER BY id')]


def audited(fn):
    """Decorator auditing a statement method when the statement carries an Audit."""
    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        audit = getattr(self, 'audit_obj', None)
        if audit is None:
            return fn(self, *args, **kwargs)
        params = str([v for v, _ in self._bindings.values()])[:1000]  # Limit size
        try:
            result = fn(self, *args, **kwargs)
        except Exception as e:
            _safe_log(audit, fn.__name__, self.sql, params, False, str(e))
            raise
        _safe_log(audit, fn.__name__, self.sql, params, True, None)
        return result
    return wrapper


def _safe_log(audit: Audit, *entry):
    try:
        audit.log(*entry)
    except sqlite3.Error as e:
        logger.warning(f'Failed to write audit entry: {e}')
