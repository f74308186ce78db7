"""UPDATE statement builder."""

import logging
from typing import Any, List, Optional
from . import clauses
from .clauses import Pair
from .column import Column
from .errors import ConfigurationError
from .mappings import SET, UPDATE, WHERE

logger = logging.getLogger(__name__)


class UpdateBuilder:
    """Builds and executes a parameterized UPDATE.

    SET values are bound first, then the non-null WHERE values, matching the
    placeholder order of the rendered text.
    """

    def __init__(self):
        self._table: Optional[str] = None
        self._values: List[Pair] = []
        self._clauses: List[Pair] = []

    def table(self, name: str) -> 'UpdateBuilder':
        """Set target table."""
        self._table = name
        return self

    def value(self, column: Column, value: Any) -> 'UpdateBuilder':
        """Add a column to set. value may be None."""
        clauses.put(self._values, column, value)
        return self

    def where(self, column: Column, value: Any) -> 'UpdateBuilder':
        """Restrict updated rows. None renders as IS NULL."""
        clauses.put(self._clauses, column, value)
        return self

    def render(self) -> str:
        """Render UPDATE <table> SET <c> = ?, ... [WHERE ...];"""
        sets = ', '.join(clauses.assignment(c) for c, _ in self._values)
        sql = f'{UPDATE} {self._table} {SET} {sets}'
        if self._clauses:
            sql += f' {WHERE} {clauses.render_where(self._clauses)}'
        return sql + ';'

    def params(self) -> List[Any]:
        """Values in bind order."""
        return [v for _, v in self._values] + [v for _, v in clauses.bound(self._clauses)]

    def execute(self, connection) -> Optional[int]:
        """Run the update and return the affected row count if any rows changed."""
        clauses.require_table(self._table)
        if not self._values:
            raise ConfigurationError('No values to update')
        sql = self.render()
        logger.debug(f'SQL: {sql} | Params: {self.params()}')
        with connection.prepare(sql) as statement:
            position = clauses.bind_all(statement, self._values, nulls=True)
            clauses.bind_all(statement, self._clauses, start=position)
            rows = statement.execute_update()
        return rows if rows > 0 else None
