"""INSERT statement builder."""

import logging
from typing import Any, List, Optional
from . import clauses
from .clauses import Pair
from .column import Column
from .mappings import INSERT, INTO, PLACEHOLDER, VALUES

logger = logging.getLogger(__name__)


class InsertBuilder:
    """Builds and executes a single-row parameterized INSERT."""

    def __init__(self):
        self._table: Optional[str] = None
        self._values: List[Pair] = []

    def table(self, name: str) -> 'InsertBuilder':
        """Set target table."""
        self._table = name
        return self

    def value(self, column: Column, value: Any) -> 'InsertBuilder':
        """Add a column to insert. value may be None."""
        clauses.put(self._values, column, value)
        return self

    def render(self) -> str:
        """Render INSERT INTO <table> (<cols>) VALUES (?, ...);"""
        sql = f'{INSERT} {INTO} {self._table}'
        if self._values:
            cols = ', '.join(c.name for c, _ in self._values)
            phs = ', '.join(PLACEHOLDER for _ in self._values)
            sql += f' ({cols}) {VALUES} ({phs})'
        return sql + ';'

    def params(self) -> List[Any]:
        """Values in bind order; None values keep their slot."""
        return [v for _, v in self._values]

    def execute(self, connection) -> Optional[int]:
        """Insert the row and return the generated key, if any."""
        clauses.require_table(self._table)
        sql = self.render()
        logger.debug(f'SQL: {sql} | Params: {self.params()}')
        with connection.prepare(sql, return_generated_keys=True) as statement:
            clauses.bind_all(statement, self._values, nulls=True)
            rows = statement.execute_update()
            if rows > 0:
                with statement.generated_keys() as keys:
                    if keys.next():
                        return keys.get_int(0)
        return None
