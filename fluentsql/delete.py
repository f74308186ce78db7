"""DELETE statement builder."""

import logging
from typing import Any, List, Optional
from . import clauses
from .clauses import Pair
from .column import Column
from .errors import ConfigurationError
from .mappings import DELETE, FROM, WHERE

logger = logging.getLogger(__name__)


class DeleteBuilder:
    """Builds and executes a parameterized DELETE. At least one clause is required."""

    def __init__(self):
        self._table: Optional[str] = None
        self._clauses: List[Pair] = []

    def table(self, name: str) -> 'DeleteBuilder':
        self._table = name
        return self

    def where(self, column: Column, value: Any) -> 'DeleteBuilder':
        """Restrict deleted rows. None renders as IS NULL."""
        clauses.put(self._clauses, column, value)
        return self

    def render(self) -> str:
        """Render DELETE FROM <table> WHERE ...;"""
        return f'{DELETE} {FROM} {self._table} {WHERE} {clauses.render_where(self._clauses)};'

    def params(self) -> List[Any]:
        return [v for _, v in clauses.bound(self._clauses)]

    def execute(self, connection) -> Optional[int]:
        """Run the delete and return the affected row count if any rows were removed."""
        if not self._table or not self._clauses:
            raise ConfigurationError('Need both table and at least one where clause')
        sql = self.render()
        logger.debug(f'SQL: {sql} | Params: {self.params()}')
        with connection.prepare(sql) as statement:
            clauses.bind_all(statement, self._clauses)
            rows = statement.execute_update()
        return rows if rows > 0 else None
