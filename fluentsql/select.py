"""SELECT statement builder with result mapping."""

import logging
from typing import Any, Generic, List, Optional, Tuple, TypeVar
from . import clauses
from .clauses import Pair
from .column import Column, OrderDirection
from .mapper import identity_mapper, resolve
from .mappings import FROM, GROUP_BY, ORDER_BY, SELECT, WHERE

logger = logging.getLogger(__name__)

T = TypeVar('T')


class SelectBuilder(Generic[T]):
    """Builds a parameterized SELECT and maps returned rows.

    ``mapper`` is either a callable taking the row cursor, a class to populate
    through ``FieldMapper.for_class``, or None for the raw cursor.
    """

    def __init__(self, mapper: Any = None):
        self._mapper = resolve(mapper)
        self._table: Optional[str] = None
        self._columns: List[str] = []
        self._clauses: List[Pair] = []
        self._groupings: List[str] = []
        self._orderings: List[Tuple[str, Optional[OrderDirection]]] = []

    @classmethod
    def cursor_selector(cls) -> 'SelectBuilder':
        """Builder whose results are the unmapped row cursor."""
        return cls(identity_mapper)

    def table(self, name: str) -> 'SelectBuilder[T]':
        """Set table to select from."""
        self._table = name
        return self

    def select(self, column: Column) -> 'SelectBuilder[T]':
        """Add a projected column. Never calling this selects *."""
        self._columns.append(column.name)
        return self

    def where(self, column: Column, value: Any) -> 'SelectBuilder[T]':
        """Filter rows on column = value; None renders as IS NULL."""
        clauses.put(self._clauses, column, value)
        return self

    def group_by(self, column: Column) -> 'SelectBuilder[T]':
        self._groupings.append(column.name)
        return self

    def order_by(self, column: Column, direction: Optional[OrderDirection] = None) -> 'SelectBuilder[T]':
        """Order results by column; direction None emits no ASC/DESC suffix."""
        if isinstance(direction, str):
            direction = OrderDirection(direction.upper())
        clauses.put(self._orderings, column.name, direction)
        return self

    def render(self) -> str:
        """Render SELECT <proj> FROM <table> [WHERE] [GROUP BY] [ORDER BY];"""
        proj = ', '.join(self._columns) if self._columns else '*'
        sql = f'{SELECT} {proj} {FROM} {self._table}'
        if self._clauses:
            sql += f' {WHERE} {clauses.render_where(self._clauses)}'
        if self._groupings:
            sql += f' {GROUP_BY} {", ".join(self._groupings)}'
        if self._orderings:
            orders = ', '.join(name if d is None else f'{name} {d.value}' for name, d in self._orderings)
            sql += f' {ORDER_BY} {orders}'
        return sql + ';'

    def params(self) -> List[Any]:
        """Non-null clause values in bind order."""
        return [v for _, v in clauses.bound(self._clauses)]

    def _prepare(self, connection):
        clauses.require_table(self._table)
        sql = self.render()
        logger.debug(f'SQL: {sql} | Params: {self.params()}')
        statement = connection.prepare(sql)
        try:
            clauses.bind_all(statement, self._clauses)
        except Exception:
            statement.close()
            raise
        return statement

    def fetch_one(self, connection) -> Optional[T]:
        """Map the first returned row, or None if there is none. Later rows are not read."""
        with self._prepare(connection) as statement:
            with statement.execute_query() as cursor:
                if cursor.next():
                    return self._mapper(cursor)
        return None

    def fetch_many(self, connection) -> List[T]:
        """Map every returned row in cursor order. Never returns None."""
        results = []
        with self._prepare(connection) as statement:
            with statement.execute_query() as cursor:
                while cursor.next():
                    results.append(self._mapper(cursor))
        return results
