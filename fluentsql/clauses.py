"""Ordered (column, value) pair lists shared by the statement builders.

The same list is the source of truth for both clause text order and positional
bind order, so the Nth ``?`` rendered always binds to the Nth bound pair.
"""

from typing import Any, Iterator, List, Optional, Tuple, TypeVar
from .column import Column
from .errors import ConfigurationError
from .mappings import AND, IS_NULL, PLACEHOLDER

K = TypeVar('K')
Pair = Tuple[Column, Any]


def put(pairs: List[Tuple[K, Any]], key: K, value: Any) -> None:
    """Insert key -> value, replacing the value in place if key is already present."""
    for idx, (existing, _) in enumerate(pairs):
        if existing == key:
            pairs[idx] = (key, value)
            return
    pairs.append((key, value))


def assignment(column: Column) -> str:
    """SET style fragment: col = ?"""
    return f'{column.name} = {PLACEHOLDER}'


def predicate(column: Column, value: Any) -> str:
    """WHERE fragment; None renders as IS NULL and consumes no bind slot."""
    if value is None:
        return f'{column.name} {IS_NULL}'
    return assignment(column)


def render_where(pairs: List[Pair]) -> str:
    """Join predicates with AND in insertion order."""
    return f' {AND} '.join(predicate(c, v) for c, v in pairs)


def bound(pairs: List[Pair]) -> Iterator[Pair]:
    """Yield only the pairs that occupy a placeholder in a WHERE clause."""
    return ((c, v) for c, v in pairs if v is not None)


def bind_all(statement, pairs: List[Pair], start: int = 1, nulls: bool = False) -> int:
    """Bind pairs positionally from start; return the next free position.

    With nulls=True a None value is bound as an explicit typed null, otherwise
    None entries are skipped (they rendered as IS NULL).
    """
    position = start
    for column, value in pairs:
        if value is None:
            if not nulls:
                continue
            statement.bind_null(position, column.sql_type)
        else:
            statement.bind(position, value, column.sql_type)
        position += 1
    return position


def require_table(table: Optional[str]) -> str:
    """Return table or raise ConfigurationError when unset/empty."""
    if not table:
        raise ConfigurationError('No table defined')
    return table
