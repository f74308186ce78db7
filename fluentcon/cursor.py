"""Row cursor and statement base shared by the connection adapters."""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union
from fluentsql.column import SqlType
from fluentsql.mappings import infer_sql_type

Key = Union[int, str]

_truthy = ('true', 't', 'yes', 'y', '1')
_falsy = ('false', 'f', 'no', 'n', '0')


class RowCursor:
    """Forward-only cursor over rows pulled one at a time from fetch_row.

    The current row stays readable after close(), so a mapped cursor can still
    be inspected once its statement has been released.
    """

    def __init__(self, names: Sequence[str], fetch_row: Callable[[], Optional[Sequence[Any]]],
                 closer: Optional[Callable[[], None]] = None):
        self.names = list(names)
        self._index = {n: i for i, n in enumerate(self.names)}
        self._fetch_row = fetch_row
        self._closer = closer
        self._row: Optional[Tuple[Any, ...]] = None
        self._done = False

    @classmethod
    def from_rows(cls, names: Sequence[str], rows: List[Sequence[Any]]) -> 'RowCursor':
        """Cursor over an in-memory list of rows."""
        it = iter(rows)
        return cls(names, lambda: next(it, None))

    def next(self) -> bool:
        """Advance to the next row; False once exhausted."""
        if self._done:
            return False
        row = self._fetch_row()
        if row is None:
            self._row = None
            self._done = True
            return False
        self._row = tuple(row)
        return True

    def _value(self, key: Key) -> Any:
        if self._row is None:
            raise ValueError('Cursor is not positioned on a row')
        idx = key if isinstance(key, int) else self._index[key]
        return self._row[idx]

    def get_int(self, key: Key) -> Optional[int]:
        v = self._value(key)
        return None if v is None else int(v)

    def get_double(self, key: Key) -> Optional[float]:
        v = self._value(key)
        return None if v is None else float(v)

    def get_boolean(self, key: Key) -> Optional[bool]:
        v = self._value(key)
        if v is None or isinstance(v, bool):
            return v
        if isinstance(v, str):
            if v.strip().lower() in _truthy:
                return True
            if v.strip().lower() in _falsy:
                return False
            raise ValueError(f'Not a boolean: {v!r}')
        return bool(v)

    def get_string(self, key: Key) -> Optional[str]:
        v = self._value(key)
        return None if v is None else str(v)

    def get_array(self, key: Key) -> Optional[List[Any]]:
        v = self._value(key)
        if v is None:
            return None
        if not isinstance(v, (list, tuple)):
            raise TypeError(f'Not an array: {v!r}')
        return list(v)

    def get_object(self, key: Key) -> Any:
        return self._value(key)

    def column_count(self) -> int:
        return len(self.names)

    def column_name(self, index: int) -> str:
        return self.names[index]

    def column_type(self, index: int) -> SqlType:
        """Type of the current row's value at index; OTHER when unknown or NULL."""
        if self._row is None or self._row[index] is None:
            return SqlType.OTHER
        return infer_sql_type(self._row[index])

    def as_dict(self) -> Dict[str, Any]:
        if self._row is None:
            raise ValueError('Cursor is not positioned on a row')
        return dict(zip(self.names, self._row))

    def close(self):
        if self._closer is not None:
            closer, self._closer = self._closer, None
            closer()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class BaseStatement:
    """Collects positional bindings for a prepared SQL string."""

    def __init__(self, sql: str, return_generated_keys: bool = False):
        self.sql = sql
        self.return_generated_keys = return_generated_keys
        self._bindings: Dict[int, Tuple[Any, SqlType]] = {}

    def bind(self, position: int, value: Any, sql_type: SqlType):
        if position < 1:
            raise IndexError(f'Bind positions start at 1, got {position}')
        self._bindings[position] = (value, sql_type)

    def bind_null(self, position: int, sql_type: SqlType):
        self.bind(position, None, sql_type)

    def bindings(self) -> List[Tuple[Any, SqlType]]:
        """Bound (value, type) pairs ordered by position; every placeholder must be bound."""
        expected = self.sql.count('?')
        missing = [p for p in range(1, expected + 1) if p not in self._bindings]
        if missing or len(self._bindings) != expected:
            raise ValueError(f'Expected {expected} bindings, missing positions {missing}')
        return [self._bindings[p] for p in range(1, expected + 1)]

    def close(self):
        """Release driver resources."""

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
