"""Connection contract consumed by the statement builders.

Any object providing these methods can be handed to ``execute``/``fetch_one``/
``fetch_many``. Bind positions are 1-based and follow placeholder order; cursor
getters take a column name or a 0-based column index.
"""

from typing import Any, Dict, List, Optional, Protocol, Union
from fluentsql.column import SqlType

Key = Union[int, str]


class RowCursor(Protocol):
    def next(self) -> bool: ...
    def get_int(self, key: Key) -> Optional[int]: ...
    def get_double(self, key: Key) -> Optional[float]: ...
    def get_boolean(self, key: Key) -> Optional[bool]: ...
    def get_string(self, key: Key) -> Optional[str]: ...
    def get_array(self, key: Key) -> Optional[List[Any]]: ...
    def get_object(self, key: Key) -> Any: ...
    def column_count(self) -> int: ...
    def column_name(self, index: int) -> str: ...
    def column_type(self, index: int) -> SqlType: ...
    def as_dict(self) -> Dict[str, Any]: ...
    def close(self) -> None: ...
    def __enter__(self) -> 'RowCursor': ...
    def __exit__(self, *args) -> None: ...


class Statement(Protocol):
    def bind(self, position: int, value: Any, sql_type: SqlType) -> None: ...
    def bind_null(self, position: int, sql_type: SqlType) -> None: ...
    def execute_update(self) -> int: ...
    def execute_query(self) -> RowCursor: ...
    def generated_keys(self) -> RowCursor: ...
    def close(self) -> None: ...
    def __enter__(self) -> 'Statement': ...
    def __exit__(self, *args) -> None: ...


class Connection(Protocol):
    def prepare(self, sql: str, return_generated_keys: bool = False) -> Statement: ...
