"""Typed column descriptors used as keys and bind-type hints by every builder."""

from dataclasses import dataclass
from enum import Enum


class SqlType(Enum):
    """SQL type tag attached to a column and passed along when binding values."""
    INTEGER = 'INTEGER'
    DOUBLE = 'DOUBLE'
    BOOLEAN = 'BOOLEAN'
    VARCHAR = 'VARCHAR'
    ARRAY = 'ARRAY'
    OTHER = 'OTHER'

    @classmethod
    def parse(cls, name: str) -> 'SqlType':
        """Look up a type by name, case-insensitively."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f'Invalid SQL type: {name}') from None


class OrderDirection(Enum):
    ASC = 'ASC'
    DESC = 'DESC'


@dataclass(frozen=True)
class Column:
    """A named, typed reference to a table field."""
    name: str
    sql_type: SqlType = SqlType.OTHER

    @classmethod
    def of(cls, name: str, sql_type: str = 'OTHER') -> 'Column':
        """Create column from a type name (e.g. 'INTEGER')."""
        return cls(name, SqlType.parse(sql_type))

    def __str__(self) -> str:
        return self.name
