"""SQL keywords and type mappings between SqlType, SQLAlchemy, Python and pandas."""

from typing import Any, Dict
from sqlalchemy import types as sa_types
from .column import SqlType

# Statement keywords
SELECT = 'SELECT'
INSERT = 'INSERT'
UPDATE = 'UPDATE'
DELETE = 'DELETE'
INTO = 'INTO'
VALUES = 'VALUES'
SET = 'SET'
FROM = 'FROM'
WHERE = 'WHERE'
AND = 'AND'
IS_NULL = 'IS NULL'
GROUP_BY = 'GROUP BY'
ORDER_BY = 'ORDER BY'
PLACEHOLDER = '?'

# SqlType -> SQLAlchemy bind type. ARRAY and OTHER bind untyped so the driver adapts them.
alchemy_types: Dict[SqlType, Any] = {
    SqlType.INTEGER: sa_types.Integer,
    SqlType.DOUBLE: sa_types.Float,
    SqlType.BOOLEAN: sa_types.Boolean,
    SqlType.VARCHAR: sa_types.String,
    SqlType.ARRAY: sa_types.NullType,
    SqlType.OTHER: sa_types.NullType,
}

# Python value/annotation type -> SqlType. bool precedes int since bool subclasses int.
python_types = (
    (bool, SqlType.BOOLEAN),
    (int, SqlType.INTEGER),
    (float, SqlType.DOUBLE),
    (str, SqlType.VARCHAR),
    (list, SqlType.ARRAY),
    (tuple, SqlType.ARRAY),
)

# pandas dtype name -> SqlType
dtype_map = {
    'int8': SqlType.INTEGER, 'int16': SqlType.INTEGER, 'int32': SqlType.INTEGER,
    'int64': SqlType.INTEGER, 'Int64': SqlType.INTEGER, 'Int32': SqlType.INTEGER,
    'float32': SqlType.DOUBLE, 'float64': SqlType.DOUBLE, 'Float64': SqlType.DOUBLE,
    'bool': SqlType.BOOLEAN, 'boolean': SqlType.BOOLEAN,
    'object': SqlType.VARCHAR, 'string': SqlType.VARCHAR, 'category': SqlType.VARCHAR,
}


def alchemy_type(sql_type: SqlType):
    """Instantiate the SQLAlchemy type used to bind a value of sql_type."""
    return alchemy_types.get(sql_type, sa_types.NullType)()


def infer_sql_type(value: Any) -> SqlType:
    """Map a Python value or class to the closest SqlType."""
    cls = value if isinstance(value, type) else type(value)
    for py_type, sql_type in python_types:
        if issubclass(cls, py_type):
            return sql_type
    return SqlType.OTHER
