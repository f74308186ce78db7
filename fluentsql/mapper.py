"""Result mappers turning the current cursor row into a value.

A mapper is any callable taking a row cursor (positioned on a row) and returning
the mapped value. ``FieldMapper`` populates objects from an explicit table of
column name -> typed setter; ``FieldMapper.for_class`` derives that table from a
class's public attributes.
"""

import logging
import types
import typing
from typing import Any, Callable, Dict, NamedTuple, Optional, TypeVar
from .column import SqlType
from .errors import MappingError
from .mappings import infer_sql_type

logger = logging.getLogger(__name__)

_union_types = (typing.Union, getattr(types, 'UnionType', typing.Union))

T = TypeVar('T')
ResultMapper = Callable[[Any], T]

# SqlType -> cursor getter name
_getters = {
    SqlType.INTEGER: 'get_int',
    SqlType.DOUBLE: 'get_double',
    SqlType.BOOLEAN: 'get_boolean',
    SqlType.VARCHAR: 'get_string',
    SqlType.ARRAY: 'get_array',
}


def identity_mapper(cursor):
    """Return the cursor itself; the caller reads the row."""
    return cursor


def dict_mapper(cursor) -> Dict[str, Any]:
    """Map the current row to {column: value}."""
    return cursor.as_dict()


class Field(NamedTuple):
    """Declared SQL type of a target field and the callable assigning it."""
    sql_type: SqlType
    setter: Callable[[Any, Any], None]


def attr(name: str, sql_type: SqlType) -> Field:
    """Field assigning via setattr(obj, name, value)."""
    def setter(obj, value):
        setattr(obj, name, value)
    return Field(sql_type, setter)


class FieldMapper:
    """Instantiates a target per row and assigns the columns it declares fields for.

    Getters are chosen by each field's declared SqlType; the cursor's column_type
    metadata is not consulted.
    """

    def __init__(self, factory: Callable[[], T], fields: Dict[str, Field], strict: bool = False):
        self.factory = factory
        self.fields = dict(fields)
        self.strict = strict
        self.name = getattr(factory, '__name__', repr(factory))

    @classmethod
    def for_class(cls, target: type, strict: bool = False) -> 'FieldMapper':
        """Build the field table from the public attributes of target.

        Annotated class attributes are typed from their hints. Attributes a
        default-constructed instance sets in ``__init__`` are typed from their
        default value, or OTHER when that is None.
        """
        try:
            hints = typing.get_type_hints(target)
        except (NameError, TypeError):
            hints = getattr(target, '__annotations__', {})
        fields = {}
        for name, hint in hints.items():
            if name.startswith('_') or typing.get_origin(hint) is typing.ClassVar:
                continue
            fields[name] = attr(name, _hint_type(hint))
        for name, default in _instance_attrs(target).items():
            if name.startswith('_') or name in hints:
                continue
            fields[name] = attr(name, infer_sql_type(default))
        return cls(target, fields, strict=strict)

    def _instantiate(self):
        try:
            return self.factory()
        except Exception as e:
            raise MappingError(f"Can't instantiate instance of type: {self.name}") from e

    def __call__(self, cursor) -> T:
        obj = self._instantiate()
        for idx in range(cursor.column_count()):
            column = cursor.column_name(idx)
            field = self.fields.get(column)
            if field is None:
                if self.strict:
                    raise MappingError(f'No field for column {column} on {self.name}')
                logger.debug(f'Skipping column {column}: no field on {self.name}')
                continue
            getter = getattr(cursor, _getters.get(field.sql_type, 'get_object'))
            try:
                value = getter(idx)
            except (TypeError, ValueError) as e:
                raise MappingError(f'Column {column} is not {field.sql_type.value}: {e}') from e
            try:
                field.setter(obj, value)
            except AttributeError as e:
                if self.strict:
                    raise MappingError(f'Cannot assign column {column} on {self.name}: {e}') from e
                logger.debug(f'Skipping column {column}: {e}')
        return obj


def _instance_attrs(target: type) -> Dict[str, Any]:
    """Attributes set on a default-constructed target, or {} if it needs arguments."""
    try:
        return dict(vars(target()))
    except Exception as e:
        # Instantiation is retried per row, where it raises MappingError.
        logger.debug(f'No instance attributes for {target.__name__}: {e}')
        return {}


def _hint_type(hint: Any) -> SqlType:
    """SqlType for an annotation, unwrapping Optional[X] and List[X]."""
    origin = typing.get_origin(hint)
    if origin in _union_types:
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        return _hint_type(args[0]) if len(args) == 1 else SqlType.OTHER
    if origin is not None:
        hint = origin
    if not isinstance(hint, type):
        return SqlType.OTHER
    return infer_sql_type(hint)


def resolve(mapper: Optional[Any]) -> ResultMapper:
    """Accept a mapper callable, a target class, or None (identity)."""
    if mapper is None:
        return identity_mapper
    if isinstance(mapper, type):
        return FieldMapper.for_class(mapper)
    if callable(mapper):
        return mapper
    raise TypeError(f'Unsupported mapper type: {type(mapper)}')
