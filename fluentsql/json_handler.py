"""Builders configured from JSON payloads."""

from typing import Any, Dict, List, Tuple, Union
from .column import Column, SqlType
from .delete import DeleteBuilder
from .insert import InsertBuilder
from .mapper import dict_mapper
from .mappings import infer_sql_type
from .select import SelectBuilder
from .update import UpdateBuilder

Values = Union[Dict[str, Any], List[Dict[str, Any]]]


def _require(payload: Dict[str, Any], required: List[str]):
    missing = [k for k in required if k not in payload]
    if missing:
        raise ValueError(f'Missing required fields: {missing}')


def _column(entry: Union[str, Dict[str, Any]], types: Dict[str, str]) -> Column:
    """Column from 'name' or {"name"|"field": ..., "type": ...}."""
    if isinstance(entry, str):
        return Column.of(entry, types.get(entry, 'OTHER'))
    name = entry.get('name', entry.get('field'))
    if not name:
        raise ValueError(f'Column needs a name: {entry}')
    return Column.of(name, entry.get('type', types.get(name, 'OTHER')))


def _pairs(values: Values, types: Dict[str, str]) -> List[Tuple[Column, Any]]:
    """(column, value) pairs from {name: value} or [{field, type, value}, ...].

    Types not given explicitly are inferred from the value.
    """
    if isinstance(values, dict):
        return [
            (Column(k, SqlType.parse(types[k]) if k in types else infer_sql_type(v)), v)
            for k, v in values.items()
        ]
    out = []
    for item in values:
        if not isinstance(item, dict) or 'value' not in item:
            raise ValueError(f'Invalid value entry: {item}')
        col = _column(item, types)
        if 'type' not in item and col.name not in types:
            col = Column(col.name, infer_sql_type(item['value']))
        out.append((col, item['value']))
    return out


def json_select(payload: Dict[str, Any]) -> SelectBuilder:
    """Build a SELECT returning rows as dicts."""
    _require(payload, ['table'])
    types = payload.get('types', {})
    builder = SelectBuilder(dict_mapper).table(payload['table'])
    fields = payload.get('fields', '*')
    if isinstance(fields, str) and fields != '*':
        fields = [f.strip() for f in fields.split(',') if f.strip()]
    if fields != '*':
        for f in fields:
            builder.select(_column(f, types))
    for col, value in _pairs(payload.get('condition', []), types):
        builder.where(col, value)
    for g in payload.get('groupby', []):
        builder.group_by(_column(g, types))
    for o in payload.get('orderby', []):
        builder.order_by(_column(o, types), o.get('direction') if isinstance(o, dict) else None)
    return builder


def json_insert(payload: Dict[str, Any]) -> InsertBuilder:
    """Build an INSERT from {"table", "insertValues"}."""
    _require(payload, ['table', 'insertValues'])
    builder = InsertBuilder().table(payload['table'])
    for col, value in _pairs(payload['insertValues'], payload.get('types', {})):
        builder.value(col, value)
    return builder


def json_update(payload: Dict[str, Any]) -> UpdateBuilder:
    """Build an UPDATE from {"table", "updateValues", "condition"}."""
    _require(payload, ['table', 'updateValues'])
    types = payload.get('types', {})
    builder = UpdateBuilder().table(payload['table'])
    for col, value in _pairs(payload['updateValues'], types):
        builder.value(col, value)
    for col, value in _pairs(payload.get('condition', []), types):
        builder.where(col, value)
    return builder


def json_delete(payload: Dict[str, Any]) -> DeleteBuilder:
    """Build a DELETE from {"table", "condition"}."""
    _require(payload, ['table', 'condition'])
    builder = DeleteBuilder().table(payload['table'])
    for col, value in _pairs(payload['condition'], payload.get('types', {})):
        builder.where(col, value)
    return builder
