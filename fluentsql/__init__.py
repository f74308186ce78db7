"""Fluent builders for parameterized INSERT, SELECT, UPDATE and DELETE statements."""

from .column import Column, SqlType, OrderDirection
from .errors import ConfigurationError, MappingError
from .insert import InsertBuilder
from .select import SelectBuilder
from .update import UpdateBuilder
from .delete import DeleteBuilder
from .mapper import FieldMapper, Field, attr, identity_mapper, dict_mapper
from .adapt_sql import adapt_sql
from .json_handler import json_select, json_insert, json_update, json_delete
from .df_handler import df_inserts, fetch_df

__all__ = [
    'Column', 'SqlType', 'OrderDirection', 'ConfigurationError', 'MappingError',
    'InsertBuilder', 'SelectBuilder', 'UpdateBuilder', 'DeleteBuilder',
    'FieldMapper', 'Field', 'attr', 'identity_mapper', 'dict_mapper', 'adapt_sql',
    'json_select', 'json_insert', 'json_update', 'json_delete', 'df_inserts', 'fetch_df'
]
