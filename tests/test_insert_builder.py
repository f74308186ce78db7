"""
Tests for InsertBuilder rendering, binding order and generated keys.
"""

from unittest.mock import call

import pytest

from conftest import Cols, MockDB
from fluentsql import ConfigurationError, InsertBuilder, SqlType


class TestInsertRender:
    """Rendering of INSERT statements."""

    def test_single_column(self):
        builder = InsertBuilder().table('test_table').value(Cols.VAR_CHAR, 'val')

        assert builder.render() == 'INSERT INTO test_table (varCharCol) VALUES (?);'

    def test_multi_column(self):
        builder = (InsertBuilder()
                   .table('test_table')
                   .value(Cols.VAR_CHAR, 'val')
                   .value(Cols.INT, 1)
                   .value(Cols.ARRAY, ['a', 'b']))

        assert builder.render() == (
            'INSERT INTO test_table (varCharCol, intCol, arrayCol) VALUES (?, ?, ?);'
        )

    def test_no_values_renders_degenerate_statement(self):
        assert InsertBuilder().table('test_table').render() == 'INSERT INTO test_table;'

    def test_repeated_column_overwrites_in_place(self):
        builder = (InsertBuilder()
                   .table('test_table')
                   .value(Cols.VAR_CHAR, 'first')
                   .value(Cols.INT, 1)
                   .value(Cols.VAR_CHAR, 'second'))

        assert builder.render() == 'INSERT INTO test_table (varCharCol, intCol) VALUES (?, ?);'
        assert builder.params() == ['second', 1]

    def test_last_table_wins(self):
        builder = InsertBuilder().table('a').table('b').value(Cols.INT, 1)

        assert builder.render() == 'INSERT INTO b (intCol) VALUES (?);'


class TestInsertExecute:
    """Execution against a mocked connection."""

    def test_returns_generated_key(self, mock_db):
        builder = InsertBuilder().table('test_table').value(Cols.VAR_CHAR, 'val')

        assert builder.execute(mock_db.connection) == 2
        mock_db.connection.prepare.assert_called_once_with(
            'INSERT INTO test_table (varCharCol) VALUES (?);', return_generated_keys=True
        )
        mock_db.statement.bind.assert_called_once_with(1, 'val', SqlType.VARCHAR)

    def test_binds_in_value_order_with_declared_types(self, mock_db):
        builder = (InsertBuilder()
                   .table('test_table')
                   .value(Cols.INT, 7)
                   .value(Cols.VAR_CHAR, 'x')
                   .value(Cols.DOUBLE, 1.5))

        builder.execute(mock_db.connection)

        assert mock_db.bind_calls() == [
            call.bind(1, 7, SqlType.INTEGER),
            call.bind(2, 'x', SqlType.VARCHAR),
            call.bind(3, 1.5, SqlType.DOUBLE),
        ]

    def test_null_value_consumes_slot_as_typed_null(self, mock_db):
        builder = (InsertBuilder()
                   .table('test_table')
                   .value(Cols.VAR_CHAR, None)
                   .value(Cols.INT, 3))

        builder.execute(mock_db.connection)

        assert builder.render() == 'INSERT INTO test_table (varCharCol, intCol) VALUES (?, ?);'
        assert mock_db.bind_calls() == [
            call.bind_null(1, SqlType.VARCHAR),
            call.bind(2, 3, SqlType.INTEGER),
        ]

    def test_no_rows_affected_returns_none(self):
        db = MockDB(rowcount=0)
        builder = InsertBuilder().table('test_table').value(Cols.INT, 1)

        assert builder.execute(db.connection) is None
        db.statement.generated_keys.assert_not_called()

    def test_no_generated_key_returns_none(self):
        db = MockDB(generated_key=None)
        builder = InsertBuilder().table('test_table').value(Cols.INT, 1)

        assert builder.execute(db.connection) is None

    def test_missing_table_raises_before_prepare(self, mock_db):
        builder = InsertBuilder().value(Cols.INT, 1)

        with pytest.raises(ConfigurationError):
            builder.execute(mock_db.connection)
        mock_db.connection.prepare.assert_not_called()

    def test_driver_error_propagates(self, mock_db):
        mock_db.statement.execute_update.side_effect = RuntimeError('driver failure')
        builder = InsertBuilder().table('test_table').value(Cols.INT, 1)

        with pytest.raises(RuntimeError, match='driver failure'):
            builder.execute(mock_db.connection)
        mock_db.statement.__exit__.assert_called_once()
