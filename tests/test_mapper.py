"""
Tests for result mappers.
"""

from dataclasses import dataclass
from typing import ClassVar, List, Optional

import pytest

from fluentcon.cursor import RowCursor
from fluentsql import Field, FieldMapper, MappingError, SqlType, attr, dict_mapper, identity_mapper


def row(names, values):
    cursor = RowCursor.from_rows(names, [values])
    assert cursor.next()
    return cursor


class Person:
    name: str = None
    age: int = 0


class TestFieldMapper:

    def test_maps_matching_columns_and_skips_unknown(self):
        mapper = FieldMapper.for_class(Person)

        person = mapper(row(['name', 'age', 'unknownCol'], ('Alice', 30, 'x')))

        assert isinstance(person, Person)
        assert person.name == 'Alice'
        assert person.age == 30
        assert not hasattr(person, 'unknownCol')

    def test_plain_class_attributes_set_in_init(self):
        class PlainPerson:
            def __init__(self):
                self.name = None
                self.age = 0
                self._cache = {}

        mapper = FieldMapper.for_class(PlainPerson)

        assert mapper.fields['age'].sql_type == SqlType.INTEGER
        assert mapper.fields['name'].sql_type == SqlType.OTHER
        assert '_cache' not in mapper.fields
        person = mapper(row(['name', 'age', 'unknownCol'], ('Alice', '30', 'x')))
        assert person.name == 'Alice'
        assert person.age == 30
        assert not hasattr(person, 'unknownCol')

    def test_field_names_are_case_sensitive(self):
        person = FieldMapper.for_class(Person)(row(['NAME', 'age'], ('Alice', 30)))

        assert person.name is None
        assert person.age == 30

    def test_converts_by_declared_type(self):
        @dataclass
        class Measurement:
            count: int = 0
            ratio: float = 0.0
            ok: bool = False
            label: str = ''
            tags: Optional[List[str]] = None
            raw: object = None

        m = FieldMapper.for_class(Measurement)(row(
            ['count', 'ratio', 'ok', 'label', 'tags', 'raw'],
            ('5', 2, 1, 12, ('a', 'b'), b'\x00'),
        ))

        assert m == Measurement(count=5, ratio=2.0, ok=True, label='12', tags=['a', 'b'], raw=b'\x00')

    def test_null_values_assigned_as_none(self):
        person = FieldMapper.for_class(Person)(row(['name', 'age'], (None, None)))

        assert person.name is None
        assert person.age is None

    def test_private_and_classvar_attributes_are_not_fields(self):
        class Target:
            _secret: str = 'keep'
            kind: ClassVar[str] = 'static'
            value: int = 0

        mapper = FieldMapper.for_class(Target)

        assert set(mapper.fields) == {'value'}
        obj = mapper(row(['_secret', 'kind', 'value'], ('x', 'y', 1)))
        assert obj._secret == 'keep'
        assert obj.value == 1

    def test_strict_mode_reports_unmatched_column(self):
        mapper = FieldMapper.for_class(Person, strict=True)

        with pytest.raises(MappingError, match='unknownCol'):
            mapper(row(['name', 'unknownCol'], ('Alice', 'x')))

    def test_type_mismatch_raises_mapping_error(self):
        with pytest.raises(MappingError, match='age'):
            FieldMapper.for_class(Person)(row(['age'], ('thirty',)))

    def test_constructor_requiring_arguments_fails(self):
        class NeedsArgs:
            name: str

            def __init__(self, name):
                self.name = name

        with pytest.raises(MappingError, match="Can't instantiate"):
            FieldMapper.for_class(NeedsArgs)(row(['name'], ('Alice',)))

    def test_constructor_raising_fails(self):
        def broken():
            raise RuntimeError('boom')

        mapper = FieldMapper(broken, {'name': attr('name', SqlType.VARCHAR)})

        with pytest.raises(MappingError) as exc:
            mapper(row(['name'], ('Alice',)))
        assert isinstance(exc.value.__cause__, RuntimeError)

    def test_read_only_attribute_is_skipped(self):
        class ReadOnly:
            value: int = 0

            @property
            def name(self):
                return 'fixed'

        mapper = FieldMapper(ReadOnly, {'name': attr('name', SqlType.VARCHAR),
                                        'value': attr('value', SqlType.INTEGER)})

        obj = mapper(row(['name', 'value'], ('Alice', 4)))
        assert obj.name == 'fixed'
        assert obj.value == 4

    def test_explicit_setter_table(self):
        mapper = FieldMapper(dict, {
            'full_name': Field(SqlType.VARCHAR, lambda obj, v: obj.__setitem__('name', v.upper())),
        })

        result = mapper(row(['full_name', 'other'], ('alice', 1)))

        assert result == {'name': 'ALICE'}


class TestSimpleMappers:

    def test_identity_returns_cursor(self):
        cursor = row(['a'], (1,))

        assert identity_mapper(cursor) is cursor

    def test_dict_mapper(self):
        assert dict_mapper(row(['a', 'b'], (1, 'x'))) == {'a': 1, 'b': 'x'}
