import pytest

from zeitgeist.types import (
    Column,
    ColumnConst,
    ColumnVector,
    ColumnWithNameType,
    IntType,
    TypeId,
    ValueType,
)


def test_int_type_properties():
    t = IntType()
    assert t.type_id is TypeId.INT
    assert t.size == 4
    assert t.name == "int"
    assert t.is_variable_size() is False


def test_int_types_compare_equal():
    first = IntType()
    second = IntType()
    assert first == second
    assert hash(first) == hash(second)
    assert first.name == second.name == "int"


def test_value_type_is_abstract():
    with pytest.raises(TypeError):
        ValueType()


def test_value_type_defaults_to_null():
    class Blob(ValueType):
        @property
        def name(self):
            return "blob"

    blob = Blob()
    int_type = IntType()
    assert blob.type_id is TypeId.NULL
    assert blob.size == 0
    assert ValueType.is_variable_size(blob) is False
    assert int_type.type_id is TypeId.INT
    assert (blob == int_type) is False


def test_column_flags():
    assert Column().is_const() is False
    assert Column().is_nullable() is True
    assert ColumnConst().is_const() is False


def test_column_vector_insert_and_len():
    col = ColumnVector()
    assert len(col) == 0
    col.insert(7)
    col.insert(9)
    assert len(col) == 2
    assert list(col) == [7, 9]
    assert col.is_nullable() is True
    assert col.is_const() is False


def test_column_with_name_type_fields():
    data = ColumnVector()
    col = ColumnWithNameType(data, "id", IntType())
    assert col.column is data
    assert col.name == "id"
    assert col.type.name == "int"