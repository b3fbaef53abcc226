import pytest

from tablemerge.core.errors import GrammarError, RowShapeError
from tablemerge.core.grammar import ColumnType
from tablemerge.core.tables import Schema, Table


def test_schema_normalizes_strings_and_supports_sequence_ops() -> None:
    s = Schema(["I64", "bool"])  # type: ignore[arg-type]
    assert s.columns == (ColumnType.I64, ColumnType.BOOLEAN)
    assert list(s) == [ColumnType.I64, ColumnType.BOOLEAN]
    assert s[0] is ColumnType.I64
    assert s[1:] == Schema.of("boolean")
    assert (s + Schema.of("f64")).values() == ("i64", "boolean", "f64")
    assert str(s) == "[i64, boolean]"


def test_schema_rejects_unknown_tag() -> None:
    with pytest.raises(GrammarError):
        Schema.of("i64", "decimal")


def test_table_copies_rows_into_tuples() -> None:
    rows = [[1, "a"], [2, "b"]]
    t = Table(["i64", "str"], rows)
    rows[0][0] = 99
    assert t.rows == ((1, "a"), (2, "b"))
    assert t.row_count == 2 and len(t) == 2
    assert t.width == 2
    assert t.column(0) == (1, 2)
    assert t.column(-1) == ("a", "b")


def test_table_rejects_wrong_arity() -> None:
    with pytest.raises(RowShapeError, match="row 1 has 1 values"):
        Table(Schema.of("i64", "str"), [(1, "a"), (2,)])


def test_table_rejects_wrong_value_kind() -> None:
    with pytest.raises(RowShapeError, match="row 0, column 1: expected boolean"):
        Table(Schema.of("i64", "boolean"), [(1, 1)])


def test_table_coerce_ints_promotes_f64_cells() -> None:
    s = Schema.of("i64", "f64")
    with pytest.raises(RowShapeError):
        Table(s, [(1, 2)])
    t = Table(s, [(1, 2)], coerce_ints=True)
    assert t.rows == ((1, 2.0),)
    assert isinstance(t.rows[0][1], float)
    assert isinstance(t.rows[0][0], int)


def test_table_is_immutable() -> None:
    t = Table.empty(Schema.of("str"))
    assert t.row_count == 0
    with pytest.raises(AttributeError):
        t._rows = ((1,),)  # type: ignore[misc]


def test_column_index_out_of_range() -> None:
    t = Table(Schema.of("str"), [("x",)])
    with pytest.raises(IndexError):
        t.column(1)


def test_table_equality_is_structural() -> None:
    a = Table(Schema.of("i64"), [(1,)])
    b = Table(["i64"], [[1]])
    assert a == b
    assert hash(a) == hash(b)
    assert a != Table(Schema.of("i64"), [(2,)])


@pytest.mark.parametrize("row", ["ab", b"ab", {"a": 1, "b": 2}])
def test_table_rejects_rows_that_are_not_cell_sequences(row) -> None:
    with pytest.raises(RowShapeError, match="row 0 must be a sequence"):
        Table(Schema.of("str", "str"), [row])


def test_table_rejects_non_iterable_row() -> None:
    with pytest.raises(RowShapeError, match="row 1 must be a sequence"):
        Table(Schema.of("i64"), [(1,), 2])
