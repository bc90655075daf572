import pytest

from colstore.errors import ColumnNotFoundError, RelationError
from colstore.joins import hash_join, merge_join, nested_loop_join
from colstore.relation import ColumnStoreRelation


def create_test_relation(name, columns):
    relation = ColumnStoreRelation(name=name)
    for col_name, data in columns:
        relation.columns[col_name] = list(data)
        relation.fields[col_name] = ""
        relation.select_columns.append(col_name)
    return relation


def assert_relation_eq(actual, expected):
    assert actual.fields == expected.fields
    assert actual.select_columns == expected.select_columns
    assert len(actual.columns) == len(expected.columns)
    for key, values in actual.columns.items():
        assert values == expected.columns[key]


def rows(relation):
    names = relation.select_columns
    return sorted(zip(*(relation.columns[n] for n in names)))


@pytest.fixture
def relation1():
    return create_test_relation(
        "relation1", [("id", [1, 2, 3]), ("value1", ["A", "B", "C"])]
    )


@pytest.fixture
def relation2():
    return create_test_relation(
        "relation2", [("id", [2, 3, 4]), ("value2", ["X", "Y", "Z"])]
    )


@pytest.fixture
def expected():
    return create_test_relation(
        "relation1_relation2_join",
        [("id", [2, 3]), ("value1", ["B", "C"]), ("value2", ["X", "Y"])],
    )


def test_nested_loop_join(relation1, relation2, expected):
    result = nested_loop_join(relation1, relation2, "id", "id", lambda a, b: a == b)
    assert_relation_eq(result, expected)
    assert result.name == "relation1_relation2_join"


def test_merge_join(relation1, relation2, expected):
    result = merge_join(relation1, relation2, "id", "id", lambda a, b: a == b)
    assert_relation_eq(result, expected)


def test_hash_join(relation1, relation2, expected):
    result = hash_join(relation1, relation2, "id", "id", lambda a, b: a == b)
    assert_relation_eq(result, expected)


def test_merge_join_rejects_unsorted(relation2):
    unsorted = create_test_relation("u", [("id", [3, 1, 2]), ("v", ["a", "b", "c"])])
    with pytest.raises(RelationError, match="not sorted"):
        merge_join(unsorted, relation2, "id", "id", lambda a, b: a == b)


@pytest.mark.parametrize("join", [nested_loop_join, merge_join, hash_join])
def test_missing_left_column(join, relation1, relation2):
    with pytest.raises(ColumnNotFoundError):
        join(relation1, relation2, "missing", "id", lambda a, b: a == b)


@pytest.mark.parametrize("join", [nested_loop_join, merge_join, hash_join])
def test_missing_right_column(join, relation1, relation2):
    with pytest.raises(ColumnNotFoundError):
        join(relation1, relation2, "id", "missing", lambda a, b: a == b)


def test_duplicates_agree_across_algorithms():
    left = create_test_relation("l", [("k", [1, 2, 2]), ("a", ["p", "q", "r"])])
    right = create_test_relation("r", [("k", [2, 2, 3]), ("b", ["x", "y", "z"])])
    eq = lambda a, b: a == b  # noqa: E731
    nested = nested_loop_join(left, right, "k", "k", eq)
    merged = merge_join(left, right, "k", "k", eq)
    hashed = hash_join(left, right, "k", "k", eq)
    assert len(nested.columns["k"]) == 4
    assert rows(nested) == rows(merged) == rows(hashed)


def test_hash_join_distinguishes_int_and_float():
    left = create_test_relation("l", [("k", [1]), ("a", ["p"])])
    right = create_test_relation("r", [("k", [1.0]), ("b", ["x"])])
    result = hash_join(left, right, "k", "k", lambda a, b: a == b)
    assert result.columns["k"] == []
    assert result.columns["b"] == []


def test_nested_loop_with_inequality(relation1, relation2):
    result = nested_loop_join(relation1, relation2, "id", "id", lambda a, b: a > b)
    assert result.columns["value1"] == ["C"]
    assert result.columns["value2"] == ["X"]


def test_shared_schema_drops_right_join_column(relation1, relation2):
    result = nested_loop_join(relation1, relation2, "id", "id", lambda a, b: True)
    assert result.select_columns == ["id", "value1", "value2"]
    assert len(result.columns["id"]) == 9
    assert all(len(v) == 9 for v in result.columns.values())