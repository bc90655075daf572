"""Join algorithms over column-store relations."""

from __future__ import annotations

import math
from collections.abc import Callable
from itertools import pairwise

from colstore.dtype import Value
from colstore.errors import ColumnNotFoundError, RelationError
from colstore.relation import ColumnStoreRelation

JoinPredicate = Callable[[Value, Value], bool]


def _rank(value: Value) -> int:
    """Position of a value's type in the cross-type ordering."""
    if isinstance(value, str):
        return 0
    if isinstance(value, int):
        return 1
    return 2


def _less(a: Value, b: Value) -> bool:
    """Strings before integers before floats; same types compare by value."""
    rank_a, rank_b = _rank(a), _rank(b)
    if rank_a != rank_b:
        return rank_a < rank_b
    return a < b


def _same(a: Value, b: Value) -> bool:
    """Equal only when both type and value agree."""
    return type(a) is type(b) and a == b


def _is_sorted(values: list[Value]) -> bool:
    return not any(_less(current, previous) for previous, current in pairwise(values))


def _column(relation: ColumnStoreRelation, name: str) -> list[Value]:
    try:
        return relation.columns[name]
    except KeyError:
        raise ColumnNotFoundError(name) from None


def _empty_result(
    left: ColumnStoreRelation, right: ColumnStoreRelation, right_column: str
) -> ColumnStoreRelation:
    """Result relation with the combined schema, the right join column dropped."""
    fields = dict(left.fields)
    fields.update((k, v) for k, v in right.fields.items() if k != right_column)
    select_columns = list(left.select_columns) + [
        name for name in right.select_columns if name != right_column
    ]
    return ColumnStoreRelation(
        name=f"{left.name}_{right.name}_join",
        fields=fields,
        columns={name: [] for name in select_columns},
        select_columns=select_columns,
    )


def _emit(
    result: ColumnStoreRelation,
    left: ColumnStoreRelation,
    left_row: int,
    right: ColumnStoreRelation,
    right_row: int,
    right_column: str,
) -> None:
    """Append one combined row to the result."""
    for key, values in left.columns.items():
        target = result.columns.get(key)
        if target is not None:
            target.append(values[left_row])
    for key, values in right.columns.items():
        if key == right_column:
            continue
        target = result.columns.get(key)
        if target is not None:
            target.append(values[right_row])


def nested_loop_join(
    left: ColumnStoreRelation,
    right: ColumnStoreRelation,
    left_column: str,
    right_column: str,
    predicate: JoinPredicate,
) -> ColumnStoreRelation:
    """Join by comparing every pair of rows."""
    left_values = _column(left, left_column)
    right_values = _column(right, right_column)
    result = _empty_result(left, right, right_column)
    for i, left_value in enumerate(left_values):
        for j, right_value in enumerate(right_values):
            if predicate(left_value, right_value):
                _emit(result, left, i, right, j, right_column)
    return result


def merge_join(
    left: ColumnStoreRelation,
    right: ColumnStoreRelation,
    left_column: str,
    right_column: str,
    predicate: JoinPredicate,
) -> ColumnStoreRelation:
    """Join two relations already sorted ascending on their join columns."""
    left_values = _column(left, left_column)
    right_values = _column(right, right_column)
    if not (_is_sorted(left_values) and _is_sorted(right_values)):
        raise RelationError("Columns are not sorted for merge join")

    result = _empty_result(left, right, right_column)
    i = j = 0
    while i < len(left_values) and j < len(right_values):
        if predicate(left_values[i], right_values[j]):
            k = j
            while k < len(right_values) and _same(right_values[k], right_values[j]):
                _emit(result, left, i, right, k, right_column)
                k += 1
            i += 1
        elif _less(left_values[i], right_values[j]):
            i += 1
        else:
            j += 1
    return result


def _hash_key(value: Value) -> tuple[int, Value] | None:
    if isinstance(value, float) and math.isnan(value):
        return None
    return (_rank(value), value)


def hash_join(
    left: ColumnStoreRelation,
    right: ColumnStoreRelation,
    left_column: str,
    right_column: str,
    predicate: JoinPredicate,
) -> ColumnStoreRelation:
    """Join through a hash table built on the left relation's join column."""
    left_values = _column(left, left_column)
    right_values = _column(right, right_column)
    result = _empty_result(left, right, right_column)

    table: dict[tuple[int, Value], list[int]] = {}
    for i, value in enumerate(left_values):
        key = _hash_key(value)
        if key is not None:
            table.setdefault(key, []).append(i)

    for j, right_value in enumerate(right_values):
        key = _hash_key(right_value)
        if key is None:
            continue
        for i in table.get(key, ()):
            if predicate(left_values[i], right_value):
                _emit(result, left, i, right, j, right_column)
    return result