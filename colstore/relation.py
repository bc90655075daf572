"""In-memory column-store relation and its operators."""

from __future__ import annotations

import csv
import functools
import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from colstore.dtype import Value, display_value, format_value, parse_value
from colstore.errors import (
    ColumnNotFoundError,
    InvalidInputError,
    ReadError,
    RelationError,
    WriteError,
)
from colstore.render import render_table

Predicate = Callable[[Value], bool]


class Aggregation(Enum):
    """Aggregate functions available on a column."""

    COUNT = "count"
    SUM = "sum"
    MIN = "min"
    MAX = "max"
    AVERAGE = "average"


class Order(Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class JoinType(Enum):
    """Join algorithms."""

    NESTED_LOOP = "nested_loop"
    MERGE_JOIN = "merge_join"
    HASH_JOIN = "hash_join"


def _numeric(value: Value) -> float | None:
    if isinstance(value, str):
        return None
    return float(value)


def _compare(a: Value, b: Value) -> int:
    """Order values of the same type; values of different types tie."""
    if type(a) is type(b):
        if a < b:
            return -1
        if a > b:
            return 1
    return 0


@dataclass
class ColumnStoreRelation:
    """A table whose data is held column by column."""

    name: str = ""
    fields: dict[str, Value] = field(default_factory=dict)
    columns: dict[str, list[Value]] = field(default_factory=dict)
    select_columns: list[str] = field(default_factory=list)
    indices: dict[str, dict[str, list[int]]] = field(default_factory=dict)

    def _column(self, column_name: str) -> list[Value]:
        try:
            return self.columns[column_name]
        except KeyError:
            raise ColumnNotFoundError(column_name) from None

    def _rows(self, rows: Sequence[int]) -> dict[str, list[Value]]:
        return {
            key: [values[i] for i in rows if i < len(values)]
            for key, values in self.columns.items()
        }

    def num_tuples(self) -> int:
        """Number of rows, taken from the first column."""
        first = next(iter(self.columns.values()), None)
        return 0 if first is None else len(first)

    def load_csv(
        self,
        path: str,
        table_name: str,
        delimiter: str,
        select_columns: Iterable[str],
    ) -> None:
        """Replace the content with the selected columns of a CSV file."""
        wanted = list(select_columns)
        self.columns.clear()
        self.name = table_name
        self.select_columns = wanted
        if len(delimiter) != 1:
            raise InvalidInputError("Delimiter must be a single character")

        try:
            with open(path, newline="", encoding="utf-8") as handle:
                reader = csv.reader(handle, delimiter=delimiter)
                headers = next(reader, [])
                for header in headers:
                    if header in wanted:
                        self.columns[header] = []
                for record in reader:
                    if not record:
                        continue
                    if len(record) != len(headers):
                        raise ReadError("Error reading csv")
                    for header, text in zip(headers, record):
                        column = self.columns.get(header)
                        if column is not None:
                            column.append(parse_value(text))
        except OSError as exc:
            raise ReadError("Error reading file") from exc
        except (csv.Error, UnicodeDecodeError) as exc:
            raise ReadError("Error reading csv") from exc

    def save(self, path: str) -> None:
        """Write the selected columns to a CSV file with a header line."""
        max_rows = max((len(col) for col in self.columns.values()), default=0)
        try:
            with open(path, "w", newline="", encoding="utf-8") as handle:
                writer = csv.writer(handle, lineterminator="\n")
                if self.select_columns:
                    writer.writerow(self.select_columns)
                for row in range(max_rows):
                    cells = []
                    for name in self.select_columns:
                        column = self.columns.get(name, [])
                        cells.append(display_value(column[row]) if row < len(column) else "")
                    writer.writerow(cells)
        except (OSError, csv.Error) as exc:
            raise WriteError(str(exc)) from exc

    def to_table(self) -> str:
        """The selected columns as a boxed text table."""
        return render_table(self.columns, self.select_columns)

    def pretty_print(self) -> None:
        """Print the boxed table to standard output."""
        print(self.to_table())

    def add_tuple(self, values: Sequence[Value]) -> None:
        """Append one row given in the order of ``select_columns``."""
        if len(values) != len(self.select_columns):
            raise InvalidInputError("Tuple does not match relation schema")
        for name in self.select_columns:
            if name not in self.columns:
                raise ColumnNotFoundError(name)
        for name, value in zip(self.select_columns, values):
            self.columns[name].append(value)

    def delete_tuple(self, column_name: str, predicate: Predicate) -> int:
        """Delete rows whose value in a column matches; return how many."""
        doomed = {i for i, v in enumerate(self._column(column_name)) if predicate(v)}
        if not doomed:
            return 0
        for key, values in self.columns.items():
            self.columns[key] = [v for i, v in enumerate(values) if i not in doomed]
        return len(doomed)

    def update_tuple(
        self,
        target_column: str,
        filter_column: str,
        predicate: Predicate,
        update_func: Callable[[Value], Value],
    ) -> int:
        """Rewrite target cells of rows whose filter cell matches; return how many."""
        if target_column not in self.columns or filter_column not in self.columns:
            raise ColumnNotFoundError(f"{target_column} or {filter_column} not found")
        target = self.columns[target_column]
        updated = 0
        for index, value in enumerate(list(self.columns[filter_column])):
            if predicate(value):
                target[index] = update_func(target[index])
                updated += 1
        return updated

    def scan(
        self, select_columns: Sequence[str], predicate: Predicate
    ) -> ColumnStoreRelation:
        """Filter each named column on its own, dropping columns left empty."""
        result = ColumnStoreRelation(name=self.name)
        for name in select_columns:
            kept = [v for v in self._column(name) if predicate(v)]
            if kept:
                result.columns[name] = kept
        result.select_columns = list(select_columns)
        return result

    def select(self, column_name: str, predicate: Predicate) -> ColumnStoreRelation:
        """Rows whose value in a column matches the predicate."""
        matching = [i for i, v in enumerate(self._column(column_name)) if predicate(v)]
        matched = set(matching)
        indices: dict[str, dict[str, list[int]]] = {}
        for key, index in self.indices.items():
            filtered = {}
            for value_key, rows in index.items():
                kept = [r for r in rows if r in matched]
                if kept:
                    filtered[value_key] = kept
            indices[key] = filtered
        return ColumnStoreRelation(
            name=self.name,
            fields=dict(self.fields),
            columns=self._rows(matching),
            select_columns=list(self.select_columns),
            indices=indices,
        )

    def project(self, columns_to_keep: Sequence[str]) -> ColumnStoreRelation:
        """A relation holding only the named columns, in that order."""
        result = ColumnStoreRelation(name=self.name)
        for name in columns_to_keep:
            result.columns[name] = list(self._column(name))
            result.select_columns.append(name)
        return result

    def aggr(self, column_name: str, aggregation: Aggregation) -> Value:
        """Apply an aggregate function to a column."""
        column = self._column(column_name)
        if aggregation is Aggregation.COUNT:
            return len(column)

        numbers = [n for n in map(_numeric, column) if n is not None]
        if aggregation is Aggregation.SUM:
            if len(numbers) != len(column):
                raise RelationError("Sum operation on non-numeric column")
            total = 0.0
            for number in numbers:
                total += number
            return total
        if aggregation is Aggregation.MIN:
            least = math.inf
            for number in numbers:
                if number < least:
                    least = number
            if least == math.inf:
                raise RelationError("Min operation on non-numeric column or empty column")
            return least
        if aggregation is Aggregation.MAX:
            most = -math.inf
            for number in numbers:
                if number > most:
                    most = number
            if most == -math.inf:
                raise RelationError("Max operation on non-numeric column or empty column")
            return most
        if not numbers:
            raise RelationError("Average operation on non-numeric column or empty column")
        total = 0.0
        for number in numbers:
            total += number
        return total / len(numbers)

    def sort(self, column_name: str, order: Order) -> None:
        """Reorder all rows in place by one column."""
        key_column = self._column(column_name)
        if order is Order.ASC:
            compare = _compare
        else:
            def compare(a: Value, b: Value) -> int:
                return -_compare(a, b)
        positions = sorted(
            range(len(key_column)),
            key=functools.cmp_to_key(lambda a, b: compare(key_column[a], key_column[b])),
        )
        for key, values in self.columns.items():
            self.columns[key] = [values[i] for i in positions]

    def create_index(self, column_name: str) -> None:
        """Map each distinct value's canonical text to its row positions."""
        index: dict[str, list[int]] = {}
        for row, value in enumerate(self._column(column_name)):
            index.setdefault(format_value(value), []).append(row)
        self.indices[column_name] = {key: index[key] for key in sorted(index)}

    def index_select(self, column_name: str, predicate: Predicate) -> ColumnStoreRelation:
        """Rows found through an existing index whose key matches the predicate."""
        index = self.indices.get(column_name)
        if index is None:
            raise ColumnNotFoundError(column_name)
        matched = sorted(
            {row for key, rows in index.items() if predicate(parse_value(key)) for row in rows}
        )
        return ColumnStoreRelation(
            name=self.name,
            fields=dict(self.fields),
            columns=self._rows(matched),
            select_columns=list(self.select_columns),
        )