# colstore

An in-memory column-store database. Each relation keeps its data column by
column. It supports the usual relational operators: selection, projection,
sorting, aggregation, indexing and joins. Relations can be loaded from CSV
files and saved back to them. A minimal SQL `SELECT` is also available.

## Installation

```
pip install .
```

The package has no runtime dependencies. To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
colstore [PATH] [--table NAME] [--columns COLS] [--delimiter CHAR]
```

The command creates a relation and loads the chosen columns of a CSV file
into it. It then prints the qualified name (`colstore.<table>`) followed by
the relation drawn as a boxed table.

| Option | Default |
| --- | --- |
| `PATH` | `test_data.csv` |
| `--table` | `Students` |
| `--columns` (comma separated) | `id,first_name,last_name,email,grade` |
| `--delimiter` (a single character) | `,` |

If the file cannot be read, or a relation error occurs, the command prints
`error: ...` to standard error and exits with status 1.

## Using the library

```python
from colstore.database import Database
from colstore.errors import RelationNotFoundError
from colstore.relation import Aggregation, JoinType, Order

db = Database("school")
db.create_relation("Students")
db.load_from_csv("Students", "students.csv", ",", ["id", "name", "grade"])

# Rows whose grade is below 3.0
good = db.select_from_relation("Students", "grade", lambda v: isinstance(v, float) and v < 3.0)
good.pretty_print()

names = db.project_relation("Students", ["id", "name"])
db.sort_relation("Students", "grade", Order.DESC)
average = db.aggregate("Students", "grade", Aggregation.AVERAGE)

# SELECT with an optional single WHERE <column> <value>
result = db.execute_sql("SELECT id, name FROM Students WHERE id 42")

try:
    db.project_relation("Teachers", ["id"])
except RelationNotFoundError:
    print("no such relation")
```

### Values

CSV fields are trimmed and then parsed:

- a field that reads as a 32-bit integer becomes an `int`;
- otherwise, a field that reads as a number becomes a `float`;
- anything else stays a `str`.

### The SQL subset

`parse_sql` accepts only `SELECT col[, col ...] FROM table [WHERE col value]`.
Any malformed query raises `ValueError`. The `WHERE` clause keeps the rows
whose cell, written as text, equals the given value exactly. For example,
`42` matches the integer 42 and `2.5` matches the float 2.5.

## Main names

- `colstore.relation.ColumnStoreRelation`: one relation. It is a dataclass
  with these fields: `name`, `fields`, `columns` (a column name mapped to a
  list of values), `select_columns` (the column order) and `indices`.
  - `load_csv` and `save` read and write CSV files.
  - `num_tuples` returns the number of rows.
  - `add_tuple`, `delete_tuple` and `update_tuple` change rows.
  - `scan`, `select`, `project`, `aggr` and `sort` are the operators.
  - `create_index` and `index_select` work with an index. An index maps
    each value's canonical text to its row positions; floats are written
    with six decimals.
  - `to_table` returns the boxed table as a string, and `pretty_print`
    prints it. Floats are shown with two decimals.
- `colstore.relation.Aggregation` (`COUNT`, `SUM`, `MIN`, `MAX`, `AVERAGE`):
  `COUNT` returns an `int`, and the others return a `float`.
- `colstore.relation.Order` (`ASC`, `DESC`): the sort direction.
- `colstore.relation.JoinType` (`NESTED_LOOP`, `MERGE_JOIN`, `HASH_JOIN`):
  the join algorithm.
- `colstore.joins`: `nested_loop_join`, `merge_join` and `hash_join`.
  - The result drops the right-hand join column.
  - `merge_join` raises `RelationError` unless both join columns are
    already sorted in ascending order.
- `colstore.database.Database`: relations kept by name, with the same
  operations addressed by relation name, plus `join` and `execute_sql`.
- `colstore.database.parse_sql` and `SelectQuery`: the SQL parser and its
  result.
- `colstore.dtype`: value parsing and formatting (`parse_value`,
  `format_value`, `display_value`) and a tagged big-endian binary encoding
  (`serialize_values` / `deserialize_values`).
- `colstore.render`: `render_table`, `column_width` and `cell_text`, used
  to draw the tables.
- `colstore.errors`: `RelationError` and its subclasses:
  - `RelationNotFoundError`
  - `RelationAlreadyExistsError`
  - `ColumnNotFoundError`
  - `ReadError`
  - `WriteError`
  - `InvalidInputError`

## What it does not do

All data lives in memory. Relations are saved only when you call `save`,
which writes a CSV file; the package has no storage format of its own.
There is no server and no interactive query shell. The only query language
is the `SELECT` subset described above: no inserts, updates or joins
through SQL.