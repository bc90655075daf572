"""A named collection of relations with a minimal SELECT query language."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from colstore.dtype import Value, display_value
from colstore.errors import RelationAlreadyExistsError, RelationNotFoundError
from colstore.joins import hash_join, merge_join, nested_loop_join
from colstore.relation import Aggregation, ColumnStoreRelation, JoinType, Order

_JOINS = {
    JoinType.NESTED_LOOP: nested_loop_join,
    JoinType.MERGE_JOIN: merge_join,
    JoinType.HASH_JOIN: hash_join,
}


@dataclass
class SelectQuery:
    """A parsed ``SELECT cols FROM table [WHERE col value]`` query."""

    columns: list[str]
    table: str
    where_clause: tuple[str, str] | None = None


def parse_sql(query: str) -> SelectQuery:
    """Parse a SELECT query; raise ValueError when it is malformed."""
    tokens = query.split()
    if not tokens:
        raise ValueError("Empty query")
    if tokens[0].upper() != "SELECT":
        raise ValueError("Only SELECT queries are supported")

    rest = iter(tokens[1:])
    columns = []
    for token in rest:
        if token.upper() == "FROM":
            break
        columns.append(token.rstrip(","))
    if not columns:
        raise ValueError("Expected columns in SELECT clause")

    remaining = list(rest)
    if not remaining:
        raise ValueError("Expected table name")
    table, remaining = remaining[0], remaining[1:]

    where_clause = None
    while remaining:
        keyword, remaining = remaining[0], remaining[1:]
        if keyword.upper() != "WHERE":
            raise ValueError("Unexpected token in query")
        if len(remaining) < 2:
            raise ValueError("Invalid WHERE clause")
        where_clause = (remaining[0], remaining[1])
        remaining = remaining[2:]

    return SelectQuery(columns=columns, table=table, where_clause=where_clause)


class Database:
    """Relations held in memory and addressed by name."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.relations: dict[str, ColumnStoreRelation] = {}

    def _relation(self, name: str) -> ColumnStoreRelation:
        try:
            return self.relations[name]
        except KeyError:
            raise RelationNotFoundError(name) from None

    def execute_sql(self, query: str) -> ColumnStoreRelation:
        """Run a SELECT query and return the resulting relation."""
        command = parse_sql(query)
        relation = self._relation(command.table)
        if command.where_clause is not None:
            column, value = command.where_clause
            relation = relation.select(column, lambda d: display_value(d) == value)
        return relation.project(command.columns)

    def add_relation(self, name: str, relation: ColumnStoreRelation) -> None:
        """Store a relation under a name, replacing any previous one."""
        self.relations[name] = relation

    def create_relation(self, name: str) -> None:
        """Create an empty relation; the name must be unused."""
        if name in self.relations:
            raise RelationAlreadyExistsError(name)
        self.relations[name] = ColumnStoreRelation()

    def load_from_csv(
        self, name: str, path: str, delimiter: str, select_columns: Sequence[str]
    ) -> None:
        """Load the selected columns of a CSV file into an existing relation."""
        self._relation(name).load_csv(path, name, delimiter, select_columns)

    def select_from_relation(
        self, name: str, column_name: str, predicate: Callable[[Value], bool]
    ) -> ColumnStoreRelation:
        """Rows of a relation whose value in a column matches."""
        return self._relation(name).select(column_name, predicate)

    def project_relation(
        self, name: str, columns_to_keep: Sequence[str]
    ) -> ColumnStoreRelation:
        """A relation reduced to the named columns."""
        return self._relation(name).project(columns_to_keep)

    def pretty_print_relation(self, name: str) -> None:
        """Print a relation's qualified name and its table."""
        print(f"{self.name}.{name}")
        self._relation(name).pretty_print()

    def aggregate(
        self, relation_name: str, column_name: str, aggregation: Aggregation
    ) -> Value:
        """Apply an aggregate function to a column of a relation."""
        return self._relation(relation_name).aggr(column_name, aggregation)

    def sort_relation(self, relation_name: str, column_name: str, order: Order) -> None:
        """Sort a relation in place."""
        self._relation(relation_name).sort(column_name, order)

    def create_index(self, relation_name: str, column_name: str) -> None:
        """Build an index on a column of a relation."""
        self._relation(relation_name).create_index(column_name)

    def join(
        self,
        r_name: str,
        r_col: str,
        s_name: str,
        s_col: str,
        predicate: Callable[[Value, Value], bool],
        join_type: JoinType,
    ) -> ColumnStoreRelation:
        """Join two relations with the chosen algorithm."""
        left = self._relation(r_name)
        right = self._relation(s_name)
        return _JOINS[join_type](left, right, r_col, s_col, predicate)