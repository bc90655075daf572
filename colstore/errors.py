"""Exceptions raised by relations and the database."""

from __future__ import annotations


class RelationError(Exception):
    """Base class for all relation and database errors."""


class RelationNotFoundError(RelationError):
    """No relation with the given name exists."""

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        super().__init__("Relation not found" if name is None else f"Relation not found: {name}")


class RelationAlreadyExistsError(RelationError):
    """A relation with the given name already exists."""

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        super().__init__(
            "Relation already exists" if name is None else f"Relation already exists: {name}"
        )


class ColumnNotFoundError(RelationError):
    """The named column is not part of the relation."""

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"Column not found: {column}")


class WriteError(RelationError):
    """Writing a relation failed."""


class ReadError(RelationError):
    """Reading a relation failed."""


class InvalidInputError(RelationError):
    """The input does not match the relation."""