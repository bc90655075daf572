import pytest

from colstore.errors import (
    ColumnNotFoundError,
    InvalidInputError,
    ReadError,
    RelationAlreadyExistsError,
    RelationError,
    RelationNotFoundError,
    WriteError,
)


def test_column_not_found_keeps_column():
    err = ColumnNotFoundError("grade")
    assert err.column == "grade"
    assert "grade" in str(err)


def test_relation_not_found_keeps_name():
    err = RelationNotFoundError("Students")
    assert err.name == "Students"
    assert "Students" in str(err)


def test_relation_not_found_without_name():
    err = RelationNotFoundError()
    assert err.name is None
    assert "not found" in str(err)


def test_relation_already_exists_keeps_name():
    err = RelationAlreadyExistsError("Students")
    assert err.name == "Students"
    assert "Students" in str(err)


@pytest.mark.parametrize("cls", [WriteError, ReadError, InvalidInputError, RelationError])
def test_message_errors_caught_as_relation_error(cls):
    with pytest.raises(RelationError) as info:
        raise cls("Error reading file")
    assert str(info.value) == "Error reading file"
    assert type(info.value) is cls


@pytest.mark.parametrize(
    "err",
    [ColumnNotFoundError("x"), RelationNotFoundError("r"), RelationAlreadyExistsError("r")],
)
def test_structured_errors_caught_as_relation_error(err):
    with pytest.raises(RelationError) as info:
        raise err
    assert info.value is err