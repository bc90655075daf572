import pytest

from colstore.cli import main
from colstore.relation import ColumnStoreRelation

COLUMNS = ["id", "first_name", "last_name", "email", "grade"]


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "students.csv"
    path.write_text(
        "id,first_name,last_name,email,grade\n"
        "1,Ada,Lovelace,ada@example.com,3.5\n"
        "2,Alan,Turing,alan@example.com,1.25\n"
    )
    return str(path)


def test_prints_loaded_relation(csv_file, capsys):
    assert main([csv_file]) == 0
    out = capsys.readouterr().out
    expected = ColumnStoreRelation()
    expected.load_csv(csv_file, "Students", ",", COLUMNS)
    assert out == "colstore.Students\n" + expected.to_table() + "\n"


def test_column_subset(csv_file, capsys):
    assert main([csv_file, "--columns", "id,first_name"]) == 0
    out = capsys.readouterr().out
    assert "first_name" in out
    assert "ada@example.com" not in out
    assert "last_name" not in out


def test_table_name(csv_file, capsys):
    assert main([csv_file, "--table", "People"]) == 0
    assert capsys.readouterr().out.startswith("colstore.People\n")


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.csv")]) == 1
    assert "Error reading file" in capsys.readouterr().err