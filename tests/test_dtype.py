import math

import pytest

from colstore.dtype import (
    data_length,
    deserialize_values,
    display_value,
    format_value,
    parse_value,
    serialize_values,
    serialized_length,
    type_json,
)


def test_serialize_deserialize_round_trip():
    values = ["Test", 42, 3.14]
    assert deserialize_values(serialize_values(values)) == values


@pytest.mark.parametrize(
    "values",
    [[], [""], [-7, 0, 2147483647, -2147483648], ["héllo", 1.5, "x"], [-0.5, 1e300]],
)
def test_round_trip_variety(values):
    assert deserialize_values(serialize_values(values)) == values


def test_csv_fields_parse():
    assert parse_value("0") == 0
    assert isinstance(parse_value("3"), int)
    assert parse_value("1.5") == 1.5
    assert parse_value("3.33") == 3.33
    assert parse_value("Name1") == "Name1"


def test_parse_trims_whitespace():
    assert parse_value("  7 ") == 7
    assert parse_value(" Name2\t") == "Name2"


def test_parse_out_of_range_int_becomes_float():
    result = parse_value("2147483648")
    assert isinstance(result, float)
    assert result == 2147483648.0


def test_parse_rejects_underscored_numbers():
    assert parse_value("1_000") == "1_000"


def test_parse_infinity():
    assert parse_value("inf") == math.inf
    assert parse_value("-inf") == -math.inf


def test_display_matches_saved_csv():
    assert display_value(0) == "0"
    assert display_value(1.5) == "1.5"
    assert display_value(3.33) == "3.33"
    assert display_value("Name3") == "Name3"


def test_display_whole_float_and_large_float():
    assert display_value(130.0) == "130"
    assert display_value(1e20) == "100000000000000000000"


def test_format_value():
    assert format_value(1.5) == "1.500000"
    assert format_value(2) == "2"
    assert format_value("b") == "b"


def test_lengths():
    assert data_length(42) == 4
    assert data_length(3.14) == 8
    assert data_length("Test") == 4
    assert serialized_length(42) == 5
    assert serialized_length("Test") == 5


def test_type_json():
    assert type_json(1) == '"Integer"'
    assert type_json(1.0) == '"Float"'
    assert type_json("a") == '"String"'


def test_wire_bytes():
    assert serialize_values([42]) == b"\x01\x00\x00\x00\x2a"
    assert serialize_values(["ab"]) == b"\x00\x00\x00\x00\x00\x00\x00\x00\x02ab"
    assert serialize_values([1.0]) == b"\x02\x3f\xf0\x00\x00\x00\x00\x00\x00"


def test_unknown_prefix_raises():
    with pytest.raises(ValueError):
        deserialize_values(b"\x07\x00")


def test_truncated_data_raises():
    with pytest.raises(ValueError):
        deserialize_values(b"\x01\x00\x00")


def test_integer_overflow_raises():
    with pytest.raises(ValueError):
        serialize_values([2**31])


def test_unsupported_type_raises():
    with pytest.raises(TypeError):
        serialize_values([None])