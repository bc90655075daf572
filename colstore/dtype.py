"""Cell values of a relation: parsing, formatting and a compact binary encoding.

A cell holds one of three kinds of value: a 32-bit integer (``int``), a
double precision float (``float``) or a text string (``str``).
"""

from __future__ import annotations

import math
import re
import struct
from collections.abc import Iterable
from decimal import Decimal
from typing import Union

Value = Union[int, float, str]

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_TAG_STRING = 0
_TAG_INT = 1
_TAG_FLOAT = 2

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)


def _kind(value: Value) -> str:
    """Return the type name of a cell value, rejecting anything else."""
    if isinstance(value, bool):
        raise TypeError("booleans are not valid cell values")
    if isinstance(value, str):
        return "String"
    if isinstance(value, int):
        return "Integer"
    if isinstance(value, float):
        return "Float"
    raise TypeError(f"unsupported cell value: {value!r}")


def parse_value(text: str) -> Value:
    """Parse trimmed text as a 32-bit int, then a float, else keep it as text."""
    stripped = text.strip()
    if _INT_PATTERN.fullmatch(stripped):
        number = int(stripped)
        if INT_MIN <= number <= INT_MAX:
            return number
    if _FLOAT_PATTERN.fullmatch(stripped):
        return float(stripped)
    return stripped


def _special_float(number: float) -> str | None:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    return None


def format_value(value: Value) -> str:
    """Canonical text of a value; floats carry six decimals."""
    kind = _kind(value)
    if kind == "Float":
        special = _special_float(value)
        return special if special is not None else f"{value:.6f}"
    return str(value)


def display_value(value: Value) -> str:
    """Human text of a value; floats use their shortest positional form."""
    kind = _kind(value)
    if kind != "Float":
        return str(value)
    special = _special_float(value)
    if special is not None:
        return special
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def data_length(value: Value) -> int:
    """Size of the raw data in bytes."""
    kind = _kind(value)
    if kind == "Integer":
        return 4
    if kind == "Float":
        return 8
    return len(value.encode("utf-8"))


def serialized_length(value: Value) -> int:
    """Size of the raw data plus one byte for the type tag."""
    return data_length(value) + 1


def type_json(value: Value) -> str:
    """JSON string naming the value's type."""
    return f'"{_kind(value)}"'


def serialize_values(values: Iterable[Value]) -> bytes:
    """Encode values as tagged big-endian records."""
    out = bytearray()
    for value in values:
        kind = _kind(value)
        if kind == "String":
            raw = value.encode("utf-8")
            out.append(_TAG_STRING)
            out += struct.pack(">Q", len(raw))
            out += raw
        elif kind == "Integer":
            if not INT_MIN <= value <= INT_MAX:
                raise ValueError(f"integer {value} does not fit in 32 bits")
            out.append(_TAG_INT)
            out += struct.pack(">i", value)
        else:
            out.append(_TAG_FLOAT)
            out += struct.pack(">d", value)
    return bytes(out)


def _unpack(fmt: str, data: bytes, offset: int):
    try:
        return struct.unpack_from(fmt, data, offset)[0]
    except struct.error as exc:
        raise ValueError("truncated value data") from exc


def deserialize_values(data: bytes) -> list[Value]:
    """Decode records written by :func:`serialize_values`."""
    values: list[Value] = []
    pos = 0
    size = len(data)
    while pos < size:
        tag = data[pos]
        pos += 1
        if tag == _TAG_STRING:
            length = _unpack(">Q", data, pos)
            pos += 8
            raw = bytes(data[pos:pos + length])
            if len(raw) != length:
                raise ValueError("truncated value data")
            values.append(raw.decode("utf-8"))
            pos += length
        elif tag == _TAG_INT:
            values.append(_unpack(">i", data, pos))
            pos += 4
        elif tag == _TAG_FLOAT:
            values.append(_unpack(">d", data, pos))
            pos += 8
        else:
            raise ValueError("Unknown DataType prefix")
    return values