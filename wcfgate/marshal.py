"""Typed JSON values from raw backend SQL rows.

The backend returns each column as a type tag plus raw bytes. This module
turns them into FieldContent values. On the wire every variant is a bare JSON
scalar (number, string or null), never an object with a kind field; clients
rely on that shape.

Type tags:
    1  signed 64-bit integer, parsed from UTF-8 text
    2  float, parsed from UTF-8 text
    3  UTF-8 text (invalid UTF-8 decodes to "")
    4  opaque binary, base64 encoded
    *  anything else is absent

Unparseable numbers become absent instead of failing the row.
"""

from __future__ import annotations

import base64
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from contracts.wechat import DbField, DbRow

TAG_INT = 1
TAG_FLOAT = 2
TAG_TEXT = 3
TAG_BLOB = 4

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


class FieldKind(StrEnum):
    """Variants of a typed field value."""

    INT = "int"
    FLOAT = "float"
    UTF8 = "utf8"
    BASE64 = "base64"
    NONE = "none"


@dataclass(frozen=True)
class FieldContent:
    """One typed column value.

    Exactly one variant is populated; ``value`` is None only for NONE.
    """

    kind: FieldKind
    value: int | float | str | None = None

    @classmethod
    def absent(cls) -> FieldContent:
        return cls(FieldKind.NONE)

    def to_json(self) -> int | float | str | None:
        """Bare JSON scalar for this value (untagged wire format)."""
        return self.value


def _utf8_or_empty(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return ""


def parse_int(text: str) -> int | None:
    """Strict signed 64-bit integer parse; None on failure."""
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def parse_float(text: str) -> float | None:
    """Strict float parse; None on failure or non-finite result."""
    if not _FLOAT_RE.fullmatch(text):
        return None
    value = float(text)
    # JSON has no representation for inf/nan
    if not math.isfinite(value):
        return None
    return value


def marshal_field(field: DbField) -> FieldContent:
    """Convert one raw backend field to a FieldContent.

    Total over the tag domain: unknown tags yield an absent value.
    """
    raw = bytes(field.content or b"")

    if field.type == TAG_INT:
        number = parse_int(_utf8_or_empty(raw))
        return FieldContent.absent() if number is None else FieldContent(FieldKind.INT, number)
    if field.type == TAG_FLOAT:
        real = parse_float(_utf8_or_empty(raw))
        return FieldContent.absent() if real is None else FieldContent(FieldKind.FLOAT, real)
    if field.type == TAG_TEXT:
        return FieldContent(FieldKind.UTF8, _utf8_or_empty(raw))
    if field.type == TAG_BLOB:
        return FieldContent(FieldKind.BASE64, base64.b64encode(raw).decode("ascii"))
    return FieldContent.absent()


def marshal_row(row: DbRow) -> dict[str, FieldContent]:
    """Map column name to typed value, preserving field order.

    A column emitted twice keeps its first position and its last value.
    """
    result: dict[str, FieldContent] = {}
    for field in row.fields:
        result[field.column] = marshal_field(field)
    return result


def marshal_rows(rows: Iterable[DbRow]) -> list[dict[str, Any]]:
    """Marshal a whole query result into JSON-ready dicts, in backend order."""
    return [
        {column: content.to_json() for column, content in marshal_row(row).items()}
        for row in rows
    ]
