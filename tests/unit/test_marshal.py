"""Tests for the dynamic row marshaler."""

import json

import pytest

from contracts.wechat import DbField, DbRow
from wcfgate.marshal import (
    FieldContent,
    FieldKind,
    marshal_field,
    marshal_row,
    marshal_rows,
    parse_float,
    parse_int,
)


class TestMarshalField:
    """Tag dispatch for single fields."""

    def test_integer(self):
        assert marshal_field(DbField(1, "n", b"42")) == FieldContent(FieldKind.INT, 42)

    def test_negative_integer(self):
        assert marshal_field(DbField(1, "n", b"-7")).to_json() == -7

    def test_unparseable_integer_is_absent(self):
        assert marshal_field(DbField(1, "n", b"abc")) == FieldContent.absent()

    def test_float(self):
        assert marshal_field(DbField(2, "f", b"3.14")) == FieldContent(FieldKind.FLOAT, 3.14)

    def test_unparseable_float_is_absent(self):
        assert marshal_field(DbField(2, "f", b"pi")).kind == FieldKind.NONE

    def test_text(self):
        assert marshal_field(DbField(3, "s", b"hello")) == FieldContent(FieldKind.UTF8, "hello")

    def test_text_multibyte(self):
        assert marshal_field(DbField(3, "s", "微信".encode())).to_json() == "微信"

    def test_invalid_utf8_text_is_empty_string(self):
        assert marshal_field(DbField(3, "s", b"\xff\xfe")) == FieldContent(FieldKind.UTF8, "")

    def test_blob_is_base64(self):
        assert marshal_field(DbField(4, "b", bytes([0, 1, 2]))).to_json() == "AAEC"

    def test_empty_blob(self):
        assert marshal_field(DbField(4, "b", b"")).to_json() == ""

    @pytest.mark.parametrize("tag", [0, 5, 99, -1])
    def test_unknown_tag_is_absent(self, tag):
        assert marshal_field(DbField(tag, "x", b"42")).to_json() is None


class TestParsers:
    """Strict numeric parsing."""

    @pytest.mark.parametrize("text", ["", " 1", "1.0", "1e3", "0x10", "12a"])
    def test_parse_int_rejects(self, text):
        assert parse_int(text) is None

    def test_parse_int_bounds(self):
        assert parse_int("9223372036854775807") == 2**63 - 1
        assert parse_int("-9223372036854775808") == -(2**63)
        assert parse_int("9223372036854775808") is None

    def test_parse_int_sign(self):
        assert parse_int("+5") == 5

    @pytest.mark.parametrize(
        "text,expected", [("1", 1.0), ("-0.5", -0.5), (".5", 0.5), ("1e3", 1000.0)]
    )
    def test_parse_float_accepts(self, text, expected):
        assert parse_float(text) == expected

    @pytest.mark.parametrize("text", ["inf", "-Infinity", "NaN", "1e999"])
    def test_parse_float_non_finite_is_none(self, text):
        assert parse_float(text) is None

    @pytest.mark.parametrize("text", ["", "1.2.3", "abc", "1_000"])
    def test_parse_float_rejects(self, text):
        assert parse_float(text) is None


class TestMarshalRow:
    """Row and result-set marshaling."""

    def test_preserves_column_order(self):
        row = DbRow([DbField(3, "b", b"x"), DbField(1, "a", b"1")])
        assert list(marshal_row(row)) == ["b", "a"]

    def test_duplicate_column_last_value_wins(self):
        row = DbRow([DbField(1, "id", b"1"), DbField(3, "name", b"n"), DbField(1, "id", b"2")])
        result = marshal_row(row)
        assert list(result) == ["id", "name"]
        assert result["id"].to_json() == 2

    def test_rows_are_untagged_json(self):
        rows = [
            DbRow(
                [
                    DbField(1, "id", b"42"),
                    DbField(2, "score", b"2.5"),
                    DbField(3, "name", b"Alice"),
                    DbField(4, "avatar", bytes([0, 1, 2])),
                    DbField(7, "odd", b"?"),
                ]
            )
        ]
        data = marshal_rows(rows)
        assert json.loads(json.dumps(data)) == [
            {"id": 42, "score": 2.5, "name": "Alice", "avatar": "AAEC", "odd": None}
        ]

    def test_empty_result(self):
        assert marshal_rows([]) == []
