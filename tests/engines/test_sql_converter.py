"""Unit tests for engines.sql.converter."""

from decimal import Decimal

import pytest

from dbquery.engines.sql import SKIP, ConversionError, PlaceholderKind, convert_value
from dbquery.engines.sql.conditional import SKIP_MARKER
from dbquery.engines.sql.converter import is_numeric

INT = PlaceholderKind.INT
FLOAT = PlaceholderKind.FLOAT
ARRAY = PlaceholderKind.ARRAY
IDENTIFIER = PlaceholderKind.IDENTIFIER
AUTO = PlaceholderKind.AUTO


class TestIsNumeric:
    def test_numbers(self):
        assert is_numeric(1)
        assert is_numeric(1.5)
        assert is_numeric(Decimal("2.5"))

    def test_numeric_strings(self):
        for s in ("1", "-1", "+1", "1.", ".5", "1.5e3", "-1e-3", " 7 "):
            assert is_numeric(s), s

    def test_not_numeric(self):
        for v in ("", " ", ".", "abc", "0x1A", "1_000", "inf", "nan", "1e", True, None, [1]):
            assert not is_numeric(v), v

    def test_non_finite(self):
        assert not is_numeric(float("inf"))
        assert not is_numeric(float("nan"))
        assert not is_numeric(Decimal("Infinity"))


class TestNull:
    def test_nullable_kinds(self, escaper):
        assert convert_value(AUTO, None, escaper) == "NULL"
        assert convert_value(INT, None, escaper) == "NULL"
        assert convert_value(FLOAT, None, escaper) == "NULL"

    def test_array_rejects_null(self, escaper):
        with pytest.raises(ConversionError, match="NULL"):
            convert_value(ARRAY, None, escaper)

    def test_identifier_rejects_null(self, escaper):
        with pytest.raises(ConversionError) as exc:
            convert_value(IDENTIFIER, None, escaper)
        assert exc.value.kind is IDENTIFIER


class TestSkip:
    def test_passed_through_for_every_kind(self, escaper):
        for kind in PlaceholderKind:
            assert convert_value(kind, SKIP, escaper) == SKIP_MARKER

    def test_skip_inside_array_rejected(self, escaper):
        with pytest.raises(ConversionError, match="Wrong arg value"):
            convert_value(ARRAY, [1, SKIP], escaper)

    def test_skip_string_is_just_a_string(self, escaper):
        assert convert_value(AUTO, "%SKIP%", escaper) == "'%SKIP%'"


class TestInt:
    def test_int(self, escaper):
        assert convert_value(INT, 5, escaper) == "5"
        assert convert_value(INT, -12, escaper) == "-12"

    def test_bool(self, escaper):
        assert convert_value(INT, True, escaper) == "1"
        assert convert_value(INT, False, escaper) == "0"

    def test_float_truncated(self, escaper):
        assert convert_value(INT, 3.9, escaper) == "3"
        assert convert_value(INT, -3.9, escaper) == "-3"

    def test_numeric_string(self, escaper):
        assert convert_value(INT, "42", escaper) == "42"
        assert convert_value(INT, " 7 ", escaper) == "7"
        assert convert_value(INT, "12.7", escaper) == "12"
        assert convert_value(INT, "1e3", escaper) == "1000"

    def test_decimal(self, escaper):
        assert convert_value(INT, Decimal("9.99"), escaper) == "9"

    def test_big_int_string_keeps_precision(self, escaper):
        assert convert_value(INT, "12345678901234567890", escaper) == "12345678901234567890"

    def test_fraction_below_one(self, escaper):
        assert convert_value(INT, "0.5", escaper) == "0"
        assert convert_value(INT, "-5e-1", escaper) == "0"

    def test_too_many_digits(self, escaper):
        for v in (10**5000, "1e5000", "1e999999999"):
            with pytest.raises(ConversionError, match="Wrong int arg value"):
                convert_value(INT, v, escaper)

    def test_invalid(self, escaper):
        for v in ("abc", "1; DROP TABLE t", [1], {"a": 1}, float("inf")):
            with pytest.raises(ConversionError, match="Wrong int arg value"):
                convert_value(INT, v, escaper)


class TestFloat:
    def test_float(self, escaper):
        assert convert_value(FLOAT, 1.5, escaper) == "1.5"
        assert convert_value(FLOAT, -0.25, escaper) == "-0.25"

    def test_int_becomes_float(self, escaper):
        assert convert_value(FLOAT, 2, escaper) == "2.0"

    def test_bool(self, escaper):
        assert convert_value(FLOAT, True, escaper) == "1"
        assert convert_value(FLOAT, False, escaper) == "0"

    def test_numeric_string(self, escaper):
        assert convert_value(FLOAT, "2.5", escaper) == "2.5"
        assert convert_value(FLOAT, " 3 ", escaper) == "3.0"

    def test_decimal(self, escaper):
        assert convert_value(FLOAT, Decimal("0.1"), escaper) == "0.1"

    def test_invalid(self, escaper):
        for v in ("x", float("nan"), "1e400", [1.5]):
            with pytest.raises(ConversionError, match="Wrong float arg value"):
                convert_value(FLOAT, v, escaper)


class TestArray:
    def test_list(self, escaper):
        assert convert_value(ARRAY, [1, 2, 3], escaper) == "1, 2, 3"

    def test_tuple(self, escaper):
        assert convert_value(ARRAY, (1, 2), escaper) == "1, 2"

    def test_mixed_values(self, escaper):
        assert convert_value(ARRAY, ["a", None, 1.5], escaper) == "'a', NULL, 1.5"

    def test_map(self, escaper):
        assert convert_value(ARRAY, {"a": 1, "b": 2}, escaper) == "`a` = 1, `b` = 2"

    def test_map_with_null_and_string(self, escaper):
        assert (
            convert_value(ARRAY, {"name": "Jack", "email": None}, escaper)
            == "`name` = 'Jack', `email` = NULL"
        )

    def test_sequential_int_keys_are_a_list(self, escaper):
        assert convert_value(ARRAY, {0: "x", 1: "y"}, escaper) == "'x', 'y'"

    def test_unordered_int_keys_are_a_map(self, escaper):
        assert convert_value(ARRAY, {1: "x", 0: "y"}, escaper) == "`1` = 'x', `0` = 'y'"

    def test_empty(self, escaper):
        assert convert_value(ARRAY, [], escaper) == ""
        assert convert_value(ARRAY, {}, escaper) == ""

    def test_strings_escaped(self, escaper):
        assert convert_value(ARRAY, ["O'Brien"], escaper) == "'O\\'Brien'"

    def test_not_a_collection(self, escaper):
        for v in ("abc", 5, 1.5, True):
            with pytest.raises(ConversionError, match="Wrong array arg value"):
                convert_value(ARRAY, v, escaper)

    def test_nested_collection_rejected(self, escaper):
        with pytest.raises(ConversionError, match="Wrong arg value"):
            convert_value(ARRAY, [[1]], escaper)

    def test_bool_element_rejected(self, escaper):
        with pytest.raises(ConversionError, match="Wrong arg value"):
            convert_value(ARRAY, [True], escaper)


class TestIdentifier:
    def test_scalar(self, escaper):
        assert convert_value(IDENTIFIER, "name", escaper) == "`name`"

    def test_list(self, escaper):
        assert convert_value(IDENTIFIER, ["a", "b"], escaper) == "`a`, `b`"

    def test_int_scalar(self, escaper):
        assert convert_value(IDENTIFIER, 5, escaper) == "`5`"

    def test_mapping_uses_values(self, escaper):
        assert convert_value(IDENTIFIER, {"x": "a", "y": "b"}, escaper) == "`a`, `b`"

    def test_escaped(self, escaper):
        assert convert_value(IDENTIFIER, "a'b", escaper) == "`a\\'b`"

    def test_too_many_digits(self, escaper):
        with pytest.raises(ConversionError, match="Wrong identifier arg value"):
            convert_value(IDENTIFIER, 10**5000, escaper)

    def test_invalid(self, escaper):
        for v in (3.5, True, [None], [["a"]], {"a": 1.5}):
            with pytest.raises(ConversionError, match="Wrong identifier arg value"):
                convert_value(IDENTIFIER, v, escaper)


class TestAuto:
    def test_int(self, escaper):
        assert convert_value(AUTO, 5, escaper) == "5"

    def test_float(self, escaper):
        assert convert_value(AUTO, 1.5, escaper) == "1.5"

    def test_string(self, escaper):
        assert convert_value(AUTO, "x", escaper) == "'x'"

    def test_numeric_string_stays_string(self, escaper):
        assert convert_value(AUTO, "5", escaper) == "'5'"

    def test_injection_neutralised(self, escaper):
        result = convert_value(AUTO, "'; DROP TABLE users; --", escaper)
        assert result == "'\\'; DROP TABLE users; --'"

    def test_bool_rejected(self, escaper):
        with pytest.raises(ConversionError, match="Wrong arg value"):
            convert_value(AUTO, True, escaper)

    def test_collection_rejected(self, escaper):
        with pytest.raises(ConversionError, match="Wrong arg value"):
            convert_value(AUTO, [1], escaper)

    def test_too_many_digits(self, escaper):
        with pytest.raises(ConversionError, match="Wrong int arg value"):
            convert_value(AUTO, 10**5000, escaper)

    def test_deterministic(self, escaper):
        assert convert_value(AUTO, "x", escaper) == convert_value(AUTO, "x", escaper)
