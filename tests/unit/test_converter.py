"""Unit tests for ValueConverter."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union
from uuid import UUID

import pytest

from row_bind.core.enums import SkipReason
from row_bind.core.exceptions import ConversionError
from row_bind.mapping.converter import (
    _DATE_FORMATS,
    _TIME_FORMATS,
    _TIME_SUFFIXES,
    ValueConverter,
    convert_value,
)
from row_bind.mapping.result import Fail, Ok


class Color(Enum):
    RED = 1
    DARK_BLUE = 2


class Opaque:
    """A type no conversion rule understands."""


@pytest.fixture
def converter() -> ValueConverter:
    return ValueConverter()


def _value(outcome: Ok[Any] | Fail) -> Any:
    assert isinstance(outcome, Ok), outcome
    return outcome.value


class TestBoolean:
    @pytest.mark.parametrize("token", ["yes", "YES", "True", "true", "1", " Yes "])
    def test_true_tokens(self, converter: ValueConverter, token: str) -> None:
        assert _value(converter.convert(token, bool)) is True

    @pytest.mark.parametrize("token", ["no", "No", "FALSE", "false", "0"])
    def test_false_tokens(self, converter: ValueConverter, token: str) -> None:
        assert _value(converter.convert(token, bool)) is False

    @pytest.mark.parametrize("token", ["maybe", "", "2", "y", "on"])
    def test_other_tokens_fail(self, converter: ValueConverter, token: str) -> None:
        outcome = converter.convert(token, bool)
        assert isinstance(outcome, Fail)
        assert outcome.reason is SkipReason.CONVERSION_FAILED

    def test_native_bool_passes_through(self, converter: ValueConverter) -> None:
        assert _value(converter.convert(False, bool)) is False

    def test_numeric_one(self, converter: ValueConverter) -> None:
        assert _value(converter.convert(1, bool)) is True


class TestSequence:
    def test_invalid_elements_dropped_in_order(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("1, 2, x, 4", list[int])) == [1, 2, 4]

    def test_all_invalid_yields_empty_list(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("a, b", list[int])) == []

    def test_float_elements(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("1000.5, 2000", list[float])) == [1000.5, 2000.0]

    def test_string_elements_trimmed(self, converter: ValueConverter) -> None:
        assert _value(converter.convert(" a ,b,  c", list[str])) == ["a", "b", "c"]

    def test_variadic_tuple(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("3,2,1", tuple[int, ...])) == (3, 2, 1)

    def test_set(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("x,y,x", set[str])) == {"x", "y"}

    def test_enum_elements(self, converter: ValueConverter) -> None:
        result = _value(converter.convert("red, green, dark_blue", list[Color]))
        assert result == [Color.RED, Color.DARK_BLUE]

    def test_bare_list_keeps_strings(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("a,b", list)) == ["a", "b"]

    def test_existing_list_is_iterated(self, converter: ValueConverter) -> None:
        assert _value(converter.convert(["1", 2, "bad"], list[int])) == [1, 2]


class TestDateTime:
    def test_iso_date(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("2024-03-15", date)) == date(2024, 3, 15)

    def test_iso_datetime(self, converter: ValueConverter) -> None:
        result = _value(converter.convert("2024-03-15T10:30:00", datetime))
        assert result == datetime(2024, 3, 15, 10, 30)

    def test_invariant_us_format(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("03/15/2024", datetime)) == datetime(2024, 3, 15)

    def test_invariant_month_name_with_time(self, converter: ValueConverter) -> None:
        result = _value(converter.convert("15 Mar 2024 10:30", datetime))
        assert result == datetime(2024, 3, 15, 10, 30)

    def test_datetime_narrowed_to_date(self, converter: ValueConverter) -> None:
        assert _value(converter.convert(datetime(2024, 3, 15, 9), date)) == date(2024, 3, 15)

    def test_iso_datetime_string_narrowed_to_date(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("2024-01-15T10:30:00", date)) == date(2024, 1, 15)

    def test_invariant_datetime_string_narrowed_to_date(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("01/15/2024 10:30", date)) == date(2024, 1, 15)

    @pytest.mark.parametrize(
        "raw",
        ["March 5, 2024", "Mar 5, 2024", "5 march 2024", "5 SEPT 2024", "Sep 5, 2024"],
    )
    def test_english_month_names(self, converter: ValueConverter, raw: str) -> None:
        assert _value(converter.convert(raw, date)).day == 5

    def test_meridiem_times(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("5 Mar 2024 3:15 PM", datetime)) == datetime(
            2024, 3, 5, 15, 15
        )
        assert _value(converter.convert("12:05 am", time)) == time(0, 5)
        assert _value(converter.convert("12:05:30 pm", time)) == time(12, 5, 30)

    def test_fallback_formats_avoid_locale_directives(self) -> None:
        formats = (*_DATE_FORMATS, *_TIME_SUFFIXES, *_TIME_FORMATS)
        for directive in ("%a", "%A", "%b", "%B", "%p", "%c", "%x", "%X"):
            assert not any(directive in fmt for fmt in formats)

    def test_meridiem_hour_out_of_range_fails(self, converter: ValueConverter) -> None:
        assert isinstance(converter.convert("13:00 PM", time), Fail)

    def test_date_widened_to_datetime(self, converter: ValueConverter) -> None:
        assert _value(converter.convert(date(2024, 3, 15), datetime)) == datetime(2024, 3, 15)

    def test_time(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("10:30", time)) == time(10, 30)

    @pytest.mark.parametrize("raw", ["not a date", "12345", "", "2024-13-45"])
    def test_unparseable_fails(self, converter: ValueConverter, raw: str) -> None:
        assert isinstance(converter.convert(raw, datetime), Fail)

    @pytest.mark.parametrize(
        "instant",
        [
            datetime(2024, 1, 1),
            datetime(1999, 12, 31, 23, 59, 59),
            datetime(2024, 2, 29, 12, 0, 0, 123456),
            datetime(2024, 6, 1, 8, 15, tzinfo=timezone(timedelta(hours=2))),
        ],
    )
    def test_format_round_trip(self, converter: ValueConverter, instant: datetime) -> None:
        assert _value(converter.convert(instant.isoformat(), datetime)) == instant


class TestEnumAndUuid:
    @pytest.mark.parametrize("raw", ["red", "RED", "Red", " red "])
    def test_enum_name_case_insensitive(self, converter: ValueConverter, raw: str) -> None:
        assert _value(converter.convert(raw, Color)) is Color.RED

    def test_enum_value_is_not_a_name(self, converter: ValueConverter) -> None:
        assert isinstance(converter.convert("1", Color), Fail)

    def test_enum_unknown_name(self, converter: ValueConverter) -> None:
        assert isinstance(converter.convert("purple", Color), Fail)

    def test_uuid(self, converter: ValueConverter) -> None:
        text = "12345678-1234-5678-1234-567812345678"
        assert _value(converter.convert(text, UUID)) == UUID(text)

    def test_uuid_with_braces(self, converter: ValueConverter) -> None:
        text = "{12345678-1234-5678-1234-567812345678}"
        assert _value(converter.convert(text, UUID)) == UUID(text.strip("{}"))

    def test_malformed_uuid(self, converter: ValueConverter) -> None:
        outcome = converter.convert("not-a-uuid", UUID)
        assert isinstance(outcome, Fail)
        assert isinstance(outcome.error, ConversionError)


class TestScalarCoercion:
    def test_string_to_int(self, converter: ValueConverter) -> None:
        assert _value(converter.convert(" 42 ", int)) == 42

    def test_integral_float_narrows_to_int(self, converter: ValueConverter) -> None:
        assert _value(converter.convert(42.0, int)) == 42

    def test_lossy_float_to_int_fails(self, converter: ValueConverter) -> None:
        assert isinstance(converter.convert(42.5, int), Fail)

    def test_int_widens_to_float(self, converter: ValueConverter) -> None:
        assert _value(converter.convert(3, float)) == 3.0

    def test_string_to_decimal(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("1.10", Decimal)) == Decimal("1.10")

    def test_non_numeric_string_fails(self, converter: ValueConverter) -> None:
        assert isinstance(converter.convert("abc", int), Fail)

    def test_string_identity(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("V8", str)) == "V8"

    def test_number_to_string(self, converter: ValueConverter) -> None:
        assert _value(converter.convert(5, str)) == "5"

    def test_container_to_string_fails(self, converter: ValueConverter) -> None:
        assert isinstance(converter.convert(["a"], str), Fail)

    def test_any_is_identity(self, converter: ValueConverter) -> None:
        marker = object()
        assert _value(converter.convert(marker, Any)) is marker

    def test_optional_wrapper_stripped(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("5", Optional[int])) == 5

    def test_union_members_tried_in_order(self, converter: ValueConverter) -> None:
        assert _value(converter.convert("5", Union[int, str])) == 5
        assert _value(converter.convert("x", Union[int, str])) == "x"

    def test_null_fails(self, converter: ValueConverter) -> None:
        outcome = converter.convert(None, str)
        assert isinstance(outcome, Fail)
        assert outcome.reason is SkipReason.CONVERSION_FAILED

    def test_unexpected_exception_becomes_failure(self, converter: ValueConverter) -> None:
        outcome = converter.convert("x", Opaque)
        assert isinstance(outcome, Fail)
        assert isinstance(outcome.error, ConversionError)
        assert outcome.error.target_type is Opaque

    def test_module_level_helper(self) -> None:
        assert _value(convert_value("7", int)) == 7
