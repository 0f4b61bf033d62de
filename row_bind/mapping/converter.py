"""Value converter - type-directed conversion of raw cell values.

Dispatch order (first match wins):
1. date/time types   -> ISO-8601 via Pydantic, then culture-invariant formats
2. Enum subclasses   -> case-insensitive member name
3. UUID              -> uuid.UUID parsing
4. bool              -> yes/true/1 and no/false/0 tokens
5. list/tuple/set    -> comma-split, per-element conversion, bad elements dropped
6. anything else     -> str identity, or Pydantic lax-mode coercion
"""

from __future__ import annotations

import functools
import logging
import re
import types
import typing
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Union
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from row_bind.core.enums import SkipReason
from row_bind.core.exceptions import ConversionError
from row_bind.mapping.result import Fail, Ok
from row_bind.mapping.schema import is_class, unwrap_optional

logger = logging.getLogger(__name__)

TRUE_TOKENS = frozenset({"yes", "true", "1"})
FALSE_TOKENS = frozenset({"no", "false", "0"})

LIST_SEPARATOR = ","

# Month names and AM/PM are rewritten to numbers first; strptime only sees
# numeric directives.
_DATE_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%d %m %Y",
    "%m %d, %Y",
)
_TIME_SUFFIXES = ("", " %H:%M", " %H:%M:%S")
_TIME_FORMATS = ("%H:%M", "%H:%M:%S")

_MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)
_MONTHS = {
    **{name: number for number, name in enumerate(_MONTH_NAMES, start=1)},
    **{name[:3]: number for number, name in enumerate(_MONTH_NAMES, start=1)},
    "sept": 9,
}
_WORD = re.compile(r"[A-Za-z]+")
_MERIDIEM = re.compile(r"\b(\d{1,2})(:\d{2}(?::\d{2})?)\s*([AaPp])[Mm]$")

_SEQUENCE_TYPES: dict[Any, Callable[[list[Any]], Any]] = {
    list: list,
    tuple: tuple,
    set: set,
    frozenset: frozenset,
}


@functools.lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


@functools.lru_cache(maxsize=None)
def _collector_for(target: Any) -> tuple[Any, Callable[[list[Any]], Any]] | None:
    """Element type and container factory for a homogeneous sequence type.

    Returns None when ``target`` is not a supported sequence type.
    """
    if target in _SEQUENCE_TYPES:
        return Any, _SEQUENCE_TYPES[target]

    origin = typing.get_origin(target)
    if origin not in _SEQUENCE_TYPES:
        return None

    args = typing.get_args(target)
    if origin is tuple:
        # Only variadic tuples are homogeneous.
        if len(args) != 2 or args[1] is not Ellipsis:
            return None
    element = args[0] if args else Any
    return element, _SEQUENCE_TYPES[origin]


def _is_temporal(target: Any) -> bool:
    return is_class(target) and issubclass(target, (date, time))


def _to_24_hour(match: re.Match[str]) -> str:
    hour = int(match.group(1))
    if not 1 <= hour <= 12:
        return match.group(0)
    hour %= 12
    if match.group(3).lower() == "p":
        hour += 12
    return f"{hour}{match.group(2)}"


def _month_number(match: re.Match[str]) -> str:
    number = _MONTHS.get(match.group(0).casefold())
    return match.group(0) if number is None else str(number)


def _numeric_fields(text: str) -> str:
    """Rewrite English month names and a trailing AM/PM into numeric form."""
    return _WORD.sub(_month_number, _MERIDIEM.sub(_to_24_hour, text))


def _parse_formats(text: str, formats: typing.Iterable[str]) -> datetime | None:
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _convert_temporal(raw: Any, target: type) -> Any:
    if isinstance(raw, datetime):
        if target is date:
            return raw.date()
        if target is time:
            return raw.time()
        return raw
    if isinstance(raw, date) and target is not time:
        return datetime.combine(raw, time()) if target is datetime else raw
    if isinstance(raw, time) and target is time:
        return raw

    text = str(raw).strip()
    if not text or text.lstrip("+-").isdigit():
        raise ConversionError(raw, target, "not a date/time string")

    try:
        return _adapter(target).validate_python(text)
    except ValidationError:
        pass

    if target is date:
        # A full timestamp narrows to its date, as a native datetime does.
        try:
            return _adapter(datetime).validate_python(text).date()
        except ValidationError:
            pass

    text = _numeric_fields(text)
    if target is time:
        parsed = _parse_formats(text, _TIME_FORMATS)
        if parsed is not None:
            return parsed.time()
    else:
        formats = (d + t for d in _DATE_FORMATS for t in _TIME_SUFFIXES)
        parsed = _parse_formats(text, formats)
        if parsed is not None:
            return parsed if target is datetime else parsed.date()

    raise ConversionError(raw, target, "unrecognized date/time format")


def _convert_enum(raw: Any, target: type[Enum]) -> Enum:
    if isinstance(raw, target):
        return raw
    name = str(raw).strip().casefold()
    for member_name, member in target.__members__.items():
        if member_name.casefold() == name:
            return member
    raise ConversionError(raw, target, f"no member named '{raw}'")


def _convert_uuid(raw: Any) -> UUID:
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw).strip())
    except ValueError as e:
        raise ConversionError(raw, UUID, str(e)) from e


def _convert_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    token = str(raw).strip().lower()
    if token in TRUE_TOKENS:
        return True
    if token in FALSE_TOKENS:
        return False
    raise ConversionError(raw, bool, "not a boolean token")


def _convert_str(raw: Any) -> str:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (int, float, Decimal, date, time, UUID)):
        return str(raw)
    raise ConversionError(raw, str, f"unsupported source type {type(raw).__name__}")


class ValueConverter:
    """Converts one raw value into one declared field type.

    Conversions never raise: every failure, including unexpected exceptions
    from third-party validators, comes back as a ``Fail`` outcome.
    """

    def convert(self, raw: Any, target_type: Any) -> Ok[Any] | Fail:
        target, _ = unwrap_optional(target_type)
        try:
            return Ok(self._dispatch(raw, target))
        except ConversionError as e:
            return Fail(SkipReason.CONVERSION_FAILED, str(e), e)
        except Exception as e:
            error = ConversionError(raw, target, str(e))
            error.__cause__ = e
            return Fail(SkipReason.CONVERSION_FAILED, str(error), error)

    def _dispatch(self, raw: Any, target: Any) -> Any:
        if raw is None:
            raise ConversionError(raw, target, "value is null")

        if _is_temporal(target):
            return _convert_temporal(raw, target)
        if is_class(target) and issubclass(target, Enum):
            return _convert_enum(raw, target)
        if target is UUID:
            return _convert_uuid(raw)
        if target is bool:
            return _convert_bool(raw)

        collector = _collector_for(target)
        if collector is not None:
            return self._convert_sequence(raw, *collector)

        return self._coerce(raw, target)

    def _convert_sequence(
        self,
        raw: Any,
        element_type: Any,
        factory: Callable[[list[Any]], Any],
    ) -> Any:
        if isinstance(raw, (list, tuple, set, frozenset)):
            pieces = list(raw)
        else:
            pieces = [piece.strip() for piece in str(raw).split(LIST_SEPARATOR)]

        items: list[Any] = []
        for piece in pieces:
            outcome = self.convert(piece, element_type)
            if isinstance(outcome, Ok):
                items.append(outcome.value)
            else:
                logger.debug("Dropped list element %r: %s", piece, outcome.detail)
        return factory(items)

    def _coerce(self, raw: Any, target: Any) -> Any:
        if target is Any or target is object:
            return raw
        if target is str:
            return _convert_str(raw)

        origin = typing.get_origin(target)
        if origin is Union or origin is types.UnionType:
            errors = []
            for member in typing.get_args(target):
                try:
                    return self._dispatch(raw, member)
                except (ConversionError, ValueError, TypeError) as e:
                    errors.append(str(e))
            raise ConversionError(raw, target, "; ".join(errors))

        if isinstance(raw, str):
            raw = raw.strip()
        try:
            return _adapter(target).validate_python(raw)
        except ValidationError as e:
            raise ConversionError(raw, target, f"{e.error_count()} validation error(s)") from e


DEFAULT_CONVERTER = ValueConverter()


def convert_value(raw: Any, target_type: Any) -> Ok[Any] | Fail:
    """Convert with the shared default converter."""
    return DEFAULT_CONVERTER.convert(raw, target_type)
