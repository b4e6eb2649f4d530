"""Transformations from raw column values to attribute entries.

Every transformation takes an attribute key and the raw values read for
it, and returns either `{key: values}` or, when there is nothing to
record, an empty mapping.
"""

from __future__ import annotations

import datetime
import re
from collections.abc import Callable, Sequence
from decimal import Decimal
from typing import Any
from urllib.parse import urlsplit

from dateutil import parser as date_parser
from frozendict import frozendict

from alexandria.metadata.core.exceptions import (
    CoercionError,
    MalformedRowError,
    UnknownTransformer,
)
from alexandria.metadata.ingest.fields import (
    FieldSpec,
    FieldType,
    PlainField,
    SubfieldedField,
    TransformedField,
    TypedField,
)
from alexandria.metadata.ingest.row import Row, occurrences, values_for

AttributeMapping = dict[str, list[Any]]
Transformer = Callable[[str, Sequence[str]], AttributeMapping]


def default(key: str, values: Sequence[str]) -> AttributeMapping:
    if not values:
        return {}
    return {key: list(values)}


# Typed coercion

_TRUE_VALUES = frozenset({"true", "yes", "y", "1"})
_FALSE_VALUES = frozenset({"false", "no", "n", "0"})

# Two defaults that differ in every component, used to tell whether a
# parsed date actually named its year, month and day.
_PROBE_DEFAULTS = (datetime.datetime(1, 1, 1), datetime.datetime(2, 2, 2))


# ASCII digits only, without the underscores Python literals allow.
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _coerce_integer(value: str) -> int:
    value = value.strip()
    if not _INTEGER_PATTERN.fullmatch(value):
        raise ValueError(value)
    return int(value)


def _coerce_decimal(value: str) -> Decimal:
    value = value.strip()
    if not _DECIMAL_PATTERN.fullmatch(value):
        raise ValueError(value)
    return Decimal(value)


def _coerce_date(value: str) -> datetime.date | datetime.datetime:
    value = value.strip()
    try:
        parsed = date_parser.isoparse(value)
    except ValueError:
        first, second = (
            date_parser.parse(value, default=probe) for probe in _PROBE_DEFAULTS
        )
        if first.date() != second.date():
            raise ValueError(f"Incomplete date: {value}")
        parsed = first

    if parsed.tzinfo is None and parsed.time() == datetime.time():
        return parsed.date()
    return parsed


def _coerce_boolean(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(value)


_COERCIONS: frozendict[FieldType, Callable[[str], Any]] = frozendict(
    {
        FieldType.string: str,
        FieldType.integer: _coerce_integer,
        FieldType.decimal: _coerce_decimal,
        FieldType.date: _coerce_date,
        FieldType.boolean: _coerce_boolean,
    }
)


def typed(key: str, values: Sequence[str], field_type: FieldType) -> AttributeMapping:
    """Coerce every value to the declared type.

    :raises CoercionError: If any value cannot be coerced.
    """
    if not values:
        return {}

    coerce = _COERCIONS[field_type]
    coerced = []
    for value in values:
        try:
            coerced.append(coerce(value))
        except (ValueError, OverflowError):
            raise CoercionError(key, value, field_type.value) from None
    return {key: coerced}


# Subfields


def subfields(spec: SubfieldedField, row: Row) -> AttributeMapping:
    """Combine a field's sub-columns into one compound value per occurrence.

    The *n*th column of every sub-column header goes into the *n*th
    compound value. Empty cells are left out of their compound value,
    occurrences with no values at all are skipped, and sub-columns
    without any values are ignored.

    :raises MalformedRowError: If the sub-columns with values don't all
        occur the same number of times.
    """
    columns = {
        subfield: occurrences(spec.subfield_header(subfield), row)
        for subfield in spec.subfields
    }
    columns = {
        subfield: cells for subfield, cells in columns.items() if any(cells)
    }
    if not columns:
        return {}

    counts = {len(cells) for cells in columns.values()}
    if len(counts) > 1:
        described = ", ".join(
            f"{spec.subfield_header(subfield)}={len(cells)}"
            for subfield, cells in columns.items()
        )
        raise MalformedRowError(
            f"Subfield columns occur different numbers of times: {described}",
            field=spec.key,
            line_number=row.line_number,
        )

    [count] = counts
    compound = [
        {
            subfield: cells[index]
            for subfield, cells in columns.items()
            if cells[index]
        }
        for index in range(count)
    ]
    return {spec.key: [value for value in compound if value]}


# Named transformers


def _bounded_decimal(expected: str, limit: int) -> Transformer:
    def transform(key: str, values: Sequence[str]) -> AttributeMapping:
        if not values:
            return {}
        normalized = []
        for value in values:
            try:
                number = _coerce_decimal(value)
            except ValueError:
                raise CoercionError(key, value, expected) from None
            if abs(number) > limit:
                raise CoercionError(key, value, expected)
            normalized.append(value.strip())
        return {key: normalized}

    return transform


def uri(key: str, values: Sequence[str]) -> AttributeMapping:
    if not values:
        return {}
    normalized = []
    for value in values:
        value = value.strip()
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise CoercionError(key, value, "an http or https URI")
        normalized.append(value)
    return {key: normalized}


NAMED_TRANSFORMERS: frozendict[str, Transformer] = frozendict(
    {
        "latitude": _bounded_decimal("a latitude in decimal degrees", 90),
        "longitude": _bounded_decimal("a longitude in decimal degrees", 180),
        "uri": uri,
    }
)


def named(name: str, key: str, values: Sequence[str]) -> AttributeMapping:
    try:
        transformer = NAMED_TRANSFORMERS[name]
    except KeyError:
        raise UnknownTransformer(name, key) from None
    return transformer(key, values)


def transform(spec: FieldSpec, row: Row) -> AttributeMapping:
    """Extract and transform the values of one field from a row."""
    match spec:
        case SubfieldedField():
            return subfields(spec, row)
        case TypedField():
            return typed(spec.key, values_for(spec.key, row), spec.type)
        case TransformedField():
            return named(spec.transformer, spec.key, values_for(spec.key, row))
        case PlainField():
            return default(spec.key, values_for(spec.key, row))
    raise TypeError(f"Not a field specification: {spec!r}")
