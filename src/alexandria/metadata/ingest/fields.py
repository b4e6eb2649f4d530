"""Field specifications for tabular metadata.

Each recognized column of an input format is described by exactly one
field specification: a plain pass-through field, a typed field whose
values are coerced, a field handed to a named transformer, or a field
assembled from several sub-columns.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum, auto
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from alexandria.metadata.core.exceptions import InvalidFieldSpecification


class FieldType(StrEnum):
    string = auto()
    integer = auto()
    decimal = auto()
    date = auto()
    boolean = auto()


class BaseFieldSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str


class PlainField(BaseFieldSpec):
    kind: Literal["plain"] = "plain"


class TypedField(BaseFieldSpec):
    kind: Literal["typed"] = "typed"
    type: FieldType


class TransformedField(BaseFieldSpec):
    kind: Literal["transformed"] = "transformed"
    transformer: str


class SubfieldedField(BaseFieldSpec):
    kind: Literal["subfielded"] = "subfielded"
    subfields: tuple[str, ...] = Field(min_length=1)

    def subfield_header(self, subfield: str) -> str:
        """The column header a subfield's values are read from."""
        return f"{self.key}_{subfield}"

    @property
    def subfield_headers(self) -> list[str]:
        return [self.subfield_header(subfield) for subfield in self.subfields]


FieldSpec = Annotated[
    PlainField | TypedField | TransformedField | SubfieldedField,
    Field(discriminator="kind"),
]

# Flag names used in field definition files, and the kind each selects.
_FLAG_KINDS = {
    "typed": "typed",
    "transformer": "transformed",
    "subfields": "subfielded",
}
_FLAG_ATTRIBUTES = {
    "typed": "type",
    "transformer": "transformer",
    "subfields": "subfields",
}


def field_spec(entry: str | Mapping[str, Any]) -> FieldSpec:
    """Resolve one entry of a field definition file into a field specification.

    An entry is either a bare key, or a mapping with a single key whose
    value holds at most one of the flags `typed`, `transformer` or
    `subfields`:

        "title"
        {"sequence": {"typed": "integer"}}
        {"north_bound_latitude": {"transformer": "latitude"}}
        {"created": {"subfields": ["start", "finish"]}}

    :raises InvalidFieldSpecification: If the entry is not in one of these forms.
    """
    if isinstance(entry, str):
        return PlainField(key=entry)

    if not isinstance(entry, Mapping) or len(entry) != 1:
        raise InvalidFieldSpecification(
            f"Field entries must be a string or a mapping with a single key: {entry!r}"
        )

    [(key, flags)] = entry.items()
    flags = dict(flags or {})
    unknown = set(flags) - set(_FLAG_KINDS)
    if unknown:
        raise InvalidFieldSpecification(
            f"Unknown flags for field {key}: {', '.join(sorted(unknown))}"
        )

    active = [flag for flag, value in flags.items() if value]
    if len(active) > 1:
        raise InvalidFieldSpecification(
            f"Field {key} may only set one of typed, transformer or subfields, "
            f"not {', '.join(active)}"
        )
    if not active:
        return PlainField(key=key)

    [flag] = active
    try:
        match _FLAG_KINDS[flag]:
            case "typed":
                return TypedField(key=key, type=flags[flag])
            case "transformed":
                return TransformedField(key=key, transformer=flags[flag])
            case _:
                return SubfieldedField(key=key, subfields=flags[flag])
    except ValidationError as e:
        raise InvalidFieldSpecification(
            f"Invalid {_FLAG_ATTRIBUTES[flag]} for field {key}: {flags[flag]!r}"
        ) from e
