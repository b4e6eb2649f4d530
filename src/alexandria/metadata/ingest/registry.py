from __future__ import annotations

import functools
import json
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from alexandria.metadata.core.exceptions import (
    InvalidFieldSpecification,
    UnknownTransformer,
)
from alexandria.metadata.ingest.fields import FieldSpec, TransformedField, field_spec
from alexandria.metadata.ingest.transformers import NAMED_TRANSFORMERS
from alexandria.metadata.util.log import LoggerMixin
from alexandria.metadata.util.resources import resources_dir


class FieldRegistry(LoggerMixin):
    """The ordered, recognized fields of one input format.

    A registry is built once and never changed afterwards. Building it
    checks that every field produces its own attribute key and that every
    named transformer exists, so these problems are found at startup
    rather than part way through an import.
    """

    def __init__(self, name: str, fields: Iterable[FieldSpec]):
        self.name = name
        self._fields: tuple[FieldSpec, ...] = tuple(fields)

        seen: set[str] = set()
        for spec in self._fields:
            if spec.key in seen:
                raise InvalidFieldSpecification(
                    f"Field {spec.key} is defined more than once in the {name} fields"
                )
            seen.add(spec.key)

            if (
                isinstance(spec, TransformedField)
                and spec.transformer not in NAMED_TRANSFORMERS
            ):
                raise UnknownTransformer(spec.transformer, spec.key)

    @classmethod
    def from_entries(
        cls, name: str, entries: Iterable[str | Mapping[str, Any]]
    ) -> FieldRegistry:
        return cls(name, (field_spec(entry) for entry in entries))

    @classmethod
    def from_resource(cls, name: str) -> FieldRegistry:
        """Load the field definitions shipped for an input format."""
        resource = resources_dir("fields") / f"{name}.json"
        with resource.open() as f:
            entries = json.load(f)
        registry = cls.from_entries(name, entries)
        registry.log.debug(f"Loaded {len(registry)} {name} fields.")
        return registry

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, key: object) -> bool:
        return any(spec.key == key for spec in self._fields)

    @property
    def keys(self) -> list[str]:
        return [spec.key for spec in self._fields]


@functools.cache
def csv_fields() -> FieldRegistry:
    """The fields recognized in CSV metadata spreadsheets."""
    return FieldRegistry.from_resource("csv")
