from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from frozendict import frozendict


def _present(value: Any) -> bool:
    return value is not None and value != ""


def _as_values(value: Any) -> tuple[Any, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(v for v in value if _present(v))
    return (value,) if _present(value) else ()


class ExportRecord(Mapping[str, tuple[Any, ...]]):
    """A read-only view of the indexed fields of a stored object.

    Every field holds a tuple of values. Single-valued index fields are
    treated as one-element tuples, and empty values are dropped.
    """

    def __init__(self, fields: Mapping[str, Any]):
        self._fields: frozendict[str, tuple[Any, ...]] = frozendict(
            {name: _as_values(value) for name, value in fields.items()}
        )

    @classmethod
    def wrap(cls, fields: Mapping[str, Any]) -> ExportRecord:
        if isinstance(fields, cls):
            return fields
        return cls(fields)

    def __getitem__(self, name: str) -> tuple[Any, ...]:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"ExportRecord({dict(self._fields)!r})"

    def values_for(self, *names: str) -> list[Any]:
        """The values of the named fields, one field after another.

        Fields the record doesn't have contribute nothing.
        """
        return [value for name in names for value in self._fields.get(name, ())]
