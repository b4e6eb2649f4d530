"""Crosswalk tables: output elements and where their values come from."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from frozendict import frozendict

from alexandria.metadata.oai.record import ExportRecord
from alexandria.metadata.oai.settings import OAISettings

ComputedFunction = Callable[[ExportRecord, OAISettings], Iterable[Any]]


@dataclass(frozen=True)
class DirectField:
    """Values read straight from one or more export record fields."""

    names: tuple[str, ...]

    def values(self, record: ExportRecord, settings: OAISettings) -> list[Any]:
        return record.values_for(*self.names)


@dataclass(frozen=True)
class Computed:
    """Values derived from the whole export record."""

    function: ComputedFunction

    def values(self, record: ExportRecord, settings: OAISettings) -> list[Any]:
        return list(self.function(record, settings))


ElementMapping = DirectField | Computed
Crosswalk = frozendict[str, frozendict[str, ElementMapping]]


def element_mapping(
    source: str | Sequence[str] | ElementMapping | ComputedFunction,
) -> ElementMapping:
    if isinstance(source, (DirectField, Computed)):
        return source
    if isinstance(source, str):
        return DirectField((source,))
    if callable(source):
        return Computed(source)
    return DirectField(tuple(source))


def build_crosswalk(
    vocabularies: Mapping[
        str,
        Mapping[str, str | Sequence[str] | ElementMapping | ComputedFunction],
    ],
) -> Crosswalk:
    """Build a crosswalk table.

    Keys are vocabulary prefixes, in output order. Each maps output element
    names, in output order, to a field name, a list of field names whose
    values are concatenated, or a function of the export record.
    """
    return frozendict(
        {
            prefix: frozendict(
                {name: element_mapping(source) for name, source in elements.items()}
            )
            for prefix, elements in vocabularies.items()
        }
    )


def image_urls(record: ExportRecord, settings: OAISettings) -> list[str]:
    """Absolute URLs of the images stored for an object."""
    return [
        f"https://{settings.host_name}{path}"
        for path in record.values_for("image_url_ssm")
    ]
