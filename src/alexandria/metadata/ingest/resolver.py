from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from alexandria.metadata.util.log import LoggerMixin


class StoredObject(Protocol):
    @property
    def id(self) -> str: ...


class ObjectStore(Protocol):
    """The repository objects are created in and exported from."""

    def find_by_accession_number(self, accession_number: str) -> StoredObject | None:
        """The object whose accession number index exactly matches, if any."""
        ...

    def indexed_fields(self, object_id: str) -> Mapping[str, Any] | None:
        """The flattened, multi-valued index fields stored for an object."""
        ...


class ReferenceResolver(LoggerMixin):
    """Turn accession numbers into the IDs of stored objects."""

    def __init__(self, store: ObjectStore):
        self.store = store

    def resolve(self, accession_number: str | Sequence[str] | None) -> str | None:
        """The ID of the object with this accession number.

        When given several accession numbers, only the first is looked up.

        :return: The object's ID, or None if no object has the accession number.
        """
        if accession_number is not None and not isinstance(accession_number, str):
            accession_number = next(iter(accession_number), None)
        if not accession_number:
            return None

        found = self.store.find_by_accession_number(accession_number)
        if found is None:
            self.log.info(f"No object found with accession number {accession_number}")
            return None
        return found.id
