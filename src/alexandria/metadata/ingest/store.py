from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from alexandria.metadata.core.exceptions import AlexandriaValueError

ID_FIELD = "id"
ACCESSION_NUMBER_FIELD = "accession_number_ssim"


@dataclass(frozen=True)
class IndexedObject:
    id: str


class InMemoryObjectStore:
    """An object store over a fixed set of index documents.

    Each document is the flattened index of one object: an `id` plus
    its multi-valued fields, including `accession_number_ssim`. This is
    what a dump of the repository's search index looks like, so it is
    enough to resolve references and export records without a live
    repository.
    """

    def __init__(self, documents: Iterable[Mapping[str, Any]] = ()):
        self._documents: dict[str, Mapping[str, Any]] = {}
        self._by_accession_number: dict[str, str] = {}
        for document in documents:
            self.add(document)

    @classmethod
    def from_json_file(cls, path: str | Path) -> InMemoryObjectStore:
        with open(path, "rb") as f:
            documents = json.load(f)
        if not isinstance(documents, list):
            raise AlexandriaValueError(
                f"Expected a list of index documents in {path}"
            )
        return cls(documents)

    def add(self, document: Mapping[str, Any]) -> None:
        object_id = document.get(ID_FIELD)
        if not object_id:
            raise AlexandriaValueError(f"Index document has no {ID_FIELD}")
        self._documents[object_id] = document

        accession_numbers = document.get(ACCESSION_NUMBER_FIELD) or []
        if isinstance(accession_numbers, str):
            accession_numbers = [accession_numbers]
        for accession_number in accession_numbers:
            # The first object indexed under an accession number wins.
            self._by_accession_number.setdefault(accession_number, object_id)

    def __len__(self) -> int:
        return len(self._documents)

    @property
    def ids(self) -> list[str]:
        return list(self._documents)

    def find_by_accession_number(self, accession_number: str) -> IndexedObject | None:
        object_id = self._by_accession_number.get(accession_number)
        if object_id is None:
            return None
        return IndexedObject(object_id)

    def indexed_fields(self, object_id: str) -> Mapping[str, Any] | None:
        return self._documents.get(object_id)
