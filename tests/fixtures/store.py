from __future__ import annotations

from typing import Any

import pytest

from alexandria.metadata.ingest.assembler import RecordAssembler
from alexandria.metadata.ingest.resolver import ReferenceResolver
from alexandria.metadata.ingest.store import InMemoryObjectStore


class ObjectStoreFixture:
    def __init__(self) -> None:
        self.store = InMemoryObjectStore()
        self.resolver = ReferenceResolver(self.store)
        self.assembler = RecordAssembler(self.resolver)

    def add_object(
        self, object_id: str, accession_number: str | None = None, **fields: Any
    ) -> dict[str, Any]:
        document: dict[str, Any] = {"id": object_id, **fields}
        if accession_number is not None:
            document["accession_number_ssim"] = [accession_number]
        self.store.add(document)
        return document


@pytest.fixture()
def object_store_fixture() -> ObjectStoreFixture:
    return ObjectStoreFixture()
