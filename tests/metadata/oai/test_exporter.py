import logging

import pytest

from alexandria.metadata.core.exceptions import UnknownMetadataFormat
from alexandria.metadata.ingest.store import InMemoryObjectStore
from alexandria.metadata.oai.encoder import DC_NS, EDM_NS
from alexandria.metadata.oai.exporter import OAIRecordExporter
from tests.fixtures.files import ObjectFilesFixture
from tests.fixtures.oai import OAIFixture


@pytest.fixture()
def exporter(
    oai_fixture: OAIFixture, object_files_fixture: ObjectFilesFixture
) -> OAIRecordExporter:
    store = InMemoryObjectStore.from_json_file(
        object_files_fixture.sample_path("index.json")
    )
    return OAIRecordExporter(store, oai_fixture.settings)


class TestOAIRecordExporter:
    def test_export(self, exporter: OAIRecordExporter, oai_fixture: OAIFixture):
        document = exporter.export("fk4/maps/1", "oai_cdl")
        assert document is not None
        assert oai_fixture.children(document) == [
            (f"{{{DC_NS}}}creator", "United States. Geological Survey"),
            (f"{{{DC_NS}}}date", "1950"),
            (f"{{{DC_NS}}}title", "Topographic maps of California"),
            (f"{{{EDM_NS}}}isShownAt", "http://id.example.org/ark:/48907/f3maps1"),
            (
                f"{{{EDM_NS}}}object",
                "https://alexandria.example.edu/image-service/fk4-maps-1/full/400,/0/default.jpg",
            ),
        ]

    def test_export_without_images(
        self, exporter: OAIRecordExporter, oai_fixture: OAIFixture
    ):
        document = exporter.export("fk4/images/2", "oai_dc")
        assert document is not None
        assert oai_fixture.children(document) == [
            (f"{{{DC_NS}}}description", "Flight over Goleta"),
            (f"{{{DC_NS}}}description", "Taken in the morning"),
            (f"{{{DC_NS}}}description", "Aerial photograph, 1938"),
            (f"{{{DC_NS}}}title", "Aerial photograph"),
            (f"{{{DC_NS}}}title", "Goleta"),
        ]

    def test_missing_object(
        self, exporter: OAIRecordExporter, caplog: pytest.LogCaptureFixture
    ):
        caplog.set_level(logging.INFO)
        assert exporter.export("fk4/missing", "oai_dc") is None
        assert "No indexed fields for object fk4/missing" in caplog.messages

    def test_unknown_format(self, exporter: OAIRecordExporter):
        with pytest.raises(UnknownMetadataFormat):
            exporter.export("fk4/maps/1", "marc21")
