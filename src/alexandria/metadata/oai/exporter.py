from __future__ import annotations

from alexandria.metadata.ingest.resolver import ObjectStore
from alexandria.metadata.oai.formats import metadata_format
from alexandria.metadata.oai.record import ExportRecord
from alexandria.metadata.oai.settings import OAISettings
from alexandria.metadata.util.log import LoggerMixin


class OAIRecordExporter(LoggerMixin):
    """Encode stored objects for harvesting."""

    def __init__(self, store: ObjectStore, settings: OAISettings):
        self.store = store
        self.settings = settings

    def export(self, object_id: str, prefix: str) -> str | None:
        """The object's metadata in the given format, or None if there is
        no such object.

        :raises UnknownMetadataFormat: If no format has the given prefix.
        """
        encoder = metadata_format(prefix, self.settings)
        fields = self.store.indexed_fields(object_id)
        if fields is None:
            self.log.info(f"No indexed fields for object {object_id}")
            return None
        return encoder.encode(ExportRecord(fields))
