from __future__ import annotations

import argparse

from alexandria.metadata.ingest.store import InMemoryObjectStore
from alexandria.metadata.oai.exporter import OAIRecordExporter
from alexandria.metadata.oai.formats import METADATA_FORMATS
from alexandria.metadata.oai.settings import OAISettings
from alexandria.metadata.scripts.base import Script
from alexandria.metadata.util.log import elapsed_time_logging, pluralize


class OAIExportScript(Script):
    """Encode the index documents of stored objects in an OAI-PMH metadata
    format, one XML document per line.
    """

    name = "Export OAI records"

    @classmethod
    def arg_parser(cls) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description=cls.__doc__)
        parser.add_argument(
            "--objects",
            help="A JSON list of index documents",
            required=True,
            metavar="FILE",
        )
        parser.add_argument(
            "--prefix",
            help="The metadata format to export",
            choices=sorted(METADATA_FORMATS),
            default="oai_dc",
        )
        parser.add_argument(
            "--id",
            help="Only export the object with this ID (can be specified multiple times)",
            action="append",
            dest="ids",
            metavar="ID",
        )
        parser.add_argument(
            "--host-name",
            help="The repository host name (default: $ALEXANDRIA_OAI_HOST_NAME)",
        )
        parser.add_argument(
            "--output",
            help="The file the records are written to (default: stdout)",
            metavar="FILE",
        )
        cls.add_verbosity_argument(parser)
        return parser

    def do_run(self) -> list[str]:
        settings = (
            OAISettings(host_name=self.args.host_name)
            if self.args.host_name
            else OAISettings()
        )
        store = InMemoryObjectStore.from_json_file(self.args.objects)
        exporter = OAIRecordExporter(store, settings)

        records = []
        with elapsed_time_logging(
            log_method=self.log.info, message_prefix=f"Export {self.args.prefix}"
        ):
            for object_id in self.args.ids or store.ids:
                encoded = exporter.export(object_id, self.args.prefix)
                if encoded is not None:
                    records.append(encoded)
        self.log.info(f"Exported {pluralize(len(records), 'record')}.")

        self.write_output(self.args.output, "\n".join(records))
        return records
