from __future__ import annotations

import argparse

from alexandria.metadata.ingest.assembler import RecordAssembler
from alexandria.metadata.ingest.importer import CSVMetadataImporter, ImportReport
from alexandria.metadata.ingest.resolver import ReferenceResolver
from alexandria.metadata.ingest.store import InMemoryObjectStore
from alexandria.metadata.scripts.base import Script


class CSVImportScript(Script):
    """Parse a CSV metadata spreadsheet into attribute records, and write
    the import report as JSON.
    """

    name = "Import CSV metadata"

    @classmethod
    def arg_parser(cls) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description=cls.__doc__)
        parser.add_argument(
            "--file", help="The CSV metadata file", required=True, metavar="FILE"
        )
        parser.add_argument(
            "--objects",
            help="A JSON list of index documents of existing objects, used to resolve parent accession numbers",
            metavar="FILE",
        )
        parser.add_argument(
            "--output",
            help="The file the JSON report is written to (default: stdout)",
            metavar="FILE",
        )
        cls.add_verbosity_argument(parser)
        return parser

    def do_run(self) -> ImportReport:
        store = (
            InMemoryObjectStore.from_json_file(self.args.objects)
            if self.args.objects
            else InMemoryObjectStore()
        )
        importer = CSVMetadataImporter(RecordAssembler(ReferenceResolver(store)))

        # Spreadsheet programs like to save CSV with a byte order mark.
        with open(self.args.file, newline="", encoding="utf-8-sig") as f:
            report = importer.import_csv(f)

        self.write_output(self.args.output, report.model_dump_json(indent=2))
        return report
