"""Batch import of CSV metadata spreadsheets."""

from __future__ import annotations

import datetime
import re
from collections.abc import Iterable
from typing import IO, Any

from pydantic import BaseModel, ConfigDict, Field

from alexandria.metadata.core.exceptions import BaseAlexandriaException, RowError
from alexandria.metadata.ingest.assembler import RecordAssembler
from alexandria.metadata.ingest.row import Row, read_rows, values_for
from alexandria.metadata.service.logging.configuration import LogLevel
from alexandria.metadata.util.datetime_helpers import utc_now
from alexandria.metadata.util.log import LoggerMixin, log_elapsed_time, pluralize

# The column naming the kind of object a row describes.
TYPE_HEADER = "type"


def determine_model(type_field: str | None) -> str | None:
    """The name of the object model a row's `type` column refers to.

    "Image" and "image" give "Image"; "map set", "Map Set" and "map_set"
    give "MapSet".
    """
    if not type_field or not type_field.strip():
        return None
    words = re.split(r"[\s_]+", type_field.strip())
    return "".join(word[:1].upper() + word[1:].lower() for word in words if word)


class ImportedRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_number: int | None
    model: str | None
    attributes: dict[str, Any]


class ImportProblem(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_number: int | None
    error: str
    message: str
    field: str | None = None

    @classmethod
    def from_exception(
        cls, e: BaseAlexandriaException, row: Row
    ) -> ImportProblem:
        field = e.field if isinstance(e, RowError) else None
        return cls(
            line_number=row.line_number,
            error=e.__class__.__name__,
            message=str(e.message),
            field=field,
        )


class ImportReport(BaseModel):
    generated_at: datetime.datetime = Field(default_factory=utc_now)
    records: list[ImportedRecord] = []
    problems: list[ImportProblem] = []

    @property
    def succeeded(self) -> bool:
        return not self.problems

    def summary(self) -> str:
        return (
            f"Imported {pluralize(len(self.records), 'record')}, "
            f"{pluralize(len(self.problems), 'problem')}."
        )


class CSVMetadataImporter(LoggerMixin):
    """Assemble every row of a metadata spreadsheet.

    A row that can't be assembled is recorded as a problem in the report
    and the import carries on with the next row.
    """

    def __init__(self, assembler: RecordAssembler):
        self.assembler = assembler

    def import_row(self, row: Row) -> ImportedRecord:
        model = determine_model(next(iter(values_for(TYPE_HEADER, row)), None))
        return ImportedRecord(
            line_number=row.line_number,
            model=model,
            attributes=self.assembler.assemble(row),
        )

    def import_rows(self, rows: Iterable[Row]) -> ImportReport:
        report = ImportReport()
        for row in rows:
            try:
                report.records.append(self.import_row(row))
            except BaseAlexandriaException as e:
                self.assembler.row_log(row).error(f"Row not imported: {e}")
                report.problems.append(ImportProblem.from_exception(e, row))
        self.log.info(report.summary())
        return report

    @log_elapsed_time(log_level=LogLevel.info, message_prefix="CSV import")
    def import_csv(self, stream: IO[str]) -> ImportReport:
        return self.import_rows(read_rows(stream))
