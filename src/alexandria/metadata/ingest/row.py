"""Rows of tabular metadata.

Spreadsheets exported to CSV routinely carry several columns with the
same header (e.g. three `title` columns, or one `files` column per
file). Mapping-based readers like :class:`csv.DictReader` keep only the
last of them, so rows are kept as ordered (header, value) cells and
repeated values are counted out by :func:`values_for`.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator, Sequence
from typing import IO, NamedTuple


class Cell(NamedTuple):
    header: str
    value: str | None


class Row:
    """One row of tabular metadata, as an ordered sequence of cells."""

    def __init__(self, cells: Iterable[Cell], line_number: int | None = None):
        self.cells: tuple[Cell, ...] = tuple(cells)
        self.line_number = line_number

    @classmethod
    def from_csv(
        cls,
        headers: Sequence[str],
        values: Sequence[str],
        line_number: int | None = None,
    ) -> Row:
        """Pair a CSV record up with the header record.

        Headers are stripped of surrounding whitespace. Records shorter than
        the header leave their trailing cells without a value. Values past
        the last header have no column and are ignored.
        """
        cells = [
            Cell(header.strip(), values[position] if position < len(values) else None)
            for position, header in enumerate(headers)
        ]
        return cls(cells, line_number=line_number)

    @classmethod
    def from_pairs(cls, *pairs: tuple[str, str | None]) -> Row:
        return cls(Cell(header, value) for header, value in pairs)

    def __len__(self) -> int:
        return len(self.cells)

    def __repr__(self) -> str:
        return f"<Row line={self.line_number} cells={len(self.cells)}>"

    def index(self, header: str) -> int | None:
        """The position of the first cell with this header, if any."""
        for position, cell in enumerate(self.cells):
            if cell.header == header:
                return position
        return None

    @property
    def headers(self) -> list[str]:
        return [cell.header for cell in self.cells]


def values_for(header: str, row: Row) -> list[str]:
    """Every value in the row for the given header, in column order.

    Missing headers and empty cells are skipped, so a header that is
    absent or blank yields an empty list rather than an error.
    """
    start = row.index(header)
    if start is None:
        return []

    return [
        cell.value
        for cell in row.cells[start:]
        if cell.header == header and cell.value
    ]


def occurrences(header: str, row: Row) -> list[str | None]:
    """The cell value of every column with the given header, in column order.

    Unlike :func:`values_for`, empty cells are kept, so the *n*th entry
    is always the *n*th column with that header.
    """
    return [cell.value for cell in row.cells if cell.header == header]


def read_rows(stream: IO[str], **reader_kwargs: str) -> Iterator[Row]:
    """Read rows of metadata from a CSV stream.

    The first record is the header. Completely blank records are skipped.
    Line numbers are the physical line each record started on.
    """
    reader = csv.reader(stream, **reader_kwargs)
    try:
        headers = next(reader)
    except StopIteration:
        return

    line_number = reader.line_num + 1
    for values in reader:
        if any(value.strip() for value in values):
            yield Row.from_csv(headers, values, line_number=line_number)
        line_number = reader.line_num + 1
