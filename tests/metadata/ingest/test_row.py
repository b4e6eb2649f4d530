import io

import pytest

from alexandria.metadata.ingest.row import Cell, Row, read_rows, values_for
from tests.fixtures.files import CSVFilesFixture


class TestValuesFor:
    def test_missing_header(self):
        row = Row.from_pairs(("title", "My Item"))
        assert values_for("description", row) == []

    def test_empty_row(self):
        assert values_for("title", Row([])) == []

    def test_single_value(self):
        row = Row.from_pairs(("accession_number", "123"), ("title", "My Item"))
        assert values_for("title", row) == ["My Item"]

    def test_repeated_headers(self):
        row = Row.from_pairs(
            ("files", "a.tif"),
            ("title", "My Item"),
            ("files", "b.tif"),
            ("note", "A note"),
            ("files", "c.tif"),
        )
        assert values_for("files", row) == ["a.tif", "b.tif", "c.tif"]

    @pytest.mark.parametrize(
        "blank",
        [
            pytest.param("", id="empty string"),
            pytest.param(None, id="no value"),
        ],
    )
    def test_gaps_are_skipped(self, blank: str | None):
        row = Row.from_pairs(
            ("files", blank),
            ("files", "b.tif"),
            ("files", blank),
            ("files", "d.tif"),
        )
        assert values_for("files", row) == ["b.tif", "d.tif"]

    def test_all_blank(self):
        row = Row.from_pairs(("title", ""), ("title", None))
        assert values_for("title", row) == []

    def test_header_match_is_exact(self):
        row = Row.from_pairs((" title", "Stray space"), ("title_alt", "Other"))
        assert values_for("title", row) == []
        assert values_for(" title", row) == ["Stray space"]


class TestRow:
    def test_from_csv_short_record(self):
        row = Row.from_csv(["a", "b", "c"], ["1"], line_number=4)
        assert row.cells == (Cell("a", "1"), Cell("b", None), Cell("c", None))
        assert row.line_number == 4
        assert len(row) == 3

    def test_from_csv_long_record(self):
        row = Row.from_csv(["a"], ["1", "2"])
        assert row.cells == (Cell("a", "1"),)

    def test_index(self):
        row = Row.from_pairs(("a", "1"), ("b", "2"), ("a", "3"))
        assert row.index("a") == 0
        assert row.index("b") == 1
        assert row.index("c") is None
        assert row.headers == ["a", "b", "a"]


class TestReadRows:
    def test_read_rows(self, csv_files_fixture: CSVFilesFixture):
        with csv_files_fixture.sample_path("maps.csv").open(newline="") as f:
            rows = list(read_rows(f))

        # The blank line between the fourth and fifth rows is skipped.
        assert [row.line_number for row in rows] == [2, 3, 4, 5, 7]
        assert values_for("title", rows[1]) == ["Aerial photograph", "Goleta"]
        assert values_for("access_policy", rows[4]) == ["bogus"]

    def test_empty_file(self, csv_files_fixture: CSVFilesFixture):
        with csv_files_fixture.sample_path("empty.csv").open(newline="") as f:
            assert list(read_rows(f)) == []

    def test_quoted_newlines(self):
        stream = io.StringIO('title,note\n"One","two\nlines"\nThree,four\n')
        rows = list(read_rows(stream))
        assert [row.line_number for row in rows] == [2, 4]
        assert values_for("note", rows[0]) == ["two\nlines"]

    def test_headers_are_stripped(self):
        stream = io.StringIO(" title ,access_policy\t\nMy Item,public\n")
        [row] = read_rows(stream)
        assert [cell.header for cell in row.cells] == ["title", "access_policy"]
        assert values_for("title", row) == ["My Item"]
