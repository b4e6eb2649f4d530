from pathlib import Path

import pytest


class FilesFixture:
    """A fixture providing access to test files."""

    def __init__(self, directory: str):
        self._base_path = Path(__file__).parent.parent
        self.directory = self._base_path / "files" / directory

    def sample_data(self, filename: str) -> bytes:
        return self.sample_path(filename).read_bytes()

    def sample_text(self, filename: str) -> str:
        return self.sample_path(filename).read_text()

    def sample_path(self, filename: str) -> Path:
        return self.directory / filename

    def sample_path_str(self, filename: str) -> str:
        return str(self.sample_path(filename))


class CSVFilesFixture(FilesFixture):
    """A fixture providing access to CSV metadata files."""

    def __init__(self) -> None:
        super().__init__("csv")


@pytest.fixture()
def csv_files_fixture() -> CSVFilesFixture:
    return CSVFilesFixture()


class ObjectFilesFixture(FilesFixture):
    """A fixture providing access to JSON dumps of index documents."""

    def __init__(self) -> None:
        super().__init__("objects")


@pytest.fixture()
def object_files_fixture() -> ObjectFilesFixture:
    return ObjectFilesFixture()
