import logging

import pytest

from tests.fixtures.store import ObjectStoreFixture


class TestReferenceResolver:
    def test_found(self, object_store_fixture: ObjectStoreFixture):
        object_store_fixture.add_object("fk4/parent", "123")
        assert object_store_fixture.resolver.resolve("123") == "fk4/parent"

    def test_not_found(
        self,
        object_store_fixture: ObjectStoreFixture,
        caplog: pytest.LogCaptureFixture,
    ):
        caplog.set_level(logging.INFO)
        assert object_store_fixture.resolver.resolve("404") is None
        assert "No object found with accession number 404" in caplog.messages

    def test_exact_match_only(self, object_store_fixture: ObjectStoreFixture):
        object_store_fixture.add_object("fk4/parent", "123")
        assert object_store_fixture.resolver.resolve("12") is None
        assert object_store_fixture.resolver.resolve("123 ") is None

    def test_first_of_several(self, object_store_fixture: ObjectStoreFixture):
        object_store_fixture.add_object("fk4/first", "1")
        object_store_fixture.add_object("fk4/second", "2")
        assert object_store_fixture.resolver.resolve(["1", "2"]) == "fk4/first"
        assert object_store_fixture.resolver.resolve(["404", "2"]) is None

    @pytest.mark.parametrize(
        "accession_number",
        [
            pytest.param(None, id="none"),
            pytest.param("", id="empty string"),
            pytest.param([], id="empty list"),
        ],
    )
    def test_nothing_to_resolve(
        self, object_store_fixture: ObjectStoreFixture, accession_number
    ):
        assert object_store_fixture.resolver.resolve(accession_number) is None
