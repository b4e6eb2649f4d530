import pytest

from alexandria.metadata.core.exceptions import InvalidAccessPolicy
from alexandria.metadata.ingest.policy import (
    PUBLIC_POLICY_ID,
    UCSB_CAMPUS_POLICY_ID,
    AccessPolicy,
)


class TestAccessPolicy:
    def test_policy_ids(self):
        assert PUBLIC_POLICY_ID == "authorities/policies/public"
        assert UCSB_CAMPUS_POLICY_ID == "authorities/policies/ucsb_campus"
        assert {policy.policy_id for policy in AccessPolicy} == {
            "authorities/policies/public",
            "authorities/policies/ucsb",
            "authorities/policies/discovery",
            "authorities/policies/public_campus",
            "authorities/policies/restricted",
            "authorities/policies/ucsb_campus",
        }

    def test_from_shorthand(self):
        assert AccessPolicy.from_shorthand("ucsb") == AccessPolicy.ucsb
        assert AccessPolicy.from_shorthand(" restricted\n") == AccessPolicy.restricted

    @pytest.mark.parametrize(
        "shorthand",
        [
            pytest.param("bogus", id="unknown"),
            pytest.param("Public", id="wrong case"),
            pytest.param("", id="empty"),
            pytest.param(None, id="none"),
        ],
    )
    def test_from_shorthand_invalid(self, shorthand: str | None):
        with pytest.raises(InvalidAccessPolicy) as excinfo:
            AccessPolicy.from_shorthand(shorthand)
        assert excinfo.value.shorthand == shorthand
