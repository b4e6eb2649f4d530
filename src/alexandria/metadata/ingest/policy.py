from __future__ import annotations

from enum import StrEnum

from alexandria.metadata.core.exceptions import InvalidAccessPolicy


class AccessPolicy(StrEnum):
    """The access policies an object can be governed by.

    Member values are the shorthands used in metadata spreadsheets.
    """

    public = "public"
    ucsb = "ucsb"
    discovery = "discovery"
    public_campus = "public_campus"
    restricted = "restricted"
    ucsb_campus = "ucsb_campus"

    @property
    def policy_id(self) -> str:
        """The ID of the stored admin policy object for this policy."""
        return f"authorities/policies/{self.value}"

    @classmethod
    def from_shorthand(cls, shorthand: str | None) -> AccessPolicy:
        """
        :raises InvalidAccessPolicy: If the shorthand doesn't name a policy.
        """
        try:
            return cls((shorthand or "").strip())
        except ValueError:
            raise InvalidAccessPolicy(shorthand) from None


PUBLIC_POLICY_ID = AccessPolicy.public.policy_id
UCSB_POLICY_ID = AccessPolicy.ucsb.policy_id
DISCOVERY_POLICY_ID = AccessPolicy.discovery.policy_id
PUBLIC_CAMPUS_POLICY_ID = AccessPolicy.public_campus.policy_id
RESTRICTED_POLICY_ID = AccessPolicy.restricted.policy_id
UCSB_CAMPUS_POLICY_ID = AccessPolicy.ucsb_campus.policy_id
