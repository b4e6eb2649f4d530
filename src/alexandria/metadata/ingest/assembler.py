"""Assemble rows of tabular metadata into attribute records."""

from __future__ import annotations

from typing import Any

from alexandria.metadata.core.exceptions import (
    InvalidAccessPolicy,
    MalformedRowError,
    MissingAccessPolicy,
    RowError,
)
from alexandria.metadata.ingest.coordinates import DCMIBox
from alexandria.metadata.ingest.policy import AccessPolicy
from alexandria.metadata.ingest.registry import FieldRegistry, csv_fields
from alexandria.metadata.ingest.resolver import ReferenceResolver
from alexandria.metadata.ingest.row import Row
from alexandria.metadata.ingest.transformers import transform
from alexandria.metadata.util.log import LoggerMixin, LoggerType, RowLoggerAdapter

AttributeRecord = dict[str, Any]

# Attribute keys of the bounding box edges, in DCMI Box order.
BOUND_KEYS = {
    "north": "north_bound_latitude",
    "east": "east_bound_longitude",
    "south": "south_bound_latitude",
    "west": "west_bound_longitude",
}


class RecordAssembler(LoggerMixin):
    """Build the attributes of a new object from one row of metadata.

    The recognized fields of the row are extracted and transformed, then
    the result goes through a fixed series of passes:

    1. the bounding box fields are replaced by a single `coverage`;
    2. accession numbers of related objects become references;
    3. stray whitespace is stripped from attribute keys;
    4. the access policy shorthand is replaced by its policy ID.
    """

    def __init__(
        self, resolver: ReferenceResolver, registry: FieldRegistry | None = None
    ):
        self.resolver = resolver
        self.registry = registry or csv_fields()

    def row_log(self, row: Row) -> LoggerType:
        return RowLoggerAdapter(self.logger(), {"line_number": row.line_number})

    def assemble(self, row: Row) -> AttributeRecord:
        """
        :raises ConfigurationError: If the row has no valid access policy.
        :raises RowError: If the row's values can't be turned into attributes.
            The error carries the row's line number.
        """
        log = self.row_log(row)
        try:
            attrs = self.field_attributes(row)
            attrs = self.transform_coordinates_to_dcmi_box(attrs)
            attrs = self.handle_structural_metadata(attrs, log)
            attrs = self.strip_extra_spaces(attrs)
            attrs = self.assign_access_policy(attrs)
        except RowError as e:
            if e.line_number is None:
                e.line_number = row.line_number
            raise
        log.debug(f"Assembled attributes: {', '.join(sorted(attrs))}")
        return attrs

    def field_attributes(self, row: Row) -> AttributeRecord:
        """Merge the attributes of every recognized field, in registry order."""
        attrs: AttributeRecord = {}
        for spec in self.registry:
            mapping = transform(spec, row)
            if conflicts := attrs.keys() & mapping.keys():
                raise MalformedRowError(
                    f"Attribute produced by more than one field: {', '.join(sorted(conflicts))}",
                    field=spec.key,
                )
            attrs.update(mapping)
        return attrs

    @staticmethod
    def transform_coordinates_to_dcmi_box(attrs: AttributeRecord) -> AttributeRecord:
        """Replace the bounding box fields with a DCMI Box `coverage`.

        For example, 'northlimit=43.039; eastlimit=-69.856;
        southlimit=42.943; westlimit=-71.032; units=degrees;
        projection=EPSG:4326'
        """
        if not any(key in attrs for key in BOUND_KEYS.values()):
            return attrs

        bounds: dict[str, str] = {}
        for edge, key in BOUND_KEYS.items():
            if key not in attrs:
                continue
            values = attrs.pop(key)
            if len(values) != 1:
                raise MalformedRowError(
                    f"Expected a single coordinate, found {len(values)}", field=key
                )
            bounds[edge] = values[0]

        if "coverage" in attrs:
            raise MalformedRowError(
                "Coverage is already set, can't add a bounding box", field="coverage"
            )
        attrs["coverage"] = str(DCMIBox(**bounds))
        return attrs

    def handle_structural_metadata(
        self, attrs: AttributeRecord, log: LoggerType | None = None
    ) -> AttributeRecord:
        """Turn accession numbers of related objects into references."""
        log = log or self.log
        parent_accession_number = attrs.pop("parent_accession_number", None)
        if parent_accession_number:
            parent_id = self.resolver.resolve(parent_accession_number)
            if parent_id:
                attrs["parent_id"] = parent_id
            else:
                log.warning(
                    f"Parent {', '.join(parent_accession_number)} not found, no parent set."
                )

        # Map sets are usually created before the index map they name, so
        # the index map can't be looked up yet. Keep its accession number.
        index_map_accession_number = attrs.pop("index_map_accession_number", None)
        if index_map_accession_number:
            attrs["index_map_id"] = index_map_accession_number

        return attrs

    @staticmethod
    def strip_extra_spaces(attrs: AttributeRecord) -> AttributeRecord:
        """Strip whitespace from around attribute keys. Values are untouched."""
        stripped: AttributeRecord = {}
        for key, value in attrs.items():
            new_key = key.strip()
            if new_key in stripped:
                raise MalformedRowError(
                    "Attribute given twice once whitespace is removed", field=new_key
                )
            stripped[new_key] = value
        return stripped

    @staticmethod
    def assign_access_policy(attrs: AttributeRecord) -> AttributeRecord:
        """Replace the access policy shorthand with the policy's ID.

        :raises MissingAccessPolicy: If no access policy is given.
        :raises InvalidAccessPolicy: If the shorthand isn't a known policy.
        """
        if not attrs.get("access_policy"):
            raise MissingAccessPolicy()

        shorthands = attrs.pop("access_policy")
        if len(shorthands) > 1:
            raise InvalidAccessPolicy(", ".join(shorthands))

        attrs["admin_policy_id"] = AccessPolicy.from_shorthand(shorthands[0]).policy_id
        return attrs
