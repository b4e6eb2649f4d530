from __future__ import annotations

import datetime
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, ClassVar

from lxml import etree

from alexandria.metadata.core.exceptions import EncodingError
from alexandria.metadata.oai.mapping import Crosswalk
from alexandria.metadata.oai.record import ExportRecord
from alexandria.metadata.oai.settings import OAISettings
from alexandria.metadata.util.log import LoggerMixin

DC_NS = "http://purl.org/dc/elements/1.1/"
DCTERMS_NS = "http://purl.org/dc/terms/"
EDM_NS = "http://www.europeana.eu/schemas/edm/"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"


class MetadataFormat(LoggerMixin):
    """A metadata format records can be harvested in over OAI-PMH.

    Subclasses declare the format's constants and its crosswalk. The root
    element of an encoded record is `<prefix:element_namespace>`, with one
    child element per value of every crosswalk entry.
    """

    prefix: ClassVar[str]
    schema: ClassVar[str]
    namespace: ClassVar[str]
    element_namespace: ClassVar[str]
    schema_location: ClassVar[str]

    # Namespace prefix to URI, for every namespace declared on the root.
    namespaces: ClassVar[Mapping[str, str]]
    crosswalk: ClassVar[Crosswalk]

    def __init__(self, settings: OAISettings):
        self.settings = settings

    def header_specification(self) -> dict[str, str]:
        """The namespace declarations and schema location of the root element."""
        attributes = {
            f"xmlns:{prefix}": uri for prefix, uri in self.namespaces.items()
        }
        attributes["xsi:schemaLocation"] = self.schema_location
        return attributes

    def _qname(self, prefix: str, name: str) -> str:
        return f"{{{self.namespaces[prefix]}}}{name}"

    @staticmethod
    def _text(field: str, value: Any) -> str:
        match value:
            case str():
                return value
            case bool():
                return "true" if value else "false"
            case int() | float() | Decimal():
                return str(value)
            case datetime.date():
                return value.isoformat()
        raise EncodingError(field, value)

    def encode(self, record: Mapping[str, Any]) -> str:
        """Encode the indexed fields of an object as an XML document.

        :raises EncodingError: If a field holds a value that can't be
            written as XML text.
        """
        record = ExportRecord.wrap(record)
        root = etree.Element(
            self._qname(self.prefix, self.element_namespace),
            nsmap=dict(self.namespaces),
        )
        root.set(f"{{{XSI_NS}}}schemaLocation", self.schema_location)

        for vocabulary, elements in self.crosswalk.items():
            for name, mapping in elements.items():
                field = f"{vocabulary}:{name}"
                for value in mapping.values(record, self.settings):
                    element = etree.SubElement(root, self._qname(vocabulary, name))
                    try:
                        element.text = self._text(field, value)
                    except ValueError as e:
                        # lxml refuses control characters and the like.
                        raise EncodingError(field, value) from e

        return etree.tostring(root, encoding="unicode")

    @classmethod
    def description(cls) -> dict[str, str]:
        """How the format is listed in an OAI-PMH ListMetadataFormats response."""
        return {
            "metadataPrefix": cls.prefix,
            "schema": cls.schema,
            "metadataNamespace": cls.namespace,
        }
