from __future__ import annotations

from frozendict import frozendict

from alexandria.metadata.core.exceptions import UnknownMetadataFormat
from alexandria.metadata.oai.calisphere import OAICalisphere
from alexandria.metadata.oai.dublin_core import OAIDublinCore
from alexandria.metadata.oai.encoder import MetadataFormat
from alexandria.metadata.oai.settings import OAISettings

METADATA_FORMATS: frozendict[str, type[MetadataFormat]] = frozendict(
    {format_cls.prefix: format_cls for format_cls in (OAIDublinCore, OAICalisphere)}
)


def metadata_formats() -> list[dict[str, str]]:
    """Descriptions of every supported format, for ListMetadataFormats."""
    return [format_cls.description() for format_cls in METADATA_FORMATS.values()]


def metadata_format(prefix: str, settings: OAISettings) -> MetadataFormat:
    """
    :raises UnknownMetadataFormat: If no format has the given prefix.
    """
    try:
        format_cls = METADATA_FORMATS[prefix]
    except KeyError:
        raise UnknownMetadataFormat(prefix) from None
    return format_cls(settings)
