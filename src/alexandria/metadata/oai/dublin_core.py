from __future__ import annotations

from frozendict import frozendict

from alexandria.metadata.oai.encoder import DC_NS, EDM_NS, XSI_NS, MetadataFormat
from alexandria.metadata.oai.mapping import build_crosswalk, image_urls


class OAIDublinCore(MetadataFormat):
    """Simple Dublin Core, as every OAI-PMH repository must offer, with
    EDM links to the object and its images.
    """

    prefix = "oai_dc"
    schema = "http://www.openarchives.org/OAI/2.0/oai_dc.xsd"
    namespace = "http://www.openarchives.org/OAI/2.0/oai_dc/"
    element_namespace = "dc"
    schema_location = (
        "http://www.openarchives.org/OAI/2.0/oai_dc/ "
        "http://www.openarchives.org/OAI/2.0/oai_dc.xsd"
    )

    namespaces = frozendict(
        {
            "oai_dc": "http://www.openarchives.org/OAI/2.0/oai_dc/",
            "dc": DC_NS,
            "edm": EDM_NS,
            "xsi": XSI_NS,
        }
    )

    crosswalk = build_crosswalk(
        {
            "dc": {
                "contributor": "all_contributors_label_sim",
                "coverage": "location_label_tesim",
                "creator": "creator_label_tesim",
                "date": "date_si",
                "description": ["description_tesim", "note_label_tesim", "citation"],
                "format": "extent_ssm",
                "identifier": "identifier_ssm",
                "language": "language_label_ssm",
                "publisher": "publisher_tesim",
                "relation": "collection_label_ssim",
                "rights": "copyright_status_label_tesim",
                "subject": "lc_subject_label_tesim",
                "title": "title_tesim",
                "type": "work_type_label_tesim",
            },
            "edm": {
                "isShownAt": "uri_ssm",
                "object": image_urls,
            },
        }
    )
