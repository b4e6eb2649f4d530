from __future__ import annotations

from frozendict import frozendict

from alexandria.metadata.oai.encoder import (
    DC_NS,
    DCTERMS_NS,
    EDM_NS,
    XSI_NS,
    MetadataFormat,
)
from alexandria.metadata.oai.mapping import build_crosswalk, image_urls


class OAICalisphere(MetadataFormat):
    """Records for the Calisphere aggregator: Dublin Core and DC terms,
    with links to the object and its images in EDM.
    """

    prefix = "oai_cdl"
    schema = "https://alexandria.ucsb.edu/oai_cdl.xsd"
    namespace = "http://www.openarchives.org/OAI/2.0/"
    element_namespace = "cdl"
    # The published value keeps a space at each end.
    schema_location = (
        " https://alexandria.ucsb.edu/oai_cdl/ https://alexandria.ucsb.edu/oai_cdl.xsd "
    )

    namespaces = frozendict(
        {
            "oai_cdl": "https://alexandria.ucsb.edu/oai_cdl/",
            "dc": DC_NS,
            "dcterms": DCTERMS_NS,
            "edm": EDM_NS,
            "xsi": XSI_NS,
        }
    )

    crosswalk = build_crosswalk(
        {
            "dc": {
                "contributor": "all_contributors_label_sim",
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
            },
            "dcterms": {
                "accessRights": "isGovernedBy_ssim",
                "alternative": "alternative_tesim",
                "isPartOf": "collection_label_ssim",
                "rightsHolder": "rights_holder_label_tesim",
                "spatial": "location_label_tesim",
                "type": "work_type_label_tesim",
            },
            "edm": {
                "isShownAt": "uri_ssm",
                "hasType": "form_of_work_label_tesim",
                "object": image_urls,
                "rights": "license_tesim",
            },
        }
    )
