"""Warning letters, interaction issues and cross-document link records."""

from datetime import date
from typing import Optional

from labelgraph.models.base import EntityRecord


class WarningLetterProductInfo(EntityRecord):
    __references__ = {"section_id": "Section"}

    section_id: Optional[int] = None
    product_name: Optional[str] = None
    generic_name: Optional[str] = None
    form_code: Optional[str] = None
    form_code_system: Optional[str] = None
    form_display_name: Optional[str] = None
    strength_text: Optional[str] = None
    item_codes_text: Optional[str] = None


class WarningLetterDate(EntityRecord):
    __references__ = {"section_id": "Section"}

    section_id: Optional[int] = None
    alert_issue_date: Optional[date] = None
    resolution_date: Optional[date] = None


class InteractionIssue(EntityRecord):
    __references__ = {"section_id": "Section"}

    section_id: Optional[int] = None
    interaction_code: Optional[str] = None
    interaction_code_system: Optional[str] = None
    interaction_display_name: Optional[str] = None


class ContributingFactor(EntityRecord):
    __references__ = {
        "interaction_issue_id": "InteractionIssue",
        "factor_substance_id": "IdentifiedSubstance",
    }

    interaction_issue_id: Optional[int] = None
    factor_substance_id: Optional[int] = None


class InteractionConsequence(EntityRecord):
    __references__ = {"interaction_issue_id": "InteractionIssue"}

    interaction_issue_id: Optional[int] = None
    consequence_type_code: Optional[str] = None
    consequence_type_code_system: Optional[str] = None
    consequence_type_display_name: Optional[str] = None
    consequence_value_code: Optional[str] = None
    consequence_value_code_system: Optional[str] = None
    consequence_value_display_name: Optional[str] = None


class NCTLink(EntityRecord):
    __references__ = {"section_id": "Section"}

    section_id: Optional[int] = None
    nct_number: Optional[str] = None
    nct_root_oid: Optional[str] = None


class CertificationProductLink(EntityRecord):
    __references__ = {
        "document_relationship_id": "DocumentRelationship",
        "product_identifier_id": "ProductIdentifier",
    }

    document_relationship_id: Optional[int] = None
    product_identifier_id: Optional[int] = None


class FacilityProductLink(EntityRecord):
    __references__ = {
        "document_relationship_id": "DocumentRelationship",
        "product_id": "Product",
        "product_identifier_id": "ProductIdentifier",
    }

    document_relationship_id: Optional[int] = None
    product_id: Optional[int] = None
    product_identifier_id: Optional[int] = None
    product_name: Optional[str] = None


class ResponsiblePersonLink(EntityRecord):
    __references__ = {"product_id": "Product", "responsible_person_org_id": "Organization"}

    product_id: Optional[int] = None
    responsible_person_org_id: Optional[int] = None


ENTITY_TYPES = (
    WarningLetterProductInfo,
    WarningLetterDate,
    InteractionIssue,
    ContributingFactor,
    InteractionConsequence,
    NCTLink,
    CertificationProductLink,
    FacilityProductLink,
    ResponsiblePersonLink,
)

__all__ = [record_type.__name__ for record_type in ENTITY_TYPES]
