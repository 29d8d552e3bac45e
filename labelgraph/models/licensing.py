"""Licensing sub-graph: jurisdictions, licenses and actions taken on them."""

from datetime import date
from typing import Optional

from pydantic import Field

from labelgraph.models.base import EntityRecord


class TerritorialAuthority(EntityRecord):
    """Jurisdiction issuing a license.

    ``territory_code`` is either the ISO 3166-1 country code ``USA`` for a
    federal authority, in which case the governing agency identifier triple
    must be present, or an ISO 3166-2 state code, in which case it must not.
    """

    __references__ = {"governing_agency_org_id": "Organization"}

    territory_code: Optional[str] = None
    territory_code_system: Optional[str] = None
    governing_agency_org_id: Optional[int] = None
    governing_agency_id_extension: Optional[str] = Field(None, description="Agency DUNS number")
    governing_agency_id_root: Optional[str] = None
    governing_agency_name: Optional[str] = None


class License(EntityRecord):
    __references__ = {
        "business_operation_id": "BusinessOperation",
        "territorial_authority_id": "TerritorialAuthority",
    }

    business_operation_id: Optional[int] = None
    license_number: Optional[str] = None
    license_root_oid: Optional[str] = None
    license_type_code: Optional[str] = None
    license_type_code_system: Optional[str] = None
    license_type_display_name: Optional[str] = None
    status_code: Optional[str] = None
    expiration_date: Optional[date] = None
    territorial_authority_id: Optional[int] = None


class DisciplinaryAction(EntityRecord):
    __references__ = {"license_id": "License"}

    license_id: Optional[int] = None
    action_code: Optional[str] = None
    action_code_system: Optional[str] = None
    action_display_name: Optional[str] = None
    effective_time: Optional[date] = None
    action_text: Optional[str] = None


class AttachedDocument(EntityRecord):
    """A file attached to another record through a generic parent pointer.

    ``parent_entity_type`` names the kind of the parent record and
    ``parent_entity_id`` its id; see ``labelgraph.models.variants``.
    """

    parent_entity_type: Optional[str] = None
    parent_entity_id: Optional[int] = None
    media_type: Optional[str] = None
    file_name: Optional[str] = None


class ComplianceAction(EntityRecord):
    """Inactivation or reactivation of a package or an establishment."""

    __references__ = {
        "section_id": "Section",
        "package_identifier_id": "PackageIdentifier",
        "document_relationship_id": "DocumentRelationship",
    }

    section_id: Optional[int] = None
    package_identifier_id: Optional[int] = None
    document_relationship_id: Optional[int] = None
    action_code: Optional[str] = None
    action_code_system: Optional[str] = None
    action_display_name: Optional[str] = None
    effective_time_low: Optional[date] = None
    effective_time_high: Optional[date] = None


ENTITY_TYPES = (
    TerritorialAuthority,
    License,
    DisciplinaryAction,
    AttachedDocument,
    ComplianceAction,
)

__all__ = [record_type.__name__ for record_type in ENTITY_TYPES]
