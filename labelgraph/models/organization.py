"""Organizations, their contact details and declared business operations."""

from typing import Optional

from labelgraph.models.base import EntityRecord


class Organization(EntityRecord):
    organization_name: Optional[str] = None
    is_confidential: Optional[bool] = None


class Address(EntityRecord):
    street_address_line1: Optional[str] = None
    street_address_line2: Optional[str] = None
    city: Optional[str] = None
    state_province: Optional[str] = None
    postal_code: Optional[str] = None
    country_code: Optional[str] = None
    country_name: Optional[str] = None


class Telecom(EntityRecord):
    telecom_type: Optional[str] = None
    telecom_value: Optional[str] = None


class ContactPerson(EntityRecord):
    contact_person_name: Optional[str] = None


class ContactParty(EntityRecord):
    __references__ = {
        "organization_id": "Organization",
        "address_id": "Address",
        "contact_person_id": "ContactPerson",
    }

    organization_id: Optional[int] = None
    address_id: Optional[int] = None
    contact_person_id: Optional[int] = None


class ContactPartyTelecom(EntityRecord):
    __references__ = {"contact_party_id": "ContactParty", "telecom_id": "Telecom"}

    contact_party_id: Optional[int] = None
    telecom_id: Optional[int] = None


class OrganizationIdentifier(EntityRecord):
    """DUNS, FEI or other identifier assigned to an organization."""

    __references__ = {"organization_id": "Organization"}

    organization_id: Optional[int] = None
    identifier_value: Optional[str] = None
    identifier_system_oid: Optional[str] = None
    identifier_type: Optional[str] = None


class OrganizationTelecom(EntityRecord):
    __references__ = {"organization_id": "Organization", "telecom_id": "Telecom"}

    organization_id: Optional[int] = None
    telecom_id: Optional[int] = None


class NamedEntity(EntityRecord):
    """Doing-business-as or other alternate name of an organization."""

    __references__ = {"organization_id": "Organization"}

    organization_id: Optional[int] = None
    entity_type_code: Optional[str] = None
    entity_type_code_system: Optional[str] = None
    entity_type_display_name: Optional[str] = None
    entity_name: Optional[str] = None
    entity_suffix: Optional[str] = None


class BusinessOperation(EntityRecord):
    __references__ = {"document_relationship_id": "DocumentRelationship"}

    document_relationship_id: Optional[int] = None
    operation_code: Optional[str] = None
    operation_code_system: Optional[str] = None
    operation_display_name: Optional[str] = None


class BusinessOperationQualifier(EntityRecord):
    __references__ = {"business_operation_id": "BusinessOperation"}

    business_operation_id: Optional[int] = None
    qualifier_code: Optional[str] = None
    qualifier_code_system: Optional[str] = None
    qualifier_display_name: Optional[str] = None


class BusinessOperationProductLink(EntityRecord):
    __references__ = {"business_operation_id": "BusinessOperation", "product_id": "Product"}

    business_operation_id: Optional[int] = None
    product_id: Optional[int] = None


ENTITY_TYPES = (
    Organization,
    Address,
    Telecom,
    ContactPerson,
    ContactParty,
    ContactPartyTelecom,
    OrganizationIdentifier,
    OrganizationTelecom,
    NamedEntity,
    BusinessOperation,
    BusinessOperationQualifier,
    BusinessOperationProductLink,
)

__all__ = [record_type.__name__ for record_type in ENTITY_TYPES]
