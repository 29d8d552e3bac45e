"""Document-level records: the labeling version, its body and its authors."""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import Field

from labelgraph.models.base import EntityRecord


class Document(EntityRecord):
    """Root metadata record for one version of a labeling document."""

    document_guid: Optional[UUID] = Field(None, description="Unique id of this version")
    document_code: Optional[str] = Field(None, description="LOINC document type code")
    document_code_system: Optional[str] = None
    document_display_name: Optional[str] = None
    title: Optional[str] = None
    effective_time: Optional[date] = None
    set_guid: Optional[UUID] = Field(
        None,
        description="Set id, constant across all versions of the same label"
    )
    version_number: Optional[int] = Field(
        None,
        description="Version number, strictly increasing within a set id"
    )
    submission_file_name: Optional[str] = None


class StructuredBody(EntityRecord):
    """Container for the sections of a document."""

    __references__ = {"document_id": "Document"}

    document_id: Optional[int] = None


class DocumentAuthor(EntityRecord):
    __references__ = {"document_id": "Document", "organization_id": "Organization"}

    document_id: Optional[int] = None
    organization_id: Optional[int] = None
    author_type: Optional[str] = None


class RelatedDocument(EntityRecord):
    """Reference from this document to another version or set.

    ``referenced_version_number`` together with the source document's own
    version feeds the version sequence check for replacement relationships.
    """

    __references__ = {"source_document_id": "Document"}

    source_document_id: Optional[int] = None
    relationship_type_code: Optional[str] = None
    referenced_set_guid: Optional[UUID] = None
    referenced_document_guid: Optional[UUID] = None
    referenced_version_number: Optional[int] = None
    referenced_document_code: Optional[str] = None
    referenced_document_code_system: Optional[str] = None
    referenced_document_display_name: Optional[str] = None


class DocumentRelationship(EntityRecord):
    """Organization-to-organization relationship declared by a document."""

    __references__ = {
        "document_id": "Document",
        "parent_organization_id": "Organization",
        "child_organization_id": "Organization",
    }

    document_id: Optional[int] = None
    parent_organization_id: Optional[int] = None
    child_organization_id: Optional[int] = None
    relationship_type: Optional[str] = None
    relationship_level: Optional[int] = None


class LegalAuthenticator(EntityRecord):
    __references__ = {"document_id": "Document", "signer_organization_id": "Organization"}

    document_id: Optional[int] = None
    note_text: Optional[str] = None
    time_value: Optional[date] = None
    signature_text: Optional[str] = None
    assigned_person_name: Optional[str] = None
    signer_organization_id: Optional[int] = None


ENTITY_TYPES = (
    Document,
    StructuredBody,
    DocumentAuthor,
    RelatedDocument,
    DocumentRelationship,
    LegalAuthenticator,
)

__all__ = [record_type.__name__ for record_type in ENTITY_TYPES]
