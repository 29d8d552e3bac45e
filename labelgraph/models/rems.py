"""Risk Evaluation and Mitigation Strategy (REMS) records."""

from datetime import date
from typing import Optional
from uuid import UUID

from labelgraph.models.base import EntityRecord


class Protocol(EntityRecord):
    __references__ = {"section_id": "Section"}

    section_id: Optional[int] = None
    protocol_code: Optional[str] = None
    protocol_code_system: Optional[str] = None
    protocol_display_name: Optional[str] = None


class Stakeholder(EntityRecord):
    stakeholder_code: Optional[str] = None
    stakeholder_code_system: Optional[str] = None
    stakeholder_display_name: Optional[str] = None


class REMSMaterial(EntityRecord):
    __references__ = {"section_id": "Section", "attached_document_id": "AttachedDocument"}

    section_id: Optional[int] = None
    material_document_guid: Optional[UUID] = None
    title: Optional[str] = None
    title_reference: Optional[str] = None
    attached_document_id: Optional[int] = None


class Requirement(EntityRecord):
    """A step of a REMS protocol; the sequence orders before/during/after."""

    __references__ = {
        "protocol_id": "Protocol",
        "stakeholder_id": "Stakeholder",
        "rems_material_id": "REMSMaterial",
    }

    protocol_id: Optional[int] = None
    requirement_sequence_number: Optional[int] = None
    is_monitoring_observation: Optional[bool] = None
    pause_quantity_value: Optional[float] = None
    pause_quantity_unit: Optional[str] = None
    requirement_code: Optional[str] = None
    requirement_code_system: Optional[str] = None
    requirement_display_name: Optional[str] = None
    original_text_reference: Optional[str] = None
    period_value: Optional[float] = None
    period_unit: Optional[str] = None
    stakeholder_id: Optional[int] = None
    rems_material_id: Optional[int] = None


class REMSApproval(EntityRecord):
    __references__ = {"protocol_id": "Protocol"}

    protocol_id: Optional[int] = None
    approval_code: Optional[str] = None
    approval_code_system: Optional[str] = None
    approval_display_name: Optional[str] = None
    approval_date: Optional[date] = None
    territory_code: Optional[str] = None


class REMSElectronicResource(EntityRecord):
    __references__ = {"section_id": "Section"}

    section_id: Optional[int] = None
    resource_document_guid: Optional[UUID] = None
    title: Optional[str] = None
    title_reference: Optional[str] = None
    resource_reference_value: Optional[str] = None


ENTITY_TYPES = (
    Protocol,
    Stakeholder,
    REMSMaterial,
    Requirement,
    REMSApproval,
    REMSElectronicResource,
)

__all__ = [record_type.__name__ for record_type in ENTITY_TYPES]
