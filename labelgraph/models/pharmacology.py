"""Identified substances, pharmacologic classes and substance specifications."""

from datetime import date
from typing import Optional

from pydantic import Field

from labelgraph.models.base import EntityRecord


class IdentifiedSubstance(EntityRecord):
    """Substance named by an indexing section.

    The same table serves two roles. With ``is_definition`` set the record
    defines a pharmacologic class concept; otherwise it is a reference to an
    active moiety mentioned by the label.
    """

    __references__ = {"section_id": "Section"}

    section_id: Optional[int] = None
    subject_type: Optional[str] = Field(None, description="ActiveMoiety or PharmacologicClass")
    substance_identifier_value: Optional[str] = None
    substance_identifier_system_oid: Optional[str] = None
    is_definition: Optional[bool] = None


class PharmacologicClass(EntityRecord):
    __references__ = {"identified_substance_id": "IdentifiedSubstance"}

    identified_substance_id: Optional[int] = None
    class_code: Optional[str] = None
    class_code_system: Optional[str] = None
    class_display_name: Optional[str] = None


class PharmacologicClassName(EntityRecord):
    __references__ = {"pharmacologic_class_id": "PharmacologicClass"}

    pharmacologic_class_id: Optional[int] = None
    name_value: Optional[str] = None
    name_use: Optional[str] = None


class PharmacologicClassLink(EntityRecord):
    __references__ = {
        "active_moiety_substance_id": "IdentifiedSubstance",
        "pharmacologic_class_id": "PharmacologicClass",
    }

    active_moiety_substance_id: Optional[int] = None
    pharmacologic_class_id: Optional[int] = None


class PharmacologicClassHierarchy(EntityRecord):
    """Super-class/sub-class edge between two pharmacologic classes."""

    __references__ = {
        "parent_pharmacologic_class_id": "PharmacologicClass",
        "child_pharmacologic_class_id": "PharmacologicClass",
    }

    parent_pharmacologic_class_id: int
    child_pharmacologic_class_id: int
    sequence_number: Optional[int] = None


class SubstanceSpecification(EntityRecord):
    """Tolerance specification for a pesticide residue or similar substance."""

    __references__ = {"identified_substance_id": "IdentifiedSubstance"}

    identified_substance_id: Optional[int] = None
    spec_code: Optional[str] = None
    spec_code_system: Optional[str] = None
    enforcement_method_code: Optional[str] = None
    enforcement_method_code_system: Optional[str] = None
    enforcement_method_display_name: Optional[str] = None


class Analyte(EntityRecord):
    __references__ = {
        "substance_specification_id": "SubstanceSpecification",
        "analyte_substance_id": "IdentifiedSubstance",
    }

    substance_specification_id: Optional[int] = None
    analyte_substance_id: Optional[int] = None


class Commodity(EntityRecord):
    commodity_code: Optional[str] = None
    commodity_code_system: Optional[str] = None
    commodity_display_name: Optional[str] = None
    commodity_name: Optional[str] = None


class ApplicationType(EntityRecord):
    app_type_code: Optional[str] = None
    app_type_code_system: Optional[str] = None
    app_type_display_name: Optional[str] = None


class ObservationCriterion(EntityRecord):
    __references__ = {
        "substance_specification_id": "SubstanceSpecification",
        "commodity_id": "Commodity",
        "application_type_id": "ApplicationType",
    }

    substance_specification_id: Optional[int] = None
    tolerance_high_value: Optional[float] = None
    tolerance_high_unit: Optional[str] = None
    commodity_id: Optional[int] = None
    application_type_id: Optional[int] = None
    expiration_date: Optional[date] = None
    text_note: Optional[str] = None


ENTITY_TYPES = (
    IdentifiedSubstance,
    PharmacologicClass,
    PharmacologicClassName,
    PharmacologicClassLink,
    PharmacologicClassHierarchy,
    SubstanceSpecification,
    Analyte,
    Commodity,
    ApplicationType,
    ObservationCriterion,
)

__all__ = [record_type.__name__ for record_type in ENTITY_TYPES]
