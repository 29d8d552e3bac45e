"""Packaging levels, their identifiers and lot distribution events."""

from datetime import date
from typing import Optional

from labelgraph.models.base import EntityRecord


class PackagingLevel(EntityRecord):
    """One level of packaging (bottle, carton, case) for a product."""

    __references__ = {
        "product_id": "Product",
        "part_product_id": "Product",
        "product_instance_id": "ProductInstance",
    }

    product_id: Optional[int] = None
    part_product_id: Optional[int] = None
    quantity_numerator: Optional[float] = None
    quantity_numerator_unit: Optional[str] = None
    package_form_code: Optional[str] = None
    package_form_code_system: Optional[str] = None
    package_form_display_name: Optional[str] = None
    product_instance_id: Optional[int] = None


class PackageIdentifier(EntityRecord):
    __references__ = {"packaging_level_id": "PackagingLevel"}

    packaging_level_id: Optional[int] = None
    identifier_value: Optional[str] = None
    identifier_system_oid: Optional[str] = None
    identifier_type: Optional[str] = None


class PackagingHierarchy(EntityRecord):
    """Containment edge: the inner level is packed inside the outer level."""

    __references__ = {
        "outer_packaging_level_id": "PackagingLevel",
        "inner_packaging_level_id": "PackagingLevel",
    }

    outer_packaging_level_id: int
    inner_packaging_level_id: int
    sequence_number: Optional[int] = None


class ProductEvent(EntityRecord):
    """Distribution or return event reported for a packaging level."""

    __references__ = {"packaging_level_id": "PackagingLevel"}

    packaging_level_id: Optional[int] = None
    event_code: Optional[str] = None
    event_code_system: Optional[str] = None
    event_display_name: Optional[str] = None
    quantity_value: Optional[int] = None
    quantity_unit: Optional[str] = None
    effective_time_low: Optional[date] = None


ENTITY_TYPES = (
    PackagingLevel,
    PackageIdentifier,
    PackagingHierarchy,
    ProductEvent,
)

__all__ = [record_type.__name__ for record_type in ENTITY_TYPES]
