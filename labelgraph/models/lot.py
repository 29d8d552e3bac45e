"""Product instances (lots) and their genealogy."""

from datetime import date
from typing import Optional

from labelgraph.models.base import EntityRecord


class LotIdentifier(EntityRecord):
    lot_number: Optional[str] = None
    lot_root_oid: Optional[str] = None


class ProductInstance(EntityRecord):
    """A concrete lot of a product: bulk, fill or label lot."""

    __references__ = {"product_id": "Product", "lot_identifier_id": "LotIdentifier"}

    product_id: Optional[int] = None
    instance_type: Optional[str] = None
    lot_identifier_id: Optional[int] = None
    expiration_date: Optional[date] = None


class LotHierarchy(EntityRecord):
    """Genealogy edge; a child lot may be fed by several parent lots."""

    __references__ = {
        "parent_instance_id": "ProductInstance",
        "child_instance_id": "ProductInstance",
    }

    parent_instance_id: int
    child_instance_id: int
    sequence_number: Optional[int] = None


class IngredientInstance(EntityRecord):
    __references__ = {
        "fill_lot_instance_id": "ProductInstance",
        "ingredient_substance_id": "IngredientSubstance",
        "lot_identifier_id": "LotIdentifier",
        "manufacturer_organization_id": "Organization",
    }

    fill_lot_instance_id: Optional[int] = None
    ingredient_substance_id: Optional[int] = None
    lot_identifier_id: Optional[int] = None
    manufacturer_organization_id: Optional[int] = None


ENTITY_TYPES = (
    LotIdentifier,
    ProductInstance,
    LotHierarchy,
    IngredientInstance,
)

__all__ = [record_type.__name__ for record_type in ENTITY_TYPES]
