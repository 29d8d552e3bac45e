"""Ingredients and the substances they are made of."""

from typing import Optional

from labelgraph.models.base import EntityRecord


class IngredientSubstance(EntityRecord):
    unii: Optional[str] = None
    substance_name: Optional[str] = None


class ActiveMoiety(EntityRecord):
    __references__ = {"ingredient_substance_id": "IngredientSubstance"}

    ingredient_substance_id: Optional[int] = None
    moiety_unii: Optional[str] = None
    moiety_name: Optional[str] = None


class ReferenceSubstance(EntityRecord):
    __references__ = {"ingredient_substance_id": "IngredientSubstance"}

    ingredient_substance_id: Optional[int] = None
    ref_substance_unii: Optional[str] = None
    ref_substance_name: Optional[str] = None


class Ingredient(EntityRecord):
    """An ingredient of a product with its strength as a ratio of quantities."""

    __references__ = {
        "product_id": "Product",
        "ingredient_substance_id": "IngredientSubstance",
        "reference_substance_id": "ReferenceSubstance",
        "product_concept_id": "ProductConcept",
    }

    product_id: Optional[int] = None
    ingredient_substance_id: Optional[int] = None
    class_code: Optional[str] = None
    quantity_numerator: Optional[float] = None
    quantity_numerator_unit: Optional[str] = None
    quantity_denominator: Optional[float] = None
    quantity_denominator_unit: Optional[str] = None
    reference_substance_id: Optional[int] = None
    is_confidential: Optional[bool] = None
    sequence_number: Optional[int] = None
    product_concept_id: Optional[int] = None


class IngredientSourceProduct(EntityRecord):
    __references__ = {"ingredient_id": "Ingredient"}

    ingredient_id: Optional[int] = None
    source_product_ndc: Optional[str] = None
    source_product_ndc_system: Optional[str] = None


class SpecifiedSubstance(EntityRecord):
    __references__ = {"ingredient_id": "Ingredient"}

    ingredient_id: Optional[int] = None
    substance_code: Optional[str] = None
    substance_code_system: Optional[str] = None
    substance_display_name: Optional[str] = None


ENTITY_TYPES = (
    IngredientSubstance,
    ActiveMoiety,
    ReferenceSubstance,
    Ingredient,
    IngredientSourceProduct,
    SpecifiedSubstance,
)

__all__ = [record_type.__name__ for record_type in ENTITY_TYPES]
