"""Ingredient rules."""

from labelgraph.models.ingredient import Ingredient
from labelgraph.services.validation.checks import normalized, present
from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.utils.vocabulary import (
    ACTIVE_INGREDIENT_CLASS_CODES,
    INGREDIENT_CLASS_CODES,
    REFERENCE_SUBSTANCE_CLASS_CODE,
)


@DEFAULT_REGISTRY.rule(
    "IngredientClassCode",
    Ingredient,
    "Ingredient {entity_id} has unrecognized class code '{class_code}'",
)
def ingredient_class_code(ingredient: Ingredient, context):
    if normalized(ingredient.class_code) not in INGREDIENT_CLASS_CODES:
        return {"class_code": ingredient.class_code or ""}
    return None


@DEFAULT_REGISTRY.rule(
    "ActiveIngredientStrength",
    Ingredient,
    "Active ingredient {entity_id} {problem}",
)
def active_ingredient_strength(ingredient: Ingredient, context):
    """Active ingredients state a strength unless it is confidential."""
    if normalized(ingredient.class_code) not in ACTIVE_INGREDIENT_CLASS_CODES:
        return None
    if ingredient.is_confidential:
        return None
    if ingredient.quantity_numerator is None:
        return {"problem": "has no strength numerator"}
    if ingredient.quantity_denominator is not None and ingredient.quantity_denominator <= 0:
        return {"problem": f"has a non-positive strength denominator {ingredient.quantity_denominator:g}"}
    return None


@DEFAULT_REGISTRY.rule(
    "ReferenceSubstanceRequired",
    Ingredient,
    "Ingredient {entity_id} with class code {class_code} must name its reference substance",
)
def reference_substance_required(ingredient: Ingredient, context):
    """Strength based on a reference substance must say which one."""
    if normalized(ingredient.class_code) == REFERENCE_SUBSTANCE_CLASS_CODE and not present(
        ingredient.reference_substance_id
    ):
        return {"class_code": ingredient.class_code}
    return None
