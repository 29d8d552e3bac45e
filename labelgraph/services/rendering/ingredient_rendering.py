"""Rendering of product ingredients."""

from typing import Optional

from labelgraph.models.entity_set import EntitySet
from labelgraph.models.ingredient import (
    ActiveMoiety,
    Ingredient,
    IngredientSubstance,
    ReferenceSubstance,
    SpecifiedSubstance,
)
from labelgraph.schemas.rendering import IngredientRendering
from labelgraph.services.rendering.formatting import format_quantity, group_by
from labelgraph.utils.vocabulary import ACTIVE_INGREDIENT_CLASS_CODES, REFERENCE_SUBSTANCE_CLASS_CODE


def is_active(ingredient: Ingredient) -> bool:
    return (ingredient.class_code or "").strip().upper() in ACTIVE_INGREDIENT_CLASS_CODES


class IngredientRenderingService:
    def __init__(self, entity_set: EntitySet):
        self.entity_set = entity_set
        self.moieties_by_substance = group_by(entity_set.table(ActiveMoiety), "ingredient_substance_id")
        self.specified_by_ingredient = group_by(entity_set.table(SpecifiedSubstance), "ingredient_id")

    def render(self, ingredient: Ingredient) -> IngredientRendering:
        substance: Optional[IngredientSubstance] = self.entity_set.get(
            IngredientSubstance, ingredient.ingredient_substance_id
        )
        reference: Optional[ReferenceSubstance] = self.entity_set.get(
            ReferenceSubstance, ingredient.reference_substance_id
        )
        substance_name = substance.substance_name if substance else None
        unii = substance.unii if substance else None

        numerator = format_quantity(ingredient.quantity_numerator, ingredient.quantity_numerator_unit)
        denominator = format_quantity(ingredient.quantity_denominator, ingredient.quantity_denominator_unit)
        strength = numerator
        if numerator and denominator:
            strength = f"{numerator} in {denominator}"

        moieties = [
            moiety.moiety_name or moiety.moiety_unii or ""
            for moiety in self.moieties_by_substance.get(ingredient.ingredient_substance_id, [])
        ] if substance else []
        specified = [
            s.substance_display_name or s.substance_code or ""
            for s in self.specified_by_ingredient.get(ingredient.id, [])
        ]

        return IngredientRendering(
            ingredient_id=ingredient.id,
            sequence_number=ingredient.sequence_number,
            is_active_ingredient=is_active(ingredient),
            class_code=ingredient.class_code,
            substance_name=substance_name,
            unii=unii,
            formatted_substance_name=(substance_name or unii or "").strip().upper(),
            has_substance=substance is not None,
            has_quantity=ingredient.quantity_numerator is not None,
            formatted_quantity_numerator=numerator,
            formatted_quantity_denominator=denominator,
            formatted_strength=strength,
            active_moieties=moieties,
            specified_substances=specified,
            has_active_moieties=bool(moieties),
            has_specified_substances=bool(specified),
            requires_reference_substance=(
                (ingredient.class_code or "").strip().upper() == REFERENCE_SUBSTANCE_CLASS_CODE
            ),
            reference_substance_name=(reference.ref_substance_name if reference else None),
        )
