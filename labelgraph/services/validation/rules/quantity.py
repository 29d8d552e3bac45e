"""Value/unit pairing rules for every kind that carries physical quantities."""

from typing import Dict, List, Tuple

from labelgraph.models.base import EntityRecord
from labelgraph.models.ingredient import Ingredient
from labelgraph.models.packaging import PackagingLevel
from labelgraph.models.pharmacology import ObservationCriterion
from labelgraph.models.product import Characteristic, DosingSpecification, ProductPart
from labelgraph.models.rems import Requirement
from labelgraph.schemas.validation import Severity
from labelgraph.services.validation.checks import present
from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.utils.vocabulary import is_ucum_unit

# kind -> (value field, unit field) pairs
QUANTITY_FIELDS: Dict[str, Tuple[Tuple[str, str], ...]] = {
    Ingredient.kind(): (
        ("quantity_numerator", "quantity_numerator_unit"),
        ("quantity_denominator", "quantity_denominator_unit"),
    ),
    PackagingLevel.kind(): (
        ("quantity_numerator", "quantity_numerator_unit"),
    ),
    Characteristic.kind(): (
        ("value_pq_value", "value_pq_unit"),
        ("value_ivlpq_low_value", "value_ivlpq_low_unit"),
        ("value_ivlpq_high_value", "value_ivlpq_high_unit"),
    ),
    DosingSpecification.kind(): (
        ("dose_quantity_value", "dose_quantity_unit"),
    ),
    ProductPart.kind(): (
        ("part_quantity_numerator", "part_quantity_numerator_unit"),
    ),
    Requirement.kind(): (
        ("pause_quantity_value", "pause_quantity_unit"),
        ("period_value", "period_unit"),
    ),
    ObservationCriterion.kind(): (
        ("tolerance_high_value", "tolerance_high_unit"),
    ),
}


def _pairs(record: EntityRecord):
    for value_field, unit_field in QUANTITY_FIELDS[record.kind()]:
        yield value_field, getattr(record, value_field), unit_field, getattr(record, unit_field)


@DEFAULT_REGISTRY.rule(
    "QuantityUnitPairing",
    list(QUANTITY_FIELDS),
    "{entity_kind} {entity_id} has unpaired quantity fields: {fields}",
)
def quantity_unit_pairing(record: EntityRecord, context):
    """A quantity value and its unit are either both present or both absent."""
    unpaired: List[str] = []
    for value_field, value, unit_field, unit in _pairs(record):
        if value is not None and not present(unit):
            unpaired.append(f"{value_field} without {unit_field}")
        elif value is None and present(unit):
            unpaired.append(f"{unit_field} without {value_field}")
    if unpaired:
        return {"fields": "; ".join(unpaired)}
    return None


@DEFAULT_REGISTRY.rule(
    "ZeroQuantityReview",
    list(QUANTITY_FIELDS),
    "{entity_kind} {entity_id} has zero-valued quantity field(s) {fields}; please review",
    severity=Severity.INFO,
)
def zero_quantity_review(record: EntityRecord, context):
    """Zero is a legal quantity but usually a data-entry slip."""
    zeros = [value_field for value_field, value, _, _ in _pairs(record) if value == 0]
    if zeros:
        return {"fields": ", ".join(zeros)}
    return None


@DEFAULT_REGISTRY.rule(
    "UcumUnitRecognized",
    list(QUANTITY_FIELDS),
    "{entity_kind} {entity_id} uses unrecognized UCUM unit(s): {units}",
    severity=Severity.WARNING,
)
def ucum_unit_recognized(record: EntityRecord, context):
    unknown = [
        f"{unit_field}='{unit}'"
        for _, _, unit_field, unit in _pairs(record)
        if present(unit) and not is_ucum_unit(unit)
    ]
    if unknown:
        return {"units": ", ".join(unknown)}
    return None
