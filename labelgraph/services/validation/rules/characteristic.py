"""Characteristic rules: the value-type discriminator and its slots."""

from labelgraph.models.product import Characteristic
from labelgraph.models.variants import VALUE_TYPE_SHAPES, resolve_characteristic
from labelgraph.schemas.validation import Severity
from labelgraph.services.validation.registry import DEFAULT_REGISTRY


def _variant(characteristic: Characteristic, context):
    variant = context.variants.characteristic(characteristic.id)
    return variant if variant is not None else resolve_characteristic(characteristic)


@DEFAULT_REGISTRY.rule(
    "ValueTypeConsistency",
    Characteristic,
    "Characteristic {entity_id} {problem}",
)
def value_type_consistency(characteristic: Characteristic, context):
    """Exactly one value slot is populated and it matches the declared value type."""
    variant = _variant(characteristic, context)
    populated = [shape.value for shape in variant.populated_shapes]
    if len(populated) > 1:
        declared = f" (declared {variant.declared_type})" if variant.declared_type else ""
        return {"problem": f"has several value slots populated{declared}: {', '.join(populated)}"}
    if variant.declared_shape is not None and populated and populated[0] != variant.declared_shape.value:
        return {
            "problem": f"declares value type {variant.declared_type} but holds a {populated[0]} value"
        }
    return None


@DEFAULT_REGISTRY.rule(
    "ValueTypeRecognized",
    Characteristic,
    "Characteristic {entity_id} declares unrecognized value type '{value_type}'",
    severity=Severity.WARNING,
)
def value_type_recognized(characteristic: Characteristic, context):
    variant = _variant(characteristic, context)
    if variant.declared_type is not None and variant.declared_type not in VALUE_TYPE_SHAPES:
        return {"value_type": characteristic.value_type}
    return None


@DEFAULT_REGISTRY.rule(
    "CharacteristicOwner",
    Characteristic,
    "Characteristic {entity_id} belongs to neither a product nor a packaging level",
)
def characteristic_owner(characteristic: Characteristic, context):
    if characteristic.product_id is None and characteristic.packaging_level_id is None:
        return {}
    return None


@DEFAULT_REGISTRY.rule(
    "IntervalBounds",
    Characteristic,
    "Characteristic {entity_id} interval is invalid: {problem}",
)
def interval_bounds(characteristic: Characteristic, context):
    low = characteristic.value_ivlpq_low_value
    high = characteristic.value_ivlpq_high_value
    if low is not None and high is not None and low > high:
        return {"problem": f"low bound {low:g} exceeds high bound {high:g}"}
    low_unit = characteristic.value_ivlpq_low_unit
    high_unit = characteristic.value_ivlpq_high_unit
    if low_unit and high_unit and low_unit.strip() != high_unit.strip():
        return {"problem": f"bounds use different units '{low_unit}' and '{high_unit}'"}
    return None
