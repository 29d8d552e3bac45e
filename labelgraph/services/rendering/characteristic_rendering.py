"""Rendering decisions for characteristics."""

from typing import Optional

from labelgraph.models.product import Characteristic
from labelgraph.models.variants import (
    BooleanValue,
    CharacteristicValueVariant,
    CodedValue,
    EncodedDataValue,
    IntegerValue,
    IntervalValue,
    NullFlavorValue,
    PhysicalQuantity,
    StringValue,
    ValueShape,
    resolve_characteristic,
)
from labelgraph.schemas.rendering import CharacteristicRendering
from labelgraph.services.rendering.formatting import format_quantity


def _format_coded(value: CodedValue) -> Optional[str]:
    return value.display_name or value.code


def _format_interval(value: IntervalValue) -> Optional[str]:
    low = format_quantity(value.low_value, value.low_unit)
    high = format_quantity(value.high_value, value.high_unit)
    if low and high:
        return f"{low} - {high}"
    if low:
        return f">= {low}"
    if high:
        return f"<= {high}"
    return None


class CharacteristicRenderingService:
    """Resolves a characteristic's value type into one rendering decision.

    An explicit value type is honored. Without one, the single populated
    slot decides; with several populated slots the fallback precedence picks
    the coded value first. The service never raises on malformed records; it
    degrades to ``resolution='none'`` with every flag false.
    """

    def render(
        self,
        characteristic: Characteristic,
        variant: Optional[CharacteristicValueVariant] = None,
    ) -> CharacteristicRendering:
        if variant is None:
            variant = resolve_characteristic(characteristic)

        populated = set(variant.populated_shapes)
        shape = variant.resolved_shape
        value = variant.value

        coded = value if isinstance(value, CodedValue) else None
        quantity = value if isinstance(value, PhysicalQuantity) else None
        interval = value if isinstance(value, IntervalValue) else None
        integer = value if isinstance(value, IntegerValue) else None
        boolean = value if isinstance(value, BooleanValue) else None
        string = value if isinstance(value, StringValue) else None
        encoded = value if isinstance(value, EncodedDataValue) else None
        null_flavor = value.null_flavor if isinstance(value, NullFlavorValue) else None

        return CharacteristicRendering(
            characteristic_id=characteristic.id,
            characteristic_code=characteristic.characteristic_code,
            characteristic_code_system=characteristic.characteristic_code_system,
            normalized_value_type=variant.declared_type,
            has_coded_value=ValueShape.CODED in populated,
            has_quantity_value=ValueShape.QUANTITY in populated,
            has_interval_value=ValueShape.INTERVAL in populated,
            has_integer_value=ValueShape.INTEGER in populated,
            has_boolean_value=ValueShape.BOOLEAN in populated,
            has_string_value=ValueShape.STRING in populated,
            has_encoded_data=ValueShape.ENCODED in populated,
            has_null_flavor=variant.null_flavor is not None,
            should_render_as_coded_element=shape == ValueShape.CODED,
            should_render_as_physical_quantity=shape == ValueShape.QUANTITY,
            should_render_as_interval=shape == ValueShape.INTERVAL,
            should_render_as_integer=shape == ValueShape.INTEGER,
            should_render_as_boolean=shape == ValueShape.BOOLEAN,
            should_render_as_string=shape == ValueShape.STRING,
            should_render_as_encoded_data=shape == ValueShape.ENCODED,
            resolution=variant.resolution.value,
            formatted_coded_value=_format_coded(coded) if coded else None,
            formatted_quantity_value=format_quantity(quantity.value, quantity.unit) if quantity else None,
            formatted_interval_value=_format_interval(interval) if interval else None,
            formatted_integer_value=str(integer.value) if integer else None,
            formatted_boolean_value=str(boolean.value).lower() if boolean else None,
            formatted_string_value=string.value if string else None,
            formatted_encoded_value=(encoded.file_name or encoded.media_type) if encoded else None,
            null_flavor=null_flavor,
            has_renderable_content=value is not None,
            should_display_original_text=bool(coded and coded.display_name),
        )
