"""Packaging rules: lot distribution events reported per packaging level."""

from labelgraph.models.packaging import ProductEvent
from labelgraph.services.validation.checks import display_name_mismatch, present, problems
from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.utils.vocabulary import (
    EVENT_DISTRIBUTED,
    EVENT_RETURNED,
    FDA_SPL_CODE_SYSTEM,
    PRODUCT_EVENT_CODES,
    canonical_code,
)


@DEFAULT_REGISTRY.rule(
    "ProductEventCode",
    ProductEvent,
    "Product event {entity_id} has an invalid event code: {problems}",
)
def product_event_code(event: ProductEvent, context):
    """Code and code system come from the lot distribution list; a display name must match."""
    return problems(
        canonical_code(PRODUCT_EVENT_CODES, event.event_code) is None
        and f"code '{event.event_code or ''}' is neither distributed ({EVENT_DISTRIBUTED}) "
            f"nor returned ({EVENT_RETURNED})",
        event.event_code_system != FDA_SPL_CODE_SYSTEM
        and f"code system '{event.event_code_system or ''}' is not the FDA SPL system",
        display_name_mismatch(PRODUCT_EVENT_CODES, event.event_code, event.event_display_name),
    )


@DEFAULT_REGISTRY.rule(
    "ProductEventQuantity",
    ProductEvent,
    "Product event {entity_id} quantity is invalid: {problems}",
)
def product_event_quantity(event: ProductEvent, context):
    """Event quantities are non-negative counts of packages (unit '1' or none)."""
    return problems(
        event.quantity_value is None and "quantity is required",
        event.quantity_value is not None and event.quantity_value < 0
        and f"quantity {event.quantity_value} is negative",
        present(event.quantity_unit) and event.quantity_unit.strip() != "1"
        and f"unit '{event.quantity_unit}' must be '1' or omitted",
    )


@DEFAULT_REGISTRY.rule(
    "ProductEventEffectiveTime",
    ProductEvent,
    "Product event {entity_id} {problem}",
)
def product_event_effective_time(event: ProductEvent, context):
    """Distribution events state when the reporting interval began; returns do not."""
    code = canonical_code(PRODUCT_EVENT_CODES, event.event_code)
    if code == EVENT_DISTRIBUTED and event.effective_time_low is None:
        return {"problem": "reports a distribution without the start of the reporting interval"}
    if code == EVENT_RETURNED and event.effective_time_low is not None:
        return {"problem": "reports a return but carries an effective time"}
    return None
