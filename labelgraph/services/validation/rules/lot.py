"""Lot rules: instance types and genealogy direction."""

from labelgraph.models.lot import LotHierarchy, ProductInstance
from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.utils.vocabulary import LOT_GENEALOGY, LOT_INSTANCE_TYPES

_INSTANCE_TYPES_BY_KEY = {name.upper(): name for name in LOT_INSTANCE_TYPES}


def instance_type(instance) -> str:
    """Canonical instance type name, or '' when absent or unknown."""
    if instance is None or not instance.instance_type:
        return ""
    return _INSTANCE_TYPES_BY_KEY.get(instance.instance_type.strip().upper(), "")


@DEFAULT_REGISTRY.rule(
    "LotInstanceType",
    ProductInstance,
    "Product instance {entity_id} has unrecognized instance type '{instance_type}'",
)
def lot_instance_type(instance: ProductInstance, context):
    if not instance_type(instance):
        return {"instance_type": instance.instance_type or ""}
    return None


@DEFAULT_REGISTRY.rule(
    "LotGenealogyDirection",
    LotHierarchy,
    "Lot hierarchy {entity_id} links a {parent_type} to a {child_type}; "
    "genealogy runs bulk lot -> fill lot -> label lot",
)
def lot_genealogy_direction(edge: LotHierarchy, context):
    parent_type = instance_type(context.get(ProductInstance, edge.parent_instance_id))
    child_type = instance_type(context.get(ProductInstance, edge.child_instance_id))
    if not parent_type or not child_type:
        return None
    if child_type not in LOT_GENEALOGY[parent_type]:
        return {"parent_type": parent_type, "child_type": child_type}
    return None
