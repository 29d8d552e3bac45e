"""Rendering of packaging level trees."""

from typing import List, Optional

from labelgraph.models.entity_set import EntitySet
from labelgraph.models.packaging import PackageIdentifier, PackagingLevel, ProductEvent
from labelgraph.models.product import Characteristic
from labelgraph.models.variants import VariantIndex
from labelgraph.schemas.rendering import PackageRendering, ProductEventRendering
from labelgraph.services.hierarchy.assembler import AssembledHierarchy
from labelgraph.services.rendering.characteristic_rendering import CharacteristicRenderingService
from labelgraph.services.rendering.formatting import format_quantity, group_by


class PackageRenderingService:
    """Walks the packaging hierarchy from an outer level down to its inner levels."""

    def __init__(
        self,
        entity_set: EntitySet,
        hierarchy: AssembledHierarchy,
        variants: VariantIndex,
        characteristic_service: Optional[CharacteristicRenderingService] = None,
    ):
        self.entity_set = entity_set
        self.hierarchy = hierarchy
        self.variants = variants
        self.characteristic_service = characteristic_service or CharacteristicRenderingService()
        self.identifiers_by_level = group_by(entity_set.table(PackageIdentifier), "packaging_level_id")
        self.events_by_level = group_by(entity_set.table(ProductEvent), "packaging_level_id")
        self.characteristics_by_level = group_by(
            (c for c in entity_set.table(Characteristic) if c.packaging_level_id is not None),
            "packaging_level_id",
        )

    def render(self, packaging_level_id: int) -> PackageRendering:
        return self.hierarchy.fold(packaging_level_id, self._render_level)

    def _render_level(self, packaging_level_id: int, _depth: int, children: List[PackageRendering]) -> PackageRendering:
        level = self.entity_set.require(PackagingLevel, packaging_level_id)
        identifiers = [
            identifier.identifier_value
            for identifier in self.identifiers_by_level.get(level.id, [])
            if identifier.identifier_value
        ]
        events = [
            ProductEventRendering(
                product_event_id=event.id,
                event_code=event.event_code,
                event_display_name=event.event_display_name,
                quantity_value=event.quantity_value,
                effective_time_low=event.effective_time_low,
            )
            for event in self.events_by_level.get(level.id, [])
        ]
        characteristics = [
            self.characteristic_service.render(c, self.variants.characteristic(c.id))
            for c in self.characteristics_by_level.get(level.id, [])
        ]

        return PackageRendering(
            packaging_level_id=level.id,
            formatted_quantity=format_quantity(level.quantity_numerator, level.quantity_numerator_unit),
            quantity_unit=level.quantity_numerator_unit,
            package_form_code=level.package_form_code,
            package_form_code_system=level.package_form_code_system,
            package_form_display_name=level.package_form_display_name,
            identifiers=identifiers,
            events=events,
            characteristics=characteristics,
            children=children,
            has_identifiers=bool(identifiers),
            has_events=bool(events),
            has_characteristics=bool(characteristics),
            has_children=bool(children),
        )
