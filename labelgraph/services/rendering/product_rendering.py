"""Rendering of products with their ingredients, routes and packaging."""

from typing import Dict, List, Optional

from labelgraph.models.entity_set import EntitySet
from labelgraph.models.ingredient import Ingredient
from labelgraph.models.packaging import PackagingLevel
from labelgraph.models.product import (
    Characteristic,
    GenericMedicine,
    Product,
    ProductIdentifier,
    ProductRouteOfAdministration,
)
from labelgraph.models.variants import VariantIndex
from labelgraph.schemas.rendering import ProductRendering, RouteRendering
from labelgraph.services.hierarchy.assembler import AssembledHierarchy
from labelgraph.services.rendering.characteristic_rendering import CharacteristicRenderingService
from labelgraph.services.rendering.formatting import group_by
from labelgraph.services.rendering.ingredient_rendering import IngredientRenderingService
from labelgraph.services.rendering.package_rendering import PackageRenderingService
from labelgraph.utils.vocabulary import NDC_CODE_SYSTEM


class ProductRenderingService:
    def __init__(self, entity_set: EntitySet, packaging: AssembledHierarchy, variants: VariantIndex):
        self.entity_set = entity_set
        self.packaging = packaging
        self.characteristic_service = CharacteristicRenderingService()
        self.ingredient_service = IngredientRenderingService(entity_set)
        self.package_service = PackageRenderingService(
            entity_set, packaging, variants, self.characteristic_service
        )
        self.variants = variants

        self.identifiers_by_product = group_by(entity_set.table(ProductIdentifier), "product_id")
        self.generics_by_product = group_by(entity_set.table(GenericMedicine), "product_id")
        self.routes_by_product = group_by(entity_set.table(ProductRouteOfAdministration), "product_id")
        self.ingredients_by_product = group_by(entity_set.table(Ingredient), "product_id", "sequence_number")
        self.characteristics_by_product = group_by(
            (c for c in entity_set.table(Characteristic) if c.packaging_level_id is None),
            "product_id",
        )
        # only outermost levels start a package tree
        self.packaging_roots_by_product: Dict[Optional[int], List[PackagingLevel]] = group_by(
            (entity_set.require(PackagingLevel, level_id) for level_id in packaging.roots),
            "product_id",
        )

    def _ndc_identifier(self, product_id: int) -> Optional[str]:
        for identifier in self.identifiers_by_product.get(product_id, []):
            if identifier.identifier_system_oid == NDC_CODE_SYSTEM and identifier.identifier_value:
                return identifier.identifier_value
        return None

    def render(self, product: Product) -> ProductRendering:
        ingredients = [
            self.ingredient_service.render(ingredient)
            for ingredient in self.ingredients_by_product.get(product.id, [])
        ]
        active = [i for i in ingredients if i.is_active_ingredient]
        inactive = [i for i in ingredients if not i.is_active_ingredient]
        characteristics = [
            self.characteristic_service.render(c, self.variants.characteristic(c.id))
            for c in self.characteristics_by_product.get(product.id, [])
        ]
        routes = [
            RouteRendering(
                route_id=route.id,
                route_code=route.route_code,
                route_display_name=route.route_display_name,
                route_null_flavor=route.route_null_flavor,
            )
            for route in self.routes_by_product.get(product.id, [])
        ]
        generic_names = [
            generic.generic_name
            for generic in self.generics_by_product.get(product.id, [])
            if generic.generic_name
        ]
        packaging = [
            self.package_service.render(level.id)
            for level in self.packaging_roots_by_product.get(product.id, [])
        ]
        ndc = self._ndc_identifier(product.id)

        return ProductRendering(
            product_id=product.id,
            product_name=product.product_name,
            product_suffix=product.product_suffix,
            form_code=product.form_code,
            form_display_name=product.form_display_name,
            ndc_product_identifier=ndc,
            generic_names=generic_names,
            routes=routes,
            active_ingredients=active,
            inactive_ingredients=inactive,
            characteristics=characteristics,
            packaging=packaging,
            has_ndc_identifier=ndc is not None,
            has_generic_medicines=bool(generic_names),
            has_routes=bool(routes),
            has_active_ingredients=bool(active),
            has_inactive_ingredients=bool(inactive),
            has_characteristics=bool(characteristics),
            has_packaging=bool(packaging),
        )
