"""Rendering-context construction."""

from labelgraph.services.rendering.characteristic_rendering import CharacteristicRenderingService
from labelgraph.services.rendering.context_builder import RenderingContextBuilder
from labelgraph.services.rendering.ingredient_rendering import IngredientRenderingService
from labelgraph.services.rendering.package_rendering import PackageRenderingService
from labelgraph.services.rendering.product_rendering import ProductRenderingService
from labelgraph.services.rendering.section_rendering import SectionRenderingService
from labelgraph.services.rendering.text_content_rendering import TextContentRenderingService

__all__ = [
    "CharacteristicRenderingService",
    "IngredientRenderingService",
    "PackageRenderingService",
    "ProductRenderingService",
    "RenderingContextBuilder",
    "SectionRenderingService",
    "TextContentRenderingService",
]
