"""Rendering of sections and their nested children."""

from typing import List

from labelgraph.models.entity_set import EntitySet
from labelgraph.models.product import Product
from labelgraph.models.section import ObservationMedia, Section, SectionExcerptHighlight
from labelgraph.models.variants import VariantIndex
from labelgraph.schemas.rendering import SectionRendering
from labelgraph.services.hierarchy.document_hierarchies import DocumentHierarchies
from labelgraph.services.rendering.formatting import group_by
from labelgraph.services.rendering.product_rendering import ProductRenderingService
from labelgraph.services.rendering.text_content_rendering import (
    TextContentRenderingService,
    media_rendering,
)
from labelgraph.utils.vocabulary import code_system_name


def section_id_attribute(section: Section) -> str:
    """Anchor id for a section: the link GUID when set, else the section GUID.

    Hyphens are replaced with underscores so the value is usable as an HTML id.
    """
    raw = section.section_link_guid or (str(section.section_guid) if section.section_guid else "")
    if not raw:
        return f"section_{section.id}"
    return raw.replace("-", "_")


class SectionRenderingService:
    """Builds ``SectionRendering`` trees following the section hierarchy."""

    def __init__(self, entity_set: EntitySet, hierarchies: DocumentHierarchies, variants: VariantIndex):
        self.entity_set = entity_set
        self.sections = hierarchies.sections
        self.text_content_service = TextContentRenderingService(entity_set, hierarchies.text_content)
        self.product_service = ProductRenderingService(entity_set, hierarchies.packaging, variants)
        self.products_by_section = group_by(entity_set.table(Product), "section_id")
        self.media_by_section = group_by(entity_set.table(ObservationMedia), "section_id")
        self.highlights_by_section = group_by(entity_set.table(SectionExcerptHighlight), "section_id")

    def render(self, section_id: int, depth: int = 0) -> SectionRendering:
        """Render a section and every section below it."""
        return self.sections.fold(section_id, self._render_section, depth)

    def _render_section(self, section_id: int, depth: int, children: List[SectionRendering]) -> SectionRendering:
        section = self.entity_set.require(Section, section_id)
        text_content = self.text_content_service.render_section_blocks(section.id)
        products = [self.product_service.render(p) for p in self.products_by_section.get(section.id, [])]
        media = [media_rendering(m) for m in self.media_by_section.get(section.id, [])]
        highlights = [
            h.highlight_text
            for h in self.highlights_by_section.get(section.id, [])
            if h.highlight_text
        ]
        return SectionRendering(
            section_id=section.id,
            section_guid=str(section.section_guid) if section.section_guid else None,
            section_code=section.section_code,
            section_code_system=section.section_code_system,
            section_display_name=section.section_display_name,
            title=section.title,
            effective_time=section.effective_time,
            section_id_attribute=section_id_attribute(section),
            depth=depth,
            is_standalone=self.sections.is_standalone(section.id) and section.structured_body_id is None,
            has_section_code=bool(section.section_code),
            section_code_system_name=code_system_name(section.section_code_system),
            children=children,
            text_content=text_content,
            products=products,
            media=media,
            excerpt_highlights=highlights,
            has_text_content=bool(text_content),
            has_products=bool(products),
            has_media=bool(media),
            has_children=bool(children),
            has_excerpt_highlights=bool(highlights),
        )
