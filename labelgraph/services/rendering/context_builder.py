"""Builds the per-document rendering context."""

from typing import List, Optional

from labelgraph.core.exceptions import ContractError
from labelgraph.models.document import Document
from labelgraph.models.entity_set import EntitySet
from labelgraph.models.section import Section
from labelgraph.models.variants import VariantIndex, map_variants
from labelgraph.schemas.rendering import RenderingContext, SectionRendering
from labelgraph.services.hierarchy.document_hierarchies import DocumentHierarchies
from labelgraph.services.rendering.section_rendering import SectionRenderingService
from labelgraph.utils.logging import get_logger

LOGGER = get_logger(__name__)


def _preorder(sections: List[SectionRendering]) -> List[int]:
    ordered: List[int] = []
    stack = list(reversed(sections))
    while stack:
        current = stack.pop()
        ordered.append(current.section_id)
        stack.extend(reversed(current.children))
    return ordered


class RenderingContextBuilder:
    """Turns an entity set and its hierarchies into a ``RenderingContext``.

    The builder performs no validation of its own. Malformed records degrade
    to empty collections and false flags instead of raising; only missing
    structural inputs are rejected.
    """

    def build(
        self,
        entity_set: EntitySet,
        hierarchies: DocumentHierarchies,
        variants: Optional[VariantIndex] = None,
    ) -> RenderingContext:
        """Build the rendering context for one document version.

        Args:
            entity_set: Loaded entity set
            hierarchies: Hierarchies assembled from the same entity set
            variants: Pre-mapped variants; mapped here when omitted

        Returns:
            RenderingContext: Root and standalone section trees in document order

        Raises:
            ContractError: If ``entity_set`` or ``hierarchies`` is None
        """
        if entity_set is None:
            raise ContractError("RenderingContextBuilder.build requires an entity set")
        if hierarchies is None:
            raise ContractError("RenderingContextBuilder.build requires assembled hierarchies")
        if variants is None:
            variants = map_variants(entity_set)

        service = SectionRenderingService(entity_set, hierarchies, variants)
        section_hierarchy = hierarchies.sections

        # a section without a body and without edges is rendered on its own
        standalone_ids = [
            section_id
            for section_id in section_hierarchy.standalone
            if entity_set.require(Section, section_id).structured_body_id is None
        ]
        root_ids = [
            section_id for section_id in section_hierarchy.roots if section_id not in standalone_ids
        ]
        root_sections = [service.render(section_id) for section_id in root_ids]
        standalone_sections = [service.render(section_id) for section_id in standalone_ids]

        documents = list(entity_set.table(Document))
        document = documents[0] if documents else None

        context = RenderingContext(
            document_id=document.id if document else None,
            document_title=document.title if document else None,
            root_sections=root_sections,
            standalone_sections=standalone_sections,
            section_index=_preorder(root_sections) + _preorder(standalone_sections),
        )
        LOGGER.info(
            f"Built rendering context: {len(root_sections)} root sections, "
            f"{len(standalone_sections)} standalone",
            extra={"document_id": context.document_id, "sections": len(context.section_index)},
        )
        return context
