"""Assembles every hierarchy dimension of one document."""

from dataclasses import dataclass
from typing import Dict

from labelgraph.core.exceptions import ContractError
from labelgraph.models.entity_set import EntitySet
from labelgraph.models.lot import LotHierarchy, ProductInstance
from labelgraph.models.packaging import PackagingHierarchy, PackagingLevel
from labelgraph.models.pharmacology import PharmacologicClass, PharmacologicClassHierarchy
from labelgraph.models.section import Section, SectionHierarchy, SectionTextContent
from labelgraph.services.hierarchy.assembler import (
    AssembledHierarchy,
    HierarchyAssembler,
    HierarchyEdge,
    HierarchyKind,
)
from labelgraph.utils.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class DocumentHierarchies:
    """The independent hierarchies of a single document version."""
    sections: AssembledHierarchy
    packaging: AssembledHierarchy
    lots: AssembledHierarchy
    pharmacologic_classes: AssembledHierarchy
    text_content: AssembledHierarchy

    def by_kind(self) -> Dict[HierarchyKind, AssembledHierarchy]:
        return {
            HierarchyKind.SECTION: self.sections,
            HierarchyKind.PACKAGING: self.packaging,
            HierarchyKind.LOT: self.lots,
            HierarchyKind.PHARMACOLOGIC_CLASS: self.pharmacologic_classes,
            HierarchyKind.TEXT_CONTENT: self.text_content,
        }

    def as_index(self) -> Dict[str, dict]:
        return {kind.value: hierarchy.as_index() for kind, hierarchy in self.by_kind().items()}


class DocumentHierarchyBuilder:
    """Reconstructs section, packaging, lot, class and content hierarchies."""

    def __init__(self):
        self.section_assembler = HierarchyAssembler(
            HierarchyKind.SECTION,
            node_kind=Section.kind(),
            edge_kind=SectionHierarchy.kind(),
        )
        self.packaging_assembler = HierarchyAssembler(
            HierarchyKind.PACKAGING,
            node_kind=PackagingLevel.kind(),
            edge_kind=PackagingHierarchy.kind(),
        )
        self.lot_assembler = HierarchyAssembler(
            HierarchyKind.LOT,
            allow_multiple_parents=True,
            node_kind=ProductInstance.kind(),
            edge_kind=LotHierarchy.kind(),
        )
        self.class_assembler = HierarchyAssembler(
            HierarchyKind.PHARMACOLOGIC_CLASS,
            node_kind=PharmacologicClass.kind(),
            edge_kind=PharmacologicClassHierarchy.kind(),
        )
        self.text_content_assembler = HierarchyAssembler(
            HierarchyKind.TEXT_CONTENT,
            node_kind=SectionTextContent.kind(),
            edge_kind=SectionTextContent.kind(),
        )

    def build(self, entity_set: EntitySet) -> DocumentHierarchies:
        """Assemble all hierarchies of ``entity_set``.

        Raises:
            ContractError: If ``entity_set`` is None
            StructuralError: If any hierarchy has a dangling edge or a cycle
        """
        if entity_set is None:
            raise ContractError("DocumentHierarchyBuilder.build requires an entity set")

        sections = self.section_assembler.assemble(
            entity_set.table(Section).ids(),
            [
                HierarchyEdge(row.parent_section_id, row.child_section_id, row.sequence_number, row.id)
                for row in entity_set.table(SectionHierarchy)
            ],
        )
        packaging = self.packaging_assembler.assemble(
            entity_set.table(PackagingLevel).ids(),
            [
                HierarchyEdge(
                    row.outer_packaging_level_id,
                    row.inner_packaging_level_id,
                    row.sequence_number,
                    row.id,
                )
                for row in entity_set.table(PackagingHierarchy)
            ],
        )
        lots = self.lot_assembler.assemble(
            entity_set.table(ProductInstance).ids(),
            [
                HierarchyEdge(row.parent_instance_id, row.child_instance_id, row.sequence_number, row.id)
                for row in entity_set.table(LotHierarchy)
            ],
        )
        pharmacologic_classes = self.class_assembler.assemble(
            entity_set.table(PharmacologicClass).ids(),
            [
                HierarchyEdge(
                    row.parent_pharmacologic_class_id,
                    row.child_pharmacologic_class_id,
                    row.sequence_number,
                    row.id,
                )
                for row in entity_set.table(PharmacologicClassHierarchy)
            ],
        )
        text_content = self.text_content_assembler.assemble(
            entity_set.table(SectionTextContent).ids(),
            [
                HierarchyEdge(block.parent_section_text_content_id, block.id, block.sequence_number, block.id)
                for block in entity_set.table(SectionTextContent)
                if block.parent_section_text_content_id is not None
            ],
        )

        LOGGER.info(
            f"Assembled document hierarchies: {len(sections)} sections, {len(packaging)} packaging levels, "
            f"{len(lots)} lots, {len(pharmacologic_classes)} classes",
            extra={
                "section_roots": len(sections.roots),
                "packaging_roots": len(packaging.roots),
                "lot_roots": len(lots.roots),
            },
        )
        return DocumentHierarchies(
            sections=sections,
            packaging=packaging,
            lots=lots,
            pharmacologic_classes=pharmacologic_classes,
            text_content=text_content,
        )
