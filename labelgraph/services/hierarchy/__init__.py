"""Hierarchy assembly services."""

from labelgraph.services.hierarchy.assembler import (
    AssembledHierarchy,
    HierarchyAssembler,
    HierarchyEdge,
    HierarchyKind,
    HierarchyNode,
)
from labelgraph.services.hierarchy.document_hierarchies import (
    DocumentHierarchies,
    DocumentHierarchyBuilder,
)

__all__ = [
    "AssembledHierarchy",
    "HierarchyAssembler",
    "HierarchyEdge",
    "HierarchyKind",
    "HierarchyNode",
    "DocumentHierarchies",
    "DocumentHierarchyBuilder",
]
