"""Unit tests for assembling every hierarchy of a document."""

import pytest

from labelgraph.core.exceptions import ContractError, CycleDetected, DanglingReferenceError
from labelgraph.models import EntitySet
from labelgraph.services.hierarchy import DocumentHierarchyBuilder, HierarchyKind


class TestDocumentHierarchyBuilder:
    """Tests for DocumentHierarchyBuilder."""

    def test_sections(self, label_hierarchies):
        sections = label_hierarchies.sections
        assert sections.roots == (10, 20, 30)
        assert sections.standalone == (20, 30)
        assert sections.children_of(10) == [11, 12]

    def test_packaging(self, label_hierarchies):
        assert label_hierarchies.packaging.roots == (600,)
        assert label_hierarchies.packaging.children_of(600) == [601]

    def test_lot_genealogy(self, label_hierarchies):
        lots = label_hierarchies.lots
        assert lots.parents_of(702) == [700, 701]
        assert lots.children_of(702) == [703]
        assert lots.ancestors(703) == [702, 700, 701]

    def test_pharmacologic_classes(self, label_hierarchies):
        assert label_hierarchies.pharmacologic_classes.children_of(801) == [800]

    def test_nested_text_content(self, label_hierarchies):
        text_content = label_hierarchies.text_content
        assert text_content.children_of(101) == [103]
        assert text_content.parents_of(103) == [101]
        assert 103 not in text_content.roots

    def test_by_kind_and_index(self, label_hierarchies):
        by_kind = label_hierarchies.by_kind()
        assert set(by_kind) == set(HierarchyKind)
        index = label_hierarchies.as_index()
        assert index["Section"]["children"][10] == [11, 12]

    def test_text_content_cycle(self):
        entity_set = EntitySet.from_payload({
            "Section": [{"id": 1}],
            "SectionTextContent": [
                {"id": 1, "section_id": 1, "parent_section_text_content_id": 2},
                {"id": 2, "section_id": 1, "parent_section_text_content_id": 1},
            ],
        })
        with pytest.raises(CycleDetected):
            DocumentHierarchyBuilder().build(entity_set)

    def test_dangling_section_edge(self):
        entity_set = EntitySet.from_payload({
            "Section": [{"id": 1}],
            "SectionHierarchy": [{"id": 5, "parent_section_id": 1, "child_section_id": 2}],
        })
        with pytest.raises(DanglingReferenceError) as exc_info:
            DocumentHierarchyBuilder().build(entity_set)
        assert exc_info.value.kind == "SectionHierarchy"
        assert exc_info.value.record_id == 5

    def test_none_entity_set(self):
        with pytest.raises(ContractError):
            DocumentHierarchyBuilder().build(None)
