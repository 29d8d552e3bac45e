"""Unit tests for the generic hierarchy assembler."""

import pytest

from labelgraph.core.exceptions import ContractError, CycleDetected, DanglingReferenceError
from labelgraph.services.hierarchy import HierarchyAssembler, HierarchyEdge, HierarchyKind, HierarchyNode


@pytest.fixture
def section_assembler() -> HierarchyAssembler:
    return HierarchyAssembler(HierarchyKind.SECTION, node_kind="Section", edge_kind="SectionHierarchy")


@pytest.fixture
def lot_assembler() -> HierarchyAssembler:
    return HierarchyAssembler(HierarchyKind.LOT, allow_multiple_parents=True)


class TestSiblingOrdering:
    """Tests for ordering children by sequence number."""

    def test_sequence_then_child_id(self, section_assembler):
        # P=1, A=2, B=3, C=4
        edges = [HierarchyEdge(1, 2, 2), HierarchyEdge(1, 4, 1), HierarchyEdge(1, 3, 1)]
        hierarchy = section_assembler.assemble([1, 2, 3, 4], edges)
        assert hierarchy.children_of(1) == [3, 4, 2]

    def test_missing_sequence_sorts_first(self, section_assembler):
        edges = [HierarchyEdge(1, 2, 1), HierarchyEdge(1, 3, None)]
        hierarchy = section_assembler.assemble([1, 2, 3], edges)
        assert hierarchy.children_of(1) == [3, 2]

    def test_sequence_need_not_be_contiguous(self, section_assembler):
        edges = [HierarchyEdge(1, 2, 40), HierarchyEdge(1, 3, 7)]
        hierarchy = section_assembler.assemble([1, 2, 3], edges)
        assert hierarchy.children_of(1) == [3, 2]


class TestRootsAndStandalone:
    """Tests for root and standalone detection."""

    def test_roots_never_appear_as_children(self, section_assembler):
        edges = [HierarchyEdge(5, 6, 1), HierarchyEdge(6, 7, 1)]
        hierarchy = section_assembler.assemble([7, 6, 5, 9], edges)
        assert hierarchy.roots == (5, 9)
        assert hierarchy.standalone == (9,)
        assert hierarchy.is_standalone(9)
        assert not hierarchy.is_standalone(5)

    def test_depth_and_walk(self, section_assembler):
        edges = [HierarchyEdge(1, 2, 1), HierarchyEdge(2, 3, 1), HierarchyEdge(1, 4, 2)]
        hierarchy = section_assembler.assemble([1, 2, 3, 4], edges)
        assert hierarchy.depth_of(3) == 2
        assert list(hierarchy.walk()) == [(0, 1), (1, 2), (2, 3), (1, 4)]
        assert hierarchy.ancestors(3) == [2, 1]
        assert hierarchy.descendants(1) == [2, 3, 4]

    def test_forest_is_nested(self, section_assembler):
        edges = [HierarchyEdge(1, 2, 1), HierarchyEdge(1, 3, 2)]
        hierarchy = section_assembler.assemble([1, 2, 3], edges)
        assert hierarchy.forest() == (HierarchyNode(1, (HierarchyNode(2), HierarchyNode(3))),)
        assert hierarchy.subtree(1).flatten() == [1, 2, 3]

    def test_unknown_node_query_is_a_contract_error(self, section_assembler):
        hierarchy = section_assembler.assemble([1], [])
        with pytest.raises(ContractError):
            hierarchy.children_of(2)


class TestAcyclicity:
    """Tests for cycle detection."""

    def test_cycle_raises(self, section_assembler):
        edges = [HierarchyEdge(1, 2, 1), HierarchyEdge(2, 3, 1), HierarchyEdge(3, 1, 1)]
        with pytest.raises(CycleDetected) as exc_info:
            section_assembler.assemble([1, 2, 3], edges)
        assert exc_info.value.node_id in (1, 2, 3)
        assert exc_info.value.kind == "Section"

    def test_cycle_below_a_root_raises(self, section_assembler):
        edges = [HierarchyEdge(1, 2, 1), HierarchyEdge(2, 3, 1), HierarchyEdge(3, 2, 1)]
        with pytest.raises(CycleDetected) as exc_info:
            section_assembler.assemble([1, 2, 3], edges)
        assert exc_info.value.node_id == 2

    def test_self_edge_raises(self, section_assembler):
        with pytest.raises(CycleDetected):
            section_assembler.assemble([1], [HierarchyEdge(1, 1, 1)])

    def test_cycles_are_detected_in_dag_kinds_too(self, lot_assembler):
        edges = [HierarchyEdge(1, 2), HierarchyEdge(2, 1)]
        with pytest.raises(CycleDetected):
            lot_assembler.assemble([1, 2], edges)

    def test_deep_chain_is_not_a_cycle(self, section_assembler):
        nodes = list(range(1, 2001))
        edges = [HierarchyEdge(n, n + 1, 1) for n in nodes[:-1]]
        hierarchy = section_assembler.assemble(nodes, edges)
        assert hierarchy.depth_of(2000) == 1999

    def test_deep_chain_folds_and_flattens(self, section_assembler):
        nodes = list(range(1, 2001))
        edges = [HierarchyEdge(n, n + 1, 1) for n in nodes[:-1]]
        hierarchy = section_assembler.assemble(nodes, edges)

        deepest = hierarchy.fold(1, lambda n, depth, children: children[0] if children else (n, depth))
        assert deepest == (2000, 1999)
        assert hierarchy.subtree(1).flatten() == nodes


class TestFold:
    """Tests for bottom-up folding over a subtree."""

    def test_children_arrive_in_sibling_order(self, section_assembler):
        edges = [HierarchyEdge(1, 2, 2), HierarchyEdge(1, 3, 1), HierarchyEdge(3, 4, 1)]
        hierarchy = section_assembler.assemble([1, 2, 3, 4], edges)

        rendered = hierarchy.fold(1, lambda n, depth, children: f"{n}@{depth}[{','.join(children)}]")
        assert rendered == "1@0[3@1[4@2[]],2@1[]]"

    def test_starting_depth(self, section_assembler):
        hierarchy = section_assembler.assemble([1, 2], [HierarchyEdge(1, 2, 1)])
        assert hierarchy.fold(2, lambda n, depth, children: depth, depth=5) == 5

    def test_shared_node_built_per_parent(self, lot_assembler):
        edges = [HierarchyEdge(1, 2, 1), HierarchyEdge(1, 3, 2), HierarchyEdge(2, 4, 1), HierarchyEdge(3, 4, 1)]
        hierarchy = lot_assembler.assemble([1, 2, 3, 4], edges)

        calls = []
        hierarchy.fold(1, lambda n, depth, children: calls.append(n))
        assert calls == [4, 2, 4, 3, 1]

    def test_unknown_node(self, section_assembler):
        hierarchy = section_assembler.assemble([1], [])
        with pytest.raises(ContractError):
            hierarchy.fold(9, lambda n, depth, children: n)


class TestStructuralInputs:
    """Tests for dangling edges and contract violations."""

    def test_dangling_child(self, section_assembler):
        with pytest.raises(DanglingReferenceError) as exc_info:
            section_assembler.assemble([1], [HierarchyEdge(1, 8, 1, edge_id=42)])
        error = exc_info.value
        assert (error.kind, error.record_id, error.field) == ("SectionHierarchy", 42, "child_id")
        assert (error.target_kind, error.target_id) == ("Section", 8)

    def test_none_collections(self, section_assembler):
        with pytest.raises(ContractError):
            section_assembler.assemble(None, [])
        with pytest.raises(ContractError):
            section_assembler.assemble([1], None)

    def test_non_edge_items(self, section_assembler):
        with pytest.raises(ContractError):
            section_assembler.assemble([1, 2], [(1, 2, 1)])


class TestMultiParent:
    """Tests for lot genealogy with several parents."""

    def test_parents_are_not_collapsed(self, lot_assembler):
        bulk1, bulk2, fill1 = 10, 11, 20
        edges = [HierarchyEdge(bulk1, fill1), HierarchyEdge(bulk2, fill1)]
        hierarchy = lot_assembler.assemble([bulk1, bulk2, fill1], edges)

        assert hierarchy.parents_of(fill1) == [bulk1, bulk2]
        assert hierarchy.children_of(bulk1) == [fill1]
        assert hierarchy.children_of(bulk2) == [fill1]
        assert hierarchy.shared_nodes() == [fill1]
        assert [e.parent_id for e in hierarchy.parent_edges(fill1)] == [bulk1, bulk2]

    def test_shared_node_in_tree_kind_is_tolerated(self, section_assembler, caplog):
        edges = [HierarchyEdge(1, 3, 1), HierarchyEdge(2, 3, 1)]
        hierarchy = section_assembler.assemble([1, 2, 3], edges)
        assert hierarchy.parents_of(3) == [1, 2]
        assert "several parents" in caplog.text


class TestDeterminism:
    """Tests for repeatable output."""

    def test_same_input_same_structure(self, section_assembler):
        edges = [HierarchyEdge(1, 2, 2), HierarchyEdge(1, 3, 1), HierarchyEdge(3, 4, 1)]
        first = section_assembler.assemble([1, 2, 3, 4], edges)
        second = section_assembler.assemble([1, 2, 3, 4], edges)
        assert first.forest() == second.forest()
        assert first.as_index() == second.as_index()
        assert list(first.walk()) == list(second.walk())

    def test_input_order_does_not_matter(self, section_assembler):
        edges = [HierarchyEdge(1, 2, 2), HierarchyEdge(1, 3, 1), HierarchyEdge(3, 4, 1)]
        first = section_assembler.assemble([1, 2, 3, 4], edges)
        second = section_assembler.assemble([4, 3, 2, 1], list(reversed(edges)))
        assert first.as_index() == second.as_index()
