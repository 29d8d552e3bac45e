"""Generic hierarchy assembly from adjacency-list join records.

One algorithm serves every hierarchy dimension of a labeling document:
sections, packaging containment, lot genealogy, pharmacologic class
taxonomy and nested text content blocks. The caller supplies node ids and
``(parent, child, sequence)`` edges; the assembler validates them, orders
siblings and proves the structure acyclic before handing out read-only
views.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple, TypeVar

from labelgraph.core.exceptions import ContractError, CycleDetected, DanglingReferenceError
from labelgraph.utils.logging import get_logger

LOGGER = get_logger(__name__)

T = TypeVar("T")


class HierarchyKind(str, Enum):
    """Hierarchy dimensions of a document."""
    SECTION = "Section"
    PACKAGING = "Packaging"
    LOT = "Lot"
    PHARMACOLOGIC_CLASS = "PharmacologicClass"
    TEXT_CONTENT = "TextContent"


@dataclass(frozen=True)
class HierarchyEdge:
    """One parent/child join record.

    Attributes:
        parent_id: Id of the parent node
        child_id: Id of the child node
        sequence_number: Sibling position; None sorts as 0
        edge_id: Id of the source join record, when there is one
    """
    parent_id: int
    child_id: int
    sequence_number: Optional[int] = None
    edge_id: Optional[int] = None

    @property
    def sequence(self) -> int:
        return self.sequence_number if self.sequence_number is not None else 0


@dataclass(frozen=True)
class HierarchyNode:
    """Immutable nested view of a node and its ordered children."""
    node_id: int
    children: Tuple["HierarchyNode", ...] = ()

    def flatten(self) -> List[int]:
        """Node ids of this subtree in pre-order."""
        ids: List[int] = []
        stack: List[HierarchyNode] = [self]
        while stack:
            current = stack.pop()
            ids.append(current.node_id)
            stack.extend(reversed(current.children))
        return ids


class AssembledHierarchy:
    """Read-only result of assembling one hierarchy.

    ``roots`` are the nodes that never appear as a child, in ascending id
    order; ``standalone`` is the subset of them that has no edges at all.
    Children are ordered by sequence number, ties broken by child id; parents
    by sequence number, ties broken by parent id.
    """

    def __init__(
        self,
        kind: HierarchyKind,
        node_ids: Tuple[int, ...],
        child_index: Dict[int, Tuple[HierarchyEdge, ...]],
        parent_index: Dict[int, Tuple[HierarchyEdge, ...]],
        depths: Dict[int, int],
        allow_multiple_parents: bool,
    ):
        self.kind = kind
        self.node_ids = node_ids
        self.allow_multiple_parents = allow_multiple_parents
        self._children = child_index
        self._parents = parent_index
        self._depths = depths
        self.roots: Tuple[int, ...] = tuple(n for n in node_ids if n not in parent_index)
        self.standalone: Tuple[int, ...] = tuple(
            n for n in self.roots if n not in child_index
        )
        self._forest: Optional[Tuple[HierarchyNode, ...]] = None

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._depths

    def __len__(self) -> int:
        return len(self.node_ids)

    def _require_node(self, node_id: int) -> None:
        if node_id not in self._depths:
            raise ContractError(f"Node {node_id} is not part of the {self.kind.value} hierarchy")

    def child_edges(self, parent_id: int) -> Tuple[HierarchyEdge, ...]:
        self._require_node(parent_id)
        return self._children.get(parent_id, ())

    def parent_edges(self, child_id: int) -> Tuple[HierarchyEdge, ...]:
        self._require_node(child_id)
        return self._parents.get(child_id, ())

    def children_of(self, parent_id: int) -> List[int]:
        return [edge.child_id for edge in self.child_edges(parent_id)]

    def parents_of(self, child_id: int) -> List[int]:
        return [edge.parent_id for edge in self.parent_edges(child_id)]

    def is_standalone(self, node_id: int) -> bool:
        self._require_node(node_id)
        return node_id not in self._children and node_id not in self._parents

    def shared_nodes(self) -> List[int]:
        """Nodes reached from more than one parent edge."""
        return [n for n in self.node_ids if len(self._parents.get(n, ())) > 1]

    def ancestors(self, node_id: int) -> List[int]:
        """All ancestors, breadth-first, nearest first, each listed once."""
        self._require_node(node_id)
        seen: Set[int] = set()
        ordered: List[int] = []
        frontier = [node_id]
        while frontier:
            next_frontier: List[int] = []
            for current in frontier:
                for parent_id in self.parents_of(current):
                    if parent_id not in seen:
                        seen.add(parent_id)
                        ordered.append(parent_id)
                        next_frontier.append(parent_id)
            frontier = next_frontier
        return ordered

    def descendants(self, node_id: int) -> List[int]:
        """All descendants in pre-order, each listed once."""
        self._require_node(node_id)
        seen: Set[int] = set()
        ordered: List[int] = []
        stack = list(reversed(self.children_of(node_id)))
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            ordered.append(current)
            stack.extend(reversed(self.children_of(current)))
        return ordered

    def depth_of(self, node_id: int) -> int:
        """Length of the longest path from a root to the node."""
        self._require_node(node_id)
        return self._depths[node_id]

    def walk(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(depth, node_id)`` pairs in pre-order from every root.

        A node under several parents is visited once per parent.
        """
        stack: List[Tuple[int, int]] = [(0, root) for root in reversed(self.roots)]
        while stack:
            depth, current = stack.pop()
            yield depth, current
            for child_id in reversed(self.children_of(current)):
                stack.append((depth + 1, child_id))

    def forest(self) -> Tuple[HierarchyNode, ...]:
        """Nested node tuples rooted at ``roots``."""
        if self._forest is None:
            built: Dict[int, HierarchyNode] = {}
            # reverse depth order builds every child before its parents
            for node_id in sorted(self.node_ids, key=lambda n: (-self._depths[n], n)):
                built[node_id] = HierarchyNode(
                    node_id,
                    tuple(built[child_id] for child_id in self.children_of(node_id)),
                )
            self._forest = tuple(built[root] for root in self.roots)
        return self._forest

    def fold(
        self,
        node_id: int,
        build: Callable[[int, int, List[T]], T],
        depth: int = 0,
    ) -> T:
        """Build a value for the subtree under ``node_id`` from the leaves up.

        ``build(node_id, depth, children)`` is called once per visit with the
        already built values of the node's children in sibling order. A node
        under several parents is built once per parent. The traversal keeps
        an explicit stack, so arbitrarily deep chains are safe.

        Args:
            node_id: Subtree root
            build: Combines a node with the values built for its children
            depth: Depth assigned to ``node_id``

        Returns:
            The value built for ``node_id``
        """
        self._require_node(node_id)
        built: List[List[T]] = [[]]
        stack: List[Tuple[int, int, bool]] = [(node_id, depth, False)]
        while stack:
            current, current_depth, expanded = stack.pop()
            if expanded:
                children = built.pop()
                built[-1].append(build(current, current_depth, children))
                continue
            stack.append((current, current_depth, True))
            built.append([])
            for child_id in reversed(self.children_of(current)):
                stack.append((child_id, current_depth + 1, False))
        return built[0][0]

    def subtree(self, node_id: int) -> HierarchyNode:
        return self.fold(node_id, lambda n, _depth, children: HierarchyNode(n, tuple(children)))

    def as_index(self) -> Dict[str, Any]:
        """Plain-data export of the parent/child indices."""
        return {
            "kind": self.kind.value,
            "roots": list(self.roots),
            "standalone": list(self.standalone),
            "children": {
                parent_id: [edge.child_id for edge in edges]
                for parent_id, edges in self._children.items()
            },
            "parents": {
                child_id: [edge.parent_id for edge in edges]
                for child_id, edges in self._parents.items()
            },
        }


class HierarchyAssembler:
    """Builds an ``AssembledHierarchy`` from node ids and edges.

    Args:
        kind: Hierarchy dimension being assembled
        allow_multiple_parents: Whether a child fed by several parents is
            expected (lot genealogy) or merely tolerated (tree kinds, where each
            distinct join row is a distinct configuration)
        node_kind: Entity kind of the nodes, used in error messages
        edge_kind: Entity kind of the join records, used in error messages
    """

    def __init__(
        self,
        kind: HierarchyKind,
        allow_multiple_parents: bool = False,
        node_kind: Optional[str] = None,
        edge_kind: Optional[str] = None,
    ):
        self.kind = kind
        self.allow_multiple_parents = allow_multiple_parents
        self.node_kind = node_kind or kind.value
        self.edge_kind = edge_kind or f"{kind.value}Hierarchy"

    def assemble(
        self,
        node_ids: Iterable[int],
        edges: Iterable[HierarchyEdge],
    ) -> AssembledHierarchy:
        """Assemble and validate the hierarchy.

        Args:
            node_ids: Identity of every node
            edges: Parent/child join records

        Returns:
            AssembledHierarchy: Ordered, acyclic hierarchy views

        Raises:
            ContractError: If either collection is None or holds the wrong type
            DanglingReferenceError: If an edge names a node id that is not given
            CycleDetected: If the edges contain a cycle, including a self-edge
        """
        if node_ids is None:
            raise ContractError(f"{self.kind.value} hierarchy requires a node collection")
        if edges is None:
            raise ContractError(f"{self.kind.value} hierarchy requires an edge collection")

        nodes = tuple(sorted(set(node_ids)))
        known = set(nodes)
        edge_list = list(edges)

        children: Dict[int, List[HierarchyEdge]] = {}
        parents: Dict[int, List[HierarchyEdge]] = {}
        for edge in edge_list:
            if not isinstance(edge, HierarchyEdge):
                raise ContractError(f"Expected HierarchyEdge, got {type(edge).__name__}")
            for field_name, endpoint in (("parent_id", edge.parent_id), ("child_id", edge.child_id)):
                if endpoint not in known:
                    LOGGER.error(
                        f"{self.kind.value} edge references unknown node {endpoint}",
                        extra={"kind": self.kind.value, "edge_id": edge.edge_id},
                    )
                    raise DanglingReferenceError(
                        self.edge_kind, edge.edge_id, field_name, self.node_kind, endpoint
                    )
            if edge.parent_id == edge.child_id:
                raise CycleDetected(self.kind.value, edge.child_id, [edge.parent_id, edge.child_id])
            children.setdefault(edge.parent_id, []).append(edge)
            parents.setdefault(edge.child_id, []).append(edge)

        child_index = {
            parent_id: tuple(sorted(group, key=lambda e: (e.sequence, e.child_id)))
            for parent_id, group in sorted(children.items())
        }
        parent_index = {
            child_id: tuple(sorted(group, key=lambda e: (e.sequence, e.parent_id)))
            for child_id, group in sorted(parents.items())
        }

        topological = self._check_acyclic(nodes, child_index, parent_index)
        depths: Dict[int, int] = {}
        for node_id in topological:
            depths[node_id] = max(
                (depths[edge.parent_id] + 1 for edge in parent_index.get(node_id, ())),
                default=0,
            )

        hierarchy = AssembledHierarchy(
            self.kind, nodes, child_index, parent_index, depths, self.allow_multiple_parents
        )

        shared = hierarchy.shared_nodes()
        if shared and not self.allow_multiple_parents:
            LOGGER.warning(
                f"{self.kind.value} hierarchy places {len(shared)} node(s) under several parents",
                extra={"kind": self.kind.value, "node_ids": shared},
            )

        LOGGER.debug(
            f"Assembled {self.kind.value} hierarchy: {len(nodes)} nodes, "
            f"{len(edge_list)} edges, {len(hierarchy.roots)} roots"
        )
        return hierarchy

    def _check_acyclic(
        self,
        nodes: Tuple[int, ...],
        child_index: Dict[int, Tuple[HierarchyEdge, ...]],
        parent_index: Dict[int, Tuple[HierarchyEdge, ...]],
    ) -> List[int]:
        """Depth-first search bounded by ``len(nodes) + 1``.

        Starts from every root, then from any node still unvisited so that
        cycles unreachable from a root are found as well.

        Returns:
            List[int]: Node ids in topological order (parents before children)
        """
        depth_limit = len(nodes) + 1
        finished: Set[int] = set()
        post_order: List[int] = []

        roots = [n for n in nodes if n not in parent_index]
        starts = roots + [n for n in nodes if n in parent_index]

        for start in starts:
            if start in finished:
                continue
            path: List[int] = [start]
            on_path: Set[int] = {start}
            stack: List[Iterator[HierarchyEdge]] = [iter(child_index.get(start, ()))]

            while stack:
                edge = next(stack[-1], None)
                if edge is None:
                    done = path.pop()
                    on_path.discard(done)
                    finished.add(done)
                    post_order.append(done)
                    stack.pop()
                    continue

                child_id = edge.child_id
                if child_id in on_path:
                    cycle = path[path.index(child_id):] + [child_id]
                    LOGGER.error(
                        f"Cycle in {self.kind.value} hierarchy: {cycle}",
                        extra={"kind": self.kind.value, "node_id": child_id},
                    )
                    raise CycleDetected(self.kind.value, child_id, cycle)
                if child_id in finished:
                    continue
                if len(path) >= depth_limit:
                    raise CycleDetected(self.kind.value, child_id, path + [child_id])

                path.append(child_id)
                on_path.add(child_id)
                stack.append(iter(child_index.get(child_id, ())))

        post_order.reverse()
        return post_order
