"""Read-only lookups shared by rule predicates during one validation pass."""

from datetime import date
from typing import Dict, List, Optional, Tuple

from labelgraph.models.base import EntityRecord
from labelgraph.models.entity_set import EntitySet, KindRef, resolve_kind
from labelgraph.models.licensing import DisciplinaryAction
from labelgraph.models.variants import VariantIndex
from labelgraph.services.hierarchy.document_hierarchies import DocumentHierarchies


class ValidationContext:
    """Entity set, variants and derived indexes available to every rule.

    Indexes are built lazily on first use and cached for the rest of the pass.
    """

    def __init__(
        self,
        entity_set: EntitySet,
        variants: VariantIndex,
        reference_date: date,
        hierarchies: Optional[DocumentHierarchies] = None,
    ):
        self.entity_set = entity_set
        self.variants = variants
        self.reference_date = reference_date
        self.hierarchies = hierarchies
        self._indexes: Dict[Tuple[str, str], Dict[Optional[int], List[EntityRecord]]] = {}

    def get(self, kind: KindRef, record_id: Optional[int]) -> Optional[EntityRecord]:
        return self.entity_set.get(kind, record_id)

    def children(self, kind: KindRef, field_name: str, parent_id: Optional[int]) -> List[EntityRecord]:
        """Records of ``kind`` whose ``field_name`` equals ``parent_id``, by id."""
        record_type = resolve_kind(kind)
        key = (record_type.kind(), field_name)
        if key not in self._indexes:
            index: Dict[Optional[int], List[EntityRecord]] = {}
            for record in self.entity_set.table(record_type):
                index.setdefault(getattr(record, field_name), []).append(record)
            self._indexes[key] = index
        return list(self._indexes[key].get(parent_id, ()))

    def license_actions(self, license_id: Optional[int]) -> List[DisciplinaryAction]:
        """Actions on a license in chronological order; undated actions last."""
        actions = self.children(DisciplinaryAction, "license_id", license_id)
        return sorted(
            actions,
            key=lambda a: (a.effective_time is None, a.effective_time or date.min, a.id),
        )
