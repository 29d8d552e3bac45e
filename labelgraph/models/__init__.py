"""Entity model for labeling documents."""

from labelgraph.models.base import EntityRecord
from labelgraph.models.document import *  # noqa: F401,F403
from labelgraph.models.entity_set import ENTITY_KINDS, EntitySet, EntityTable, resolve_kind
from labelgraph.models.ingredient import *  # noqa: F401,F403
from labelgraph.models.licensing import *  # noqa: F401,F403
from labelgraph.models.lot import *  # noqa: F401,F403
from labelgraph.models.organization import *  # noqa: F401,F403
from labelgraph.models.packaging import *  # noqa: F401,F403
from labelgraph.models.pharmacology import *  # noqa: F401,F403
from labelgraph.models.product import *  # noqa: F401,F403
from labelgraph.models.regulatory import *  # noqa: F401,F403
from labelgraph.models.rems import *  # noqa: F401,F403
from labelgraph.models.section import *  # noqa: F401,F403
from labelgraph.models.variants import VariantIndex, map_variants

__all__ = [
    "EntityRecord",
    "EntitySet",
    "EntityTable",
    "ENTITY_KINDS",
    "VariantIndex",
    "map_variants",
    "resolve_kind",
] + sorted(ENTITY_KINDS)
