"""Rule modules; importing this package fills ``DEFAULT_REGISTRY``."""

from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.services.validation.rules import (  # noqa: F401
    attachment,
    characteristic,
    document,
    ingredient,
    licensing,
    lot,
    packaging,
    pharmacology,
    product,
    quantity,
    rems,
    section,
    warning_letter,
)

__all__ = ["DEFAULT_REGISTRY"]
