"""Value formatting and grouping helpers shared by the rendering services."""

import math
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, TypeVar

T = TypeVar("T")


def format_number(value: Optional[float]) -> Optional[str]:
    """Render a number in plain notation without trailing zeros.

    Every significant digit is kept and exponents are never used:
    ``10.0`` -> ``10``, ``2500000.0`` -> ``2500000``, ``1.25e-05`` -> ``0.0000125``.
    """
    if value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if value == 0:
        return "0"
    # repr gives the shortest string that round-trips the float
    return format(Decimal(repr(value)).normalize(), "f")


def format_quantity(value: Optional[float], unit: Optional[str]) -> Optional[str]:
    """``"500 mg"``; the unit ``1`` (a plain count) is not printed."""
    number = format_number(value)
    if number is None:
        return None
    unit = (unit or "").strip()
    if not unit or unit == "1":
        return number
    return f"{number} {unit}"


def group_by(records: Iterable[T], field_name: str, order_field: Optional[str] = None) -> Dict[Any, List[T]]:
    """Group records by ``field_name``; each group ordered by ``order_field`` then id.

    A None ``order_field`` value sorts as 0.
    """
    groups: Dict[Any, List[T]] = {}
    for record in records:
        groups.setdefault(getattr(record, field_name), []).append(record)
    for key, group in groups.items():
        if order_field is None:
            group.sort(key=lambda r: r.id)
        else:
            group.sort(key=lambda r: (getattr(r, order_field) or 0, r.id))
    return groups
