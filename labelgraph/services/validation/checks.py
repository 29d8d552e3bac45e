"""Small value checks shared by rule modules."""

import re
from typing import Any, List, Mapping, Optional

from labelgraph.models.base import EntityRecord
from labelgraph.utils.vocabulary import canonical_code

_ALPHANUMERIC = re.compile(r"^[A-Za-z0-9]+$")
_MARKUP_CHARACTERS = ("<", ">", "&")


def present(value: Any) -> bool:
    """True for non-None values and non-blank strings."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def normalized(value: Any) -> str:
    return value.strip().upper() if isinstance(value, str) else ""


def is_alphanumeric(value: Any) -> bool:
    return isinstance(value, str) and bool(_ALPHANUMERIC.match(value.strip()))


def is_plain_text(value: Any) -> bool:
    """True when a string carries no markup characters."""
    return isinstance(value, str) and not any(c in value for c in _MARKUP_CHARACTERS)


def missing_fields(record: EntityRecord, *field_names: str) -> List[str]:
    return [name for name in field_names if not present(getattr(record, name))]


def present_fields(record: EntityRecord, *field_names: str) -> List[str]:
    return [name for name in field_names if present(getattr(record, name))]


def problems(*items: Any):
    """Template params joining the truthy problem descriptions, or None."""
    found = [item for item in items if item]
    if not found:
        return None
    return {"problems": "; ".join(found)}


def display_name_mismatch(codes: Mapping[str, str], code: Optional[str], display_name: Optional[str]) -> Optional[str]:
    """Problem text when a present display name is not the one ``code`` defines.

    Comparison ignores case; an unrecognized code or blank display name passes.
    """
    key = canonical_code(codes, code)
    if key is None or not present(display_name):
        return None
    expected = codes[key]
    if display_name.strip().lower() != expected.lower():
        return f"display name '{display_name.strip()}' does not match '{expected}'"
    return None
