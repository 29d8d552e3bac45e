"""Base record type shared by every entity kind in a labeling document."""

from typing import ClassVar, Dict, Iterator, Tuple

from pydantic import BaseModel, ConfigDict, Field


class EntityRecord(BaseModel):
    """A single immutable row of the flat entity set.

    Every record carries an integer ``id`` unique within its kind. Links to
    other records are plain nullable integer fields; which kind each of them
    points at is declared per class in ``__references__`` so the entity set
    can verify them without the models knowing about each other.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    __references__: ClassVar[Dict[str, str]] = {}

    id: int = Field(..., description="Identity of the record within its kind")

    @classmethod
    def kind(cls) -> str:
        """Entity kind name, used as the table key in an entity set."""
        return cls.__name__

    def references(self) -> Iterator[Tuple[str, str, int]]:
        """Yield ``(field, target_kind, target_id)`` for every populated link."""
        for field_name, target_kind in sorted(self.__references__.items()):
            target_id = getattr(self, field_name)
            if target_id is not None:
                yield field_name, target_kind, target_id
