"""Arena-style storage for the flat entity set of one document version.

Each entity kind lives in its own ``EntityTable`` keyed by integer id. Links
between records stay plain integers; ``EntitySet.verify_references`` turns
any link to a missing record into a ``DanglingReferenceError`` instead of
letting consumers silently skip it.
"""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Type, Union

from pydantic import ValidationError

from labelgraph.core.exceptions import ContractError, DanglingReferenceError, MalformedRecordError
from labelgraph.models import (
    document,
    ingredient,
    licensing,
    lot,
    organization,
    packaging,
    pharmacology,
    product,
    regulatory,
    rems,
    section,
)
from labelgraph.models.base import EntityRecord
from labelgraph.utils.logging import get_logger

LOGGER = get_logger(__name__)

ENTITY_KINDS: Dict[str, Type[EntityRecord]] = {
    record_type.kind(): record_type
    for module in (
        document,
        organization,
        section,
        product,
        ingredient,
        packaging,
        lot,
        pharmacology,
        licensing,
        rems,
        regulatory,
    )
    for record_type in module.ENTITY_TYPES
}

KindRef = Union[str, Type[EntityRecord]]


def resolve_kind(kind: KindRef) -> Type[EntityRecord]:
    """Map a kind name or record class to its registered record class."""
    name = kind.kind() if isinstance(kind, type) and issubclass(kind, EntityRecord) else kind
    if not isinstance(name, str) or name not in ENTITY_KINDS:
        raise ContractError(f"Unknown entity kind: {kind!r}")
    return ENTITY_KINDS[name]


class EntityTable:
    """All records of one kind, iterated in ascending id order."""

    def __init__(self, record_type: Type[EntityRecord], records: Iterable[EntityRecord] = ()):
        self.record_type = record_type
        self.kind = record_type.kind()
        rows: Dict[int, EntityRecord] = {}
        for record in records:
            if not isinstance(record, record_type):
                raise ContractError(
                    f"{self.kind} table cannot hold {type(record).__name__} records"
                )
            if record.id in rows:
                raise MalformedRecordError(self.kind, f"duplicate id {record.id}")
            rows[record.id] = record
        self._rows = {record_id: rows[record_id] for record_id in sorted(rows)}

    def __iter__(self) -> Iterator[EntityRecord]:
        return iter(self._rows.values())

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._rows

    def get(self, record_id: Optional[int]) -> Optional[EntityRecord]:
        if record_id is None:
            return None
        return self._rows.get(record_id)

    def ids(self) -> List[int]:
        return list(self._rows)


class EntitySet:
    """Immutable snapshot of every record belonging to one document version."""

    def __init__(self, tables: Optional[Mapping[str, EntityTable]] = None):
        self._tables: Dict[str, EntityTable] = {}
        for kind, table in (tables or {}).items():
            record_type = resolve_kind(kind)
            if table.record_type is not record_type:
                raise ContractError(f"Table registered under {kind} holds {table.kind} records")
            self._tables[kind] = table

    @classmethod
    def from_payload(cls, payload: Mapping[str, Iterable[Mapping[str, Any]]]) -> "EntitySet":
        """Build an entity set from ``{kind: [record fields, ...]}``.

        Args:
            payload: Mapping of entity kind name to a list of record dicts

        Returns:
            EntitySet: The loaded snapshot

        Raises:
            ContractError: If the payload is not a mapping or names an unknown kind
            MalformedRecordError: If a record fails field validation or an id repeats
        """
        if payload is None or not isinstance(payload, Mapping):
            raise ContractError("Entity payload must be a mapping of kind -> records")

        tables: Dict[str, EntityTable] = {}
        for kind in sorted(payload):
            record_type = resolve_kind(kind)
            rows = payload[kind]
            if rows is None or isinstance(rows, (str, bytes, Mapping)):
                raise ContractError(f"Records for {kind} must be a list")

            records = []
            for index, row in enumerate(rows):
                if not isinstance(row, Mapping):
                    raise MalformedRecordError(kind, f"record #{index} is not an object")
                try:
                    records.append(record_type.model_validate(dict(row)))
                except ValidationError as e:
                    first = e.errors()[0]
                    location = ".".join(str(part) for part in first["loc"])
                    raise MalformedRecordError(
                        kind,
                        f"record #{index}: {location} {first['msg']}",
                        original_error=e,
                    ) from e
            tables[kind] = EntityTable(record_type, records)

        entity_set = cls(tables)
        LOGGER.info(
            f"Loaded entity set with {entity_set.record_count()} records across {len(tables)} kinds",
            extra={"kinds": len(tables), "records": entity_set.record_count()},
        )
        return entity_set

    @classmethod
    def from_records(cls, records: Iterable[EntityRecord]) -> "EntitySet":
        """Build an entity set from already constructed records of any kind."""
        if records is None:
            raise ContractError("records must not be None")
        grouped: Dict[str, List[EntityRecord]] = {}
        for record in records:
            grouped.setdefault(record.kind(), []).append(record)
        return cls({
            kind: EntityTable(resolve_kind(kind), rows) for kind, rows in grouped.items()
        })

    def table(self, kind: KindRef) -> EntityTable:
        """Table for ``kind``; kinds with no records yield an empty table."""
        record_type = resolve_kind(kind)
        table = self._tables.get(record_type.kind())
        if table is None:
            return EntityTable(record_type)
        return table

    def get(self, kind: KindRef, record_id: Optional[int]) -> Optional[EntityRecord]:
        return self.table(kind).get(record_id)

    def require(self, kind: KindRef, record_id: int) -> EntityRecord:
        """Return the record or raise ``ContractError`` if it does not exist."""
        record = self.table(kind).get(record_id)
        if record is None:
            raise ContractError(f"Required {resolve_kind(kind).kind()} {record_id} is not in the entity set")
        return record

    def where(self, kind: KindRef, **criteria: Any) -> List[EntityRecord]:
        """Records of ``kind`` whose fields equal every keyword criterion."""
        record_type = resolve_kind(kind)
        unknown = [name for name in criteria if name not in record_type.model_fields]
        if unknown:
            raise ContractError(f"{record_type.kind()} has no field(s) {', '.join(sorted(unknown))}")
        return [
            record for record in self.table(record_type)
            if all(getattr(record, name) == value for name, value in criteria.items())
        ]

    def kinds(self) -> List[str]:
        """Names of the kinds holding at least one record, sorted."""
        return sorted(kind for kind, table in self._tables.items() if len(table))

    def record_count(self) -> int:
        return sum(len(table) for table in self._tables.values())

    def verify_references(self) -> None:
        """Check that every populated link points at an existing record.

        Kinds are checked alphabetically, records by ascending id and links by
        field name, so the first reported problem is deterministic.

        Raises:
            DanglingReferenceError: For the first link to a missing record
        """
        for kind in self.kinds():
            for record in self._tables[kind]:
                for field_name, target_kind, target_id in record.references():
                    if target_id not in self.table(target_kind):
                        LOGGER.error(
                            f"Dangling reference {kind}.{field_name} -> {target_kind} {target_id}",
                            extra={"kind": kind, "record_id": record.id},
                        )
                        raise DanglingReferenceError(
                            kind, record.id, field_name, target_kind, target_id
                        )
