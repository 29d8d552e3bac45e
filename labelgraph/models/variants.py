"""Tagged variants for records that encode a union in flat nullable columns.

Three kinds of record use a discriminator instead of distinct tables:

- ``Characteristic`` stores one of several value shapes selected by
  ``value_type``.
- ``IdentifiedSubstance`` is either a class-defining substance or a plain
  reference, selected by ``is_definition``.
- ``AttachedDocument`` points at its parent through a generic
  ``parent_entity_type``/``parent_entity_id`` pair.

``map_variants`` runs once right after load and resolves each of them into an
explicit variant so consumers never re-inspect the nullable columns.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from labelgraph.core.exceptions import ContractError, DanglingReferenceError
from labelgraph.models.entity_set import EntitySet
from labelgraph.models.licensing import AttachedDocument
from labelgraph.models.pharmacology import IdentifiedSubstance
from labelgraph.models.product import Characteristic
from labelgraph.utils.logging import get_logger
from labelgraph.utils.vocabulary import ATTACHED_DOCUMENT_PARENT_KINDS

LOGGER = get_logger(__name__)


class ValueShape(str, Enum):
    """Value shapes a characteristic can hold."""
    CODED = "coded"
    QUANTITY = "quantity"
    INTERVAL = "interval"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING = "string"
    ENCODED = "encoded"


# Deterministic choice when several slots are populated without a usable discriminator
FALLBACK_PRECEDENCE: Tuple[ValueShape, ...] = (
    ValueShape.CODED,
    ValueShape.QUANTITY,
    ValueShape.INTERVAL,
    ValueShape.INTEGER,
    ValueShape.BOOLEAN,
    ValueShape.STRING,
    ValueShape.ENCODED,
)

VALUE_TYPE_SHAPES: Dict[str, ValueShape] = {
    "CE": ValueShape.CODED,
    "CV": ValueShape.CODED,
    "CD": ValueShape.CODED,
    "CO": ValueShape.CODED,
    "PQ": ValueShape.QUANTITY,
    "INT": ValueShape.INTEGER,
    "ST": ValueShape.STRING,
    "BL": ValueShape.BOOLEAN,
    "IVL_PQ": ValueShape.INTERVAL,
    "IVL<PQ>": ValueShape.INTERVAL,
    "ED": ValueShape.ENCODED,
}


class Resolution(str, Enum):
    """How the rendering shape of a characteristic was decided."""
    EXPLICIT = "explicit"
    INFERRED = "inferred"
    FALLBACK = "fallback"
    NONE = "none"


@dataclass(frozen=True)
class CodedValue:
    code: Optional[str]
    code_system: Optional[str]
    display_name: Optional[str]


@dataclass(frozen=True)
class PhysicalQuantity:
    value: Optional[float]
    unit: Optional[str]


@dataclass(frozen=True)
class IntegerValue:
    value: int


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class BooleanValue:
    value: bool


@dataclass(frozen=True)
class IntervalValue:
    low_value: Optional[float]
    low_unit: Optional[str]
    high_value: Optional[float]
    high_unit: Optional[str]


@dataclass(frozen=True)
class EncodedDataValue:
    media_type: Optional[str]
    file_name: Optional[str]


@dataclass(frozen=True)
class NullFlavorValue:
    null_flavor: str


CharacteristicValue = Union[
    CodedValue,
    PhysicalQuantity,
    IntegerValue,
    StringValue,
    BooleanValue,
    IntervalValue,
    EncodedDataValue,
    NullFlavorValue,
]


def _present(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def normalize_value_type(value_type: Optional[str]) -> Optional[str]:
    """Upper-cased, trimmed discriminator, or None when blank."""
    if value_type is None or not value_type.strip():
        return None
    return value_type.strip().upper()


def slot_values(characteristic: Characteristic) -> Dict[ValueShape, CharacteristicValue]:
    """Values of every populated slot, keyed by shape, in fallback order."""
    c = characteristic
    candidates: Dict[ValueShape, Tuple[bool, CharacteristicValue]] = {
        ValueShape.CODED: (
            any(_present(v) for v in (c.value_cv_code, c.value_cv_code_system, c.value_cv_display_name)),
            CodedValue(c.value_cv_code, c.value_cv_code_system, c.value_cv_display_name),
        ),
        ValueShape.QUANTITY: (
            _present(c.value_pq_value) or _present(c.value_pq_unit),
            PhysicalQuantity(c.value_pq_value, c.value_pq_unit),
        ),
        ValueShape.INTERVAL: (
            any(_present(v) for v in (
                c.value_ivlpq_low_value,
                c.value_ivlpq_low_unit,
                c.value_ivlpq_high_value,
                c.value_ivlpq_high_unit,
            )),
            IntervalValue(
                c.value_ivlpq_low_value,
                c.value_ivlpq_low_unit,
                c.value_ivlpq_high_value,
                c.value_ivlpq_high_unit,
            ),
        ),
        ValueShape.INTEGER: (c.value_int is not None, IntegerValue(c.value_int)),
        ValueShape.BOOLEAN: (c.value_bl is not None, BooleanValue(c.value_bl)),
        ValueShape.STRING: (_present(c.value_st), StringValue(c.value_st)),
        ValueShape.ENCODED: (
            _present(c.value_ed_media_type) or _present(c.value_ed_file_name),
            EncodedDataValue(c.value_ed_media_type, c.value_ed_file_name),
        ),
    }
    return {
        shape: candidates[shape][1]
        for shape in FALLBACK_PRECEDENCE
        if candidates[shape][0]
    }


@dataclass(frozen=True)
class CharacteristicValueVariant:
    """Resolved view of one characteristic's tagged-union value.

    Attributes:
        characteristic_id: Id of the source record
        declared_type: Normalized discriminator as written, or None
        declared_shape: Shape the discriminator maps to, or None if absent/unknown
        populated_shapes: Every populated slot in fallback precedence order
        resolved_shape: Shape the value should be rendered as, or None
        resolution: How ``resolved_shape`` was decided
        value: Value of the resolved slot, a null flavor, or None
        null_flavor: Normalized null flavor of the record, resolved or not
    """
    characteristic_id: int
    declared_type: Optional[str]
    declared_shape: Optional[ValueShape]
    populated_shapes: Tuple[ValueShape, ...]
    resolved_shape: Optional[ValueShape]
    resolution: Resolution
    value: Optional[CharacteristicValue]
    null_flavor: Optional[str] = None

    @property
    def is_ambiguous(self) -> bool:
        return len(self.populated_shapes) > 1


def resolve_characteristic(characteristic: Characteristic) -> CharacteristicValueVariant:
    """Map one characteristic record to its value variant.

    An explicit, recognized discriminator always wins. Without one the single
    populated slot is used; with several populated slots the first in
    ``FALLBACK_PRECEDENCE`` is chosen, coded values first.
    """
    declared_type = normalize_value_type(characteristic.value_type)
    declared_shape = VALUE_TYPE_SHAPES.get(declared_type) if declared_type else None
    slots = slot_values(characteristic)
    populated = tuple(slots)

    if declared_shape is not None:
        resolved, resolution = declared_shape, Resolution.EXPLICIT
    elif len(populated) == 1:
        resolved, resolution = populated[0], Resolution.INFERRED
    elif populated:
        resolved, resolution = populated[0], Resolution.FALLBACK
    else:
        resolved, resolution = None, Resolution.NONE

    null_flavor = (
        characteristic.value_null_flavor.strip().upper()
        if _present(characteristic.value_null_flavor) else None
    )
    value: Optional[CharacteristicValue] = slots.get(resolved) if resolved else None
    if value is None and null_flavor is not None:
        value = NullFlavorValue(null_flavor)

    return CharacteristicValueVariant(
        characteristic_id=characteristic.id,
        declared_type=declared_type,
        declared_shape=declared_shape,
        populated_shapes=populated,
        resolved_shape=resolved,
        resolution=resolution,
        value=value,
        null_flavor=null_flavor,
    )


@dataclass(frozen=True)
class DefiningSubstance:
    """Substance that defines a pharmacologic class concept."""
    substance_id: int
    subject_type: Optional[str]
    identifier_value: Optional[str]
    identifier_system: Optional[str]


@dataclass(frozen=True)
class ReferencedSubstance:
    """Substance mentioned by reference, typically an active moiety."""
    substance_id: int
    subject_type: Optional[str]
    identifier_value: Optional[str]
    identifier_system: Optional[str]


SubstanceRole = Union[DefiningSubstance, ReferencedSubstance]


def resolve_substance(substance: IdentifiedSubstance) -> SubstanceRole:
    role = DefiningSubstance if substance.is_definition else ReferencedSubstance
    return role(
        substance_id=substance.id,
        subject_type=substance.subject_type,
        identifier_value=substance.substance_identifier_value,
        identifier_system=substance.substance_identifier_system_oid,
    )


@dataclass(frozen=True)
class AttachedDocumentParent:
    parent_kind: str
    parent_id: int


@dataclass(frozen=True)
class UnresolvedParent:
    """Parent pointer with a missing or unknown type, or a missing id."""
    parent_type: Optional[str]
    parent_id: Optional[int]


AttachmentParent = Union[AttachedDocumentParent, UnresolvedParent]

_PARENT_KINDS_BY_KEY = {kind.upper(): kind for kind in ATTACHED_DOCUMENT_PARENT_KINDS}


def resolve_attachment_parent(
    entity_set: EntitySet,
    attachment: AttachedDocument,
) -> AttachmentParent:
    """Resolve the generic parent pointer of an attached document.

    Raises:
        DanglingReferenceError: If the parent type is recognized but no
            record with ``parent_entity_id`` exists
    """
    raw_type = attachment.parent_entity_type
    parent_kind = _PARENT_KINDS_BY_KEY.get(raw_type.strip().upper()) if raw_type else None
    if parent_kind is None or attachment.parent_entity_id is None:
        return UnresolvedParent(raw_type, attachment.parent_entity_id)

    if attachment.parent_entity_id not in entity_set.table(parent_kind):
        raise DanglingReferenceError(
            AttachedDocument.kind(),
            attachment.id,
            "parent_entity_id",
            parent_kind,
            attachment.parent_entity_id,
        )
    return AttachedDocumentParent(parent_kind, attachment.parent_entity_id)


@dataclass
class VariantIndex:
    """Variants for every discriminated record of one entity set."""
    characteristics: Dict[int, CharacteristicValueVariant] = field(default_factory=dict)
    substances: Dict[int, SubstanceRole] = field(default_factory=dict)
    attachment_parents: Dict[int, AttachmentParent] = field(default_factory=dict)

    def characteristic(self, characteristic_id: int) -> Optional[CharacteristicValueVariant]:
        return self.characteristics.get(characteristic_id)

    def substance(self, substance_id: int) -> Optional[SubstanceRole]:
        return self.substances.get(substance_id)

    def defining_substances(self) -> List[DefiningSubstance]:
        return [s for s in self.substances.values() if isinstance(s, DefiningSubstance)]

    def attachment_parent(self, attachment_id: int) -> Optional[AttachmentParent]:
        return self.attachment_parents.get(attachment_id)

    def attachments_of(self, parent_kind: str, parent_id: int) -> List[int]:
        """Ids of the attached documents whose parent is the given record."""
        return [
            attachment_id
            for attachment_id, parent in self.attachment_parents.items()
            if isinstance(parent, AttachedDocumentParent)
            and parent.parent_kind == parent_kind
            and parent.parent_id == parent_id
        ]


def map_variants(entity_set: EntitySet) -> VariantIndex:
    """Build the variant index for an entity set.

    Args:
        entity_set: Loaded entity set

    Returns:
        VariantIndex: Resolved variants keyed by record id, ascending

    Raises:
        ContractError: If ``entity_set`` is None
        DanglingReferenceError: If an attached document names a missing parent
    """
    if entity_set is None:
        raise ContractError("map_variants requires an entity set")

    index = VariantIndex()
    for characteristic in entity_set.table(Characteristic):
        index.characteristics[characteristic.id] = resolve_characteristic(characteristic)
    for substance in entity_set.table(IdentifiedSubstance):
        index.substances[substance.id] = resolve_substance(substance)
    for attachment in entity_set.table(AttachedDocument):
        index.attachment_parents[attachment.id] = resolve_attachment_parent(entity_set, attachment)

    LOGGER.debug(
        f"Mapped {len(index.characteristics)} characteristic, {len(index.substances)} substance "
        f"and {len(index.attachment_parents)} attachment variants"
    )
    return index
