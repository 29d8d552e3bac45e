"""Static reference vocabularies used by validation and rendering.

This module contains read-only lookup data for the SPL code systems the
consistency rules check against: code-system OIDs, FDA SPL code lists,
recognized governing-agency identifier triples, ISO territory codes and the
UCUM units that appear in drug labeling.

Everything here is loaded once at import time and must be treated as
immutable for the lifetime of the process.
"""

import re
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple


# Code system OIDs
FDA_SPL_CODE_SYSTEM = "2.16.840.1.113883.3.26.1.1"
LOINC_CODE_SYSTEM = "2.16.840.1.113883.6.1"
FDA_UNII_CODE_SYSTEM = "2.16.840.1.113883.4.9"
NDC_CODE_SYSTEM = "2.16.840.1.113883.6.69"
MED_RT_CODE_SYSTEM = "2.16.840.1.113883.6.345"
ISO_3166_1_CODE_SYSTEM = "1.0.3166.1.2.3"
ISO_3166_2_CODE_SYSTEM = "1.0.3166.2"
EPA_SRS_CODE_SYSTEM = "2.16.840.1.113883.3.149"
PESTICIDE_CODE_SYSTEM = "2.16.840.1.113883.6.275.1"

CODE_SYSTEM_NAMES: Mapping[str, str] = MappingProxyType({
    FDA_SPL_CODE_SYSTEM: "FDA SPL",
    LOINC_CODE_SYSTEM: "LOINC",
    FDA_UNII_CODE_SYSTEM: "FDA SRS",
    NDC_CODE_SYSTEM: "NDC",
    MED_RT_CODE_SYSTEM: "MED-RT",
    ISO_3166_1_CODE_SYSTEM: "ISO 3166-1",
    ISO_3166_2_CODE_SYSTEM: "ISO 3166-2",
})

NULL_FLAVORS: FrozenSet[str] = frozenset({"NA", "NI", "UNK", "OTH", "NASK", "ASKU", "MSK"})


# Territorial authority / licensing
USA_TERRITORY_CODE = "USA"
US_STATE_CODE_PATTERN = re.compile(r"^US-[A-Z]{2}$", re.IGNORECASE)

US_STATE_CODES: FrozenSet[str] = frozenset({
    "US-AL", "US-AK", "US-AZ", "US-AR", "US-CA", "US-CO", "US-CT", "US-DE",
    "US-FL", "US-GA", "US-HI", "US-ID", "US-IL", "US-IN", "US-IA", "US-KS",
    "US-KY", "US-LA", "US-ME", "US-MD", "US-MA", "US-MI", "US-MN", "US-MS",
    "US-MO", "US-MT", "US-NE", "US-NV", "US-NH", "US-NJ", "US-NM", "US-NY",
    "US-NC", "US-ND", "US-OH", "US-OK", "US-OR", "US-PA", "US-RI", "US-SC",
    "US-SD", "US-TN", "US-TX", "US-UT", "US-VT", "US-VA", "US-WA", "US-WV",
    "US-WI", "US-WY", "US-DC", "US-AS", "US-GU", "US-MP", "US-PR", "US-UM",
    "US-VI",
})

GOVERNING_AGENCY_ID_ROOT = "1.3.6.1.4.1.519.1"

# Recognized federal governing agencies: name -> (DUNS id extension, id root)
GOVERNING_AGENCIES: Mapping[str, Tuple[str, str]] = MappingProxyType({
    "DEA": ("004234790", GOVERNING_AGENCY_ID_ROOT),
})

DUNS_PATTERN = re.compile(r"^\d{9}$")

LICENSE_TYPE_CODES: Mapping[str, str] = MappingProxyType({
    "C118777": "licensing",
})

LICENSE_STATUS_ACTIVE = "active"
LICENSE_STATUS_SUSPENDED = "suspended"
LICENSE_STATUS_ABORTED = "aborted"
LICENSE_STATUS_COMPLETED = "completed"

LICENSE_STATUS_CODES: FrozenSet[str] = frozenset({
    LICENSE_STATUS_ACTIVE,
    LICENSE_STATUS_SUSPENDED,
    LICENSE_STATUS_ABORTED,
    LICENSE_STATUS_COMPLETED,
})

STATE_LICENSE_OID_BASE = "1.3.6.1.4.1.32366.4.840"
DEA_LICENSE_OID = "1.3.6.1.4.1.32366.4.840.1"
LICENSE_OID_SUFFIXES: FrozenSet[str] = frozenset({"2", "3", "4", "5"})


# Disciplinary actions: code -> display name
ACTION_SUSPENSION = "C118406"
ACTION_REVOKED = "C118407"
ACTION_ACTIVATION = "C118408"
ACTION_RESOLVED = "C118471"
ACTION_OTHER = "C118472"

DISCIPLINARY_ACTION_CODES: Mapping[str, str] = MappingProxyType({
    ACTION_SUSPENSION: "suspension",
    ACTION_REVOKED: "revoked",
    ACTION_ACTIVATION: "activation",
    ACTION_RESOLVED: "resolved",
    ACTION_OTHER: "other",
})

# License status an action leaves the license in; None means unconstrained.
ACTION_RESULTING_STATUS: Mapping[str, Optional[str]] = MappingProxyType({
    ACTION_SUSPENSION: LICENSE_STATUS_SUSPENDED,
    ACTION_REVOKED: LICENSE_STATUS_ABORTED,
    ACTION_ACTIVATION: LICENSE_STATUS_ACTIVE,
    ACTION_RESOLVED: LICENSE_STATUS_ACTIVE,
    ACTION_OTHER: None,
})


# Product events (lot distribution)
EVENT_DISTRIBUTED = "C106325"
EVENT_RETURNED = "C106328"

PRODUCT_EVENT_CODES: Mapping[str, str] = MappingProxyType({
    EVENT_DISTRIBUTED: "Distributed per reporting interval",
    EVENT_RETURNED: "Returned",
})


# Lot genealogy
LOT_BULK = "BulkLot"
LOT_FILL = "FillLot"
LOT_LABEL = "LabelLot"

LOT_INSTANCE_TYPES: FrozenSet[str] = frozenset({LOT_BULK, LOT_FILL, LOT_LABEL})

# parent instance type -> child instance types it may feed
LOT_GENEALOGY: Mapping[str, FrozenSet[str]] = MappingProxyType({
    LOT_BULK: frozenset({LOT_FILL}),
    LOT_FILL: frozenset({LOT_LABEL}),
    LOT_LABEL: frozenset(),
})


# Ingredients
ACTIVE_INGREDIENT_CLASS_CODES: FrozenSet[str] = frozenset({"ACTIB", "ACTIM", "ACTIR"})
INGREDIENT_CLASS_CODES: FrozenSet[str] = ACTIVE_INGREDIENT_CLASS_CODES | frozenset({
    "IACT", "INGR", "CNTM", "ADJV",
})
REFERENCE_SUBSTANCE_CLASS_CODE = "ACTIR"


# Identified substances
SUBJECT_ACTIVE_MOIETY = "ActiveMoiety"
SUBJECT_PHARMACOLOGIC_CLASS = "PharmacologicClass"
IDENTIFIED_SUBJECT_TYPES: FrozenSet[str] = frozenset({
    SUBJECT_ACTIVE_MOIETY,
    SUBJECT_PHARMACOLOGIC_CLASS,
})

PHARMACOLOGIC_CLASS_SUFFIXES: FrozenSet[str] = frozenset({"[EPC]", "[MoA]", "[PE]", "[CS]", "[Chemical/Ingredient]"})
PREFERRED_NAME_USE = "L"


# Attached documents
PDF_MEDIA_TYPE = "application/pdf"
MEDIA_TYPE_EXTENSIONS: Mapping[str, FrozenSet[str]] = MappingProxyType({
    PDF_MEDIA_TYPE: frozenset({".pdf"}),
})
ATTACHED_DOCUMENT_PARENT_KINDS: FrozenSet[str] = frozenset({"DisciplinaryAction", "REMSMaterial"})
MAX_FILE_NAME_LENGTH = 255
INVALID_FILE_NAME_CHARACTERS: FrozenSet[str] = frozenset('<>:"/\\|?*')


# Marketing status
MARKETING_STATUS_CODES: FrozenSet[str] = frozenset({"active", "completed", "new", "cancelled"})


# Sections and text content
TEXT_CONTENT_TYPES: FrozenSet[str] = frozenset({
    "PARAGRAPH", "LIST", "TABLE", "BLOCKIMAGE", "RENDERMULTIMEDIA",
    "EXCERPT", "HIGHLIGHT", "CAPTION",
})


# REMS
REMS_REQUIREMENT_SEQUENCES: FrozenSet[int] = frozenset({1, 2, 3})


# Substance specifications / tolerances
SPECIFICATION_CODE_PREFIX = "40-CFR-"
TOLERANCE_UNIT = "[ppm]"


# NDC / NHRIC product and package codes: accepted segment lengths
NDC_PRODUCT_PATTERNS: FrozenSet[Tuple[int, int]] = frozenset({(4, 4), (5, 4), (5, 3)})
NDC_PACKAGE_PATTERNS: FrozenSet[Tuple[int, int, int]] = frozenset({(4, 4, 2), (5, 3, 2), (5, 4, 1)})


# UCUM units commonly seen in drug labeling
UCUM_UNITS: FrozenSet[str] = frozenset({
    "g", "kg", "mg", "ug", "ng", "pg",
    "L", "mL", "uL", "dL", "cL",
    "1", "{count}", "{dose}", "{tablet}", "{capsule}", "{vial}", "{ampule}",
    "mg/mL", "g/L", "mg/L", "ug/mL", "mg/g", "g/100g", "mg/100mL",
    "%", "{v/v}", "{w/w}", "{w/v}",
    "IU", "[IU]", "U", "[U]", "[ppm]",
    "meq", "mOsm", "Ci", "Bq", "kBq", "MBq", "GBq",
    "mm", "cm", "h", "d", "wk", "mo", "a",
})

_UCUM_CHARACTERS = re.compile(r"^[a-zA-Z0-9\{\}\[\]/\*\.\-\+\(\)%]+$")
_UCUM_SHAPES: Tuple[re.Pattern, ...] = (
    re.compile(r"^\w+/\w+$"),
    re.compile(r"^\w+/100\w+$"),
    re.compile(r"^\{\w+\}$"),
    re.compile(r"^\[\w+\]$"),
)


def is_ucum_unit(unit: str) -> bool:
    """Check a unit string against the known UCUM units and common UCUM shapes."""
    unit = unit.strip()
    if not unit:
        return False
    if unit in UCUM_UNITS:
        return True
    if not _UCUM_CHARACTERS.match(unit):
        return False
    return any(pattern.match(unit) for pattern in _UCUM_SHAPES)


def code_system_name(oid: Optional[str]) -> str:
    """Human readable name for a code system OID, or the OID itself."""
    if not oid:
        return ""
    return CODE_SYSTEM_NAMES.get(oid, oid)


def ndc_segments(code: str) -> Tuple[int, ...]:
    """Return the segment lengths of a hyphenated NDC code, or () if non-numeric."""
    parts = code.strip().split("-")
    if not all(part.isdigit() for part in parts):
        return ()
    return tuple(len(part) for part in parts)


# Lookup shortcuts for case-insensitive code matching
def lookup_code(table: Mapping[str, str], code: Optional[str]) -> Optional[str]:
    """Case-insensitive lookup in a code -> display name table."""
    if not code:
        return None
    wanted = code.strip().upper()
    for key, value in table.items():
        if key.upper() == wanted:
            return value
    return None


def canonical_code(table: Mapping[str, str], code: Optional[str]) -> Optional[str]:
    """Return the table key matching ``code`` case-insensitively."""
    if not code:
        return None
    wanted = code.strip().upper()
    for key in table:
        if key.upper() == wanted:
            return key
    return None
