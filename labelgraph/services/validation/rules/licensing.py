"""Licensing rules: territorial authorities, licenses and disciplinary actions.

A territory code drives which fields are legal. The federal code ``USA``
requires the governing agency identifier triple (DUNS extension, id root,
agency name); any state code forbids it. License status and the actions
taken against a license follow a small state machine.
"""

import re

from labelgraph.models.licensing import DisciplinaryAction, License, TerritorialAuthority
from labelgraph.services.validation.checks import (
    display_name_mismatch,
    is_plain_text,
    missing_fields,
    normalized,
    present,
    present_fields,
    problems,
)
from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.utils.vocabulary import (
    ACTION_ACTIVATION,
    ACTION_OTHER,
    ACTION_RESULTING_STATUS,
    ACTION_REVOKED,
    ACTION_SUSPENSION,
    DEA_LICENSE_OID,
    DISCIPLINARY_ACTION_CODES,
    DUNS_PATTERN,
    FDA_SPL_CODE_SYSTEM,
    GOVERNING_AGENCIES,
    GOVERNING_AGENCY_ID_ROOT,
    ISO_3166_1_CODE_SYSTEM,
    ISO_3166_2_CODE_SYSTEM,
    LICENSE_STATUS_ACTIVE,
    LICENSE_STATUS_CODES,
    LICENSE_STATUS_COMPLETED,
    LICENSE_TYPE_CODES,
    STATE_LICENSE_OID_BASE,
    US_STATE_CODE_PATTERN,
    US_STATE_CODES,
    USA_TERRITORY_CODE,
    canonical_code,
)

_AGENCY_FIELDS = (
    "governing_agency_id_extension",
    "governing_agency_id_root",
    "governing_agency_name",
)
_LICENSE_OID_PATTERN = re.compile(r"^" + re.escape(STATE_LICENSE_OID_BASE) + r"\.\d+(\.[2-5])?$")


def is_federal(authority: TerritorialAuthority) -> bool:
    return normalized(authority.territory_code) == USA_TERRITORY_CODE


def is_state(authority: TerritorialAuthority) -> bool:
    return bool(US_STATE_CODE_PATTERN.match((authority.territory_code or "").strip()))


def _status(license_record: License) -> str:
    return (license_record.status_code or "").strip().lower()


@DEFAULT_REGISTRY.rule(
    "TerritoryCode",
    TerritorialAuthority,
    "Territorial authority {entity_id} has invalid territory code '{code}'",
)
def territory_code(authority: TerritorialAuthority, context):
    """Territory is the USA or a US state/territory subdivision code."""
    if is_federal(authority):
        return None
    if normalized(authority.territory_code) in US_STATE_CODES:
        return None
    return {"code": authority.territory_code or ""}


@DEFAULT_REGISTRY.rule(
    "TerritoryCodeSystem",
    TerritorialAuthority,
    "Territorial authority {entity_id} code {code} must use code system {expected}, found '{found}'",
)
def territory_code_system(authority: TerritorialAuthority, context):
    if is_federal(authority):
        expected = ISO_3166_1_CODE_SYSTEM
    elif is_state(authority):
        expected = ISO_3166_2_CODE_SYSTEM
    else:
        return None
    if authority.territory_code_system != expected:
        return {
            "code": authority.territory_code,
            "expected": expected,
            "found": authority.territory_code_system or "",
        }
    return None


@DEFAULT_REGISTRY.rule(
    "GoverningAgencyPresence",
    TerritorialAuthority,
    "Territorial authority {entity_id} ({code}) {problem}",
)
def governing_agency_presence(authority: TerritorialAuthority, context):
    """Federal authorities name their governing agency; state authorities must not."""
    if not present(authority.territory_code):
        return None
    if is_federal(authority):
        missing = missing_fields(authority, *_AGENCY_FIELDS)
        if missing:
            return {"code": authority.territory_code, "problem": f"requires {', '.join(missing)}"}
        return None
    illegal = present_fields(authority, *_AGENCY_FIELDS)
    if illegal:
        return {"code": authority.territory_code, "problem": f"must not carry {', '.join(illegal)}"}
    return None


@DEFAULT_REGISTRY.rule(
    "GoverningAgencyIdentifier",
    TerritorialAuthority,
    "Territorial authority {entity_id} governing agency identifier is invalid: {problems}",
)
def governing_agency_identifier(authority: TerritorialAuthority, context):
    """Checks only the agency fields that are present.

    A known agency name and its DUNS number imply each other.
    """
    extension = (authority.governing_agency_id_extension or "").strip()
    root = (authority.governing_agency_id_root or "").strip()
    name = (authority.governing_agency_name or "").strip()
    known = GOVERNING_AGENCIES.get(name.upper()) if name else None
    duns_owner = next(
        (agency for agency, (duns, _root) in GOVERNING_AGENCIES.items() if duns == extension), None
    )
    return problems(
        root and root != GOVERNING_AGENCY_ID_ROOT
        and f"id root {root} is not {GOVERNING_AGENCY_ID_ROOT}",
        extension and not DUNS_PATTERN.match(extension)
        and f"id extension '{extension}' is not a 9-digit DUNS number",
        name and not is_plain_text(name) and "agency name contains markup characters",
        known and extension and extension != known[0]
        and f"{name} must use DUNS {known[0]}, found {extension}",
        duns_owner and name and name.upper() != duns_owner
        and f"DUNS {extension} belongs to {duns_owner}, found agency name '{name}'",
    )


@DEFAULT_REGISTRY.rule(
    "LicenseTypeCode",
    License,
    "License {entity_id} type must be {expected_code} in the FDA SPL code system: {problems}",
)
def license_type_code(license_record: License, context):
    expected_code = next(iter(LICENSE_TYPE_CODES))
    params = problems(
        canonical_code(LICENSE_TYPE_CODES, license_record.license_type_code) is None
        and f"found code '{license_record.license_type_code or ''}'",
        license_record.license_type_code_system != FDA_SPL_CODE_SYSTEM
        and f"found code system '{license_record.license_type_code_system or ''}'",
    )
    if params:
        params["expected_code"] = expected_code
    return params


@DEFAULT_REGISTRY.rule(
    "LicenseStatusCode",
    License,
    "License {entity_id} has unrecognized status '{status}'",
)
def license_status_code(license_record: License, context):
    if _status(license_record) not in LICENSE_STATUS_CODES:
        return {"status": license_record.status_code or ""}
    return None


@DEFAULT_REGISTRY.rule(
    "LicenseExpiration",
    License,
    "License {entity_id} {problem}",
)
def license_expiration(license_record: License, context):
    """Completed licenses have expired; expired licenses cannot be active."""
    status = _status(license_record)
    expiration = license_record.expiration_date
    if status == LICENSE_STATUS_COMPLETED:
        if expiration is None:
            return {"problem": "is completed but has no expiration date"}
        if expiration >= context.reference_date:
            return {"problem": f"is completed but expires in the future ({expiration.isoformat()})"}
    if status == LICENSE_STATUS_ACTIVE and expiration is not None and expiration < context.reference_date:
        return {"problem": f"is active but expired on {expiration.isoformat()}"}
    return None


@DEFAULT_REGISTRY.rule(
    "LicenseNumber",
    License,
    "License {entity_id} {problem}",
)
def license_number(license_record: License, context):
    if not present(license_record.license_number):
        return {"problem": "has no license number"}
    if not is_plain_text(license_record.license_number):
        return {"problem": "license number contains markup characters"}
    return None


@DEFAULT_REGISTRY.rule(
    "LicenseRootOid",
    License,
    "License {entity_id} root OID '{root}' is not the DEA OID or a state licensing OID",
)
def license_root_oid(license_record: License, context):
    root = (license_record.license_root_oid or "").strip()
    if root == DEA_LICENSE_OID or _LICENSE_OID_PATTERN.match(root):
        return None
    return {"root": root}


@DEFAULT_REGISTRY.rule(
    "LicenseTerritory",
    License,
    "License {entity_id} {problem}",
)
def license_territory(license_record: License, context):
    """Federal licenses use the DEA OID; state licenses use a state OID."""
    authority = context.get(TerritorialAuthority, license_record.territorial_authority_id)
    if authority is None:
        return {"problem": "names no territorial authority"}
    root = (license_record.license_root_oid or "").strip()
    if is_federal(authority) and root and root != DEA_LICENSE_OID:
        return {"problem": f"is issued by the federal authority but uses root OID {root}"}
    if is_state(authority) and root == DEA_LICENSE_OID:
        return {"problem": f"is issued by {authority.territory_code} but uses the DEA root OID"}
    return None


@DEFAULT_REGISTRY.rule(
    "DisciplinaryActionCode",
    DisciplinaryAction,
    "Disciplinary action {entity_id} has an invalid action code: {problems}",
)
def disciplinary_action_code(action: DisciplinaryAction, context):
    """Code, code system and display name follow the approval action list."""
    return problems(
        canonical_code(DISCIPLINARY_ACTION_CODES, action.action_code) is None
        and f"code '{action.action_code or ''}' is not recognized",
        action.action_code_system != FDA_SPL_CODE_SYSTEM
        and f"code system '{action.action_code_system or ''}' is not the FDA SPL system",
        display_name_mismatch(DISCIPLINARY_ACTION_CODES, action.action_code, action.action_display_name),
    )


@DEFAULT_REGISTRY.rule(
    "DisciplinaryActionText",
    DisciplinaryAction,
    "Disciplinary action {entity_id} {problem}",
)
def disciplinary_action_text(action: DisciplinaryAction, context):
    """Free text describes 'other' actions only and must be plain text."""
    code = canonical_code(DISCIPLINARY_ACTION_CODES, action.action_code)
    if code == ACTION_OTHER and not present(action.action_text):
        return {"problem": "of type 'other' must describe the action in text"}
    if code != ACTION_OTHER and present(action.action_text):
        return {"problem": "carries action text but only 'other' actions are described in text"}
    if present(action.action_text) and not is_plain_text(action.action_text):
        return {"problem": "text contains markup characters"}
    return None


@DEFAULT_REGISTRY.rule(
    "DisciplinaryActionLicenseStatus",
    DisciplinaryAction,
    "Disciplinary action {entity_id} conflicts with license {license_id}: {problems}",
)
def disciplinary_action_license_status(action: DisciplinaryAction, context):
    """The latest action on a license determines the license's status.

    Suspension leaves a license suspended, revocation aborted, and activation
    or resolution active. A license can only be re-activated after an earlier
    suspension or revocation.
    """
    license_record = context.get(License, action.license_id)
    code = canonical_code(DISCIPLINARY_ACTION_CODES, action.action_code)
    if license_record is None or code is None:
        return None

    history = context.license_actions(license_record.id)
    earlier = history[:history.index(action)] if action in history else []
    reactivated_without_cause = code == ACTION_ACTIVATION and not any(
        canonical_code(DISCIPLINARY_ACTION_CODES, prior.action_code) in (ACTION_SUSPENSION, ACTION_REVOKED)
        for prior in earlier
    )

    expected = ACTION_RESULTING_STATUS[code]
    is_latest = bool(history) and history[-1].id == action.id
    status = _status(license_record)

    params = problems(
        reactivated_without_cause and "activation without an earlier suspension or revocation",
        is_latest and expected is not None and status != expected
        and f"latest action {DISCIPLINARY_ACTION_CODES[code]} requires status '{expected}', "
            f"license is '{status or 'missing'}'",
    )
    if params:
        params["license_id"] = license_record.id
    return params


@DEFAULT_REGISTRY.rule(
    "DisciplinaryActionChronology",
    DisciplinaryAction,
    "Disciplinary action {entity_id} {problem}",
)
def disciplinary_action_chronology(action: DisciplinaryAction, context):
    """Actions are dated, not in the future, and listed oldest first."""
    if action.effective_time is None:
        return {"problem": "has no effective time"}
    if action.effective_time > context.reference_date:
        return {"problem": f"is dated in the future ({action.effective_time.isoformat()})"}
    for other in context.children(DisciplinaryAction, "license_id", action.license_id):
        if (
            action.license_id is not None
            and other.id < action.id
            and other.effective_time is not None
            and other.effective_time > action.effective_time
        ):
            return {
                "problem": f"dated {action.effective_time.isoformat()} is listed after "
                           f"action {other.id} dated {other.effective_time.isoformat()}"
            }
    return None
