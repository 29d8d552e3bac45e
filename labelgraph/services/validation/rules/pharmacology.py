"""Identified substance, pharmacologic class and substance specification rules."""

from labelgraph.models.pharmacology import (
    IdentifiedSubstance,
    ObservationCriterion,
    PharmacologicClass,
    PharmacologicClassName,
    SubstanceSpecification,
)
from labelgraph.models.variants import DefiningSubstance
from labelgraph.schemas.validation import Severity
from labelgraph.services.validation.checks import is_alphanumeric, present, problems
from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.utils.vocabulary import (
    EPA_SRS_CODE_SYSTEM,
    IDENTIFIED_SUBJECT_TYPES,
    MED_RT_CODE_SYSTEM,
    PHARMACOLOGIC_CLASS_SUFFIXES,
    PREFERRED_NAME_USE,
    SPECIFICATION_CODE_PREFIX,
    SUBJECT_PHARMACOLOGIC_CLASS,
    TOLERANCE_UNIT,
)


@DEFAULT_REGISTRY.rule(
    "IdentifiedSubstanceRole",
    IdentifiedSubstance,
    "Identified substance {entity_id} is inconsistent: {problems}",
)
def identified_substance_role(substance: IdentifiedSubstance, context):
    """Subject type, identifier and definition flag must agree."""
    role = context.variants.substance(substance.id)
    defines_class = (
        isinstance(role, DefiningSubstance) and substance.subject_type == SUBJECT_PHARMACOLOGIC_CLASS
    )
    return problems(
        substance.subject_type not in IDENTIFIED_SUBJECT_TYPES
        and f"subject type '{substance.subject_type or ''}' is not recognized",
        not present(substance.substance_identifier_value) and "substance identifier is missing",
        defines_class
        and not context.children(PharmacologicClass, "identified_substance_id", substance.id)
        and "class definition has no pharmacologic class",
    )


@DEFAULT_REGISTRY.rule(
    "PharmacologicClassCode",
    PharmacologicClass,
    "Pharmacologic class {entity_id} is malformed: {problems}",
)
def pharmacologic_class_code(pharm_class: PharmacologicClass, context):
    display = (pharm_class.class_display_name or "").strip()
    return problems(
        not is_alphanumeric(pharm_class.class_code)
        and f"class code '{pharm_class.class_code or ''}' is missing or not alphanumeric",
        pharm_class.class_code_system != MED_RT_CODE_SYSTEM
        and f"class code system '{pharm_class.class_code_system or ''}' is not MED-RT",
        display and not any(display.endswith(suffix) for suffix in PHARMACOLOGIC_CLASS_SUFFIXES)
        and f"display name '{display}' lacks a class type suffix",
    )


@DEFAULT_REGISTRY.rule(
    "PharmacologicClassPreferredName",
    PharmacologicClass,
    "Pharmacologic class {entity_id} has {count} preferred names; exactly one is expected",
    severity=Severity.WARNING,
)
def pharmacologic_class_preferred_name(pharm_class: PharmacologicClass, context):
    names = context.children(PharmacologicClassName, "pharmacologic_class_id", pharm_class.id)
    preferred = [n for n in names if (n.name_use or "").strip().upper() == PREFERRED_NAME_USE]
    if len(preferred) != 1:
        return {"count": len(preferred)}
    return None


@DEFAULT_REGISTRY.rule(
    "SpecificationCode",
    SubstanceSpecification,
    "Substance specification {entity_id} is malformed: {problems}",
)
def specification_code(spec: SubstanceSpecification, context):
    return problems(
        not (spec.spec_code or "").startswith(SPECIFICATION_CODE_PREFIX)
        and f"code '{spec.spec_code or ''}' must start with '{SPECIFICATION_CODE_PREFIX}'",
        spec.spec_code_system != EPA_SRS_CODE_SYSTEM
        and f"code system '{spec.spec_code_system or ''}' must be {EPA_SRS_CODE_SYSTEM}",
    )


@DEFAULT_REGISTRY.rule(
    "ToleranceUnit",
    ObservationCriterion,
    "Observation criterion {entity_id} tolerance unit '{unit}' must be {expected}",
)
def tolerance_unit(criterion: ObservationCriterion, context):
    if present(criterion.tolerance_high_unit) and criterion.tolerance_high_unit.strip() != TOLERANCE_UNIT:
        return {"unit": criterion.tolerance_high_unit, "expected": TOLERANCE_UNIT}
    return None
