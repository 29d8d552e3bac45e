"""REMS protocol, stakeholder and requirement rules."""

from labelgraph.models.rems import Protocol, Requirement, Stakeholder
from labelgraph.services.validation.checks import is_alphanumeric, problems
from labelgraph.services.validation.registry import DEFAULT_REGISTRY
from labelgraph.utils.vocabulary import FDA_SPL_CODE_SYSTEM, REMS_REQUIREMENT_SEQUENCES


def _coded(code, code_system, label):
    return problems(
        not is_alphanumeric(code) and f"{label} code '{code or ''}' is missing or not alphanumeric",
        code_system != FDA_SPL_CODE_SYSTEM
        and f"{label} code system '{code_system or ''}' is not the FDA SPL system",
    )


@DEFAULT_REGISTRY.rule(
    "ProtocolCode",
    Protocol,
    "REMS protocol {entity_id} is malformed: {problems}",
)
def protocol_code(protocol: Protocol, context):
    return _coded(protocol.protocol_code, protocol.protocol_code_system, "protocol")


@DEFAULT_REGISTRY.rule(
    "StakeholderCode",
    Stakeholder,
    "REMS stakeholder {entity_id} is malformed: {problems}",
)
def stakeholder_code(stakeholder: Stakeholder, context):
    return _coded(stakeholder.stakeholder_code, stakeholder.stakeholder_code_system, "stakeholder")


@DEFAULT_REGISTRY.rule(
    "RequirementCode",
    Requirement,
    "REMS requirement {entity_id} is malformed: {problems}",
)
def requirement_code(requirement: Requirement, context):
    return _coded(requirement.requirement_code, requirement.requirement_code_system, "requirement")


@DEFAULT_REGISTRY.rule(
    "RequirementSequence",
    Requirement,
    "REMS requirement {entity_id} sequence number {sequence} must be 1, 2 or 3",
)
def requirement_sequence(requirement: Requirement, context):
    """1 = before, 2 = during, 3 = after the treatment."""
    if requirement.requirement_sequence_number not in REMS_REQUIREMENT_SEQUENCES:
        return {"sequence": requirement.requirement_sequence_number}
    return None
