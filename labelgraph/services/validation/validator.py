"""Consistency validator: one pass of every registered rule over an entity set."""

from datetime import date
from typing import List, Optional

from labelgraph.config import settings
from labelgraph.core.exceptions import ContractError
from labelgraph.models.entity_set import EntitySet
from labelgraph.models.variants import VariantIndex, map_variants
from labelgraph.schemas.validation import ConsistencyViolation, ValidationReport
from labelgraph.services.hierarchy.document_hierarchies import DocumentHierarchies
from labelgraph.services.validation.context import ValidationContext
from labelgraph.services.validation.registry import DEFAULT_REGISTRY, RuleRegistry
from labelgraph.utils.logging import get_logger

LOGGER = get_logger(__name__)


class ConsistencyValidator:
    """Evaluates registered rules and reports violations without rejecting data.

    Whether a violation blocks further processing is left to the caller;
    the validator only raises for contract violations such as a missing
    entity set.

    Args:
        registry: Rules to evaluate; the default registry when omitted
        reference_date: Date treated as "today" by date-relative rules; when
            omitted, ``settings.reference_date`` is read on every ``validate`` call
    """

    def __init__(
        self,
        registry: Optional[RuleRegistry] = None,
        reference_date: Optional[date] = None,
    ):
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.reference_date = reference_date

    def validate(
        self,
        entity_set: EntitySet,
        hierarchies: Optional[DocumentHierarchies] = None,
        variants: Optional[VariantIndex] = None,
    ) -> ValidationReport:
        """Run every rule against every record of its kind.

        Args:
            entity_set: Entity set to validate
            hierarchies: Assembled hierarchies, when already available
            variants: Variant index, mapped from ``entity_set`` when omitted

        Returns:
            ValidationReport: Violations sorted by kind, id and rule name

        Raises:
            ContractError: If ``entity_set`` is None
        """
        if entity_set is None:
            raise ContractError("ConsistencyValidator.validate requires an entity set")

        context = ValidationContext(
            entity_set=entity_set,
            variants=variants if variants is not None else map_variants(entity_set),
            reference_date=self.reference_date or settings.reference_date,
            hierarchies=hierarchies,
        )

        violations: List[ConsistencyViolation] = []
        checked = 0
        rules = self.registry.rules()
        for kind in self.registry.kinds():
            kind_rules = [rule for rule in rules if rule.entity_kind == kind]
            for record in entity_set.table(kind):
                checked += 1
                for rule in kind_rules:
                    violation = rule.evaluate(record, context)
                    if violation is not None:
                        LOGGER.debug(
                            f"{rule.name} failed for {kind} {record.id}: {violation.message}"
                        )
                        violations.append(violation)

        violations.sort(key=lambda v: v.sort_key)
        report = ValidationReport(
            violations=violations,
            rule_count=len(rules),
            checked_entities=checked,
        )
        LOGGER.info(
            f"Validation finished: {len(report.errors())} errors, {len(report.warnings())} warnings, "
            f"{len(report.infos())} infos",
            extra={
                "rule_count": report.rule_count,
                "checked_entities": checked,
                "violations": len(violations),
            },
        )
        return report
