"""Central registry of consistency rules.

A rule is a predicate bound to one entity kind plus a message template. The
predicate returns ``None`` when the record satisfies the rule, or a dict of
template parameters describing the problem. Keeping every rule in one
registry, rather than scattered across the models, makes rule ordering,
coverage and testing explicit.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Type, Union

from labelgraph.core.exceptions import ContractError
from labelgraph.models.base import EntityRecord
from labelgraph.models.entity_set import resolve_kind
from labelgraph.schemas.validation import ConsistencyViolation, Severity

Predicate = Callable[[Any, Any], Optional[Dict[str, Any]]]
KindArg = Union[str, Type[EntityRecord]]


class _TemplateParams(dict):
    """Leaves unknown placeholders visible instead of raising KeyError."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


@dataclass(frozen=True)
class ValidationRule:
    """A named consistency rule for one entity kind.

    Attributes:
        name: Rule name reported on violations
        entity_kind: Kind of record the rule is evaluated against
        predicate: ``(record, context) -> None | params``
        message: ``str.format`` template; ``entity_kind`` and ``entity_id`` are
            always available in addition to the predicate's params
        severity: Severity assigned to violations of this rule
        description: Longer explanation for documentation and listings
    """
    name: str
    entity_kind: str
    predicate: Predicate
    message: str
    severity: Severity = Severity.ERROR
    description: str = ""

    def evaluate(self, record: EntityRecord, context: Any) -> Optional[ConsistencyViolation]:
        params = self.predicate(record, context)
        if params is None:
            return None
        values = _TemplateParams(params)
        values.setdefault("entity_kind", self.entity_kind)
        values.setdefault("entity_id", record.id)
        return ConsistencyViolation(
            entity_kind=self.entity_kind,
            entity_id=record.id,
            rule_name=self.name,
            message=self.message.format_map(values),
            severity=self.severity,
        )


class RuleRegistry:
    """Collection of rules keyed by ``(entity_kind, rule_name)``."""

    def __init__(self, rules: Iterable[ValidationRule] = ()):
        self._rules: Dict[Tuple[str, str], ValidationRule] = {}
        for rule in rules:
            self.register(rule)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_name: object) -> bool:
        return any(name == rule_name for _, name in self._rules)

    def register(self, rule: ValidationRule) -> ValidationRule:
        """Add a rule.

        Raises:
            ContractError: If the kind is unknown or the rule is already
                registered for that kind
        """
        kind = resolve_kind(rule.entity_kind).kind()
        key = (kind, rule.name)
        if key in self._rules:
            raise ContractError(f"Rule {rule.name} is already registered for {kind}")
        self._rules[key] = rule
        return rule

    def rule(
        self,
        name: str,
        entity_kinds: Union[KindArg, Sequence[KindArg]],
        message: str,
        severity: Severity = Severity.ERROR,
        description: str = "",
    ) -> Callable[[Predicate], Predicate]:
        """Decorator registering a predicate for one or more entity kinds."""
        if isinstance(entity_kinds, (str, type)):
            entity_kinds = [entity_kinds]

        def decorator(predicate: Predicate) -> Predicate:
            for kind in entity_kinds:
                self.register(ValidationRule(
                    name=name,
                    entity_kind=resolve_kind(kind).kind(),
                    predicate=predicate,
                    message=message,
                    severity=severity,
                    description=description or (predicate.__doc__ or "").strip(),
                ))
            return predicate

        return decorator

    def rules(self) -> List[ValidationRule]:
        """All rules ordered by entity kind, then rule name."""
        return [self._rules[key] for key in sorted(self._rules)]

    def rules_for(self, entity_kind: KindArg) -> List[ValidationRule]:
        kind = resolve_kind(entity_kind).kind()
        return [rule for rule in self.rules() if rule.entity_kind == kind]

    def kinds(self) -> List[str]:
        return sorted({kind for kind, _ in self._rules})

    def names(self) -> List[str]:
        return sorted({name for _, name in self._rules})

    def subset(self, rule_names: Iterable[str]) -> "RuleRegistry":
        """New registry holding only the named rules."""
        wanted = set(rule_names)
        unknown = wanted - set(self.names())
        if unknown:
            raise ContractError(f"Unknown rule(s): {', '.join(sorted(unknown))}")
        return RuleRegistry(rule for rule in self.rules() if rule.name in wanted)


DEFAULT_REGISTRY = RuleRegistry()
