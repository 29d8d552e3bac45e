"""Schemas for consistency validation output."""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """How seriously a violation should be treated by the caller."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ConsistencyViolation(BaseModel):
    """A rule that a specific record fails."""

    model_config = ConfigDict(frozen=True)

    entity_kind: str = Field(..., description="Kind of the offending record")
    entity_id: int = Field(..., description="Id of the offending record")
    rule_name: str = Field(..., description="Name of the violated rule")
    message: str = Field(..., description="Human-readable description")
    severity: Severity = Field(default=Severity.ERROR)

    @property
    def sort_key(self) -> Tuple[str, int, str]:
        return (self.entity_kind, self.entity_id, self.rule_name)


class ValidationReport(BaseModel):
    """Ordered violations produced by one validator pass.

    Violations are sorted by entity kind, then entity id, then rule name.
    """

    violations: List[ConsistencyViolation] = Field(default_factory=list)
    rule_count: int = Field(default=0, description="Number of rules evaluated")
    checked_entities: int = Field(default=0, description="Number of records checked")

    @property
    def is_clean(self) -> bool:
        return not self.violations

    def errors(self) -> List[ConsistencyViolation]:
        """Get only error-level violations."""
        return [v for v in self.violations if v.severity == Severity.ERROR]

    def warnings(self) -> List[ConsistencyViolation]:
        """Get only warning-level violations."""
        return [v for v in self.violations if v.severity == Severity.WARNING]

    def infos(self) -> List[ConsistencyViolation]:
        return [v for v in self.violations if v.severity == Severity.INFO]

    def for_entity(self, entity_kind: str, entity_id: int) -> List[ConsistencyViolation]:
        return [
            v for v in self.violations
            if v.entity_kind == entity_kind and v.entity_id == entity_id
        ]

    def for_rule(self, rule_name: str) -> List[ConsistencyViolation]:
        return [v for v in self.violations if v.rule_name == rule_name]

    def has_blocking(self, rule_names: Optional[Iterable[str]]) -> bool:
        """Whether any error-level violation belongs to one of ``rule_names``."""
        blocking = set(rule_names or ())
        return any(v.rule_name in blocking for v in self.errors())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "violations": [v.model_dump(mode="json") for v in self.violations],
            "rule_count": self.rule_count,
            "checked_entities": self.checked_entities,
            "summary": {
                "errors": len(self.errors()),
                "warnings": len(self.warnings()),
                "infos": len(self.infos()),
            },
        }
