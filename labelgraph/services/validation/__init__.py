"""Consistency validation services."""

from labelgraph.services.validation.registry import DEFAULT_REGISTRY, RuleRegistry, ValidationRule
from labelgraph.services.validation.validator import ConsistencyValidator
from labelgraph.services.validation import rules  # noqa: F401  populates DEFAULT_REGISTRY

__all__ = [
    "DEFAULT_REGISTRY",
    "RuleRegistry",
    "ValidationRule",
    "ConsistencyValidator",
]
