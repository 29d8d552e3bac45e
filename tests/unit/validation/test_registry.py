"""Unit tests for the consistency rule registry."""

import pytest

from labelgraph.core.exceptions import ContractError
from labelgraph.models import Characteristic, Product
from labelgraph.schemas.validation import Severity
from labelgraph.services.validation import DEFAULT_REGISTRY, RuleRegistry, ValidationRule


def _always_fails(record, context):
    return {"reason": "always"}


class TestRuleRegistry:
    """Tests for registering and listing rules."""

    def test_default_registry_is_populated(self):
        assert len(DEFAULT_REGISTRY) >= 40
        for name in (
            "ValueTypeConsistency",
            "GoverningAgencyPresence",
            "RouteCodeShape",
            "QuantityUnitPairing",
            "DisciplinaryActionLicenseStatus",
            "LotGenealogyDirection",
            "ProductEventQuantity",
        ):
            assert name in DEFAULT_REGISTRY

    def test_rules_are_ordered_by_kind_then_name(self):
        keys = [(rule.entity_kind, rule.name) for rule in DEFAULT_REGISTRY.rules()]
        assert keys == sorted(keys)

    def test_decorator_registers_every_kind(self):
        registry = RuleRegistry()
        registry.rule("AlwaysFails", [Product, "Characteristic"], "{entity_kind} {entity_id}: {reason}")(
            _always_fails
        )
        assert registry.kinds() == ["Characteristic", "Product"]
        assert [rule.name for rule in registry.rules_for(Characteristic)] == ["AlwaysFails"]

    def test_duplicate_registration(self):
        registry = RuleRegistry()
        rule = ValidationRule("AlwaysFails", "Product", _always_fails, "failed")
        registry.register(rule)
        with pytest.raises(ContractError):
            registry.register(rule)

    def test_unknown_kind(self):
        with pytest.raises(ContractError):
            RuleRegistry().register(ValidationRule("AlwaysFails", "Widget", _always_fails, "failed"))

    def test_subset(self):
        subset = DEFAULT_REGISTRY.subset(["RouteCodeShape"])
        assert subset.names() == ["RouteCodeShape"]
        with pytest.raises(ContractError):
            DEFAULT_REGISTRY.subset(["NoSuchRule"])


class TestValidationRule:
    """Tests for evaluating one rule."""

    def test_message_template(self):
        rule = ValidationRule(
            "AlwaysFails", "Product", _always_fails, "{entity_kind} {entity_id} failed: {reason}",
            severity=Severity.WARNING,
        )
        violation = rule.evaluate(Product(id=7), context=None)

        assert violation.entity_kind == "Product"
        assert violation.entity_id == 7
        assert violation.rule_name == "AlwaysFails"
        assert violation.message == "Product 7 failed: always"
        assert violation.severity == Severity.WARNING

    def test_unknown_placeholder_is_left_visible(self):
        rule = ValidationRule("AlwaysFails", "Product", _always_fails, "missing {nothing}")
        assert rule.evaluate(Product(id=1), context=None).message == "missing {nothing}"

    def test_passing_rule(self):
        rule = ValidationRule("NeverFails", "Product", lambda record, context: None, "never")
        assert rule.evaluate(Product(id=1), context=None) is None
