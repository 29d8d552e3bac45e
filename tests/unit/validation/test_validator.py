"""Unit tests for the consistency validator."""

from datetime import date

import pytest

from labelgraph.config import settings
from labelgraph.core.exceptions import ContractError
from labelgraph.models import EntitySet
from labelgraph.schemas.validation import Severity
from labelgraph.services.validation import ConsistencyValidator, DEFAULT_REGISTRY


class TestConsistencyValidator:
    """Tests for a full validator pass."""

    def test_complete_label_has_no_errors(self, validator, label_entities, label_hierarchies):
        report = validator.validate(label_entities, label_hierarchies)

        assert report.errors() == []
        assert report.warnings() == []
        assert [(v.rule_name, v.entity_id) for v in report.infos()] == [("SectionPlacement", 30)]
        assert report.rule_count == len(DEFAULT_REGISTRY)
        assert report.checked_entities > 0

    def test_hierarchies_are_optional(self, validator, label_entities):
        report = validator.validate(label_entities)
        assert [v.rule_name for v in report.violations] == ["SectionPlacement"]

    def test_violations_are_sorted(self, validator):
        entity_set = EntitySet.from_payload({
            "ProductRouteOfAdministration": [{"id": 2}, {"id": 1}],
            "Document": [{"id": 5, "version_number": 0}],
        })
        report = validator.validate(entity_set)

        keys = [v.sort_key for v in report.violations]
        assert keys == sorted(keys)
        assert report.violations[0].entity_kind == "Document"

    def test_deterministic(self, validator, label_payload):
        label_payload["Document"][0]["document_guid"] = None
        first = validator.validate(EntitySet.from_payload(label_payload))
        second = validator.validate(EntitySet.from_payload(label_payload))
        assert first.to_dict() == second.to_dict()

    def test_blocking_rules(self, validator, label_payload):
        label_payload["Document"][0]["document_guid"] = None
        report = validator.validate(EntitySet.from_payload(label_payload))

        assert report.has_blocking(["DocumentIdentifierRequired"])
        assert not report.has_blocking(["RouteCodeShape"])
        assert not report.has_blocking(None)

    def test_warnings_never_block(self, validator):
        entity_set = EntitySet.from_payload({"Section": [{"id": 1, "section_code": "34067-9"}]})
        report = validator.validate(entity_set)

        assert [v.severity for v in report.for_rule("SectionCodeSystem")] == [Severity.WARNING]
        assert not report.has_blocking(["SectionCodeSystem"])

    def test_empty_entity_set(self, validator):
        report = validator.validate(EntitySet())
        assert report.is_clean
        assert report.checked_entities == 0

    def test_none_entity_set(self, validator):
        with pytest.raises(ContractError):
            validator.validate(None)

    def test_custom_registry(self, label_entities):
        validator = ConsistencyValidator(registry=DEFAULT_REGISTRY.subset(["DocumentVersionNumber"]))
        report = validator.validate(label_entities)
        assert report.rule_count == 1
        assert report.is_clean

    def test_report_summary(self, validator, label_entities):
        summary = validator.validate(label_entities).to_dict()["summary"]
        assert summary == {"errors": 0, "warnings": 0, "infos": 1}

    def test_reference_date_is_read_per_call(self, monkeypatch):
        entity_set = EntitySet.from_payload({"License": [{
            "id": 1,
            "license_number": "RL0123456",
            "status_code": "active",
            "expiration_date": "2025-01-31",
        }]})
        validator = ConsistencyValidator(registry=DEFAULT_REGISTRY.subset(["LicenseExpiration"]))

        monkeypatch.setattr(settings, "validation_reference_date", date(2025, 1, 1))
        assert validator.validate(entity_set).is_clean

        monkeypatch.setattr(settings, "validation_reference_date", date(2025, 3, 1))
        violations = validator.validate(entity_set).for_rule("LicenseExpiration")
        assert len(violations) == 1
        assert "expired on 2025-01-31" in violations[0].message

    def test_explicit_reference_date_wins(self, monkeypatch):
        entity_set = EntitySet.from_payload({"License": [{
            "id": 1, "status_code": "active", "expiration_date": "2025-01-31",
        }]})
        validator = ConsistencyValidator(
            registry=DEFAULT_REGISTRY.subset(["LicenseExpiration"]),
            reference_date=date(2025, 1, 1),
        )
        monkeypatch.setattr(settings, "validation_reference_date", date(2025, 3, 1))
        assert validator.validate(entity_set).is_clean
