"""Unit tests for entity loading and reference verification."""

import pytest
from pydantic import ValidationError

from labelgraph.core.exceptions import ContractError, DanglingReferenceError, MalformedRecordError
from labelgraph.models import EntitySet, Section, SectionHierarchy, resolve_kind


class TestEntitySetLoading:
    """Tests for building entity sets from raw payloads."""

    def test_tables_iterate_in_ascending_id_order(self, label_entities):
        assert label_entities.table(Section).ids() == [10, 11, 12, 20, 30]

    def test_lookup_by_kind_name_or_class(self, label_entities):
        by_name = label_entities.get("Section", 11)
        by_class = label_entities.get(Section, 11)
        assert by_name is by_class
        assert by_name.section_link_guid == "hypertension-link"

    def test_missing_kind_yields_empty_table(self, label_entities):
        assert len(label_entities.table("REMSMaterial")) == 0
        assert "REMSMaterial" not in label_entities.kinds()

    def test_records_are_immutable(self, label_entities):
        section = label_entities.get(Section, 10)
        with pytest.raises(ValidationError):
            section.title = "changed"

    def test_where_filters_on_fields(self, label_entities):
        children = label_entities.where(SectionHierarchy, parent_section_id=10)
        assert [edge.child_section_id for edge in children] == [12, 11]

    def test_where_rejects_unknown_field(self, label_entities):
        with pytest.raises(ContractError):
            label_entities.where(Section, colour="red")

    def test_require_missing_record(self, label_entities):
        with pytest.raises(ContractError):
            label_entities.require(Section, 999)

    def test_unknown_kind_is_a_contract_error(self):
        with pytest.raises(ContractError):
            resolve_kind("Sektion")
        with pytest.raises(ContractError):
            EntitySet.from_payload({"Sektion": []})

    def test_none_payload_is_a_contract_error(self):
        with pytest.raises(ContractError):
            EntitySet.from_payload(None)

    def test_duplicate_id_is_malformed(self):
        with pytest.raises(MalformedRecordError):
            EntitySet.from_payload({"Section": [{"id": 1}, {"id": 1}]})

    def test_field_validation_failure_is_malformed(self):
        with pytest.raises(MalformedRecordError) as exc_info:
            EntitySet.from_payload({"Section": [{"id": "not-a-number"}]})
        assert "Section" in str(exc_info.value)

    def test_unknown_field_is_malformed(self):
        with pytest.raises(MalformedRecordError):
            EntitySet.from_payload({"Section": [{"id": 1, "colour": "red"}]})

    def test_hierarchy_edge_requires_both_endpoints(self):
        with pytest.raises(MalformedRecordError):
            EntitySet.from_payload({"SectionHierarchy": [{"id": 1, "parent_section_id": 1}]})


class TestReferenceVerification:
    """Tests for dangling-reference detection."""

    def test_clean_entity_set_passes(self, label_entities):
        label_entities.verify_references()

    def test_dangling_link_is_a_structural_error(self, label_payload):
        label_payload["Product"][0]["section_id"] = 77
        entity_set = EntitySet.from_payload(label_payload)

        with pytest.raises(DanglingReferenceError) as exc_info:
            entity_set.verify_references()

        error = exc_info.value
        assert (error.kind, error.record_id, error.field) == ("Product", 500, "section_id")
        assert (error.target_kind, error.target_id) == ("Section", 77)

    def test_first_dangling_link_is_deterministic(self, label_payload):
        label_payload["Section"][0]["structured_body_id"] = 5
        label_payload["Product"][0]["section_id"] = 77
        entity_set = EntitySet.from_payload(label_payload)

        with pytest.raises(DanglingReferenceError) as exc_info:
            entity_set.verify_references()

        # kinds are checked alphabetically: Product before Section
        assert exc_info.value.kind == "Product"
