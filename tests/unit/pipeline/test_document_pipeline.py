"""Unit tests for the single-document pipeline."""

import pytest

from labelgraph.core.exceptions import ContractError, DanglingReferenceError
from labelgraph.models import EntitySet
from labelgraph.pipeline import DocumentPipeline
from labelgraph.schemas.pipeline import ProcessingStatus


class TestDocumentPipeline:
    """Tests for DocumentPipeline.run and DocumentPipeline.process."""

    def test_complete_label_succeeds(self, pipeline, label_entities):
        result = pipeline.process(label_entities)

        assert result.status == ProcessingStatus.SUCCEEDED
        assert result.succeeded
        assert result.document_id == 1
        assert result.error is None
        assert result.rendering.section_index == [10, 11, 12, 20, 30]
        assert result.report.errors() == []
        assert result.hierarchies["Lot"]["parents"][702] == [700, 701]

    def test_blocking_violation_rejects(self, pipeline, label_payload):
        label_payload["Document"][0]["document_guid"] = None
        result = pipeline.process(EntitySet.from_payload(label_payload))

        assert result.status == ProcessingStatus.REJECTED
        assert not result.succeeded
        assert result.rendering is None
        assert [v.rule_name for v in result.report.errors()] == ["DocumentIdentifierRequired"]

    def test_non_blocking_errors_still_render(self, validator, label_payload):
        label_payload["Document"][0]["document_guid"] = None
        result = DocumentPipeline(validator=validator, blocking_rules=[]).process(
            EntitySet.from_payload(label_payload)
        )

        assert result.status == ProcessingStatus.SUCCEEDED
        assert result.rendering is not None
        assert result.report.for_rule("DocumentIdentifierRequired")

    def test_dangling_reference_fails(self, pipeline, label_payload):
        label_payload["Product"][0]["section_id"] = 77
        result = pipeline.process(EntitySet.from_payload(label_payload))

        assert result.status == ProcessingStatus.FAILED
        assert result.document_id == 1
        assert result.report is None
        assert "77" in result.error

    def test_run_raises_structural_errors(self, pipeline, label_payload):
        label_payload["Product"][0]["section_id"] = 77
        with pytest.raises(DanglingReferenceError):
            pipeline.run(EntitySet.from_payload(label_payload))

    def test_section_cycle_fails(self, pipeline, label_payload):
        label_payload["SectionHierarchy"].append(
            {"id": 3, "parent_section_id": 11, "child_section_id": 10, "sequence_number": 1}
        )
        result = pipeline.process(EntitySet.from_payload(label_payload))

        assert result.status == ProcessingStatus.FAILED
        assert result.rendering is None

    def test_dangling_attachment_parent_fails(self, pipeline, label_payload):
        label_payload["AttachedDocument"][0]["parent_entity_id"] = 999
        result = pipeline.process(EntitySet.from_payload(label_payload))
        assert result.status == ProcessingStatus.FAILED

    def test_deep_section_chain_renders(self, validator):
        depth = 1200
        payload = {
            "Section": [{"id": n, "title": f"Level {n}"} for n in range(1, depth + 1)],
            "SectionHierarchy": [
                {"id": n, "parent_section_id": n, "child_section_id": n + 1, "sequence_number": 1}
                for n in range(1, depth)
            ],
        }
        result = DocumentPipeline(validator=validator, blocking_rules=[]).process(
            EntitySet.from_payload(payload)
        )

        assert result.status == ProcessingStatus.SUCCEEDED
        assert result.rendering.section_index == list(range(1, depth + 1))
        node = result.rendering.root_sections[0]
        while node.children:
            node = node.children[0]
        assert (node.section_id, node.depth) == (depth, depth - 1)

    def test_none_entity_set(self, pipeline):
        with pytest.raises(ContractError):
            pipeline.run(None)
        with pytest.raises(ContractError):
            pipeline.process(None)

    def test_repeated_runs_match(self, pipeline, label_entities):
        first = pipeline.process(label_entities)
        second = pipeline.process(label_entities)
        assert first.rendering == second.rendering
        assert first.report == second.report
