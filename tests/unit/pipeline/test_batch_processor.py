"""Unit tests for concurrent batch processing."""

import asyncio

import pytest

from labelgraph.core.exceptions import ContractError
from labelgraph.models import EntitySet
from labelgraph.pipeline import DocumentBatchProcessor, DocumentPipeline
from labelgraph.schemas.pipeline import ProcessingStatus


def _document(document_id: int) -> EntitySet:
    return EntitySet.from_payload({"Document": [{
        "id": document_id,
        "document_guid": f"00000000-0000-4000-8000-{document_id:012d}",
        "set_guid": f"11111111-0000-4000-8000-{document_id:012d}",
        "version_number": 1,
    }]})


class CancellingPipeline(DocumentPipeline):
    """Sets the cancel event on the loop once its first document is done."""

    def __init__(self, loop, cancel_event, **kwargs):
        super().__init__(**kwargs)
        self.loop = loop
        self.cancel_event = cancel_event

    def process(self, entity_set):
        result = super().process(entity_set)
        self.loop.call_soon_threadsafe(self.cancel_event.set)
        return result


class TestDocumentBatchProcessor:
    """Tests for DocumentBatchProcessor."""

    @pytest.mark.asyncio
    async def test_results_keep_input_order(self, pipeline, label_entities):
        processor = DocumentBatchProcessor(pipeline=pipeline, max_concurrent=3)
        entity_sets = [_document(5), label_entities, _document(2), _document(9)]

        results = await processor.process_batch(entity_sets)

        assert [r.document_id for r in results] == [5, 1, 2, 9]
        assert all(r.status == ProcessingStatus.SUCCEEDED for r in results)

    @pytest.mark.asyncio
    async def test_failures_stay_isolated(self, pipeline, label_payload):
        label_payload["Product"][0]["section_id"] = 77
        processor = DocumentBatchProcessor(pipeline=pipeline, max_concurrent=2)

        results = await processor.process_batch([_document(3), EntitySet.from_payload(label_payload)])

        assert [r.status for r in results] == [ProcessingStatus.SUCCEEDED, ProcessingStatus.FAILED]

    @pytest.mark.asyncio
    async def test_cancelled_before_start(self, pipeline):
        cancel_event = asyncio.Event()
        cancel_event.set()
        processor = DocumentBatchProcessor(pipeline=pipeline)

        results = await processor.process_batch([_document(1), _document(2)], cancel_event)

        assert [r.status for r in results] == [ProcessingStatus.CANCELLED] * 2
        assert [r.document_id for r in results] == [1, 2]
        assert all(r.report is None for r in results)

    @pytest.mark.asyncio
    async def test_cancel_mid_batch(self, validator):
        cancel_event = asyncio.Event()
        pipeline = CancellingPipeline(
            asyncio.get_running_loop(), cancel_event, validator=validator, blocking_rules=[]
        )
        processor = DocumentBatchProcessor(pipeline=pipeline, max_concurrent=1)

        results = await processor.process_batch([_document(1), _document(2), _document(3)], cancel_event)

        assert [r.status for r in results] == [
            ProcessingStatus.SUCCEEDED,
            ProcessingStatus.CANCELLED,
            ProcessingStatus.CANCELLED,
        ]

    @pytest.mark.asyncio
    async def test_empty_batch(self, pipeline):
        assert await DocumentBatchProcessor(pipeline=pipeline).process_batch([]) == []

    @pytest.mark.asyncio
    async def test_none_inputs(self, pipeline):
        processor = DocumentBatchProcessor(pipeline=pipeline)
        with pytest.raises(ContractError):
            await processor.process_batch(None)
        with pytest.raises(ContractError):
            await processor.process_batch([_document(1), None])

    def test_invalid_concurrency(self, pipeline):
        with pytest.raises(ContractError):
            DocumentBatchProcessor(pipeline=pipeline, max_concurrent=-1)
