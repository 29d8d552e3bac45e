"""Concurrent processing of many independent document versions."""

import asyncio
from typing import List, Optional, Sequence

from labelgraph.config import settings
from labelgraph.core.exceptions import ContractError
from labelgraph.models.entity_set import EntitySet
from labelgraph.pipeline.document_pipeline import DocumentPipeline, document_id_of
from labelgraph.schemas.pipeline import DocumentProcessingResult, ProcessingStatus
from labelgraph.utils.logging import get_logger

LOGGER = get_logger(__name__)


class DocumentBatchProcessor:
    """Processes document versions in parallel worker threads.

    Each document is a self-contained snapshot, so workers share nothing but
    the read-only vocabularies. Cancellation is checked before a document
    starts; a document already running always completes.
    """

    def __init__(
        self,
        pipeline: Optional[DocumentPipeline] = None,
        max_concurrent: Optional[int] = None,
    ):
        self.pipeline = pipeline or DocumentPipeline()
        self.max_concurrent = max_concurrent or settings.max_concurrent_documents
        if self.max_concurrent < 1:
            raise ContractError(f"max_concurrent must be at least 1, got {self.max_concurrent}")

    async def process_batch(
        self,
        entity_sets: Sequence[EntitySet],
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[DocumentProcessingResult]:
        """Process every entity set and return results in input order.

        Args:
            entity_sets: Document versions to process
            cancel_event: When set, documents that have not started yet are
                reported as CANCELLED

        Returns:
            List[DocumentProcessingResult]: One result per input entity set

        Raises:
            ContractError: If ``entity_sets`` is None or contains None
        """
        if entity_sets is None:
            raise ContractError("process_batch requires a sequence of entity sets")
        if any(entity_set is None for entity_set in entity_sets):
            raise ContractError("process_batch received a None entity set")

        semaphore = asyncio.Semaphore(self.max_concurrent)
        LOGGER.info(
            f"Processing batch of {len(entity_sets)} documents",
            extra={"documents": len(entity_sets), "max_concurrent": self.max_concurrent},
        )

        async def _process_one(entity_set: EntitySet) -> DocumentProcessingResult:
            async with semaphore:
                if cancel_event is not None and cancel_event.is_set():
                    return DocumentProcessingResult(
                        status=ProcessingStatus.CANCELLED,
                        document_id=document_id_of(entity_set),
                    )
                # assembly and validation are CPU-bound; run off the event loop
                return await asyncio.to_thread(self.pipeline.process, entity_set)

        results = await asyncio.gather(*(_process_one(entity_set) for entity_set in entity_sets))

        counts = {status.value: 0 for status in ProcessingStatus}
        for result in results:
            counts[result.status.value] += 1
        LOGGER.info(f"Batch complete: {counts}", extra=counts)
        return list(results)
