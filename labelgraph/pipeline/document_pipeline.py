"""Single-document pipeline: references, variants, hierarchies, validation, rendering."""

from typing import Iterable, List, Optional

from labelgraph.config import settings
from labelgraph.core.exceptions import ContractError, StructuralError
from labelgraph.models.document import Document
from labelgraph.models.entity_set import EntitySet
from labelgraph.models.variants import map_variants
from labelgraph.schemas.pipeline import DocumentProcessingResult, ProcessingStatus
from labelgraph.services.hierarchy.document_hierarchies import DocumentHierarchyBuilder
from labelgraph.services.rendering.context_builder import RenderingContextBuilder
from labelgraph.services.validation.validator import ConsistencyValidator
from labelgraph.utils.logging import get_logger

LOGGER = get_logger(__name__)


def document_id_of(entity_set: Optional[EntitySet]) -> Optional[int]:
    """Id of the lowest-numbered Document record, if any."""
    if entity_set is None:
        return None
    ids = entity_set.table(Document).ids()
    return ids[0] if ids else None


class DocumentPipeline:
    """Runs one document version through every stage of the engine.

    The pipeline holds no per-document state, so one instance can process
    many documents, including from several worker threads at once.
    """

    def __init__(
        self,
        validator: Optional[ConsistencyValidator] = None,
        hierarchy_builder: Optional[DocumentHierarchyBuilder] = None,
        context_builder: Optional[RenderingContextBuilder] = None,
        blocking_rules: Optional[Iterable[str]] = None,
    ):
        self.validator = validator or ConsistencyValidator()
        self.hierarchy_builder = hierarchy_builder or DocumentHierarchyBuilder()
        self.context_builder = context_builder or RenderingContextBuilder()
        self.blocking_rules: List[str] = list(
            settings.blocking_rules if blocking_rules is None else blocking_rules
        )

    def run(self, entity_set: EntitySet) -> DocumentProcessingResult:
        """Process one document version.

        Args:
            entity_set: Loaded entity set of the document version

        Returns:
            DocumentProcessingResult: SUCCEEDED with the rendering context, or
                REJECTED without one when a blocking rule fired

        Raises:
            ContractError: If ``entity_set`` is None
            StructuralError: On dangling references, malformed attachments or cycles
        """
        if entity_set is None:
            raise ContractError("DocumentPipeline.run requires an entity set")

        document_id = document_id_of(entity_set)
        LOGGER.info(
            f"Processing document {document_id}",
            extra={"document_id": document_id, "records": entity_set.record_count()},
        )

        entity_set.verify_references()
        variants = map_variants(entity_set)
        hierarchies = self.hierarchy_builder.build(entity_set)
        report = self.validator.validate(entity_set, hierarchies, variants)

        if report.has_blocking(self.blocking_rules):
            LOGGER.warning(
                f"Document {document_id} rejected by blocking rules",
                extra={
                    "document_id": document_id,
                    "blocking": sorted({v.rule_name for v in report.errors() if v.rule_name in self.blocking_rules}),
                },
            )
            return DocumentProcessingResult(
                status=ProcessingStatus.REJECTED,
                document_id=document_id,
                report=report,
                hierarchies=hierarchies.as_index(),
            )

        rendering = self.context_builder.build(entity_set, hierarchies, variants)
        LOGGER.info(
            f"Document {document_id} processed",
            extra={"document_id": document_id, "violations": len(report.violations)},
        )
        return DocumentProcessingResult(
            status=ProcessingStatus.SUCCEEDED,
            document_id=document_id,
            report=report,
            rendering=rendering,
            hierarchies=hierarchies.as_index(),
        )

    def process(self, entity_set: EntitySet) -> DocumentProcessingResult:
        """Boundary wrapper around ``run`` that reports structural failures as FAILED."""
        try:
            return self.run(entity_set)
        except StructuralError as e:
            document_id = document_id_of(entity_set)
            LOGGER.error(
                f"Document {document_id} failed: {e}",
                extra={"document_id": document_id, "error_type": type(e).__name__},
            )
            return DocumentProcessingResult(
                status=ProcessingStatus.FAILED,
                document_id=document_id,
                error=str(e),
            )

