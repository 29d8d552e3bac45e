"""Document processing pipeline."""

from labelgraph.pipeline.batch_processor import DocumentBatchProcessor
from labelgraph.pipeline.document_pipeline import DocumentPipeline

__all__ = ["DocumentBatchProcessor", "DocumentPipeline"]
