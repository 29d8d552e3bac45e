"""Schemas for document processing results."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from labelgraph.schemas.rendering import RenderingContext
from labelgraph.schemas.validation import ValidationReport


class ProcessingStatus(str, Enum):
    """Outcome of processing one document version."""
    SUCCEEDED = "succeeded"
    REJECTED = "rejected"
    FAILED = "failed"
    CANCELLED = "cancelled"


class DocumentProcessingResult(BaseModel):
    """Result of running one document version through the pipeline.

    Attributes:
        status: Processing outcome
        document_id: Id of the document record, when one was loaded
        report: Validation report; None when processing failed before validation
        rendering: Rendering context; None unless the document succeeded
        hierarchies: Plain-data parent/child indices per hierarchy kind
        error: Error message for failed documents
    """

    status: ProcessingStatus = Field(..., description="Processing outcome")
    document_id: Optional[int] = Field(None, description="Document record id")
    report: Optional[ValidationReport] = Field(None, description="Validation report")
    rendering: Optional[RenderingContext] = Field(None, description="Rendering context")
    hierarchies: Optional[Dict[str, Any]] = Field(None, description="Hierarchy indices by kind")
    error: Optional[str] = Field(None, description="Failure message")

    @property
    def succeeded(self) -> bool:
        return self.status == ProcessingStatus.SUCCEEDED
