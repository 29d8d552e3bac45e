"""Request and response payloads for the HTTP boundary."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from labelgraph.schemas.pipeline import ProcessingStatus
from labelgraph.schemas.rendering import RenderingContext
from labelgraph.schemas.validation import ConsistencyViolation


class HealthCheckResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Service status
        version: Application version
        service: Service name
    """

    status: str = Field(
        default="healthy",
        description="Service health status",
        examples=["healthy"],
    )
    version: str = Field(
        ...,
        description="Application version",
        examples=["0.1.0"],
    )
    service: str = Field(
        ...,
        description="Service name",
        examples=["LabelGraph"],
    )


class LabelProcessRequest(BaseModel):
    """Entity records of one document version, keyed by entity kind."""

    entities: Dict[str, List[Dict[str, Any]]] = Field(
        ...,
        description="Records per entity kind, e.g. {'Section': [{'id': 1, ...}]}",
        examples=[{"Document": [{"id": 1, "title": "Example Tablets"}], "Section": []}],
    )


class LabelProcessResponse(BaseModel):
    status: ProcessingStatus = Field(..., description="Processing outcome")
    document_id: Optional[int] = Field(None, description="Document record id")
    violations: List[ConsistencyViolation] = Field(
        default_factory=list,
        description="Consistency violations ordered by kind, id and rule name",
    )
    rendering: Optional[RenderingContext] = Field(None, description="Rendering context")
    error: Optional[str] = Field(None, description="Failure message")
