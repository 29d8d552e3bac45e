"""Label processing API endpoints."""

import asyncio
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, status

from labelgraph.core.exceptions import ContractError, StructuralError
from labelgraph.models.entity_set import EntitySet
from labelgraph.pipeline.document_pipeline import DocumentPipeline
from labelgraph.schemas.api import LabelProcessRequest, LabelProcessResponse
from labelgraph.schemas.pipeline import DocumentProcessingResult
from labelgraph.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()

pipeline = DocumentPipeline()


def _run_pipeline(entities: Dict[str, List[Dict[str, Any]]]) -> DocumentProcessingResult:
    return pipeline.run(EntitySet.from_payload(entities))


@router.post(
    "/process",
    response_model=LabelProcessResponse,
    summary="Process one labeling document version",
    description=(
        "Assemble hierarchies, validate consistency and build the rendering "
        "context for the submitted entity records"
    ),
    operation_id="process_label_document",
)
async def process_label(request: LabelProcessRequest) -> LabelProcessResponse:
    """Run the document pipeline over the submitted entities.

    Raises:
        HTTPException: 422 on structural failures, 400 on contract failures
    """
    try:
        # loading and processing are CPU-bound; run off the event loop
        result = await asyncio.to_thread(_run_pipeline, request.entities)
    except StructuralError as e:
        LOGGER.warning(f"Rejected structurally invalid document: {e}", extra={"error_type": type(e).__name__})
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except ContractError as e:
        LOGGER.warning(f"Invalid label processing request: {e}", extra={"error_type": type(e).__name__})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return LabelProcessResponse(
        status=result.status,
        document_id=result.document_id,
        violations=result.report.violations if result.report else [],
        rendering=result.rendering,
        error=result.error,
    )
