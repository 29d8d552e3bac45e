from fastapi import APIRouter

from labelgraph.api.routes import health, labels

api_router = APIRouter()

api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(labels.router, prefix="/labels", tags=["Labels"])
