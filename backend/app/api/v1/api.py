from fastapi import APIRouter

from backend.app.api.v1.endpoints import (
    audit,
    inventory,
    notes,
    operations,
    orders,
    statistics,
)

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
api_router.include_router(operations.router, prefix="/operations", tags=["operations"])
api_router.include_router(statistics.router, prefix="/statistics", tags=["statistics"])
api_router.include_router(notes.router, prefix="/notes", tags=["notes"])
api_router.include_router(audit.router, prefix="/audit-logs", tags=["audit"])
