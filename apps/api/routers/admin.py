"""Admin endpoints for resetting the store and viewing the audit log."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from apps.api.deps import get_rate_limiter, get_store
from domain.errors import NotFoundError
from domain.models import AuditLogEntry, StoreSnapshot
from services.rate_limiter import RateLimiter
from services.scheduling_store import SchedulingStore


router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/reset")
async def reset_store(
    request: Request,
    store: SchedulingStore = Depends(get_store),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Restore the seed dataset and clear rate limit counters.

    Disabled unless `enable_reset_endpoint` is set.
    """
    if not request.app.state.settings.enable_reset_endpoint:
        raise NotFoundError("Not found")

    store.reset()
    rate_limiter.reset()
    return {"status": "reset"}


@router.get("/snapshot", response_model=StoreSnapshot)
async def get_snapshot(store: SchedulingStore = Depends(get_store)):
    """Get all slots and bookings as one consistent view."""
    return store.snapshot()


@router.get("/audit-log", response_model=List[AuditLogEntry])
async def get_audit_log(
    entity_id: Optional[str] = Query(None, alias="entityId", description="Filter by slot or booking ID"),
    limit: int = Query(100, ge=1, le=1000, description="Number of entries to return"),
    store: SchedulingStore = Depends(get_store),
):
    """
    List audit log entries, oldest first.

    Args:
        entity_id: Filter by slot or booking ID
        limit: Maximum number of entries to return
        store: Scheduling store

    Returns:
        List[AuditLogEntry]: Most recent audit entries
    """
    return store.get_audit_log(entity_id=entity_id, limit=limit)
