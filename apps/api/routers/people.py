"""Reference data endpoint."""

from fastapi import APIRouter, Depends

from apps.api.deps import get_store
from domain.models import PeopleDirectory
from services.scheduling_store import SchedulingStore


router = APIRouter(tags=["people"])


@router.get("/people", response_model=PeopleDirectory)
async def list_people(store: SchedulingStore = Depends(get_store)):
    """List interviewers, coordinators and candidates."""
    return store.list_people()
