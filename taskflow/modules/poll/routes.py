from fastapi import APIRouter, Depends
from taskflow.database.supabase_client import get_supabase
from taskflow.modules.poll.schemas import PollResponse
from taskflow.modules.poll.service import PollService
from taskflow.core.dependencies import get_current_user
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/poll", tags=["poll"])


def get_poll_service(supabase: Client = Depends(get_supabase)) -> PollService:
    return PollService(supabase)


@router.get("", response_model=PollResponse)
async def poll(
    user: Dict = Depends(get_current_user),
    service: PollService = Depends(get_poll_service)
):
    """Fingerprint of the caller's visible tasks and members; refetch when it changes"""
    return service.poll(user)
