from fastapi import APIRouter, Body, Depends
from taskflow.database.supabase_client import get_supabase
from taskflow.modules.appstate.service import AppStateService
from taskflow.core.dependencies import get_current_user
from supabase import Client
from typing import Any, Dict

router = APIRouter(prefix="/appstate", tags=["appstate"])


def get_app_state_service(supabase: Client = Depends(get_supabase)) -> AppStateService:
    return AppStateService(supabase)


@router.get("", response_model=Dict[str, Any])
async def get_app_state(
    user: Dict = Depends(get_current_user),
    service: AppStateService = Depends(get_app_state_service)
):
    """Shared settings blob for the caller's group (or the caller when solo)"""
    return service.get_app_state(user)


@router.post("")
async def set_app_state(
    state: Dict[str, Any] = Body(...),
    user: Dict = Depends(get_current_user),
    service: AppStateService = Depends(get_app_state_service)
):
    """Replace the blob wholesale"""
    service.set_app_state(user, state)
    return {"ok": True}
