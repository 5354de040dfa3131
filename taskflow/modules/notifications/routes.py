from fastapi import APIRouter, Depends
from taskflow.database.supabase_client import get_supabase
from taskflow.modules.notifications.schemas import NotificationResponse
from taskflow.modules.notifications.service import NotificationService
from taskflow.core.dependencies import get_current_user
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/users/notifications", tags=["notifications"])


def get_notification_service(supabase: Client = Depends(get_supabase)) -> NotificationService:
    return NotificationService(supabase)


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    user: Dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    """List the caller's mailbox in delivery order"""
    return service.list_notifications(user)


@router.delete("")
async def clear_notifications(
    user: Dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    """Empty the caller's mailbox"""
    service.clear_notifications(user)
    return {"ok": True}
