from fastapi import APIRouter, Body, Depends
from taskflow.database.supabase_client import get_supabase
from taskflow.modules.tasks.service import TaskService
from taskflow.core.dependencies import get_current_user
from supabase import Client
from typing import Any, Dict, List

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_service(supabase: Client = Depends(get_supabase)) -> TaskService:
    return TaskService(supabase)


@router.get("", response_model=List[Dict[str, Any]])
async def list_tasks(
    user: Dict = Depends(get_current_user),
    service: TaskService = Depends(get_task_service)
):
    """List every task in the caller's scope"""
    return service.list_tasks(user)


@router.post("", response_model=Dict[str, Any])
async def create_task(
    body: Dict[str, Any] = Body(...),
    user: Dict = Depends(get_current_user),
    service: TaskService = Depends(get_task_service)
):
    """Create a task in the caller's scope"""
    return service.create_task(user, body)


@router.patch("/{task_id}")
async def update_task(
    task_id: str,
    body: Dict[str, Any] = Body(...),
    user: Dict = Depends(get_current_user),
    service: TaskService = Depends(get_task_service)
):
    service.update_task(user, task_id, body)
    return {"ok": True}


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    user: Dict = Depends(get_current_user),
    service: TaskService = Depends(get_task_service)
):
    service.delete_task(user, task_id)
    return {"ok": True}
