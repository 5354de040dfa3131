from fastapi import APIRouter, Depends
from taskflow.database.supabase_client import get_supabase
from taskflow.modules.groups.schemas import (
    GroupCreate, GroupUpdate, GroupJoin, GroupTransfer, GroupResponse
)
from taskflow.modules.groups.service import GroupService
from taskflow.core.dependencies import get_current_user
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/groups", tags=["groups"])


def get_group_service(supabase: Client = Depends(get_supabase)) -> GroupService:
    return GroupService(supabase)


@router.post("", response_model=GroupResponse)
async def create_group(
    group_data: GroupCreate,
    user: Dict = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Create a group and move the caller into it"""
    return service.create_group(user, group_data)


@router.post("/join", response_model=GroupResponse)
async def join_group(
    join_data: GroupJoin,
    user: Dict = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Join a group by invite code"""
    return service.join_group(user, join_data)


@router.get("/mine", response_model=Optional[GroupResponse])
async def get_my_group(
    user: Dict = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Get the caller's group, or null"""
    return service.get_my_group(user)


@router.patch("/mine")
async def update_my_group(
    group_data: GroupUpdate,
    user: Dict = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Rename or re-photo the group (creator only)"""
    service.update_group(user, group_data)
    return {"ok": True}


@router.delete("/mine")
async def delete_my_group(
    user: Dict = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Delete the group with its tasks (creator only, once alone)"""
    service.delete_group(user)
    return {"ok": True}


@router.post("/mine/transfer")
async def transfer_my_group(
    transfer_data: GroupTransfer,
    user: Dict = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Make another member the group creator (creator only)"""
    service.transfer_creator(user, transfer_data)
    return {"ok": True}


@router.post("/leave")
async def leave_group(
    user: Dict = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    service.leave_group(user)
    return {"ok": True}
