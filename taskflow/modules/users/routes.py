from fastapi import APIRouter, Depends, Request
from taskflow.config.settings import settings
from taskflow.database.supabase_client import get_supabase
from taskflow.modules.groups.service import GroupService
from taskflow.modules.users.schemas import (
    LoginRequest, LoginResponse, UserUpdate, UserResponse, MemberResponse
)
from taskflow.modules.users.service import UserService
from taskflow.core.dependencies import get_current_user, get_user_service
from taskflow.core.limiter import limiter
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    service: UserService = Depends(get_user_service)
):
    """Log in by username; the account is created on first login"""
    return service.login(login_data)


@router.get("", response_model=List[MemberResponse])
async def list_users(
    user: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Members of the caller's group, or just the caller"""
    return service.list_visible_users(user)


@router.get("/me", response_model=UserResponse)
async def get_me(user: Dict = Depends(get_current_user)):
    return UserResponse(**user)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    user_data: UserUpdate,
    user: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return service.update_user(user, user_data)


@router.delete("/me")
async def delete_me(
    user: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
    supabase: Client = Depends(get_supabase)
):
    """Delete the account; refused while the caller created a group others still use"""
    GroupService(supabase).remove_self_on_account_deletion(user)
    service.delete_account(user)
    return {"ok": True}
