from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict
from datetime import datetime

from taskflow.modules.notifications.schemas import NotificationResponse


class CamelModel(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class LoginRequest(CamelModel):
    username: str


class LoginResponse(CamelModel):
    token: str
    user_id: str
    needs_setup: bool


class UserUpdate(CamelModel):
    name: Optional[str] = None
    color: Optional[str] = None
    photo: Optional[str] = None
    color_overrides: Optional[Dict[str, str]] = None
    solo: Optional[bool] = None
    theme: Optional[str] = None


class MemberResponse(CamelModel):
    id: str
    name: str
    color: Optional[str] = None
    photo: Optional[str] = None
    group_id: Optional[str] = None
    solo: bool = False
    created_at: Optional[datetime] = None


class UserResponse(MemberResponse):
    theme: Optional[str] = None
    color_overrides: Dict[str, str] = {}
    notifications: List[NotificationResponse] = []
