from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime


class GroupCreate(BaseModel):
    name: str = ""
    photo: Optional[str] = None


class GroupUpdate(BaseModel):
    name: Optional[str] = None
    photo: Optional[str] = None


class GroupJoin(BaseModel):
    invite_code: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class GroupResponse(BaseModel):
    id: str
    name: str
    photo: Optional[str] = None
    creator_id: str
    member_ids: List[str]
    invite_code: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class GroupTransfer(BaseModel):
    user_id: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True
