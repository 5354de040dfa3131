"""
Task scope resolution.

A user's scope decides which tasks they list, create and poll, and which
app-state blob they share. Group members all see the group's tasks; everyone
else works on private tasks owned by themselves.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union


@dataclass(frozen=True)
class MemberScope:
    group_id: str

    @property
    def key(self) -> str:
        return self.group_id

    def stamp(self) -> Dict[str, Any]:
        return {"group_id": self.group_id, "owner_id": None}

    def apply(self, query):
        return query.eq("group_id", self.group_id)

    def matches(self, task: Mapping[str, Any]) -> bool:
        return task.get("group_id") == self.group_id


@dataclass(frozen=True)
class SoloScope:
    owner_id: str

    @property
    def key(self) -> str:
        return self.owner_id

    def stamp(self) -> Dict[str, Any]:
        return {"group_id": None, "owner_id": self.owner_id}

    def apply(self, query):
        return query.is_("group_id", "null").eq("owner_id", self.owner_id)

    def matches(self, task: Mapping[str, Any]) -> bool:
        return task.get("group_id") is None and task.get("owner_id") == self.owner_id


Scope = Union[MemberScope, SoloScope]


def resolve_scope(user: Mapping[str, Any]) -> Scope:
    """Derive the scope from the user's group reference alone.

    Unconfigured users (no group, not solo yet) are treated as solo so their
    tasks stay private until they pick a group.
    """
    group_id = user.get("group_id")
    if group_id:
        return MemberScope(group_id=group_id)
    return SoloScope(owner_id=user["id"])
