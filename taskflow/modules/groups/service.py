import secrets
from datetime import datetime, timezone
from supabase import Client
from taskflow.config.settings import settings
from taskflow.core.exceptions import (
    AppError, ConflictError, ForbiddenError, NotFoundError, StoreError, ValidationError
)
from taskflow.core.scope import MemberScope
from taskflow.database.supabase_client import first_row
from taskflow.modules.groups.schemas import (
    GroupCreate, GroupUpdate, GroupJoin, GroupTransfer, GroupResponse
)
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


def generate_invite_code(length: Optional[int] = None) -> str:
    """Random upper-case alphanumeric join token. Collisions are not checked."""
    length = length or settings.invite_code_length
    return secrets.token_hex(length)[:length].upper()


class GroupService:
    """Group lifecycle and the user <-> group membership invariant.

    ``groups.member_ids`` is the source of truth; ``users.group_id`` is a
    back-reference that every mutation here keeps in step. The store offers no
    multi-document transactions, so writes are ordered dependents first and a
    crash between two writes can leave a short-lived inconsistency (e.g. a user
    still pointing at a deleted group). Readers treat such stale references as
    "no group".
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _get_group(self, group_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("groups")\
            .select("*")\
            .eq("id", group_id)\
            .limit(1)\
            .execute()
        return first_row(result)

    def _set_user_group(self, user_id: str, group_id: Optional[str]):
        update_data: Dict[str, Any] = {"group_id": group_id}
        if group_id:
            update_data["solo"] = False
        self.supabase.table("users")\
            .update(update_data)\
            .eq("id", user_id)\
            .execute()

    def _require_own_group(self, user: Dict[str, Any]) -> Dict[str, Any]:
        """Load the caller's group, failing unless they created it.

        Callers without a group, or with a stale reference, are not the
        creator of anything and get the same Forbidden answer.
        """
        group = self._get_group(user["group_id"]) if user.get("group_id") else None
        if group is None or group["creator_id"] != user["id"]:
            raise ForbiddenError("Only the group creator can do this")
        return group

    def _cascade_delete(self, group: Dict[str, Any]):
        group_id = group["id"]
        self.supabase.table("users")\
            .update({"group_id": None})\
            .eq("group_id", group_id)\
            .execute()
        MemberScope(group_id=group_id).apply(self.supabase.table("tasks").delete()).execute()
        self.supabase.table("app_state")\
            .delete()\
            .eq("id", group_id)\
            .execute()
        self.supabase.table("groups")\
            .delete()\
            .eq("id", group_id)\
            .execute()
        logger.info(f"Deleted group {group_id}")

    def _release(self, user: Dict[str, Any], group: Dict[str, Any]):
        """Remove the user from a group's members.

        The creator may only go once they are alone; the group is then
        deleted so it never outlives its creator.
        """
        user_id = user["id"]
        others = [m for m in group.get("member_ids") or [] if m != user_id]
        if group["creator_id"] == user_id:
            if others:
                raise ConflictError(
                    "The group creator cannot leave while other members remain; "
                    "delete the group or transfer it first"
                )
            self._cascade_delete(group)
            return
        self.supabase.table("groups")\
            .update({"member_ids": others})\
            .eq("id", group["id"])\
            .execute()
        logger.info(f"User {user_id} left group {group['id']}")

    def _leave_current(self, user: Dict[str, Any]):
        group = self._get_group(user["group_id"])
        if group is not None:
            self._release(user, group)

    def get_my_group(self, user: Dict[str, Any]) -> Optional[GroupResponse]:
        """Get the caller's group, None when they have none"""
        if not user.get("group_id"):
            return None
        try:
            group = self._get_group(user["group_id"])
            return GroupResponse(**group) if group else None
        except Exception as e:
            raise StoreError(str(e))

    def create_group(self, user: Dict[str, Any], group_data: GroupCreate) -> GroupResponse:
        """Create a group with the caller as creator and sole member"""
        name = (group_data.name or "").strip()
        if not name:
            raise ValidationError("Group name is required")
        try:
            if user.get("group_id"):
                self._leave_current(user)

            result = self.supabase.table("groups").insert({
                "name": name,
                "photo": group_data.photo,
                "creator_id": user["id"],
                "member_ids": [user["id"]],
                "invite_code": generate_invite_code(),
                "created_at": datetime.now(timezone.utc).isoformat(),
            }).execute()
            group = first_row(result)
            if group is None:
                raise StoreError("Failed to create group")

            self._set_user_group(user["id"], group["id"])
            logger.info(f"User {user['id']} created group {group['id']}")
            return GroupResponse(**group)
        except AppError:
            raise
        except Exception as e:
            raise StoreError(str(e))

    def join_group(self, user: Dict[str, Any], join_data: GroupJoin) -> GroupResponse:
        """Join by invite code (case-insensitive); idempotent for existing members"""
        code = join_data.invite_code.strip().upper()
        if not code:
            raise ValidationError("Invite code is required")
        try:
            result = self.supabase.table("groups")\
                .select("*")\
                .eq("invite_code", code)\
                .limit(1)\
                .execute()
            group = first_row(result)
            if group is None:
                raise NotFoundError("Invalid invite code")

            if user.get("group_id") and user["group_id"] != group["id"]:
                self._leave_current(user)

            member_ids = list(group.get("member_ids") or [])
            if user["id"] not in member_ids:
                member_ids.append(user["id"])
                self.supabase.table("groups")\
                    .update({"member_ids": member_ids})\
                    .eq("id", group["id"])\
                    .execute()
                logger.info(f"User {user['id']} joined group {group['id']}")

            self._set_user_group(user["id"], group["id"])
            return GroupResponse(**{**group, "member_ids": member_ids})
        except AppError:
            raise
        except Exception as e:
            raise StoreError(str(e))

    def leave_group(self, user: Dict[str, Any]) -> bool:
        if not user.get("group_id"):
            raise ValidationError("You are not in a group")
        try:
            self._leave_current(user)
            self._set_user_group(user["id"], None)
            return True
        except AppError:
            raise
        except Exception as e:
            raise StoreError(str(e))

    def delete_group(self, user: Dict[str, Any]) -> bool:
        """Delete the caller's group together with its tasks and app state"""
        try:
            group = self._require_own_group(user)
            if any(m != user["id"] for m in group.get("member_ids") or []):
                raise ConflictError("Other members must leave before the group can be deleted")
            self._cascade_delete(group)
            return True
        except AppError:
            raise
        except Exception as e:
            raise StoreError(str(e))

    def update_group(self, user: Dict[str, Any], group_data: GroupUpdate) -> bool:
        try:
            group = self._require_own_group(user)
            update_data = {}
            if group_data.name and group_data.name.strip():
                update_data["name"] = group_data.name.strip()
            if group_data.photo is not None:
                update_data["photo"] = group_data.photo
            if update_data:
                self.supabase.table("groups")\
                    .update(update_data)\
                    .eq("id", group["id"])\
                    .execute()
            return True
        except AppError:
            raise
        except Exception as e:
            raise StoreError(str(e))

    def transfer_creator(self, user: Dict[str, Any], transfer_data: GroupTransfer) -> bool:
        """Hand the creator role to another current member"""
        try:
            group = self._require_own_group(user)
            if transfer_data.user_id not in (group.get("member_ids") or []):
                raise ValidationError("The new creator must be a member of the group")
            self.supabase.table("groups")\
                .update({"creator_id": transfer_data.user_id})\
                .eq("id", group["id"])\
                .execute()
            logger.info(f"Group {group['id']} transferred from {user['id']} to {transfer_data.user_id}")
            return True
        except AppError:
            raise
        except Exception as e:
            raise StoreError(str(e))

    def remove_self_on_account_deletion(self, user: Dict[str, Any]):
        """Release the user's membership ahead of deleting the account.

        Same creator guard as leave_group; deleting the user row is left to
        the caller.
        """
        if not user.get("group_id"):
            return
        try:
            self._leave_current(user)
        except AppError:
            raise
        except Exception as e:
            raise StoreError(str(e))
