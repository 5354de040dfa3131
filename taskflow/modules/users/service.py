import random
import secrets
from datetime import datetime, timezone
from supabase import Client
from taskflow.core.exceptions import AppError, ConflictError, StoreError, ValidationError
from taskflow.core.scope import SoloScope
from taskflow.database.supabase_client import first_row
from taskflow.modules.users.schemas import LoginRequest, LoginResponse, UserUpdate, UserResponse
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

USER_COLORS = [
    "#e57373", "#f06292", "#ba68c8", "#7986cb", "#4fc3f7",
    "#4db6ac", "#81c784", "#ffb74d", "#a1887f", "#90a4ae",
]

# Never leave the server except in the login response / own mailbox listing
PRIVATE_FIELDS = ("token", "notifications")


def public_user(row: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a user row that is safe to show to other members"""
    return {k: v for k, v in row.items() if k not in PRIVATE_FIELDS}


def needs_setup(user: Dict[str, Any]) -> bool:
    return not user.get("group_id") and not user.get("solo")


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def login(self, login_data: LoginRequest) -> LoginResponse:
        """Log in by name, creating the user on first sight"""
        username = login_data.username.strip()
        if not username:
            raise ValidationError("Username is required")
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("name", username)\
                .limit(1)\
                .execute()
            user = first_row(result)

            if user is None:
                result = self.supabase.table("users").insert({
                    "name": username,
                    "color": random.choice(USER_COLORS),
                    "photo": None,
                    "token": secrets.token_hex(32),
                    "group_id": None,
                    "solo": False,
                    "theme": None,
                    "color_overrides": {},
                    "notifications": [],
                    "created_at": datetime.now(timezone.utc).isoformat(),
                }).execute()
                user = first_row(result)
                if user is None:
                    raise StoreError("Failed to create user")
                logger.info(f"Created user {user['id']} ({username})")

            return LoginResponse(
                token=user["token"],
                user_id=user["id"],
                needs_setup=needs_setup(user)
            )
        except AppError:
            raise
        except Exception as e:
            raise StoreError(str(e))

    def get_user_by_token(self, token: str) -> Optional[Dict[str, Any]]:
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("token", token)\
                .limit(1)\
                .execute()
            return first_row(result)
        except Exception as e:
            raise StoreError(str(e))

    def get_user_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
            return first_row(result)
        except Exception as e:
            raise StoreError(str(e))

    def update_user(self, user: Dict[str, Any], user_data: UserUpdate) -> UserResponse:
        """Apply a profile patch; ``photo`` and ``theme`` may be cleared with null"""
        patch = user_data.model_dump(exclude_unset=True)
        update_data = {}
        if patch.get("name") and patch["name"].strip():
            update_data["name"] = patch["name"].strip()
        for field in ("color", "color_overrides"):
            if patch.get(field) is not None:
                update_data[field] = patch[field]
        for field in ("photo", "theme"):
            if field in patch:
                update_data[field] = patch[field]
        if patch.get("solo") is not None:
            if patch["solo"] and user.get("group_id"):
                raise ConflictError("Leave your group before switching to solo mode")
            update_data["solo"] = patch["solo"]

        if not update_data:
            return UserResponse(**user)
        try:
            result = self.supabase.table("users")\
                .update(update_data)\
                .eq("id", user["id"])\
                .execute()
            row = first_row(result)
            if row is None:
                raise StoreError("Failed to update user")
            return UserResponse(**row)
        except AppError:
            raise
        except Exception as e:
            raise StoreError(str(e))

    def list_visible_users(self, user: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Members of the caller's group, or just the caller outside a group"""
        if not user.get("group_id"):
            return [public_user(user)]
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("group_id", user["group_id"])\
                .execute()
            return [public_user(row) for row in result.data or []]
        except Exception as e:
            raise StoreError(str(e))

    def delete_account(self, user: Dict[str, Any]) -> None:
        """Delete the user's private data and record.

        Group membership must already have been released through
        GroupService.remove_self_on_account_deletion.
        """
        user_id = user["id"]
        scope = SoloScope(owner_id=user_id)
        try:
            scope.apply(self.supabase.table("tasks").delete()).execute()
            self.supabase.table("app_state")\
                .delete()\
                .eq("id", scope.key)\
                .execute()
            self.supabase.table("users")\
                .delete()\
                .eq("id", user_id)\
                .execute()
            logger.info(f"Deleted account {user_id}")
        except Exception as e:
            raise StoreError(str(e))
