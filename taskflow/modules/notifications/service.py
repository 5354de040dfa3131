import secrets
from datetime import datetime, timezone
from supabase import Client
from taskflow.core.exceptions import StoreError
from taskflow.core.scope import resolve_scope
from taskflow.database.supabase_client import first_row
from taskflow.modules.notifications.schemas import NotificationResponse, TASK_ASSIGNED, TASK_DONE
from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)

ASSIGNEE_EVERYONE = "all"


class NotificationService:
    """Appends task events to user mailboxes.

    Delivery is at-most-once and fire-and-forget: a failed write is logged and
    never reported back to the task operation that triggered it.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _append(self, user_id: str, notification: Dict[str, Any], task: Dict[str, Any]) -> bool:
        result = self.supabase.table("users")\
            .select("id, group_id, notifications")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        row = first_row(result)
        if row is None:
            logger.warning(f"Dropping {notification['type']} notification for unknown user {user_id}")
            return False
        if not resolve_scope(row).matches(task):
            logger.warning(
                f"Dropping {notification['type']} notification for {user_id}: "
                f"task {task['id']} is outside their scope"
            )
            return False
        mailbox = list(row.get("notifications") or [])
        mailbox.append(notification)
        self.supabase.table("users")\
            .update({"notifications": mailbox})\
            .eq("id", user_id)\
            .execute()
        return True

    def _dispatch(self, user_id: str, notification_type: str, text: str, task: Dict[str, Any]) -> bool:
        notification = {
            "id": secrets.token_hex(4),
            "type": notification_type,
            "text": text,
            "task_id": task["id"],
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            return self._append(user_id, notification, task)
        except Exception as e:
            logger.warning(f"Failed to deliver {notification_type} notification to {user_id}: {e}")
            return False

    def notify_assigned(self, from_user: Dict[str, Any], task: Dict[str, Any]) -> bool:
        assignee = task.get("assignee")
        if not assignee or assignee == ASSIGNEE_EVERYONE or assignee in (task.get("creator_id"), from_user["id"]):
            return False
        text = f"{from_user.get('name', 'Someone')} assigned you \"{task.get('title', '')}\""
        return self._dispatch(assignee, TASK_ASSIGNED, text, task)

    def notify_done(self, from_user: Dict[str, Any], task: Dict[str, Any]) -> bool:
        creator_id = task.get("creator_id")
        if not creator_id or creator_id == from_user["id"]:
            return False
        text = f"{from_user.get('name', 'Someone')} completed \"{task.get('title', '')}\""
        return self._dispatch(creator_id, TASK_DONE, text, task)

    def list_notifications(self, user: Dict[str, Any]) -> List[NotificationResponse]:
        return [NotificationResponse(**n) for n in user.get("notifications") or []]

    def clear_notifications(self, user: Dict[str, Any]) -> bool:
        try:
            self.supabase.table("users")\
                .update({"notifications": []})\
                .eq("id", user["id"])\
                .execute()
            return True
        except Exception as e:
            raise StoreError(str(e))
