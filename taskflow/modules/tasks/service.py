from datetime import datetime, timezone
from supabase import Client
from taskflow.core.exceptions import AppError, NotFoundError, StoreError, ValidationError
from taskflow.core.scope import resolve_scope
from taskflow.database.supabase_client import first_row
from taskflow.modules.notifications.service import NotificationService
from taskflow.modules.tasks.schemas import split_task_body, task_to_response
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


def _require_title(title: Any):
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Task title is required")


def _require_done_flag(columns: Dict[str, Any]):
    if "done" in columns and not isinstance(columns["done"], bool):
        raise ValidationError("done must be true or false")


class TaskService:
    """Task handlers. Every read and write goes through the caller's scope."""

    def __init__(self, supabase: Client, notifications: Optional[NotificationService] = None):
        self.supabase = supabase
        self.notifications = notifications or NotificationService(supabase)

    def _get_visible_task(self, user: Dict[str, Any], task_id: str) -> Dict[str, Any]:
        """Load a task inside the caller's scope; anything else is reported missing"""
        scope = resolve_scope(user)
        query = self.supabase.table("tasks").select("*").eq("id", task_id)
        result = scope.apply(query).limit(1).execute()
        task = first_row(result)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def list_tasks(self, user: Dict[str, Any]) -> List[Dict[str, Any]]:
        try:
            scope = resolve_scope(user)
            result = scope.apply(self.supabase.table("tasks").select("*"))\
                .order("created_at")\
                .execute()
            return [task_to_response(row) for row in result.data or []]
        except Exception as e:
            raise StoreError(str(e))

    def create_task(self, user: Dict[str, Any], body: Dict[str, Any]) -> Dict[str, Any]:
        """Create a task stamped with the caller's current scope"""
        columns, extra = split_task_body(body)
        _require_title(columns.get("title"))
        _require_done_flag(columns)
        try:
            insert_data = {
                "title": columns["title"],
                "assignee": columns.get("assignee"),
                "done": columns.get("done", False),
                "creator_id": user["id"],
                "fields": extra,
                "created_at": datetime.now(timezone.utc).isoformat(),
                **resolve_scope(user).stamp(),
            }
            result = self.supabase.table("tasks").insert(insert_data).execute()
            task = first_row(result)
            if task is None:
                raise StoreError("Failed to create task")
        except AppError:
            raise
        except Exception as e:
            raise StoreError(str(e))

        self.notifications.notify_assigned(user, task)
        return task_to_response(task)

    def update_task(self, user: Dict[str, Any], task_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """Merge a partial update into a task.

        Identity and scope keys are dropped from the patch. Completion by
        someone other than the creator notifies the creator once, on the
        not-done -> done transition.
        """
        columns, extra = split_task_body(patch)
        if "title" in columns:
            _require_title(columns["title"])
        _require_done_flag(columns)
        try:
            task = self._get_visible_task(user, task_id)
            update_data = dict(columns)
            if extra:
                update_data["fields"] = {**(task.get("fields") or {}), **extra}
            if update_data:
                self.supabase.table("tasks")\
                    .update(update_data)\
                    .eq("id", task_id)\
                    .execute()
        except AppError:
            raise
        except Exception as e:
            raise StoreError(str(e))

        updated = {**task, **update_data}
        if columns.get("done") is True and not task.get("done"):
            self.notifications.notify_done(user, updated)
        if "assignee" in columns and columns["assignee"] != task.get("assignee"):
            self.notifications.notify_assigned(user, updated)
        return task_to_response(updated)

    def delete_task(self, user: Dict[str, Any], task_id: str) -> bool:
        try:
            self._get_visible_task(user, task_id)
            self.supabase.table("tasks")\
                .delete()\
                .eq("id", task_id)\
                .execute()
            return True
        except AppError:
            raise
        except Exception as e:
            raise StoreError(str(e))
