import hashlib
import json
from supabase import Client
from taskflow.modules.poll.schemas import PollResponse
from taskflow.modules.tasks.service import TaskService
from taskflow.modules.users.service import UserService
from typing import Any, Dict, List


def fingerprint(tasks: List[Dict[str, Any]], users: List[Dict[str, Any]]) -> str:
    """SHA-256 over a canonical JSON rendering of the visible state.

    Both collections are ordered by id and keys are sorted, so the digest only
    changes when content does.
    """
    snapshot = {
        "tasks": sorted(tasks, key=lambda t: str(t.get("id"))),
        "users": sorted(users, key=lambda u: str(u.get("id"))),
    }
    payload = json.dumps(snapshot, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class PollService:
    def __init__(self, supabase: Client):
        self.tasks = TaskService(supabase)
        self.users = UserService(supabase)

    def poll(self, user: Dict[str, Any]) -> PollResponse:
        tasks = self.tasks.list_tasks(user)
        members = self.users.list_visible_users(user)
        return PollResponse(
            fingerprint=fingerprint(tasks, members),
            has_notifications=bool(user.get("notifications"))
        )
