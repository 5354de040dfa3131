from typing import Any, Dict, Tuple

# Task content is client-defined; only these keys are stored as columns
TASK_COLUMNS = ("title", "assignee", "done")

# Server-owned keys a client may never set, in API and store spelling
PROTECTED_KEYS = frozenset({
    "id", "fields",
    "creatorId", "creator_id",
    "groupId", "group_id",
    "ownerId", "owner_id",
    "createdAt", "created_at",
})


def split_task_body(body: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Split a request body into column values and free-form fields"""
    columns: Dict[str, Any] = {}
    extra: Dict[str, Any] = {}
    for key, value in body.items():
        if key in PROTECTED_KEYS:
            continue
        if key in TASK_COLUMNS:
            columns[key] = value
        else:
            extra[key] = value
    return columns, extra


def task_to_response(row: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a stored task row into the client-facing object"""
    return {
        **(row.get("fields") or {}),
        "id": row["id"],
        "title": row.get("title"),
        "assignee": row.get("assignee"),
        "done": bool(row.get("done")),
        "creatorId": row.get("creator_id"),
        "groupId": row.get("group_id"),
        "ownerId": row.get("owner_id"),
        "createdAt": row.get("created_at"),
    }
