from datetime import datetime, timezone
from supabase import Client
from taskflow.core.exceptions import StoreError
from taskflow.core.scope import resolve_scope
from taskflow.database.supabase_client import first_row
from typing import Any, Dict


class AppStateService:
    """Scope-keyed settings blob with last-writer-wins replace semantics"""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_app_state(self, user: Dict[str, Any]) -> Dict[str, Any]:
        try:
            result = self.supabase.table("app_state")\
                .select("*")\
                .eq("id", resolve_scope(user).key)\
                .limit(1)\
                .execute()
            row = first_row(result)
            return (row or {}).get("state") or {}
        except Exception as e:
            raise StoreError(str(e))

    def set_app_state(self, user: Dict[str, Any], state: Dict[str, Any]) -> bool:
        try:
            self.supabase.table("app_state").upsert({
                "id": resolve_scope(user).key,
                "state": state,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            }).execute()
            return True
        except Exception as e:
            raise StoreError(str(e))
