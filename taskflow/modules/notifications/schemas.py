from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime

TASK_ASSIGNED = "task_assigned"
TASK_DONE = "task_done"


class NotificationResponse(BaseModel):
    id: str
    type: str
    text: str
    task_id: str
    created_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
