from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class PollResponse(BaseModel):
    fingerprint: str
    has_notifications: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True
