import uuid
from pydantic import BaseModel


class StatusDetailCreate(BaseModel):
    entity_id: str
    status: str
    message: str | None = None


class StatusDetailUpdate(BaseModel):
    id: uuid.UUID
    status: str
    message: str | None = None


class StatusDetailFilter(BaseModel):
    entity_ids: list[str] | None = None
    statuses: list[str] | None = None
