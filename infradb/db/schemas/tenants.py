import uuid
from pydantic import BaseModel


class TenantConfig(BaseModel):
    enable_ssh_access: bool = False
    targeted_instance_creation: bool = False


class TenantCreate(BaseModel):
    name: str
    display_name: str | None = None
    org: str
    org_display_name: str | None = None
    config: TenantConfig | None = None
    created_by: uuid.UUID


class TenantUpdate(BaseModel):
    id: uuid.UUID
    name: str | None = None
    display_name: str | None = None
    org_display_name: str | None = None
    config: TenantConfig | None = None


class TenantFilter(BaseModel):
    tenant_ids: list[uuid.UUID] | None = None
    names: list[str] | None = None
    orgs: list[str] | None = None
    search_query: str | None = None
