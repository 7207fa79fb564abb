import uuid
from pydantic import BaseModel, ConfigDict


class NetworkSecurityGroupRule(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    direction: str = "INGRESS"
    protocol: str = "ANY"
    action: str = "PERMIT"
    priority: int = 0
    source_prefix: str | None = None
    destination_prefix: str | None = None
    source_port_range: str | None = None
    destination_port_range: str | None = None


class NetworkSecurityGroupCreate(BaseModel):
    # Leave unset to generate a UUID string
    id: str | None = None
    name: str
    description: str | None = None
    site_id: uuid.UUID
    tenant_org: str
    tenant_id: uuid.UUID
    status: str
    stateful_egress: bool = False
    rules: list[NetworkSecurityGroupRule | None] | None = None
    labels: dict[str, str] | None = None
    version: str | None = None
    created_by: uuid.UUID


class NetworkSecurityGroupUpdate(BaseModel):
    id: str
    name: str | None = None
    description: str | None = None
    status: str | None = None
    stateful_egress: bool | None = None
    rules: list[NetworkSecurityGroupRule | None] | None = None
    labels: dict[str, str] | None = None
    version: str | None = None
    updated_by: uuid.UUID | None = None


class NetworkSecurityGroupFilter(BaseModel):
    network_security_group_ids: list[str] | None = None
    site_ids: list[uuid.UUID] | None = None
    tenant_ids: list[uuid.UUID] | None = None
    tenant_orgs: list[str] | None = None
    name: str | None = None
    statuses: list[str] | None = None
    search_query: str | None = None
