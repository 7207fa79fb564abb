import uuid
from pydantic import BaseModel


class SSHKeyGroupCreate(BaseModel):
    name: str
    description: str | None = None
    org: str
    tenant_id: uuid.UUID
    version: str | None = None
    status: str
    created_by: uuid.UUID


class SSHKeyGroupUpdate(BaseModel):
    id: uuid.UUID
    name: str | None = None
    description: str | None = None
    org: str | None = None
    tenant_id: uuid.UUID | None = None
    version: str | None = None
    status: str | None = None


class SSHKeyGroupFilter(BaseModel):
    ssh_key_group_ids: list[uuid.UUID] | None = None
    names: list[str] | None = None
    tenant_orgs: list[str] | None = None
    tenant_ids: list[uuid.UUID] | None = None
    versions: list[str] | None = None
    statuses: list[str] | None = None
    search_query: str | None = None


class SSHKeyGroupSiteAssociationCreate(BaseModel):
    sshkey_group_id: uuid.UUID
    site_id: uuid.UUID
    version: str | None = None
    status: str
    created_by: uuid.UUID


class SSHKeyGroupSiteAssociationUpdate(BaseModel):
    id: uuid.UUID
    sshkey_group_id: uuid.UUID | None = None
    site_id: uuid.UUID | None = None
    version: str | None = None
    status: str | None = None
    is_missing_on_site: bool | None = None


class SSHKeyGroupSiteAssociationFilter(BaseModel):
    ssh_key_group_ids: list[uuid.UUID] | None = None
    site_ids: list[uuid.UUID] | None = None
    versions: list[str] | None = None
    statuses: list[str] | None = None


class SSHKeyGroupInstanceAssociationCreate(BaseModel):
    ssh_key_group_id: uuid.UUID
    site_id: uuid.UUID
    instance_id: uuid.UUID
    created_by: uuid.UUID


class SSHKeyGroupInstanceAssociationUpdate(BaseModel):
    id: uuid.UUID
    ssh_key_group_id: uuid.UUID | None = None
    site_id: uuid.UUID | None = None
    instance_id: uuid.UUID | None = None


class SSHKeyGroupInstanceAssociationFilter(BaseModel):
    ssh_key_group_ids: list[uuid.UUID] | None = None
    site_ids: list[uuid.UUID] | None = None
    instance_ids: list[uuid.UUID] | None = None
