import uuid
from datetime import datetime
from pydantic import BaseModel


class SSHKeyCreate(BaseModel):
    name: str
    org: str
    tenant_id: uuid.UUID
    public_key: str
    fingerprint: str | None = None
    expires: datetime | None = None
    created_by: uuid.UUID


class SSHKeyUpdate(BaseModel):
    id: uuid.UUID
    name: str | None = None
    expires: datetime | None = None


class SSHKeyFilter(BaseModel):
    ssh_key_ids: list[uuid.UUID] | None = None
    ssh_key_group_ids: list[uuid.UUID] | None = None
    names: list[str] | None = None
    tenant_orgs: list[str] | None = None
    tenant_ids: list[uuid.UUID] | None = None
    fingerprints: list[str] | None = None
    expires: datetime | None = None
    search_query: str | None = None


class SSHKeyAssociationCreate(BaseModel):
    ssh_key_id: uuid.UUID
    sshkey_group_id: uuid.UUID
    created_by: uuid.UUID


class SSHKeyAssociationUpdate(BaseModel):
    id: uuid.UUID
    ssh_key_id: uuid.UUID | None = None
    sshkey_group_id: uuid.UUID | None = None


class SSHKeyAssociationFilter(BaseModel):
    ssh_key_ids: list[uuid.UUID] | None = None
    ssh_key_group_ids: list[uuid.UUID] | None = None
