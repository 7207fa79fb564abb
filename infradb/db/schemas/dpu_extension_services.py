import uuid
from pydantic import BaseModel


class DpuExtensionServiceCreate(BaseModel):
    name: str
    description: str | None = None
    service_type: str
    site_id: uuid.UUID
    tenant_id: uuid.UUID
    version: str | None = None
    status: str
    created_by: uuid.UUID


class DpuExtensionServiceUpdate(BaseModel):
    id: uuid.UUID
    name: str | None = None
    description: str | None = None
    version: str | None = None
    status: str | None = None


class DpuExtensionServiceFilter(BaseModel):
    dpu_extension_service_ids: list[uuid.UUID] | None = None
    site_ids: list[uuid.UUID] | None = None
    tenant_ids: list[uuid.UUID] | None = None
    service_types: list[str] | None = None
    statuses: list[str] | None = None
    search_query: str | None = None


class DpuExtensionServiceDeploymentCreate(BaseModel):
    site_id: uuid.UUID
    tenant_id: uuid.UUID
    instance_id: uuid.UUID
    dpu_extension_service_id: uuid.UUID
    version: str | None = None
    status: str
    created_by: uuid.UUID


class DpuExtensionServiceDeploymentUpdate(BaseModel):
    """Deployments only ever change status after creation."""

    id: uuid.UUID
    status: str | None = None


class DpuExtensionServiceDeploymentFilter(BaseModel):
    dpu_extension_service_deployment_ids: list[uuid.UUID] | None = None
    site_ids: list[uuid.UUID] | None = None
    tenant_ids: list[uuid.UUID] | None = None
    instance_ids: list[uuid.UUID] | None = None
    dpu_extension_service_ids: list[uuid.UUID] | None = None
    versions: list[str] | None = None
    statuses: list[str] | None = None
    search_query: str | None = None
