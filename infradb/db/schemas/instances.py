import uuid
from typing import Any
from pydantic import BaseModel


class InstanceBase(BaseModel):
    name: str
    description: str | None = None
    allocation_id: uuid.UUID | None = None
    allocation_constraint_id: uuid.UUID | None = None
    tenant_id: uuid.UUID
    infrastructure_provider_id: uuid.UUID
    site_id: uuid.UUID
    instance_type_id: uuid.UUID | None = None
    network_security_group_id: str | None = None
    network_security_group_propagation_details: dict[str, Any] | None = None
    vpc_id: uuid.UUID
    machine_id: str | None = None
    controller_instance_id: uuid.UUID | None = None
    hostname: str | None = None
    operating_system_id: uuid.UUID | None = None
    ipxe_script: str | None = None
    always_boot_with_custom_ipxe: bool = False
    phone_home_enabled: bool = False
    user_data: str | None = None
    labels: dict[str, str] | None = None
    is_update_pending: bool = False
    infinity_rcr_status: str | None = None
    tpm_ek_certificate: str | None = None
    status: str
    power_status: str | None = None


class InstanceCreate(InstanceBase):
    created_by: uuid.UUID


class InstanceUpdate(BaseModel):
    id: uuid.UUID
    name: str | None = None
    description: str | None = None
    allocation_id: uuid.UUID | None = None
    allocation_constraint_id: uuid.UUID | None = None
    tenant_id: uuid.UUID | None = None
    infrastructure_provider_id: uuid.UUID | None = None
    site_id: uuid.UUID | None = None
    instance_type_id: uuid.UUID | None = None
    network_security_group_id: str | None = None
    network_security_group_propagation_details: dict[str, Any] | None = None
    vpc_id: uuid.UUID | None = None
    machine_id: str | None = None
    controller_instance_id: uuid.UUID | None = None
    hostname: str | None = None
    operating_system_id: uuid.UUID | None = None
    ipxe_script: str | None = None
    always_boot_with_custom_ipxe: bool | None = None
    phone_home_enabled: bool | None = None
    user_data: str | None = None
    labels: dict[str, str] | None = None
    is_update_pending: bool | None = None
    infinity_rcr_status: str | None = None
    tpm_ek_certificate: str | None = None
    status: str | None = None
    power_status: str | None = None
    is_missing_on_site: bool | None = None


class InstanceClear(BaseModel):
    """Flags naming the nullable columns to reset to NULL."""

    id: uuid.UUID
    description: bool = False
    machine_id: bool = False
    controller_instance_id: bool = False
    network_security_group_id: bool = False
    network_security_group_propagation_details: bool = False
    hostname: bool = False
    operating_system_id: bool = False
    ipxe_script: bool = False
    user_data: bool = False
    labels: bool = False
    tpm_ek_certificate: bool = False


class InstanceFilter(BaseModel):
    instance_ids: list[uuid.UUID] | None = None
    names: list[str] | None = None
    allocation_ids: list[uuid.UUID] | None = None
    allocation_constraint_ids: list[uuid.UUID] | None = None
    tenant_ids: list[uuid.UUID] | None = None
    infrastructure_provider_ids: list[uuid.UUID] | None = None
    site_ids: list[uuid.UUID] | None = None
    instance_type_ids: list[uuid.UUID] | None = None
    network_security_group_ids: list[str] | None = None
    vpc_ids: list[uuid.UUID] | None = None
    machine_ids: list[str] | None = None
    controller_instance_ids: list[uuid.UUID] | None = None
    operating_system_ids: list[uuid.UUID] | None = None
    statuses: list[str] | None = None
    search_query: str | None = None
