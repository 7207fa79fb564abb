import uuid
from pydantic import BaseModel


class InterfaceCreate(BaseModel):
    instance_id: uuid.UUID
    subnet_id: uuid.UUID | None = None
    vpc_prefix_id: uuid.UUID | None = None
    machine_interface_id: uuid.UUID | None = None
    device: str | None = None
    device_instance: int | None = None
    is_physical: bool = False
    virtual_function_id: int | None = None
    mac_address: str | None = None
    ip_addresses: list[str] | None = None
    status: str
    created_by: uuid.UUID


class InterfaceUpdate(BaseModel):
    id: uuid.UUID
    subnet_id: uuid.UUID | None = None
    vpc_prefix_id: uuid.UUID | None = None
    machine_interface_id: uuid.UUID | None = None
    device: str | None = None
    device_instance: int | None = None
    is_physical: bool | None = None
    virtual_function_id: int | None = None
    mac_address: str | None = None
    ip_addresses: list[str] | None = None
    status: str | None = None


class InterfaceFilter(BaseModel):
    interface_ids: list[uuid.UUID] | None = None
    instance_ids: list[uuid.UUID] | None = None
    subnet_id: uuid.UUID | None = None
    vpc_prefix_id: uuid.UUID | None = None
    device: str | None = None
    device_instance: int | None = None
    is_physical: bool | None = None
    statuses: list[str] | None = None
    # Matches interfaces sharing at least one address
    ip_addresses: list[str] | None = None
