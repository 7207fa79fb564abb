import uuid
from datetime import datetime
from typing import Any
from pydantic import BaseModel


class SiteConfig(BaseModel):
    native_networking: bool = False
    network_security_group: bool = False
    nvlink_partition: bool = False


class SiteCreate(BaseModel):
    name: str
    display_name: str | None = None
    description: str | None = None
    org: str
    infrastructure_provider_id: uuid.UUID
    site_controller_version: str | None = None
    site_agent_version: str | None = None
    registration_token: str | None = None
    registration_token_expiration: datetime | None = None
    is_infinity_enabled: bool = False
    serial_console_hostname: str | None = None
    is_serial_console_enabled: bool = False
    serial_console_idle_timeout: int | None = None
    serial_console_max_session_length: int | None = None
    status: str
    location: dict[str, Any] | None = None
    config: SiteConfig | None = None
    created_by: uuid.UUID


class SiteUpdate(BaseModel):
    id: uuid.UUID
    name: str | None = None
    display_name: str | None = None
    description: str | None = None
    site_controller_version: str | None = None
    site_agent_version: str | None = None
    registration_token: str | None = None
    registration_token_expiration: datetime | None = None
    is_infinity_enabled: bool | None = None
    serial_console_hostname: str | None = None
    is_serial_console_enabled: bool | None = None
    serial_console_idle_timeout: int | None = None
    serial_console_max_session_length: int | None = None
    status: str | None = None
    location: dict[str, Any] | None = None
    config: SiteConfig | None = None


class SiteFilter(BaseModel):
    site_ids: list[uuid.UUID] | None = None
    names: list[str] | None = None
    orgs: list[str] | None = None
    infrastructure_provider_ids: list[uuid.UUID] | None = None
    statuses: list[str] | None = None
    native_networking: bool | None = None
    network_security_group: bool | None = None
    nvlink_partition: bool | None = None
    search_query: str | None = None
