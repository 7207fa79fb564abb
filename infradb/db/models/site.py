import uuid
from sqlalchemy import Column, String, Text, Boolean, Integer, DateTime, Index
from sqlalchemy.dialects.postgresql import UUID

from .base import Base, TimestampMixin, SoftDeleteMixin
from ..types import JSONDocument

SITE_RELATION_NAME = "Site"

SITE_STATUS_PENDING = "Pending"
SITE_STATUS_REGISTERED = "Registered"
SITE_STATUS_ERROR = "Error"


class Site(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = 'site'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    org = Column(String(255), nullable=False)
    infrastructure_provider_id = Column(UUID(as_uuid=True), nullable=False)
    site_controller_version = Column(String(64), nullable=True)
    site_agent_version = Column(String(64), nullable=True)
    registration_token = Column(String(255), nullable=True)
    registration_token_expiration = Column(DateTime(timezone=True), nullable=True)
    is_infinity_enabled = Column(Boolean, nullable=False, default=False)
    serial_console_hostname = Column(String(255), nullable=True)
    is_serial_console_enabled = Column(Boolean, nullable=False, default=False)
    serial_console_idle_timeout = Column(Integer, nullable=True)
    serial_console_max_session_length = Column(Integer, nullable=True)
    status = Column(String(32), nullable=False)
    location = Column(JSONDocument, nullable=True)
    # {"native_networking": bool, "network_security_group": bool, "nvlink_partition": bool}
    config = Column(JSONDocument, nullable=False, default=lambda: {})
    created_by = Column(UUID(as_uuid=True), nullable=False)

    __table_args__ = (
        Index('idx_site_org', 'org'),
        Index('idx_site_infrastructure_provider_id', 'infrastructure_provider_id'),
        Index('idx_site_created', 'created'),
    )
