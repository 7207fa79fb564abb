import uuid
from sqlalchemy import Column, String, Boolean, Integer, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from .base import Base, TimestampMixin, SoftDeleteMixin
from ..types import StringArray

INTERFACE_STATUS_PENDING = "Pending"
INTERFACE_STATUS_PROVISIONING = "Provisioning"
INTERFACE_STATUS_READY = "Ready"
INTERFACE_STATUS_ERROR = "Error"
INTERFACE_STATUS_DELETING = "Deleting"


class Interface(TimestampMixin, SoftDeleteMixin, Base):
    """A network interface attached to an Instance."""

    __tablename__ = 'interface'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    instance_id = Column(UUID(as_uuid=True), ForeignKey('instance.id'), nullable=False)
    subnet_id = Column(UUID(as_uuid=True), nullable=True)
    vpc_prefix_id = Column(UUID(as_uuid=True), nullable=True)
    machine_interface_id = Column(UUID(as_uuid=True), nullable=True)
    device = Column(String(255), nullable=True)
    device_instance = Column(Integer, nullable=True)
    is_physical = Column(Boolean, nullable=False, default=False)
    virtual_function_id = Column(Integer, nullable=True)
    mac_address = Column(String(32), nullable=True)
    ip_addresses = Column(StringArray, nullable=True)
    status = Column(String(32), nullable=False)
    created_by = Column(UUID(as_uuid=True), nullable=False)

    instance = relationship("Instance", back_populates="interfaces")

    __table_args__ = (
        Index('idx_interface_instance_id', 'instance_id'),
    )
