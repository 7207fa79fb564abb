"""
SQLAlchemy models for the infrastructure management schema.

Re-exports `Base`, the mixins and every ORM class so callers can use
`from infradb.db import models` and `models.Instance`.
"""

from .base import Base, TimestampMixin, SoftDeleteMixin, install_soft_delete_filter, now_utc

from .tenant import Tenant
from .site import Site
from .network_security_group import NetworkSecurityGroup
from .instance import Instance
from .interface import Interface
from .ssh_key import SSHKey, SSHKeyAssociation
from .ssh_key_group import SSHKeyGroup, SSHKeyGroupSiteAssociation, SSHKeyGroupInstanceAssociation
from .dpu_extension_service import DpuExtensionService, DpuExtensionServiceDeployment
from .status_detail import StatusDetail

__all__ = [
    # base
    "Base",
    "TimestampMixin",
    "SoftDeleteMixin",
    "install_soft_delete_filter",
    "now_utc",
    # tenancy/sites
    "Tenant",
    "Site",
    "NetworkSecurityGroup",
    # compute
    "Instance",
    "Interface",
    # ssh keys
    "SSHKey",
    "SSHKeyAssociation",
    "SSHKeyGroup",
    "SSHKeyGroupSiteAssociation",
    "SSHKeyGroupInstanceAssociation",
    # dpu extension services
    "DpuExtensionService",
    "DpuExtensionServiceDeployment",
    # status
    "StatusDetail",
]
