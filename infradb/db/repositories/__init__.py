"""DAO classes, one per table, sharing the generic operations in `base`."""

from .base import BaseDAO
from .tenants import TenantDAO
from .sites import SiteDAO
from .network_security_groups import NetworkSecurityGroupDAO
from .instances import InstanceDAO
from .interfaces import InterfaceDAO
from .ssh_keys import SSHKeyDAO, SSHKeyAssociationDAO
from .ssh_key_groups import SSHKeyGroupDAO, SSHKeyGroupSiteAssociationDAO, SSHKeyGroupInstanceAssociationDAO
from .dpu_extension_services import DpuExtensionServiceDAO, DpuExtensionServiceDeploymentDAO
from .status_details import StatusDetailDAO

__all__ = [
    "BaseDAO",
    "TenantDAO",
    "SiteDAO",
    "NetworkSecurityGroupDAO",
    "InstanceDAO",
    "InterfaceDAO",
    "SSHKeyDAO",
    "SSHKeyAssociationDAO",
    "SSHKeyGroupDAO",
    "SSHKeyGroupSiteAssociationDAO",
    "SSHKeyGroupInstanceAssociationDAO",
    "DpuExtensionServiceDAO",
    "DpuExtensionServiceDeploymentDAO",
    "StatusDetailDAO",
]
