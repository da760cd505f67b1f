"""
vzspawn - Virtuozzo container provisioning over local or SSH transports.

Creates a container on a hypervisor host, sizes it, boots it, bootstraps a
login user and tears it down again.
"""

__version__ = "1.0.0"
__author__ = "vzspawn Development Team"

# Re-export key components for easier access
from vzspawn.driver import VzDriver
from vzspawn.models.config import DriverConfig
from vzspawn.models.state import ProvisioningState

__all__ = [
    "DriverConfig",
    "ProvisioningState",
    "VzDriver",
]
