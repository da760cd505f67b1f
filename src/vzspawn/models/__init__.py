"""Pydantic models for configuration and validation."""

from vzspawn.models.config import (
    CustomizeSpec,
    DriverConfig,
    InstanceSpec,
    NetworkInterfaceSpec,
    VzSpawnConfig,
)
from vzspawn.models.state import ProvisioningState

__all__ = [
    "CustomizeSpec",
    "DriverConfig",
    "InstanceSpec",
    "NetworkInterfaceSpec",
    "ProvisioningState",
    "VzSpawnConfig",
]
