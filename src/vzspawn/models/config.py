"""Configuration models."""

import os
from typing import Dict, Optional
from pydantic import BaseModel, Field, validator


def _default_key_path(suffix: str = "") -> str:
    return os.path.join(os.getcwd(), ".kitchen", f"kitchen_id_rsa{suffix}")


class NetworkInterfaceSpec(BaseModel):
    """Settings for one container network interface."""
    dhcp: bool = Field(default=False)
    ip: Optional[str] = Field(None, description="Static address, CIDR allowed")
    gw: Optional[str] = Field(None, description="Default gateway")

    class Config:
        """Pydantic config."""
        extra = "forbid"


class CustomizeSpec(BaseModel):
    """Compute and storage sizing."""
    cpus: int = Field(default=2, ge=1)
    memory: str = Field(default="512M")
    disk: str = Field(default="10G")

    class Config:
        """Pydantic config."""
        extra = "forbid"


def _default_network() -> Dict[str, NetworkInterfaceSpec]:
    return {"Bridged": NetworkInterfaceSpec(dhcp=True)}


class DriverConfig(BaseModel):
    """Per-instance driver configuration."""
    socket: str = Field(default="local", description="'local' or ssh://user@host:port")
    username: str = Field(default="kitchen")
    private_key: str = Field(default_factory=_default_key_path)
    public_key: str = Field(default_factory=lambda: _default_key_path(".pub"))
    network: Dict[str, NetworkInterfaceSpec] = Field(default_factory=_default_network)
    use_sudo: bool = Field(default=True)
    arch: str = Field(default="x86_64")
    customize: CustomizeSpec = Field(default_factory=CustomizeSpec)
    ostemplate: Optional[str] = None
    ct_hostname: Optional[str] = Field(None, description="Defaults to the instance name")
    ready_interval: float = Field(default=3.0, gt=0)
    verify_host_key: bool = Field(default=False)

    class Config:
        """Pydantic config."""
        extra = "ignore"

    @validator("username")
    def validate_username(cls, v):
        """Validate login username."""
        if not v or not v.replace("-", "").replace("_", "").isalnum():
            raise ValueError(f"Invalid username: {v!r}")
        return v


class InstanceSpec(BaseModel):
    """A named instance to provision."""
    name: str = Field(..., description="Instance name")
    platform: str = Field(..., description="Platform name, e.g. centos-7.2")
    driver: DriverConfig = Field(default_factory=DriverConfig)

    class Config:
        """Pydantic config."""
        extra = "ignore"


class VzSpawnConfig(BaseModel):
    """Main configuration model."""
    log_level: str = Field(default="INFO")
    state_dir: str = Field(default="./.vzspawn")
    driver: Dict = Field(default_factory=dict, description="Defaults shared by all instances")
    instances: Dict[str, Dict] = Field(default_factory=dict)

    class Config:
        """Pydantic config."""
        extra = "ignore"

    @validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()
