"""Provisioning state record."""

from typing import Optional
from pydantic import BaseModel


class ProvisioningState(BaseModel):
    """Mutable state shared between create and destroy.

    Owned by the caller. The driver writes ``identity``, ``address`` and
    ``ssh_key`` into it but never persists it.
    """
    identity: Optional[str] = None
    address: Optional[str] = None
    ssh_key: Optional[str] = None

    class Config:
        """Pydantic config."""
        extra = "allow"
        validate_assignment = True
