"""Exceptions raised while provisioning or tearing down containers."""

from typing import Optional


class VzSpawnError(Exception):
    """Base class for all vzspawn errors."""
    pass


class InvalidEndpointError(VzSpawnError):
    """Transport endpoint is not ``local`` or a usable ``ssh://`` URI."""
    pass


class CommandExecutionError(VzSpawnError):
    """A local or remote command exited with a nonzero status."""

    def __init__(self, exit_status: Optional[int], stderr: str = "", command: Optional[str] = None):
        self.exit_status = exit_status
        self.stderr = stderr
        self.command = command
        message = f"Command failed with exit status {exit_status}"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(message)


class AddressNotFoundError(VzSpawnError):
    """No IPv4 address could be read from the container."""
    pass


class CredentialIOError(VzSpawnError):
    """The SSH keypair could not be created or read."""
    pass
