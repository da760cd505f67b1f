"""Local and SSH command transports."""

from vzspawn.transport.executor import (
    CommandExecutor,
    LocalExecutor,
    RemoteExecutor,
    create_executor,
)
from vzspawn.transport.session import RemoteSession

__all__ = [
    "CommandExecutor",
    "LocalExecutor",
    "RemoteExecutor",
    "RemoteSession",
    "create_executor",
]
