"""Hypervisor command builders."""

from vzspawn.hypervisor.commands import (
    ADDRESS_PROBE_COMMAND,
    PRLCTL,
    VZCTL,
    HypervisorCommands,
    user_bootstrap_commands,
)

__all__ = [
    "ADDRESS_PROBE_COMMAND",
    "HypervisorCommands",
    "PRLCTL",
    "VZCTL",
    "user_bootstrap_commands",
]
