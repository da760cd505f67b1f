"""Translate the resource configuration into hypervisor commands."""

from typing import List

from vzspawn.hypervisor.commands import HypervisorCommands
from vzspawn.models.config import DriverConfig


class ResourceConfigurator:
    """Emits, in a fixed order, the commands that size a created container."""

    def __init__(self, commands: HypervisorCommands, config: DriverConfig):
        self.commands = commands
        self.config = config

    def network_commands(self, ct_id: str) -> List[str]:
        """Add and configure every interface, then enable filtering once.

        Interfaces are numbered by their position in the configuration. An
        entry without dhcp, ip or gw still gets its set-network command.
        """
        command_lines = []
        for index, (network, settings) in enumerate(self.config.network.items()):
            command_lines.append(self.commands.add_interface(ct_id, index))
            command_lines.append(
                self.commands.set_network(
                    ct_id,
                    network,
                    index,
                    dhcp=settings.dhcp,
                    ip=settings.ip,
                    gw=settings.gw,
                )
            )
        command_lines.append(self.commands.enable_netfilter(ct_id))
        return command_lines

    def cpu_command(self, ct_id: str) -> str:
        return self.commands.set_cpus(ct_id, self.config.customize.cpus)

    def memory_command(self, ct_id: str) -> str:
        return self.commands.set_memory(ct_id, self.config.customize.memory)

    def disk_command(self, ct_id: str) -> str:
        return self.commands.set_disk(ct_id, self.config.customize.disk)
