"""Command executors for local and remote hypervisor hosts."""

import logging
from abc import ABC, abstractmethod

from vzspawn.models.config import DriverConfig
from vzspawn.transport.session import RemoteSession
from vzspawn.utils.process import CommandResult, run_shell


logger = logging.getLogger(__name__)

LOCAL_SOCKET = "local"
SUDO_PREFIX = "sudo -E "


class CommandExecutor(ABC):
    """Runs a command line on the hypervisor host."""

    @abstractmethod
    async def execute(self, command_line: str) -> CommandResult:
        """Run the command and return its result.

        Raises CommandExecutionError on a nonzero exit status.
        """
        pass

    async def close(self):
        """Release any transport resources."""
        pass


class LocalExecutor(CommandExecutor):
    """Runs commands as local child processes."""

    async def execute(self, command_line: str) -> CommandResult:
        result = await run_shell(command_line)
        if result.stdout:
            logger.debug(result.stdout.rstrip())
        return result


class RemoteExecutor(CommandExecutor):
    """Runs commands over a shared SSH session."""

    def __init__(self, session: RemoteSession, use_sudo: bool = True):
        self.session = session
        self.use_sudo = use_sudo

    async def execute(self, command_line: str) -> CommandResult:
        if self.use_sudo:
            command_line = SUDO_PREFIX + command_line
        result = await self.session.run(command_line)
        if result.stdout:
            logger.debug(result.stdout.rstrip())
        return result

    async def close(self):
        await self.session.close()


def create_executor(config: DriverConfig) -> CommandExecutor:
    """Pick the executor for ``config.socket``.

    Raises InvalidEndpointError for anything other than ``local`` or an
    ``ssh://`` URI.
    """
    if config.socket == LOCAL_SOCKET:
        return LocalExecutor()
    session = RemoteSession(config.socket, verify_host_key=config.verify_host_key)
    return RemoteExecutor(session, use_sudo=config.use_sudo)
