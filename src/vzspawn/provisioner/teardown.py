"""Container teardown."""

import logging
from typing import Optional

from vzspawn.hypervisor.commands import HypervisorCommands
from vzspawn.models.state import ProvisioningState
from vzspawn.transport.executor import CommandExecutor


logger = logging.getLogger(__name__)


class TeardownController:
    """Stops and destroys the container recorded in a state record."""

    def __init__(self, executor: CommandExecutor, commands: Optional[HypervisorCommands] = None):
        self.executor = executor
        self.commands = commands or HypervisorCommands()

    async def destroy(self, state: ProvisioningState) -> None:
        """Stop then destroy; a state without identity is left alone.

        The stop is issued even if the container is not running. Errors from
        either command propagate.
        """
        ct_id = state.identity
        if not ct_id:
            logger.debug("No container recorded, nothing to destroy")
            return

        logger.info(f"Destroying container {ct_id}")
        await self.executor.execute(self.commands.stop(ct_id))
        await self.executor.execute(self.commands.destroy(ct_id))

        state.identity = None
        state.address = None
        logger.info(f"Container {ct_id} destroyed")
