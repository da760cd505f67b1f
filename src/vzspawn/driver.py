"""Driver entry points: create and destroy one container."""

import logging
from typing import Callable, Optional

from vzspawn.models.config import DriverConfig
from vzspawn.models.state import ProvisioningState
from vzspawn.provisioner.orchestrator import ProvisioningOrchestrator
from vzspawn.provisioner.teardown import TeardownController
from vzspawn.transport.executor import CommandExecutor, create_executor


logger = logging.getLogger(__name__)


class VzDriver:
    """Creates and destroys the container for one instance.

    Each call builds its own executor and closes it when done, so a remote
    connection lives for exactly one create or destroy run.
    """

    def __init__(
        self,
        config: DriverConfig,
        instance_name: str,
        platform_name: str,
        identity_factory: Optional[Callable[[], str]] = None,
        executor_factory: Callable[[DriverConfig], CommandExecutor] = create_executor,
    ):
        self.config = config
        self.instance_name = instance_name
        self.platform_name = platform_name
        self.identity_factory = identity_factory
        self.executor_factory = executor_factory

    @property
    def hostname(self) -> str:
        return self.config.ct_hostname or self.instance_name

    async def create(self, state: ProvisioningState) -> None:
        """Provision the container; results are written into ``state``."""
        executor = self.executor_factory(self.config)
        try:
            orchestrator = ProvisioningOrchestrator(
                executor,
                self.config,
                platform_name=self.platform_name,
                hostname=self.hostname,
                identity_factory=self.identity_factory,
            )
            await orchestrator.create(state)
        finally:
            await executor.close()

    async def destroy(self, state: ProvisioningState) -> None:
        """Tear down the container recorded in ``state``, if any."""
        if not state.identity:
            logger.debug(f"{self.instance_name}: no container to destroy")
            return

        executor = self.executor_factory(self.config)
        try:
            await TeardownController(executor).destroy(state)
        finally:
            await executor.close()
