"""Container creation state machine."""

import asyncio
import logging
import re
import uuid
from enum import Enum
from typing import Callable, Optional

from vzspawn.errors import AddressNotFoundError
from vzspawn.hypervisor.commands import (
    ADDRESS_PROBE_COMMAND,
    HypervisorCommands,
    user_bootstrap_commands,
)
from vzspawn.models.config import DriverConfig
from vzspawn.models.state import ProvisioningState
from vzspawn.provisioner.credentials import ensure_keypair, read_public_key
from vzspawn.provisioner.readiness import ReadinessProbe
from vzspawn.provisioner.resources import ResourceConfigurator
from vzspawn.transport.executor import CommandExecutor


logger = logging.getLogger(__name__)

ADDRESS_PATTERN = re.compile(r"(([0-9]{1,3}\.){3}[0-9]{1,3})/[0-9]{1,2}")
DISCOVERY_ATTEMPTS = 30
DISCOVERY_INTERVAL = 1.0


class ProvisionPhase(Enum):
    """Provisioning progress, in the order phases are reached."""
    UNINITIALIZED = "uninitialized"
    IDENTITY_ASSIGNED = "identity_assigned"
    CREATED = "created"
    NETWORK_CONFIGURED = "network_configured"
    CPU_CONFIGURED = "cpu_configured"
    MEM_CONFIGURED = "mem_configured"
    DISK_CONFIGURED = "disk_configured"
    RUNNING = "running"
    USER_BOOTSTRAPPED = "user_bootstrapped"
    ADDRESS_DISCOVERED = "address_discovered"
    READY = "ready"
    FAILED = "failed"


def _new_identity() -> str:
    return str(uuid.uuid4())


def platform_major(platform_name: str) -> str:
    """``centos-7.2`` -> ``centos-7``."""
    return platform_name.split(".")[0]


class ProvisioningOrchestrator:
    """Drives one container from nothing to a reachable SSH login.

    Any failure leaves the orchestrator in ``FAILED`` and propagates to the
    caller. Nothing is rolled back; call the teardown controller to clean up.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        config: DriverConfig,
        platform_name: str,
        hostname: str,
        commands: Optional[HypervisorCommands] = None,
        probe: Optional[ReadinessProbe] = None,
        identity_factory: Optional[Callable[[], str]] = None,
        discovery_attempts: int = DISCOVERY_ATTEMPTS,
        discovery_interval: float = DISCOVERY_INTERVAL,
    ):
        self.executor = executor
        self.config = config
        self.platform_name = platform_name
        self.hostname = hostname
        self.commands = commands or HypervisorCommands()
        self.resources = ResourceConfigurator(self.commands, config)
        self.probe = probe or ReadinessProbe(interval=config.ready_interval)
        self.identity_factory = identity_factory or _new_identity
        self.discovery_attempts = discovery_attempts
        self.discovery_interval = discovery_interval
        self.phase = ProvisionPhase.UNINITIALIZED
        self.failure: Optional[BaseException] = None

    def _advance(self, phase: ProvisionPhase):
        logger.debug(f"{self.hostname}: {self.phase.value} -> {phase.value}")
        self.phase = phase

    @property
    def ostemplate(self) -> str:
        return self.config.ostemplate or f"{platform_major(self.platform_name)}-{self.config.arch}"

    async def create(self, state: ProvisioningState) -> None:
        """Provision a container and record its identity, address and key in ``state``."""
        try:
            await self._create(state)
        except Exception as e:
            failed_in = self.phase
            self.failure = e
            self._advance(ProvisionPhase.FAILED)
            logger.error(f"Provisioning {self.hostname} failed after {failed_in.value}: {e}")
            raise

    async def _create(self, state: ProvisioningState) -> None:
        await ensure_keypair(self.config.private_key, self.config.public_key)
        state.identity = self.identity_factory()
        state.ssh_key = self.config.private_key
        self._advance(ProvisionPhase.IDENTITY_ASSIGNED)
        ct_id = state.identity

        logger.info(f"Creating container {ct_id} ({self.hostname}) from {self.ostemplate}")
        await self.executor.execute(self.commands.create(ct_id, self.hostname, self.ostemplate))
        self._advance(ProvisionPhase.CREATED)

        # Network must come first so interface numbering is fixed
        for command_line in self.resources.network_commands(ct_id):
            await self.executor.execute(command_line)
        self._advance(ProvisionPhase.NETWORK_CONFIGURED)

        await self.executor.execute(self.resources.cpu_command(ct_id))
        self._advance(ProvisionPhase.CPU_CONFIGURED)

        await self.executor.execute(self.resources.memory_command(ct_id))
        self._advance(ProvisionPhase.MEM_CONFIGURED)

        await self.executor.execute(self.resources.disk_command(ct_id))
        self._advance(ProvisionPhase.DISK_CONFIGURED)

        logger.info(f"Starting container {ct_id}")
        await self.executor.execute(self.commands.start(ct_id))
        self._advance(ProvisionPhase.RUNNING)

        await self.bootstrap_user(ct_id)
        self._advance(ProvisionPhase.USER_BOOTSTRAPPED)

        state.address = await self.discover_address(ct_id)
        self._advance(ProvisionPhase.ADDRESS_DISCOVERED)

        await self.probe.wait(state.address, self.config.username, state.ssh_key)
        self._advance(ProvisionPhase.READY)
        logger.info(f"Container {ct_id} ready at {state.address}")

    async def bootstrap_user(self, ct_id: str) -> None:
        """Create the login user with our public key and passwordless sudo."""
        public_key = await read_public_key(self.config.public_key)
        logger.info(f"Bootstrapping user {self.config.username} in {ct_id}")
        for command in user_bootstrap_commands(self.config.username, public_key):
            await self.executor.execute(self.commands.exec_in(ct_id, command))

    async def discover_address(self, ct_id: str) -> str:
        """Poll the container's eth0 until it reports an IPv4 address."""
        command_line = self.commands.diagnose(ct_id, ADDRESS_PROBE_COMMAND)
        for attempt in range(1, self.discovery_attempts + 1):
            result = await self.executor.execute(command_line)
            match = ADDRESS_PATTERN.search(result.stdout)
            if match:
                logger.debug(f"Found address {match.group(1)} on attempt {attempt}")
                return match.group(1)
            if attempt < self.discovery_attempts:
                await asyncio.sleep(self.discovery_interval)

        raise AddressNotFoundError(
            f"Can't detect an IP for {ct_id} after {self.discovery_attempts} attempts"
        )
