"""Tests for the driver entry points."""

import pytest
from unittest.mock import AsyncMock, Mock, patch

from conftest import ScriptedExecutor
from vzspawn.driver import VzDriver
from vzspawn.errors import CommandExecutionError, InvalidEndpointError
from vzspawn.models.state import ProvisioningState

IP_OUTPUT = "2: eth0    inet 203.0.113.5/24 brd 203.0.113.255 scope global eth0"


@pytest.mark.asyncio
class TestVzDriver:
    """Test create/destroy wiring."""

    async def test_create_uses_instance_name_as_hostname(self, driver_config):
        executor = ScriptedExecutor(lambda line: IP_OUTPUT if "/sbin/ip" in line else "")
        driver = VzDriver(
            driver_config,
            instance_name="default-centos-72",
            platform_name="centos-7.2",
            identity_factory=lambda: "abc-123",
            executor_factory=lambda config: executor,
        )
        state = ProvisioningState()

        with patch("vzspawn.provisioner.orchestrator.ReadinessProbe.wait", new_callable=AsyncMock):
            await driver.create(state)

        assert "--hostname default-centos-72 " in executor.commands[0]
        assert state.identity == "abc-123"
        assert state.address == "203.0.113.5"
        assert executor.closed is True

    async def test_configured_hostname_wins(self, driver_config):
        driver_config.ct_hostname = "web01"
        driver = VzDriver(driver_config, instance_name="default-centos-72", platform_name="centos-7.2")

        assert driver.hostname == "web01"

    async def test_create_closes_executor_on_failure(self, driver_config):
        executor = ScriptedExecutor(lambda line: CommandExecutionError(1, "no space left"))
        driver = VzDriver(
            driver_config,
            instance_name="web",
            platform_name="centos-7.2",
            executor_factory=lambda config: executor,
        )
        state = ProvisioningState()

        with pytest.raises(CommandExecutionError):
            await driver.create(state)

        assert executor.closed is True
        assert state.identity is not None

    async def test_destroy_without_identity_builds_no_executor(self, driver_config):
        factory = Mock()
        driver = VzDriver(driver_config, "web", "centos-7.2", executor_factory=factory)

        await driver.destroy(ProvisioningState())

        factory.assert_not_called()

    async def test_destroy(self, driver_config):
        executor = ScriptedExecutor()
        driver = VzDriver(driver_config, "web", "centos-7.2", executor_factory=lambda config: executor)
        state = ProvisioningState(identity="abc-123", address="203.0.113.5")

        await driver.destroy(state)

        assert executor.commands == [
            "/usr/bin/prlctl stop abc-123",
            "/usr/bin/prlctl destroy abc-123",
        ]
        assert state.identity is None
        assert executor.closed is True

    async def test_bad_endpoint_raises_before_commands(self, driver_config):
        driver_config.socket = "ftp://x"
        driver = VzDriver(driver_config, "web", "centos-7.2")
        state = ProvisioningState()

        with pytest.raises(InvalidEndpointError):
            await driver.create(state)

        assert state.identity is None
