"""Tests for container teardown."""

import pytest
from unittest.mock import AsyncMock

from conftest import ScriptedExecutor
from vzspawn.errors import CommandExecutionError
from vzspawn.models.state import ProvisioningState
from vzspawn.provisioner.teardown import TeardownController


@pytest.mark.asyncio
class TestTeardownController:
    """Test stop/destroy sequencing."""

    async def test_no_identity_is_noop(self):
        executor = AsyncMock()

        await TeardownController(executor).destroy(ProvisioningState())

        executor.execute.assert_not_called()

    async def test_stop_then_destroy(self):
        executor = ScriptedExecutor()
        state = ProvisioningState(identity="abc-123", address="203.0.113.5", ssh_key="/k")

        await TeardownController(executor).destroy(state)

        assert executor.commands == [
            "/usr/bin/prlctl stop abc-123",
            "/usr/bin/prlctl destroy abc-123",
        ]
        assert state.identity is None
        assert state.address is None
        assert state.ssh_key == "/k"

    async def test_second_destroy_is_noop(self):
        executor = ScriptedExecutor()
        state = ProvisioningState(identity="abc-123")
        controller = TeardownController(executor)

        await controller.destroy(state)
        await controller.destroy(state)

        assert len(executor.commands) == 2

    async def test_stop_failure_propagates(self):
        """Test errors are not swallowed and destroy is not attempted."""
        executor = ScriptedExecutor(
            lambda line: CommandExecutionError(1, "no such container") if " stop " in line else ""
        )
        state = ProvisioningState(identity="abc-123")

        with pytest.raises(CommandExecutionError) as exc_info:
            await TeardownController(executor).destroy(state)

        assert exc_info.value.stderr == "no such container"
        assert executor.commands == ["/usr/bin/prlctl stop abc-123"]
        assert state.identity == "abc-123"

    async def test_destroy_failure_propagates(self):
        executor = ScriptedExecutor(
            lambda line: CommandExecutionError(255, "busy") if " destroy " in line else ""
        )
        state = ProvisioningState(identity="abc-123")

        with pytest.raises(CommandExecutionError):
            await TeardownController(executor).destroy(state)

        assert len(executor.commands) == 2
        assert state.identity == "abc-123"
