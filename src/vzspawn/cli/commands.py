"""Command implementations for CLI."""

import asyncio
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn

from vzspawn.config import ConfigManager
from vzspawn.driver import VzDriver
from vzspawn.models.config import InstanceSpec
from vzspawn.provisioner.orchestrator import platform_major
from vzspawn.utils.logging import setup_logging


console = Console()


async def _load(manager: ConfigManager, name: Optional[str] = None) -> Optional[InstanceSpec]:
    await manager.load()
    setup_logging(manager.config.log_level)
    if name is None:
        return None
    instance = manager.get_instance(name)
    if instance is None:
        raise ValueError(f"Instance {name} not found in {manager.config_file}")
    return instance


async def create_instance(manager: ConfigManager, name: str, timeout: Optional[float] = None):
    """Provision ``name`` and save its state, even when provisioning fails."""
    instance = await _load(manager, name)
    state = await manager.load_state(name)
    if state.identity:
        console.print(f"Instance [cyan]{name}[/cyan] already exists as {state.identity}")
        return

    driver = VzDriver(instance.driver, instance_name=name, platform_name=instance.platform)
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task(f"Creating {name}...", total=None)
            await asyncio.wait_for(driver.create(state), timeout=timeout)
            progress.update(task, completed=True)
    finally:
        # A partially created container still needs its identity for destroy
        if state.identity:
            await manager.save_state(name, state)

    console.print(f"[green]✓[/green] Instance [cyan]{name}[/cyan] ready at {state.address}")


async def destroy_instance(manager: ConfigManager, name: str):
    """Tear down ``name`` and forget its state."""
    instance = await _load(manager, name)
    state = await manager.load_state(name)
    if not state.identity:
        console.print(f"Instance [cyan]{name}[/cyan] has no container")
        return

    driver = VzDriver(instance.driver, instance_name=name, platform_name=instance.platform)
    await driver.destroy(state)
    await manager.clear_state(name)
    console.print(f"[green]✓[/green] Instance [cyan]{name}[/cyan] destroyed")


async def show_status(manager: ConfigManager, name: Optional[str] = None):
    """Print a table of instances and their saved state."""
    await _load(manager, name)
    names = [name] if name else list(manager.instances)

    table = Table(title="Instances")
    table.add_column("Instance", style="cyan")
    table.add_column("Platform")
    table.add_column("Container")
    table.add_column("Address", style="green")
    table.add_column("SSH key", style="dim")

    for instance_name in names:
        state = await manager.load_state(instance_name)
        table.add_row(
            instance_name,
            manager.get_instance(instance_name).platform,
            state.identity or "-",
            state.address or "-",
            state.ssh_key or "-",
        )

    console.print(table)


async def validate_config(manager: ConfigManager):
    """Load the configuration and summarize every instance."""
    await _load(manager)

    table = Table(title=f"Configuration: {manager.config_file}")
    table.add_column("Instance", style="cyan")
    table.add_column("Socket")
    table.add_column("Template")
    table.add_column("CPUs", justify="right")
    table.add_column("Memory", justify="right")
    table.add_column("Disk", justify="right")
    table.add_column("Networks")

    for name, instance in manager.instances.items():
        driver = instance.driver
        table.add_row(
            name,
            driver.socket,
            driver.ostemplate or f"{platform_major(instance.platform)}-{driver.arch}",
            str(driver.customize.cpus),
            driver.customize.memory,
            driver.customize.disk,
            ", ".join(driver.network) or "-",
        )

    console.print(table)
    console.print("[green]✓[/green] Configuration is valid")
