"""Local process execution."""

import asyncio
import logging
from dataclasses import dataclass

from vzspawn.errors import CommandExecutionError


logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result from running a command."""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


async def run_shell(command_line: str, check: bool = True) -> CommandResult:
    """Run a shell command line locally and capture its output."""
    logger.debug(f"Running local command: {command_line}")

    process = await asyncio.create_subprocess_shell(
        command_line,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await process.communicate()

    result = CommandResult(
        returncode=process.returncode,
        stdout=stdout.decode(errors="replace") if stdout else "",
        stderr=stderr.decode(errors="replace") if stderr else "",
    )

    if check and not result.success:
        raise CommandExecutionError(result.returncode, result.stderr, command=command_line)

    return result
