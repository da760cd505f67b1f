"""SSH session to the hypervisor host."""

import logging
from typing import Optional
from urllib.parse import urlsplit

import asyncssh

from vzspawn.errors import CommandExecutionError, InvalidEndpointError
from vzspawn.utils.process import CommandResult


logger = logging.getLogger(__name__)

SUPPORTED_SCHEME = "ssh"
DEFAULT_SSH_PORT = 22


class RemoteSession:
    """A lazily opened SSH connection reused for every command of one run.

    Each ``run`` opens a fresh channel on the shared connection and waits for
    the remote exit status before returning. Not safe for concurrent use.
    """

    def __init__(self, endpoint: str, verify_host_key: bool = False):
        parsed = urlsplit(endpoint)
        if parsed.scheme != SUPPORTED_SCHEME:
            raise InvalidEndpointError(
                f"Invalid URI scheme: {parsed.scheme or endpoint!r}. Only 'ssh' is supported."
            )
        if not parsed.hostname:
            raise InvalidEndpointError(f"No host in endpoint: {endpoint!r}")
        try:
            port = parsed.port
        except ValueError as e:
            raise InvalidEndpointError(f"Invalid port in endpoint {endpoint!r}: {e}") from e

        self.endpoint = endpoint
        self.host = parsed.hostname
        self.username: Optional[str] = parsed.username
        self.port = port or DEFAULT_SSH_PORT
        self.verify_host_key = verify_host_key
        self._conn: Optional[asyncssh.SSHClientConnection] = None

    @property
    def connected(self) -> bool:
        return self._conn is not None

    async def connect(self) -> asyncssh.SSHClientConnection:
        """Open the connection on first use and return it."""
        if self._conn is not None:
            return self._conn

        options = {"port": self.port}
        if self.username:
            options["username"] = self.username
        if not self.verify_host_key:
            options["known_hosts"] = None

        try:
            self._conn = await asyncssh.connect(self.host, **options)
        except (asyncssh.Error, OSError) as e:
            logger.error(f"SSH connection to {self.host}:{self.port} failed: {e}")
            raise

        logger.info(f"Connected to {self.host}:{self.port}")
        return self._conn

    async def run(self, command_line: str) -> CommandResult:
        """Run one command on its own channel and wait for it to finish."""
        conn = await self.connect()
        logger.debug(f"Running remote command: {command_line}")

        completed = await conn.run(command_line, check=False)
        stdout = completed.stdout or ""
        stderr = completed.stderr or ""
        if isinstance(stdout, bytes):
            stdout = stdout.decode()
        if isinstance(stderr, bytes):
            stderr = stderr.decode()

        # A missing status means the remote side died on a signal
        if completed.exit_status != 0:
            raise CommandExecutionError(completed.exit_status, stderr, command=command_line)

        return CommandResult(returncode=0, stdout=stdout, stderr=stderr)

    async def close(self):
        """Close the connection if it was ever opened."""
        if self._conn is None:
            return
        self._conn.close()
        await self._conn.wait_closed()
        self._conn = None
        logger.debug(f"Closed connection to {self.host}")

    async def __aenter__(self) -> "RemoteSession":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
