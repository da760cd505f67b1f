"""Wait for the SSH daemon inside a container."""

import asyncio
import logging

import asyncssh


logger = logging.getLogger(__name__)


class ReadinessProbe:
    """Blocks until sshd on a host accepts a key-based login.

    There is no upper bound on the wait; wrap ``wait`` in
    ``asyncio.wait_for`` to enforce one.
    """

    def __init__(self, interval: float = 3.0, port: int = 22):
        self.interval = interval
        self.port = port

    async def wait(self, host: str, username: str, private_key: str) -> int:
        """Return the number of attempts it took to log in."""
        attempt = 0
        while True:
            attempt += 1
            try:
                conn = await asyncssh.connect(
                    host,
                    port=self.port,
                    username=username,
                    client_keys=[private_key],
                    known_hosts=None,
                )
            except (asyncssh.Error, OSError) as e:
                logger.debug(f"SSH on {host} not ready (attempt {attempt}): {e}")
                await asyncio.sleep(self.interval)
                continue

            conn.close()
            await conn.wait_closed()
            logger.info(f"SSH on {host} ready after {attempt} attempt(s)")
            return attempt
