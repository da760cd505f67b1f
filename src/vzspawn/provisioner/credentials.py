"""SSH keypair used to log into provisioned containers."""

import asyncio
import logging
from pathlib import Path

import asyncssh

from vzspawn.errors import CredentialIOError


logger = logging.getLogger(__name__)

KEY_ALGORITHM = "ssh-rsa"
KEY_SIZE = 2048
KEY_COMMENT = "kitchen_key"


def _generate_keypair(private_path: Path, public_path: Path) -> None:
    key = asyncssh.generate_private_key(KEY_ALGORITHM, comment=KEY_COMMENT, key_size=KEY_SIZE)

    for path, data in (
        (private_path, key.export_private_key("openssh")),
        (public_path, key.export_public_key("openssh")),
    ):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        path.chmod(0o600)


async def ensure_keypair(private_key: str, public_key: str) -> bool:
    """Make sure a keypair exists at the given paths.

    Returns True if a new pair was written. When both files already exist
    nothing is touched.
    """
    private_path = Path(private_key)
    public_path = Path(public_key)

    if await asyncio.to_thread(private_path.exists) and await asyncio.to_thread(public_path.exists):
        logger.debug(f"Reusing keypair {private_path}")
        return False

    logger.info(f"Generating keypair {private_path}")
    try:
        await asyncio.to_thread(_generate_keypair, private_path, public_path)
    except (OSError, asyncssh.KeyGenerationError, asyncssh.KeyExportError) as e:
        raise CredentialIOError(f"Failed to write keypair {private_path}: {e}") from e

    return True


async def read_public_key(public_key: str) -> str:
    """Return the public key line without trailing whitespace."""
    try:
        content = await asyncio.to_thread(Path(public_key).read_text)
    except OSError as e:
        raise CredentialIOError(f"Failed to read public key {public_key}: {e}") from e
    return content.strip()
