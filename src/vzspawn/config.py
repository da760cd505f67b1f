"""Configuration and state file management."""

import asyncio
import io
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from pydantic import ValidationError

from vzspawn.models.config import DriverConfig, InstanceSpec, VzSpawnConfig
from vzspawn.models.state import ProvisioningState
from vzspawn.utils.templates import merge_dicts


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "vzspawn.yaml"


class ConfigManager:
    """Loads instance definitions and persists per-instance state."""

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize configuration manager."""
        self.config_file = Path(config_file or DEFAULT_CONFIG_FILE)
        self.yaml = YAML()
        self.yaml.preserve_quotes = True
        self.config: Optional[VzSpawnConfig] = None
        self.instances: Dict[str, InstanceSpec] = {}

    @property
    def state_dir(self) -> Path:
        state_dir = Path(self.config.state_dir if self.config else VzSpawnConfig().state_dir)
        if not state_dir.is_absolute():
            state_dir = self.config_file.parent / state_dir
        return state_dir

    async def load(self):
        """Load the configuration file and resolve every instance."""
        logger.info(f"Loading configuration from {self.config_file}")
        if not self.config_file.exists():
            raise FileNotFoundError(f"Config not found: {self.config_file}")

        try:
            data = await self._read_yaml(self.config_file) or {}
            self.config = VzSpawnConfig(**_plain(data))
        except ValidationError as e:
            logger.error(f"Invalid config: {e}")
            raise

        self.instances.clear()
        for name, spec in self.config.instances.items():
            spec = dict(spec or {})
            if "platform" not in spec:
                raise ValueError(f"Instance {name} has no platform")
            # Instance driver settings override the shared defaults
            driver = merge_dicts(self.config.driver, spec.pop("driver", None) or {})
            self.instances[name] = InstanceSpec(name=name, driver=DriverConfig(**driver), **spec)
            logger.debug(f"Loaded instance {name}")

        logger.info(f"Loaded {len(self.instances)} instance(s)")

    async def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse YAML file."""
        return await asyncio.to_thread(self.yaml.load, file_path)

    def get_instance(self, name: str) -> Optional[InstanceSpec]:
        """Get instance specification by name."""
        return self.instances.get(name)

    def state_file(self, name: str) -> Path:
        return self.state_dir / f"{name}.yaml"

    async def load_state(self, name: str) -> ProvisioningState:
        """Read the saved state for ``name``; empty state if there is none."""
        state_file = self.state_file(name)
        if not await asyncio.to_thread(state_file.exists):
            return ProvisioningState()
        data = await self._read_yaml(state_file) or {}
        return ProvisioningState(**_plain(data))

    async def save_state(self, name: str, state: ProvisioningState):
        """Write ``state`` for ``name``."""
        state_file = self.state_file(name)
        buffer = io.StringIO()
        self.yaml.dump(state.model_dump(), buffer)
        await asyncio.to_thread(lambda: state_file.parent.mkdir(parents=True, exist_ok=True))
        await asyncio.to_thread(state_file.write_text, buffer.getvalue())
        logger.debug(f"Saved state for {name} to {state_file}")

    async def clear_state(self, name: str):
        """Remove the saved state for ``name``."""
        state_file = self.state_file(name)
        if await asyncio.to_thread(state_file.exists):
            await asyncio.to_thread(state_file.unlink)
            logger.debug(f"Removed state file {state_file}")


def _plain(value: Any) -> Any:
    """Convert ruamel's commented containers into plain dicts and lists."""
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value
