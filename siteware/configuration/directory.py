"""Per-directory configuration loading and caching."""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from ..core.errors import ConfigError
from ..core.layout import DIR_CONFIG_FILE_NAME
from ..core.models import DEFAULT_DIRECTORY_CONFIG, DirectoryConfig, FileConfig

logger = logging.getLogger(__name__)

_DIRECTORY_CONFIG_ADAPTER = TypeAdapter(Optional[dict[str, FileConfig]])


def load_directory_config(config_path: Path) -> DirectoryConfig:
    """Decode a directory configuration file.

    Args:
        config_path: Path to a ``siteware.json`` file

    Returns:
        Read-only mapping of file name to file configuration
    """
    try:
        raw = config_path.read_bytes()
    except OSError as exc:
        raise ConfigError(f"Error reading config file {config_path}: {exc}") from exc

    try:
        entries = _DIRECTORY_CONFIG_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise ConfigError(f"Error decoding config file {config_path}: {exc}") from exc

    # A null document is an empty configuration
    return MappingProxyType(entries or {})


class DirectoryConfigResolver:
    """Resolves and caches directory configuration for one build.

    The first resolution of a directory is authoritative; later lookups
    never touch the filesystem again. Directories without a configuration
    file share the empty default.
    """

    def __init__(self, file_name: str = DIR_CONFIG_FILE_NAME) -> None:
        self.file_name = file_name
        self._cache: dict[Path, DirectoryConfig] = {}

    def is_cached(self, directory: Path) -> bool:
        return directory in self._cache

    def resolve(self, directory: Path) -> DirectoryConfig:
        cached = self._cache.get(directory)
        if cached is not None:
            return cached

        config_path = directory / self.file_name
        if config_path.exists():
            logger.debug(f"Loading directory config: {config_path}")
            config = load_directory_config(config_path)
        else:
            config = DEFAULT_DIRECTORY_CONFIG

        self._cache[directory] = config
        return config

    def __len__(self) -> int:
        return len(self._cache)
