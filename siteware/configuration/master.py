"""Build configuration loading."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from ..core.errors import ConfigError
from ..core.models import BuildConfig

logger = logging.getLogger(__name__)


def load_build_config(config_path: Path) -> BuildConfig:
    """Load and validate the master build configuration.

    Args:
        config_path: Path to ``siteware.master.json``

    Returns:
        Validated build configuration
    """
    try:
        raw = config_path.read_bytes()
    except OSError as exc:
        raise ConfigError(f"Error opening config file {config_path}: {exc}") from exc

    try:
        config = BuildConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigError(f"Error decoding config file {config_path}: {exc}") from exc

    logger.debug(f"Build config: output={config.output}")
    return config
