"""Configuration loading and management."""

import os
from pathlib import Path
from typing import Optional

import structlog
import yaml

from .config_models import JotConfig

logger = structlog.get_logger()

APP_NAME = "jot"
CONFIG_FILE = "config.yaml"


def config_locations() -> list[Path]:
    """Candidate config files, most specific first."""
    locations = []
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        locations.append(Path(xdg) / APP_NAME / CONFIG_FILE)
    locations.append(Path.home() / f".{APP_NAME}" / CONFIG_FILE)
    return locations


def default_config_path() -> Path:
    return Path.home() / f".{APP_NAME}" / CONFIG_FILE


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    for loc in config_locations():
        if loc.exists():
            return loc
    return None


def load_config(config_path: Optional[Path] = None) -> JotConfig:
    """Load configuration as Pydantic model with validation.

    Raises:
        ValueError: If the file is not valid YAML or fails validation
    """
    path = config_path or find_config()
    data = {}
    if path and path.exists():
        logger.debug("config_found", path=str(path))
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
    else:
        logger.warning("config_not_found", using="defaults")

    try:
        config = JotConfig.from_dict(data)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")
    config.location = path or default_config_path()
    return config


def save_config(config: JotConfig, path: Optional[Path] = None) -> Path:
    """Write config as YAML to path (default: where it was loaded from)."""
    path = path or config.location or default_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False)
    logger.debug("config_saved", path=str(path))
    return path
