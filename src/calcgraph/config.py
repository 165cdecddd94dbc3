"""Project-level configuration (``calcgraph.yaml``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "calcgraph.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "variables": {},  # default evaluation context
    "logging_enabled": True,
    "logging_fsync": False,
    "logging_tail_bytes": 2_097_152,  # 2 MB
}


def load_config(project_dir: Path) -> dict[str, Any]:
    """Load configuration from ``calcgraph.yaml``, with defaults.

    Args:
        project_dir: Directory holding the config file.

    Returns:
        Merged configuration dict.

    Raises:
        ValueError: If the file is not a mapping or ``variables`` is not a
            mapping.
    """
    config = dict(DEFAULT_CONFIG)
    config_path = Path(project_dir) / CONFIG_FILENAME
    if config_path.exists():
        user_config = yaml.safe_load(config_path.read_text()) or {}
        if not isinstance(user_config, dict):
            raise ValueError(f"{config_path} must contain a mapping")
        config.update(user_config)

    if config.get("variables") is None:
        config["variables"] = {}
    if not isinstance(config["variables"], dict):
        raise ValueError(f"'variables' in {CONFIG_FILENAME} must be a mapping")
    return config


def parse_assignments(items: tuple[str, ...] | list[str]) -> dict[str, Any]:
    """Parse ``name=value`` strings; values are read as YAML scalars.

    ``x=4`` gives ``4``, ``r=0.5`` gives ``0.5``, ``s=abc`` gives ``"abc"``.

    Raises:
        ValueError: If an item has no ``=``.
    """
    values: dict[str, Any] = {}
    for item in items:
        if "=" not in item:
            raise ValueError(f"Invalid assignment: {item!r}. Use name=value.")
        name, raw = item.split("=", 1)
        values[name.strip()] = yaml.safe_load(raw) if raw.strip() else raw
    return values
