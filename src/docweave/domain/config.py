from __future__ import annotations

"""
Configuration Domain Management.

Runtime configuration is a plain dictionary built in layers: defaults,
then an optional project-local JSON file, then command-line overrides.
"""

import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
PROJECT_CONFIG_FILE = "docweave.json"

CONFIG_KEYS = ("project_path", "docs_path", "output_path", "simplified_types", "dry_run")
_PATH_KEYS = ("docs_path", "output_path")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Empty `docs_path` / `output_path` are derived from the project path
    during validation.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "project_path": os.getcwd(),
        "docs_path": "",
        "output_path": "",
        "simplified_types": True,
        "dry_run": False,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(project_path: str) -> Dict[str, Any]:
    """
    Load configuration for a project, layering its `docweave.json` over
    the defaults.

    A missing file is not an error. An unreadable or malformed file is
    logged and ignored.

    Args:
        project_path: Crate root that may hold the configuration file.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    config = get_default_config()
    config["project_path"] = project_path

    config_file = os.path.join(project_path, PROJECT_CONFIG_FILE)
    if not os.path.isfile(config_file):
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load project config '{config_file}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.error(f"Project config '{config_file}' must be a JSON object. Using defaults.")
        return config

    unknown = sorted(k for k in data if k not in CONFIG_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown config keys in '{config_file}': {', '.join(unknown)}")

    for key in CONFIG_KEYS:
        if key in data and key != "project_path":
            config[key] = data[key]

    # Paths in the project file are relative to the project, not the cwd
    for key in _PATH_KEYS:
        value = config[key]
        if isinstance(value, str) and value.strip():
            expanded = os.path.expanduser(value.strip())
            if not os.path.isabs(expanded):
                config[key] = os.path.join(project_path, expanded)

    logger.debug(f"Loaded project config from {config_file}")
    return config
