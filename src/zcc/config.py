"""zcc Configuration

Configuration model shared by the scope stores and the resolver.

Each scope root (project ``.zcc/`` and global ``~/.zcc/``) may hold one
``config.yaml``. Absence means "no overrides".

Configuration Loading Order (later overrides earlier):
1. Default values (DEFAULT_CONFIG)
2. Global config.yaml
3. Project config.yaml
4. Environment variable overrides

Environment Variables:
    ZCC_DEFAULT_MODE: Override defaultMode
    ZCC_COLOR_OUTPUT: Override ui.colorOutput ("true" enables, anything else disables)
    ZCC_VERBOSE: Override ui.verboseLogging ("true" enables, anything else disables)

Configuration Schema:
    defaultMode: str - Mode activated when none is requested
    preferredWorkflows: list[str] - Workflows offered first
    customTemplateSources: list[str] - Extra template locations
    integrations: dict - Free-form integration settings
    ui:
        colorOutput: bool - Colorize CLI output (default: true)
        verboseLogging: bool - Debug logging (default: false)
    components:
        modes: list[str] - Installed modes
        workflows: list[str] - Installed workflows
"""

import copy
import logging
import os
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.yaml"

ENV_DEFAULT_MODE = "ZCC_DEFAULT_MODE"
ENV_COLOR_OUTPUT = "ZCC_COLOR_OUTPUT"
ENV_VERBOSE = "ZCC_VERBOSE"

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "ui": {
        "colorOutput": True,
        "verboseLogging": False,
    },
}

KNOWN_KEYS = {
    "defaultMode",
    "preferredWorkflows",
    "customTemplateSources",
    "integrations",
    "ui",
    "components",
}


def deep_merge(base: dict[str, Any], override: dict[str, Any] | None) -> dict[str, Any]:
    """
    Deep merge override dict into base dict.

    Nested dicts are merged key-wise. An empty (None) override for a dict
    section is no override. Every other value, lists included, replaces the
    base value wholesale.

    Args:
        base: Base dictionary (lower precedence)
        override: Override dictionary (higher precedence), None means no overrides

    Returns:
        New merged dictionary; neither input is modified
    """
    result = copy.deepcopy(base)
    if not override:
        return result
    for key, value in override.items():
        if key in result and isinstance(result[key], dict):
            if value is None:
                continue
            if isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
                continue
        result[key] = copy.deepcopy(value)
    return result


def _ui_section(config: dict[str, Any]) -> dict[str, Any]:
    # "ui:" with no value loads as None
    if not isinstance(config.get("ui"), dict):
        config["ui"] = {}
    return config["ui"]


def apply_environment_overrides(
    config: dict[str, Any], environ: dict[str, str] | None = None
) -> dict[str, Any]:
    """
    Apply the three supported environment variable overrides.

    Args:
        config: Merged file configuration
        environ: Environment mapping (defaults to os.environ)

    Returns:
        New configuration with overrides applied
    """
    env = os.environ if environ is None else environ
    result = copy.deepcopy(config)

    default_mode = env.get(ENV_DEFAULT_MODE)
    if default_mode:
        result["defaultMode"] = default_mode
        logger.debug(f"defaultMode override from env: {default_mode}")

    color_output = env.get(ENV_COLOR_OUTPUT)
    if color_output is not None:
        _ui_section(result)["colorOutput"] = color_output == "true"

    verbose = env.get(ENV_VERBOSE)
    if verbose is not None:
        _ui_section(result)["verboseLogging"] = verbose == "true"

    return result


def get_nested_value(config: dict[str, Any], key: str) -> Any:
    """Look up a dot-separated key (e.g. ``ui.colorOutput``); None if absent."""
    current: Any = config
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


def set_nested_value(config: dict[str, Any], key: str, value: Any) -> None:
    """Set a dot-separated key in place, creating intermediate dicts."""
    *parents, last = key.split(".")
    current = config
    for part in parents:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[last] = value


def unset_nested_value(config: dict[str, Any], key: str) -> bool:
    """
    Remove a dot-separated key in place.

    Returns:
        True if something was removed
    """
    *parents, last = key.split(".")
    current: Any = config
    for part in parents:
        if not isinstance(current, dict) or part not in current:
            return False
        current = current[part]
    if isinstance(current, dict) and last in current:
        del current[last]
        return True
    return False


@dataclass
class ValidationResult:
    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.valid = False
        self.errors.append(message)


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def validate_config(config: Any) -> ValidationResult:
    """
    Check the types of known configuration fields.

    Unknown top-level keys produce warnings, not errors.
    """
    result = ValidationResult()

    if not isinstance(config, dict):
        result.error("Configuration must be a mapping")
        return result

    for key in config:
        if key not in KNOWN_KEYS:
            result.warnings.append(f"Unknown configuration key: {key}")

    if "defaultMode" in config and not isinstance(config["defaultMode"], str):
        result.error("defaultMode must be a string")

    for key in ("preferredWorkflows", "customTemplateSources"):
        if key in config and not _is_string_list(config[key]):
            result.error(f"{key} must be a list of strings")

    if "integrations" in config and not isinstance(config["integrations"], dict):
        result.error("integrations must be a mapping")

    ui = config.get("ui")
    if ui is not None:
        if not isinstance(ui, dict):
            result.error("ui must be a mapping")
        else:
            for key in ("colorOutput", "verboseLogging"):
                if key in ui and not isinstance(ui[key], bool):
                    result.error(f"ui.{key} must be a boolean")

    components = config.get("components")
    if components is not None:
        if not isinstance(components, dict):
            result.error("components must be a mapping")
        else:
            for key in ("modes", "workflows"):
                if key in components and not _is_string_list(components[key]):
                    result.error(f"components.{key} must be a list of strings")

    return result
