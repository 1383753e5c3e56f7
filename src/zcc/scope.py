"""Scope store: one mutable component namespace on disk.

A scope root (project ``.zcc/`` or global ``~/.zcc/``) holds an optional
``config.yaml`` and one subdirectory per component type:

    <root>/
        config.yaml
        modes/  workflows/  scripts/  hooks/  agents/  commands/  templates/

Component identity is (file name without extension, subdirectory type).
"""

import logging
from typing import Any

import yaml

from .cache import SimpleCache
from .config import CONFIG_FILE
from .errors import ConfigurationError, FileSystemError
from .filesystem import FileSystem, LocalFileSystem
from .metadata import extract_metadata
from .models import ComponentInfo, ComponentType

logger = logging.getLogger(__name__)

SCOPE_CACHE_TTL = 300.0  # 5 minutes

COMPONENT_DIRS = [component_type.dir_name for component_type in ComponentType]

INITIAL_CONFIG: dict[str, Any] = {
    "ui": {
        "colorOutput": True,
        "verboseLogging": False,
    },
}


def discover_components(
    fs: FileSystem,
    root: str,
    skip_hidden: bool = False,
    builtin: bool = False,
) -> list[ComponentInfo]:
    """
    Scan the type subdirectories of ``root`` (non-recursive).

    Missing subdirectories and unreadable entries are skipped, never raised.

    Args:
        fs: Filesystem to scan
        root: Scope root directory
        skip_hidden: Ignore dotfiles
        builtin: Mark discovered components as built-in

    Returns:
        Components in type-directory order, files sorted by name
    """
    components: list[ComponentInfo] = []

    for dir_name in COMPONENT_DIRS:
        component_dir = fs.join(root, dir_name)
        if not fs.is_dir(component_dir):
            continue

        component_type = ComponentType.from_dir_name(dir_name)
        try:
            entries = fs.listdir(component_dir)
        except OSError as e:
            logger.debug(f"Failed to read {dir_name} directory: {e}")
            continue

        for entry in entries:
            if skip_hidden and entry.startswith("."):
                continue

            file_path = fs.join(component_dir, entry)
            try:
                if not fs.stat(file_path).is_file:
                    continue
            except OSError as e:
                logger.debug(f"Failed to stat {file_path}: {e}")
                continue

            components.append(
                ComponentInfo(
                    name=fs.stem(entry),
                    type=component_type,
                    path=file_path,
                    metadata=extract_metadata(fs, file_path),
                    is_builtin=builtin,
                )
            )

    return components


class ZccScope:
    """Handles a single zcc scope (global or project).

    Loads and saves ``config.yaml`` and discovers components. Results are
    cached for SCOPE_CACHE_TTL seconds; writers outside this class must call
    ``clear_cache()`` after touching the scope directory.
    """

    def __init__(self, scope_path: str, is_global: bool = False, fs: FileSystem | None = None):
        self.fs = fs or LocalFileSystem()
        self.scope_path = str(scope_path)
        self.is_global = is_global
        self.config_path = self.fs.join(self.scope_path, CONFIG_FILE)
        self.cache = SimpleCache(SCOPE_CACHE_TTL)

    @property
    def scope_type(self) -> str:
        return "global" if self.is_global else "project"

    def exists(self) -> bool:
        return self.fs.is_dir(self.scope_path)

    def get_path(self) -> str:
        return self.scope_path

    def get_config(self) -> dict[str, Any] | None:
        """
        Load configuration from config.yaml.

        Returns:
            Config mapping, or None if the file does not exist

        Raises:
            ConfigurationError: If the file exists but is not a valid YAML mapping
        """
        cached = self.cache.get("config")
        if cached is not None:
            return cached

        if not self.fs.is_file(self.config_path):
            return None

        try:
            content = self.fs.read_text(self.config_path)
            config = yaml.safe_load(content)
        except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Failed to parse {self.scope_type} config.yaml: {e}",
                f"Check the YAML syntax in {self.config_path}",
            ) from e

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Failed to parse {self.scope_type} config.yaml: configuration must be a mapping",
                f"Check the YAML syntax in {self.config_path}",
            )

        self.cache.set("config", config)
        return config

    def save_config(self, config: dict[str, Any]) -> None:
        """Write config.yaml, creating the scope directory if needed."""
        try:
            if not self.exists():
                self.fs.mkdir(self.scope_path)
            content = yaml.safe_dump(config, default_flow_style=False, sort_keys=False)
            self.fs.write_text(self.config_path, content)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to save {self.scope_type} config.yaml: {e}",
                f"Check write permissions for {self.config_path}",
            ) from e

        self.cache.invalidate_pattern("config")
        logger.info(f"Configuration saved to {self.scope_type} scope: {self.config_path}")

    def get_components(self) -> list[ComponentInfo]:
        """Discover all components in this scope. Missing scope yields []."""
        cached = self.cache.get("components")
        if cached is not None:
            return cached

        if not self.exists():
            logger.debug(f"No {self.scope_type} scope at {self.scope_path}")
            components: list[ComponentInfo] = []
        else:
            components = discover_components(self.fs, self.scope_path)

        self.cache.set("components", components)
        return components

    def get_component(self, name: str, component_type: ComponentType | str) -> ComponentInfo | None:
        component_type = ComponentType.parse(component_type)
        for component in self.get_components():
            if component.name == name and component.type is component_type:
                return component
        return None

    def get_components_by_type(self, component_type: ComponentType | str) -> list[ComponentInfo]:
        component_type = ComponentType.parse(component_type)
        cache_key = f"components:{component_type.value}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        filtered = [c for c in self.get_components() if c.type is component_type]
        self.cache.set(cache_key, filtered)
        return filtered

    def initialize(self) -> None:
        """
        Create the standard directory layout and a default config. Idempotent.

        Raises:
            FileSystemError: If a directory cannot be created
        """
        try:
            self.fs.mkdir(self.scope_path)
            for dir_name in COMPONENT_DIRS:
                self.fs.mkdir(self.fs.join(self.scope_path, dir_name))
        except OSError as e:
            raise FileSystemError(
                f"Failed to initialize {self.scope_type} scope: {e}", self.scope_path
            ) from e

        if not self.fs.exists(self.config_path):
            self.save_config(INITIAL_CONFIG)

        self.clear_cache()
        logger.info(f"Initialized {self.scope_type} zcc scope: {self.scope_path}")

    def clear_cache(self) -> None:
        self.cache.clear()
