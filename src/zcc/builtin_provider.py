"""Built-in component provider.

Serves the read-only templates bundled with the package. Exposes the same
component-discovery methods as ZccScope but has no config.

Components come from ``metadata.json`` at the templates root when present:

    {
      "templates": {
        "modes": [{"name": "architect", "description": "...", "tags": [...]}],
        ...
      }
    }

Otherwise the type subdirectories are scanned, exactly as for a scope.
"""

import json
import logging
from pathlib import Path

from .cache import SimpleCache
from .filesystem import FileSystem, LocalFileSystem
from .metadata import ComponentMetadata, MetadataKind
from .models import ComponentInfo, ComponentType
from .scope import discover_components

logger = logging.getLogger(__name__)

BUILTIN_CACHE_TTL = 600.0  # 10 minutes, bundled templates rarely change

MANIFEST_FILE = "metadata.json"

DEFAULT_TEMPLATES_PATH = Path(__file__).parent / "templates"

# Preferred extensions per type, first is the most common
EXPECTED_EXTENSIONS = {
    ComponentType.MODE: [".md"],
    ComponentType.WORKFLOW: [".md"],
    ComponentType.AGENT: [".md"],
    ComponentType.COMMAND: [".md"],
    ComponentType.HOOK: [".json", ".yaml", ".yml"],
    ComponentType.SCRIPT: [".sh", ".bash", ".js", ".py"],
    ComponentType.TEMPLATE: [".md", ".txt", ".json", ".yaml", ".yml"],
}


class BuiltinComponentProvider:
    """Provides access to built-in components from the templates directory."""

    def __init__(self, templates_path: str | Path | None = None, fs: FileSystem | None = None):
        self.fs = fs or LocalFileSystem()
        self.templates_path = str(templates_path or DEFAULT_TEMPLATES_PATH)
        self.manifest_path = self.fs.join(self.templates_path, MANIFEST_FILE)
        self.cache = SimpleCache(BUILTIN_CACHE_TTL)

    def is_available(self) -> bool:
        return self.fs.is_dir(self.templates_path)

    def get_templates_path(self) -> str:
        return self.templates_path

    def get_components(self) -> list[ComponentInfo]:
        """Get all built-in components, manifest first, directory scan as fallback."""
        cached = self.cache.get("components")
        if cached is not None:
            return cached

        components = self._load_from_manifest()
        if not components and self.is_available():
            components = discover_components(
                self.fs, self.templates_path, skip_hidden=True, builtin=True
            )

        logger.debug(f"Loaded {len(components)} built-in components from {self.templates_path}")
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

    def clear_cache(self) -> None:
        self.cache.clear()

    def _load_from_manifest(self) -> list[ComponentInfo]:
        """Load components listed in metadata.json whose files exist."""
        if not self.fs.is_file(self.manifest_path):
            return []

        try:
            manifest = json.loads(self.fs.read_text(self.manifest_path))
        except (ValueError, OSError) as e:
            logger.debug(f"Failed to parse {MANIFEST_FILE}: {e}")
            return []

        templates = manifest.get("templates") if isinstance(manifest, dict) else None
        if not isinstance(templates, dict):
            return []

        components: list[ComponentInfo] = []
        for component_type in ComponentType:
            for entry in templates.get(component_type.dir_name) or []:
                if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
                    continue

                template_path = self._find_template_path(entry["name"], component_type)
                if template_path is None:
                    logger.debug(
                        f"Skipping {component_type.value} '{entry['name']}': template file missing"
                    )
                    continue

                fields = {"tags": [], "dependencies": [], **entry}
                components.append(
                    ComponentInfo(
                        name=entry["name"],
                        type=component_type,
                        path=template_path,
                        metadata=ComponentMetadata(kind=MetadataKind.JSON, fields=fields),
                        is_builtin=True,
                    )
                )

        return components

    def _find_template_path(self, name: str, component_type: ComponentType) -> str | None:
        type_dir = self.fs.join(self.templates_path, component_type.dir_name)
        for ext in EXPECTED_EXTENSIONS[component_type]:
            candidate = self.fs.join(type_dir, f"{name}{ext}")
            if self.fs.is_file(candidate):
                return candidate
        return None
