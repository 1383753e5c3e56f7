"""Unit tests for BuiltinComponentProvider."""

import json

import pytest

from zcc.builtin_provider import BuiltinComponentProvider
from zcc.filesystem import MemoryFileSystem
from zcc.metadata import MetadataKind
from zcc.models import ComponentType

from tests.helpers import markdown, write_component

ROOT = "/builtin"


@pytest.fixture
def provider(memory_fs: MemoryFileSystem) -> BuiltinComponentProvider:
    return BuiltinComponentProvider(ROOT, fs=memory_fs)


class TestDirectoryDiscovery:
    """Tests for discovery without a manifest."""

    def test_unavailable_when_missing(self, provider: BuiltinComponentProvider):
        """A missing templates directory yields nothing."""
        assert provider.is_available() is False
        assert provider.get_components() == []

    def test_discovers_and_marks_builtin(self, memory_fs: MemoryFileSystem, provider: BuiltinComponentProvider):
        """Discovered components are flagged as built-in."""
        write_component(memory_fs, ROOT, "mode", "architect", markdown("Designs"))

        components = provider.get_components()

        assert [c.name for c in components] == ["architect"]
        assert components[0].is_builtin is True
        assert components[0].metadata.description == "Designs"

    def test_skips_dotfiles(self, memory_fs: MemoryFileSystem, provider: BuiltinComponentProvider):
        """Hidden files are not components."""
        write_component(memory_fs, ROOT, "mode", ".draft")
        write_component(memory_fs, ROOT, "mode", "visible")

        assert [c.name for c in provider.get_components()] == ["visible"]

    def test_get_components_by_type(self, memory_fs: MemoryFileSystem, provider: BuiltinComponentProvider):
        """Filtering by type returns only that type."""
        write_component(memory_fs, ROOT, "mode", "a")
        write_component(memory_fs, ROOT, "workflow", "b")

        assert [c.name for c in provider.get_components_by_type("workflow")] == ["b"]
        assert provider.get_component("a", ComponentType.MODE) is not None


class TestManifest:
    """Tests for metadata.json loading."""

    def test_manifest_entries_with_files(self, memory_fs: MemoryFileSystem, provider: BuiltinComponentProvider):
        """Manifest entries whose files exist become components."""
        write_component(memory_fs, ROOT, "mode", "architect")
        write_component(memory_fs, ROOT, "hook", "loader", "{}", ext=".json")
        manifest = {
            "templates": {
                "modes": [
                    {"name": "architect", "description": "Designs", "tags": ["design"]},
                    {"name": "ghost", "description": "No file"},
                ],
                "hooks": [{"name": "loader"}],
            }
        }
        memory_fs.write_text(f"{ROOT}/metadata.json", json.dumps(manifest))

        components = {c.name: c for c in provider.get_components()}

        assert set(components) == {"architect", "loader"}
        assert components["architect"].metadata.kind is MetadataKind.JSON
        assert components["architect"].metadata.tags == ["design"]
        assert components["loader"].path == f"{ROOT}/hooks/loader.json"
        assert components["loader"].metadata.get("dependencies") == []

    def test_invalid_manifest_falls_back_to_discovery(self, memory_fs: MemoryFileSystem, provider: BuiltinComponentProvider):
        """A broken manifest is ignored in favor of scanning."""
        write_component(memory_fs, ROOT, "mode", "engineer")
        memory_fs.write_text(f"{ROOT}/metadata.json", "{broken")

        assert [c.name for c in provider.get_components()] == ["engineer"]


class TestCaching:
    """Tests for the provider cache."""

    def test_clear_cache_picks_up_new_files(self, memory_fs: MemoryFileSystem, provider: BuiltinComponentProvider):
        """New templates appear only after clear_cache()."""
        write_component(memory_fs, ROOT, "mode", "one")
        assert len(provider.get_components()) == 1

        write_component(memory_fs, ROOT, "mode", "two")
        assert len(provider.get_components()) == 1

        provider.clear_cache()
        assert len(provider.get_components()) == 2


class TestBundledTemplates:
    """Tests for the templates shipped with the package."""

    def test_bundled_templates_are_available(self):
        """The default provider finds the bundled modes."""
        provider = BuiltinComponentProvider()

        assert provider.is_available()
        names = {c.name for c in provider.get_components_by_type("mode")}
        assert {"architect", "engineer", "reviewer", "autonomous-project-manager"} <= names

    def test_bundled_hook_metadata(self):
        """The bundled JSON hook exposes its nested metadata."""
        hook = BuiltinComponentProvider().get_component("git-context-loader", "hook")

        assert hook is not None
        assert "git" in hook.metadata.tags
