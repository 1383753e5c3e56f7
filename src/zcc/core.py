"""Component resolver.

Central manager for zcc configuration and components. Composes three
sources with fixed precedence:

    project (.zcc/)  >  global (~/.zcc/)  >  built-in (bundled templates)

Components and configuration are both resolved in that order. Writers that
change any scope directory must call ``clear_cache()`` afterwards; there is
no filesystem watching.
"""

import copy
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .builtin_provider import BuiltinComponentProvider
from .cache import SimpleCache
from .config import (
    DEFAULT_CONFIG,
    apply_environment_overrides,
    deep_merge,
    get_nested_value,
    set_nested_value,
    unset_nested_value,
)
from .errors import ComponentNotFoundError
from .filesystem import FileSystem, LocalFileSystem
from .fuzzy_matcher import (
    FuzzyMatchOptions,
    find_matches,
    find_matches_for_mode,
    generate_suggestions,
    ranking_key,
)
from .models import (
    MERGE_ORDER,
    ORIGIN_PRECEDENCE,
    ComponentInfo,
    ComponentType,
    FuzzyMatch,
    Origin,
    ResolvedComponent,
)
from .scope import ZccScope

logger = logging.getLogger(__name__)

CORE_CACHE_TTL = 300.0  # 5 minutes

SCOPE_DIR_NAME = ".zcc"


@dataclass
class ComponentSearchResult:
    """A fuzzy match annotated with every origin sharing its identity."""

    match: FuzzyMatch
    conflicts_with: list[ResolvedComponent] | None = None

    @property
    def name(self) -> str:
        return self.match.name

    @property
    def score(self) -> int:
        return self.match.score

    @property
    def match_type(self) -> str:
        return self.match.match_type

    @property
    def origin(self) -> Origin:
        return self.match.origin

    @property
    def component(self) -> ComponentInfo:
        return self.match.component


@dataclass
class ScopeStatus:
    builtin_available: bool
    builtin_path: str
    builtin_components: int
    global_exists: bool
    global_path: str
    global_components: int
    global_has_config: bool
    project_exists: bool
    project_path: str
    project_components: int
    project_has_config: bool
    total_components: int
    unique_components: int


class ZccCore:
    """Resolves components and configuration across project, global and built-in scopes."""

    def __init__(
        self,
        project_root: str | Path | None = None,
        fs: FileSystem | None = None,
        global_root: str | Path | None = None,
        builtin_provider: BuiltinComponentProvider | None = None,
        environ: dict[str, str] | None = None,
    ):
        """
        Args:
            project_root: Project directory; the project scope is <root>/.zcc
            fs: Filesystem for the mutable scopes (defaults to local disk)
            global_root: Home-like directory; the global scope is <root>/.zcc
            builtin_provider: Built-in source (defaults to bundled templates)
            environ: Environment used for config overrides (defaults to os.environ)
        """
        self.fs = fs or LocalFileSystem()
        self.environ = environ

        project_root = str(project_root or Path.cwd())
        global_root = str(global_root or Path.home())

        self.project_scope = ZccScope(self.fs.join(project_root, SCOPE_DIR_NAME), False, self.fs)
        self.global_scope = ZccScope(self.fs.join(global_root, SCOPE_DIR_NAME), True, self.fs)
        self.builtin_provider = builtin_provider or BuiltinComponentProvider()
        self.cache = SimpleCache(CORE_CACHE_TTL)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def get_config(self) -> dict[str, Any]:
        """
        Get merged configuration: defaults → global → project → environment.

        Raises:
            ConfigurationError: If a present config.yaml cannot be parsed
        """
        cached = self.cache.get("config:merged")
        if cached is not None:
            return copy.deepcopy(cached)

        merged = deep_merge(DEFAULT_CONFIG, self.global_scope.get_config())
        merged = deep_merge(merged, self.project_scope.get_config())
        merged = apply_environment_overrides(merged, self.environ)

        self.cache.set("config:merged", merged)
        return copy.deepcopy(merged)

    def _scope_for(self, is_global: bool) -> ZccScope:
        return self.global_scope if is_global else self.project_scope

    def save_config(self, config: dict[str, Any], is_global: bool = False) -> None:
        self._scope_for(is_global).save_config(config)
        self.cache.invalidate_pattern("config")

    def get_config_value(self, key: str) -> Any:
        """Read a dot-separated key from the merged configuration."""
        return get_nested_value(self.get_config(), key)

    def set_config_value(self, key: str, value: Any, is_global: bool = False) -> None:
        """Set a dot-separated key in one scope's config.yaml."""
        scope = self._scope_for(is_global)
        config = copy.deepcopy(scope.get_config() or {})
        set_nested_value(config, key, value)
        self.save_config(config, is_global)

    def unset_config_value(self, key: str, is_global: bool = False) -> None:
        """Remove a dot-separated key from one scope's config.yaml, if present."""
        scope = self._scope_for(is_global)
        current = scope.get_config()
        if current is None:
            return

        config = copy.deepcopy(current)
        if unset_nested_value(config, key):
            self.save_config(config, is_global)

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def _sources(self) -> list[tuple[Origin, Any]]:
        # Highest precedence first
        return [
            (Origin.PROJECT, self.project_scope),
            (Origin.GLOBAL, self.global_scope),
            (Origin.BUILTIN, self.builtin_provider),
        ]

    def resolve_component(
        self, name: str, component_type: ComponentType | str
    ) -> ResolvedComponent | None:
        """Return the first hit walking project → global → built-in, or None."""
        component_type = ComponentType.parse(component_type)
        for origin, source in self._sources():
            component = source.get_component(name, component_type)
            if component is not None:
                return ResolvedComponent(component, origin)
        return None

    def get_component(self, name: str, component_type: ComponentType | str) -> ComponentInfo | None:
        resolved = self.resolve_component(name, component_type)
        return resolved.component if resolved else None

    def require_component(
        self, name: str, component_type: ComponentType | str
    ) -> ResolvedComponent:
        """
        Resolve a component, treating a miss as an error.

        Raises:
            ComponentNotFoundError: Lists the available names of that type
        """
        component_type = ComponentType.parse(component_type)
        resolved = self.resolve_component(name, component_type)
        if resolved is None:
            available = [c.name for c in self.get_components_by_type(component_type)]
            raise ComponentNotFoundError(component_type.value, name, available)
        return resolved

    def _get_all_components_with_source(self) -> list[ResolvedComponent]:
        """Every component from every source, built-in first."""
        cached = self.cache.get("components:all")
        if cached is not None:
            return cached

        sources = dict(self._sources())
        all_components: list[ResolvedComponent] = []
        for origin in MERGE_ORDER:
            try:
                components = sources[origin].get_components()
            except OSError as e:
                logger.debug(f"Failed to load {origin.value} components: {e}")
                continue
            all_components.extend(ResolvedComponent(c, origin) for c in components)

        logger.debug(f"Collected {len(all_components)} components from all sources")
        self.cache.set("components:all", all_components)
        return all_components

    def _with_type(
        self, components: list[ResolvedComponent], component_type: ComponentType | str | None
    ) -> list[ResolvedComponent]:
        if component_type is None:
            return components
        component_type = ComponentType.parse(component_type)
        return [r for r in components if r.component.type is component_type]

    def get_components_by_type(self, component_type: ComponentType | str) -> list[ComponentInfo]:
        """
        Active components of one type, one per name.

        Entries are inserted built-in, then global, then project, so a later
        insertion for the same name overrides the earlier one.
        """
        by_name: dict[str, ComponentInfo] = {}
        for resolved in self._with_type(self._get_all_components_with_source(), component_type):
            by_name[resolved.component.name] = resolved.component
        return sorted(by_name.values(), key=lambda c: c.name)

    def get_components_by_type_with_source(
        self, component_type: ComponentType | str
    ) -> list[ResolvedComponent]:
        """Every origin's copy, sorted by name then precedence (project first)."""
        return sorted(
            self._with_type(self._get_all_components_with_source(), component_type),
            key=lambda r: (r.component.name, -ORIGIN_PRECEDENCE[r.origin]),
        )

    def list_components(self) -> dict[str, list[ComponentInfo]]:
        return {t.dir_name: self.get_components_by_type(t) for t in ComponentType}

    def list_components_with_source(self) -> dict[str, list[ResolvedComponent]]:
        return {t.dir_name: self.get_components_by_type_with_source(t) for t in ComponentType}

    def get_all_components(self) -> list[ComponentInfo]:
        components: list[ComponentInfo] = []
        for typed in self.list_components().values():
            components.extend(typed)
        return sorted(components, key=lambda c: c.name)

    def get_component_conflicts(
        self, name: str, component_type: ComponentType | str
    ) -> list[ResolvedComponent]:
        """Every origin holding the identity (name, type)."""
        return [
            r
            for r in self._with_type(self._get_all_components_with_source(), component_type)
            if r.component.name == name
        ]

    # -------------------------------------------------------------------------
    # Fuzzy lookup
    # -------------------------------------------------------------------------

    def _annotate(
        self, matches: list[FuzzyMatch], candidates: list[ResolvedComponent]
    ) -> list[ComponentSearchResult]:
        """Keep the highest-precedence match per identity and attach conflicts."""
        by_identity: dict[tuple[str, ComponentType], FuzzyMatch] = {}
        for match in matches:
            key = match.component.identity
            existing = by_identity.get(key)
            if existing is None or ORIGIN_PRECEDENCE[match.origin] > ORIGIN_PRECEDENCE[existing.origin]:
                by_identity[key] = match

        results = []
        for match in sorted(by_identity.values(), key=ranking_key):
            conflicts = [r for r in candidates if r.component.identity == match.component.identity]
            results.append(
                ComponentSearchResult(match, conflicts if len(conflicts) > 1 else None)
            )
        return results

    def find_components(
        self,
        query: str,
        component_type: ComponentType | str | None = None,
        options: FuzzyMatchOptions | None = None,
    ) -> list[ComponentSearchResult]:
        """
        Fuzzy-find components across all scopes.

        Returns:
            One result per identity (highest-precedence origin wins), with
            ``conflicts_with`` set when more than one origin shares it
        """
        candidates = self._with_type(self._get_all_components_with_source(), component_type)
        matches = find_matches(query, candidates, options)
        return self._annotate(matches, candidates)

    def find_components_for_mode(
        self,
        query: str,
        component_type: ComponentType | str | None = None,
        options: FuzzyMatchOptions | None = None,
        non_interactive: bool = False,
    ) -> list[ComponentSearchResult]:
        """
        Like find_components, applying the auto-selection policy.

        In non-interactive mode the result is a single confident match or []
        for an ambiguous query.
        """
        candidates = self._with_type(self._get_all_components_with_source(), component_type)
        options = options or FuzzyMatchOptions()
        auto_select = (
            options.auto_select_best if options.auto_select_best is not None else non_interactive
        )
        if auto_select:
            # Rank distinct identities so a component shadowed in several
            # scopes does not look like an ambiguous runner-up of itself.
            active = {r.component.identity: r for r in candidates}
            ranked = list(active.values())
        else:
            ranked = candidates

        matches = find_matches_for_mode(
            query, ranked, replace(options, auto_select_best=auto_select)
        )
        return self._annotate(matches, candidates)

    def generate_suggestions(
        self,
        query: str,
        component_type: ComponentType | str | None = None,
        max_suggestions: int = 3,
    ) -> list[str]:
        candidates = self._with_type(self._get_all_components_with_source(), component_type)
        return generate_suggestions(query, candidates, max_suggestions)

    # -------------------------------------------------------------------------
    # Scopes and cache
    # -------------------------------------------------------------------------

    def get_scopes(self) -> dict[str, ZccScope]:
        return {"global": self.global_scope, "project": self.project_scope}

    def get_scope_paths(self) -> dict[str, str]:
        return {"global": self.global_scope.get_path(), "project": self.project_scope.get_path()}

    def get_builtin_provider(self) -> BuiltinComponentProvider:
        return self.builtin_provider

    def clear_cache(self) -> None:
        """Invalidate the aggregate cache and every underlying store's cache."""
        self.cache.clear()
        self.global_scope.clear_cache()
        self.project_scope.clear_cache()
        self.builtin_provider.clear_cache()

    def get_status(self) -> ScopeStatus:
        """Summarize availability and component counts of all three scopes."""
        return ScopeStatus(
            builtin_available=self.builtin_provider.is_available(),
            builtin_path=self.builtin_provider.get_templates_path(),
            builtin_components=len(self.builtin_provider.get_components()),
            global_exists=self.global_scope.exists(),
            global_path=self.global_scope.get_path(),
            global_components=len(self.global_scope.get_components()),
            global_has_config=self.global_scope.get_config() is not None,
            project_exists=self.project_scope.exists(),
            project_path=self.project_scope.get_path(),
            project_components=len(self.project_scope.get_components()),
            project_has_config=self.project_scope.get_config() is not None,
            total_components=len(self._get_all_components_with_source()),
            unique_components=len(self.get_all_components()),
        )
