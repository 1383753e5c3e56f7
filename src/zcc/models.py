"""Data model shared by the scope stores, the resolver and the fuzzy engine."""

from dataclasses import dataclass, field
from enum import Enum

from .errors import InvalidComponentTypeError, InvalidScopeError
from .metadata import ComponentMetadata


class ComponentType(str, Enum):
    """Kinds of component, each stored in its own plural-named subdirectory."""

    MODE = "mode"
    WORKFLOW = "workflow"
    SCRIPT = "script"
    HOOK = "hook"
    AGENT = "agent"
    COMMAND = "command"
    TEMPLATE = "template"

    @property
    def dir_name(self) -> str:
        return f"{self.value}s"

    @classmethod
    def from_dir_name(cls, dir_name: str) -> "ComponentType":
        return cls(dir_name[:-1])

    @classmethod
    def parse(cls, value: "str | ComponentType") -> "ComponentType":
        """Accept singular or plural type names in any case."""
        if isinstance(value, ComponentType):
            return value
        name = value.strip().lower()
        if name.endswith("s") and name[:-1] in cls._value2member_map_:
            name = name[:-1]
        try:
            return cls(name)
        except ValueError:
            raise InvalidComponentTypeError(value) from None


class Origin(str, Enum):
    """Namespace a resolved component came from."""

    PROJECT = "project"
    GLOBAL = "global"
    BUILTIN = "builtin"

    @property
    def precedence(self) -> int:
        return ORIGIN_PRECEDENCE[self]

    @classmethod
    def parse(cls, value: "str | Origin") -> "Origin":
        if isinstance(value, Origin):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidScopeError(value) from None


ORIGIN_PRECEDENCE = {
    Origin.PROJECT: 3,
    Origin.GLOBAL: 2,
    Origin.BUILTIN: 1,
}

# Lowest to highest; later entries override earlier ones when merging
MERGE_ORDER = [Origin.BUILTIN, Origin.GLOBAL, Origin.PROJECT]


@dataclass(frozen=True)
class ComponentInfo:
    """A component discovered on disk. Identity is ``(name, type)``."""

    name: str
    type: ComponentType
    path: str
    metadata: ComponentMetadata = field(default_factory=ComponentMetadata.empty)
    is_builtin: bool = False

    @property
    def identity(self) -> tuple[str, ComponentType]:
        return (self.name, self.type)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "type": self.type.value,
            "path": self.path,
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class ResolvedComponent:
    """A component paired with the scope it was found in."""

    component: ComponentInfo
    origin: Origin

    @property
    def name(self) -> str:
        return self.component.name


@dataclass
class FuzzyMatch:
    """One ranked result of a fuzzy lookup."""

    name: str
    score: int
    match_type: str  # "exact" | "substring" | "acronym" | "partial"
    origin: Origin
    component: ComponentInfo

    @property
    def resolved(self) -> ResolvedComponent:
        return ResolvedComponent(self.component, self.origin)
