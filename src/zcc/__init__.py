"""zcc - layered component resolution with fuzzy lookup."""

from .core import ComponentSearchResult, ZccCore
from .errors import ConfigurationError, ZccError
from .fuzzy_matcher import FuzzyMatchOptions
from .models import ComponentInfo, ComponentType, FuzzyMatch, Origin, ResolvedComponent
from .scope import ZccScope

__version__ = "0.1.0"

__all__ = [
    "ComponentInfo",
    "ComponentSearchResult",
    "ComponentType",
    "ConfigurationError",
    "FuzzyMatch",
    "FuzzyMatchOptions",
    "Origin",
    "ResolvedComponent",
    "ZccCore",
    "ZccError",
    "ZccScope",
    "__version__",
]
