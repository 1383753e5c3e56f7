"""Error types for zcc.

Every error carries a machine-readable ``code`` and an optional human
``suggestion`` so the CLI can print a remediation hint next to the message.
"""

COMPONENT_TYPE_NAMES = ["mode", "workflow", "agent", "script", "hook", "command", "template"]
SCOPE_NAMES = ["builtin", "global", "project"]


class ZccError(Exception):
    """Base class for all zcc errors."""

    def __init__(self, message: str, code: str, suggestion: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.suggestion = suggestion


class FileSystemError(ZccError):
    """Raised when a filesystem operation fails."""

    def __init__(self, message: str, path: str, suggestion: str | None = None):
        super().__init__(
            message,
            "FS_ERROR",
            suggestion or f"Check if you have write permissions for: {path}",
        )
        self.path = path


class ConfigurationError(ZccError):
    """Raised when a config file exists but cannot be parsed or written."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            message,
            "CONFIG_ERROR",
            suggestion or 'Run "zcc config list" to view current configuration',
        )


class ValidationError(ZccError):
    """Raised when a value fails validation."""

    def __init__(self, message: str, field: str, suggestion: str | None = None):
        super().__init__(
            message,
            "VALIDATION_ERROR",
            suggestion or f"Check the format of: {field}",
        )
        self.field = field


class ComponentNotFoundError(ZccError):
    """Raised by callers that treat a resolution miss as fatal."""

    def __init__(
        self,
        component_type: str,
        component_name: str,
        available: list[str] | None = None,
    ):
        if available:
            listed = ", ".join(available[:5])
            if len(available) > 5:
                listed += "..."
            suggestion = (
                f"Available {component_type}s: {listed}.\n"
                f"Try: zcc list --type {component_type}"
            )
        else:
            suggestion = f"Try: zcc list --type {component_type} to see available components"

        super().__init__(
            f"{component_type.capitalize()} '{component_name}' not found.",
            "COMPONENT_NOT_FOUND",
            suggestion,
        )
        self.component_type = component_type
        self.component_name = component_name


class InvalidComponentTypeError(ZccError):
    """Raised when a component type name is not recognised."""

    def __init__(self, provided_type: str):
        super().__init__(
            f"Invalid component type: '{provided_type}'",
            "INVALID_COMPONENT_TYPE",
            f"Valid types are: {', '.join(COMPONENT_TYPE_NAMES)} (plural forms also accepted)",
        )


class InvalidScopeError(ZccError):
    """Raised when a scope name is not recognised."""

    def __init__(self, provided_scope: str):
        super().__init__(
            f"Invalid scope: '{provided_scope}'",
            "INVALID_SCOPE",
            f"Valid scopes are: {', '.join(SCOPE_NAMES)}",
        )
