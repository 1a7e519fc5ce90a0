"""Error taxonomy for configuration loading.

Every failure raised by scopeconf derives from ScopeconfError and carries
enough context (scope, env, key or environment variable name) for an
operator to fix the source file or the process environment directly.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Final


# Mapping of error kinds to operator-facing remediation hints
ERROR_HINTS: Final[dict[str, str]] = {
    "missing_configuration_data": (
        "Create the local file (or its .example sibling) and add a section "
        "for this environment or a 'defaults' section."
    ),
    "missing_configuration_variables": (
        "Copy the listed keys from the .example file into the local file "
        "for this environment."
    ),
    "no_such_configuration_variable": (
        "Check the key name, or declare it in the configuration file for "
        "this environment."
    ),
    "missing_env_variable": (
        "Export the environment variable with a non-empty value before loading."
    ),
    "template_render_error": (
        "Check the template syntax near the reported line. "
        "Required variables are read with {{ require_env('NAME') }}."
    ),
    "config_file_error": (
        "Invalid YAML. Check indentation and make sure the top level is a "
        "mapping of environment names."
    ),
    "scope_not_loaded": "Call load() before reading configuration values.",
    "scope_state_error": "A scope can only be loaded once. Create a new Scope instead.",
    "no_such_scope": "Check the scope name or add <name>.yml to the config directory.",
}

DEFAULT_HINT: Final[str] = "Check the configuration files and environment."


class ScopeconfError(Exception):
    """Base exception for configuration loading."""

    kind: str = ""

    @property
    def hint(self) -> str:
        """Get the remediation hint for this error."""
        return ERROR_HINTS.get(self.kind, DEFAULT_HINT)


class MissingConfigurationDataError(ScopeconfError):
    """Raised when neither the example nor the local file has data."""

    kind = "missing_configuration_data"

    def __init__(self, scope: str, env: str, paths: Sequence[Path | str] = ()) -> None:
        """Initialize the error.

        Args:
            scope: Scope name being loaded.
            env: Requested environment.
            paths: Files that were searched.
        """
        self.scope = scope
        self.env = env
        self.paths = tuple(str(path) for path in paths)
        message = f"Configuration data for scope '{scope}' and env '{env}' was not found"
        if self.paths:
            message = f"{message} (searched: {', '.join(self.paths)})"
        super().__init__(message)


class MissingConfigurationVariablesError(ScopeconfError):
    """Raised when the local file omits keys declared by the example file.

    Attributes:
        missing_keys: Keys absent from the local file, in example order.
    """

    kind = "missing_configuration_variables"

    def __init__(self, scope: str, env: str, missing_keys: Iterable[str]) -> None:
        self.scope = scope
        self.env = env
        self.missing_keys = list(missing_keys)
        super().__init__(
            f"Following variables are missing in local configuration file "
            f"for scope '{scope}' and env '{env}': {', '.join(self.missing_keys)}"
        )


class NoSuchConfigurationVariableError(ScopeconfError, AttributeError):
    """Raised when reading a key absent from a loaded scope.

    Also an AttributeError so that attribute-style reads behave like
    regular Python attribute lookups (hasattr, getattr with default).
    """

    kind = "no_such_configuration_variable"

    def __init__(self, key: str, scope: str) -> None:
        self.key = key
        self.scope = scope
        super().__init__(f"Configuration variable '{key}' was not found in scope '{scope}'")


class MissingEnvVariableError(ScopeconfError):
    """Raised when a required environment variable is unset or empty."""

    kind = "missing_env_variable"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Environment variable '{name}' is not set")


class TemplateRenderError(ScopeconfError):
    """Raised when a configuration template cannot be rendered."""

    kind = "template_render_error"

    def __init__(
        self, message: str, source: str | None = None, lineno: int | None = None
    ) -> None:
        """Initialize the error.

        Args:
            message: Description from the template engine.
            source: Template file path, if known.
            lineno: Line number of the offending expression, if known.
        """
        self.source = source
        self.lineno = lineno
        location = source or "<template>"
        if lineno is not None:
            location = f"{location}:{lineno}"
        super().__init__(f"Failed to render template {location}: {message}")


class ConfigFileError(ScopeconfError):
    """Raised when a configuration file is not a valid YAML mapping."""

    kind = "config_file_error"

    def __init__(self, message: str, path: Path | str) -> None:
        self.path = str(path)
        super().__init__(f"{self.path}: {message}")


class ScopeNotLoadedError(ScopeconfError):
    """Raised when reading from a scope that has not been loaded yet."""

    kind = "scope_not_loaded"

    def __init__(self, scope: str) -> None:
        self.scope = scope
        super().__init__(f"Configuration scope '{scope}' has not been loaded")


class NoSuchScopeError(ScopeconfError, AttributeError):
    """Raised when a scope set has no scope with the requested name."""

    kind = "no_such_scope"

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        names = sorted(available)
        message = f"Configuration scope '{name}' was not found"
        if names:
            message = f"{message} (available: {', '.join(names)})"
        super().__init__(message)
        # AttributeError.__init__ resets name, so assign afterwards
        self.name = name
        self.available = names


def format_error(error: ScopeconfError, *, include_hint: bool = True) -> str:
    """Format an error for operators with an optional hint.

    Args:
        error: The error to format.
        include_hint: Whether to append the remediation hint.

    Returns:
        Formatted error string.
    """
    base = f"{type(error).__name__}: {error}"
    if include_hint:
        return f"{base}\n    Hint: {error.hint}"
    return base
