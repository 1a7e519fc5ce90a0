"""Layered YAML configuration scopes.

Loads `<name>.yml` (or `<name>.yml.j2`) together with its checked-in
`.example` sibling, merges the `defaults` section under the requested
environment and exposes the result as a read-only Scope.
"""

from scopeconf.discovery import ScopeSet, find_scope_files, load_scopes
from scopeconf.errors import (
    ConfigFileError,
    MissingConfigurationDataError,
    MissingConfigurationVariablesError,
    MissingEnvVariableError,
    NoSuchConfigurationVariableError,
    NoSuchScopeError,
    ScopeconfError,
    ScopeNotLoadedError,
    TemplateRenderError,
    format_error,
)
from scopeconf.loader import Loader
from scopeconf.observability.logging import configure_logging_from_settings
from scopeconf.scope import Scope
from scopeconf.state_machine import ScopeState, ScopeStateError


__version__ = "0.1.0"

__all__ = [
    "ConfigFileError",
    "Loader",
    "MissingConfigurationDataError",
    "MissingConfigurationVariablesError",
    "MissingEnvVariableError",
    "NoSuchConfigurationVariableError",
    "NoSuchScopeError",
    "Scope",
    "ScopeNotLoadedError",
    "ScopeSet",
    "ScopeState",
    "ScopeStateError",
    "ScopeconfError",
    "TemplateRenderError",
    "__version__",
    "configure_logging_from_settings",
    "find_scope_files",
    "format_error",
    "load_scopes",
]
