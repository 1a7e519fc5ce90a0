"""Configuration template rendering using Jinja2."""

import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import ClassVar, Final

import structlog
from jinja2 import (
    Environment,
    StrictUndefined,
    TemplateSyntaxError,
    UndefinedError,
)

from scopeconf.errors import (
    MissingEnvVariableError,
    ScopeconfError,
    TemplateRenderError,
)


logger = structlog.get_logger()

# Any of these suffixes marks a configuration file as a template
TEMPLATE_SUFFIXES: Final[tuple[str, ...]] = (".j2", ".jinja", ".jinja2")


def require_env(name: str) -> str:
    """Read a required environment variable.

    Args:
        name: Environment variable name.

    Returns:
        The variable's value.

    Raises:
        MissingEnvVariableError: If the variable is unset or empty.
    """
    value = os.environ.get(name)
    if not value:
        raise MissingEnvVariableError(name)
    return value


def is_template(path: Path | str) -> bool:
    """Check whether a configuration file must be rendered before parsing.

    Checks every suffix, so `cloud.yml.j2.example` counts as a template.
    """
    return any(suffix in TEMPLATE_SUFFIXES for suffix in Path(path).suffixes)


class TemplateRenderer:
    """Renders configuration templates into raw YAML text.

    Templates see exactly two globals: `require_env(name)`, which fails
    loudly on unset variables, and `env`, a read-only snapshot of the
    process environment for optional lookups.
    """

    _instance: ClassVar["TemplateRenderer | None"] = None

    def __init__(self) -> None:
        """Initialize the Jinja2 environment."""
        # YAML is not markup, so no autoescaping
        self._env = Environment(
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.globals["require_env"] = require_env

    def render(self, text: str, source: str | None = None) -> str:
        """Render template text.

        Args:
            text: Template source.
            source: Name of the template (usually its file path) for errors.

        Returns:
            Rendered text.

        Raises:
            TemplateRenderError: On malformed templates, undefined names or
                errors raised while evaluating template expressions.
            MissingEnvVariableError: If `require_env` hits an unset variable.
        """
        try:
            template = self._env.from_string(text)
        except TemplateSyntaxError as e:
            logger.error(
                "template_syntax_error",
                source=source,
                lineno=e.lineno,
                error=e.message,
            )
            raise TemplateRenderError(
                e.message or str(e), source=source, lineno=e.lineno
            ) from e

        try:
            return template.render(env=self._environ_snapshot())
        except ScopeconfError:
            raise
        except UndefinedError as e:
            logger.error("template_undefined_name", source=source, error=str(e))
            raise TemplateRenderError(str(e), source=source) from e
        except Exception as e:  # noqa: BLE001
            # Any error raised by template code, e.g. bad helper calls or filters
            logger.error(
                "template_runtime_error",
                source=source,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise TemplateRenderError(
                f"{type(e).__name__}: {e}", source=source
            ) from e

    @classmethod
    def get_instance(cls) -> "TemplateRenderer":
        """Get the shared renderer instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @staticmethod
    def _environ_snapshot() -> Mapping[str, str]:
        return MappingProxyType(dict(os.environ))


def render_template(text: str, source: str | None = None) -> str:
    """Render template text with the shared renderer.

    Args:
        text: Template source.
        source: Name of the template for error messages.

    Returns:
        Rendered text.
    """
    return TemplateRenderer.get_instance().render(text, source=source)
