"""Scope file discovery and multi-scope loading."""

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Final

import structlog

from scopeconf.errors import ConfigFileError, NoSuchScopeError
from scopeconf.loader import EXAMPLE_SUFFIX, Loader
from scopeconf.observability.logging import bind_load_context, clear_load_context
from scopeconf.scope import Scope
from scopeconf.settings import ScopeconfSettings, get_settings
from scopeconf.template import TEMPLATE_SUFFIXES


logger = structlog.get_logger()

YAML_SUFFIXES: Final[tuple[str, ...]] = (".yml", ".yaml")


def scope_name_for(filename: str) -> str | None:
    """Get the scope name a configuration file belongs to.

    `cloud.yml`, `cloud.yml.j2` and their `.example` siblings all belong
    to scope `cloud`.

    Args:
        filename: Bare file name.

    Returns:
        Scope name, or None if the file is not a configuration file.
    """
    local_name = filename.removesuffix(EXAMPLE_SUFFIX)
    for yaml_suffix in YAML_SUFFIXES:
        for template_suffix in ("", *TEMPLATE_SUFFIXES):
            ending = f"{yaml_suffix}{template_suffix}"
            if local_name.endswith(ending) and len(local_name) > len(ending):
                return local_name[: -len(ending)]
    return None


def find_scope_files(config_dir: Path | str) -> dict[str, Path]:
    """Map scope names to local file paths in a directory.

    A scope that only has an example file maps to the local path the
    example was derived from, so the Loader can still find the example.

    Args:
        config_dir: Directory holding configuration files.

    Returns:
        Scope name to local file path, sorted by scope name.

    Raises:
        ConfigFileError: If two different local files define one scope.
    """
    directory = Path(config_dir)
    if not directory.is_dir():
        return {}

    found: dict[str, Path] = {}
    for path in sorted(directory.iterdir()):
        if not path.is_file():
            continue
        name = scope_name_for(path.name)
        if name is None:
            continue

        local_path = path.with_name(path.name.removesuffix(EXAMPLE_SUFFIX))
        existing = found.get(name)
        if existing is not None and existing != local_path:
            raise ConfigFileError(
                f"Scope '{name}' is defined by both {existing.name} and {local_path.name}",
                directory,
            )
        found[name] = local_path

    return dict(sorted(found.items()))


class ScopeSet(Mapping[str, Scope]):
    """Read-only collection of loaded scopes with attribute access."""

    def __init__(self, env: str, scopes: Mapping[str, Scope]) -> None:
        self._env = env
        self._scopes = dict(scopes)

    @property
    def env(self) -> str:
        """Get the environment the scopes were loaded for."""
        return self._env

    def __getitem__(self, name: str) -> Scope:
        try:
            return self._scopes[name]
        except KeyError:
            raise NoSuchScopeError(name, self._scopes) from None

    def __getattr__(self, name: str) -> Scope:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __contains__(self, name: object) -> bool:
        return name in self._scopes

    def get(self, name: str, default: Scope | None = None) -> Scope | None:  # type: ignore[override]
        """Get a scope by name, or `default` if there is none."""
        return self._scopes.get(name, default)

    def __iter__(self) -> Iterator[str]:
        return iter(self._scopes)

    def __len__(self) -> int:
        return len(self._scopes)

    def __repr__(self) -> str:
        return f"ScopeSet(env={self._env!r}, scopes={list(self._scopes)!r})"


def load_scopes(
    config_dir: Path | str | None = None,
    env: str | None = None,
    settings: ScopeconfSettings | None = None,
) -> ScopeSet:
    """Load every scope found in a configuration directory.

    Args:
        config_dir: Directory to scan (default: settings.config_dir).
        env: Environment to load (default: settings.env).
        settings: Settings used for omitted arguments.

    Returns:
        ScopeSet of loaded scopes.

    Raises:
        ScopeconfError: If any scope fails to load.
    """
    if config_dir is None or env is None:
        settings = settings or get_settings()
        config_dir = settings.config_dir if config_dir is None else config_dir
        env = settings.env if env is None else env

    files = find_scope_files(config_dir)
    logger.info(
        "discovered_scope_files",
        component="scopeconf",
        config_dir=str(config_dir),
        scopes=list(files),
    )

    scopes: dict[str, Scope] = {}
    for name, local_file in files.items():
        bind_load_context(name, env)
        try:
            scopes[name] = Loader(local_file, name, env).load()
        finally:
            clear_load_context()

    return ScopeSet(env, scopes)
