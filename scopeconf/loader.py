"""Configuration loader reconciling example and local files."""

import time
from pathlib import Path
from typing import Final

import structlog

from scopeconf.errors import (
    MissingConfigurationDataError,
    MissingConfigurationVariablesError,
    ScopeconfError,
    ScopeNotLoadedError,
)
from scopeconf.observability.metrics import LoaderMetrics
from scopeconf.parser import ConfigMapping, load_document
from scopeconf.reconcile import DataSource, ReconcileOutcome, reconcile
from scopeconf.scope import Scope


logger = structlog.get_logger()

# Appended to the local file path to locate the example file
EXAMPLE_SUFFIX: Final[str] = ".example"


class Loader:
    """Loads one configuration scope for one environment.

    Reads the example file (local path + `.example`) and the local file,
    and reconciles them:

    - neither has data for the env: MissingConfigurationDataError
    - only one has data: it is used as-is
    - both have data: local must contain every example key, otherwise
      MissingConfigurationVariablesError; local is then used as-is

    Construction does no I/O.
    """

    def __init__(self, local_file: Path | str, scope: Scope | str, env: str) -> None:
        """Initialize the loader.

        Args:
            local_file: Path of the local configuration file.
            scope: Scope, or scope name, being loaded.
            env: Environment whose section is read.
        """
        self.local_file = str(local_file)
        self.example_file = f"{self.local_file}{EXAMPLE_SUFFIX}"
        self.scope = scope
        self.env = env
        self._result: Scope | None = None
        self._source: DataSource | None = None

    @property
    def scope_name(self) -> str:
        """Get the name of the scope being loaded."""
        if isinstance(self.scope, Scope):
            return self.scope.name
        return str(self.scope)

    @property
    def source(self) -> DataSource | None:
        """Get which file backed the most recent successful load."""
        return self._source

    @staticmethod
    def load_yml(path: Path | str, scope: str, env: str) -> ConfigMapping | None:
        """Load the merged data of one file, None if it has none for env."""
        return load_document(path, scope, env)

    def load(self) -> Scope:
        """Load, reconcile and wrap the configuration.

        Returns:
            A loaded Scope over the final mapping.

        Raises:
            MissingConfigurationDataError: If neither file has data for env.
            MissingConfigurationVariablesError: If local lacks example keys.
            ScopeconfError: On template, YAML or environment variable errors.
        """
        start_time = time.perf_counter()
        metrics = LoaderMetrics.get_instance()
        log = logger.bind(component="scopeconf", scope=self.scope_name, env=self.env)

        self._result = None
        self._source = None

        try:
            scope = self._load(log)
        except ScopeconfError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            metrics.record_load(duration_ms, failed=True)
            log.error(
                "config_load_failed",
                error_type=type(e).__name__,
                error=str(e),
                config_load_duration_ms=duration_ms,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        metrics.record_load(duration_ms)
        log.info(
            "scope_loaded",
            source=self._source.value if self._source else None,
            key_count=len(scope),
            config_load_duration_ms=duration_ms,
        )
        self._result = scope
        return scope

    def _load(self, log: structlog.stdlib.BoundLogger) -> Scope:
        example = self.load_yml(self.example_file, self.scope_name, self.env)
        local = self.load_yml(self.local_file, self.scope_name, self.env)

        result = reconcile(example, local)
        log.info(
            "config_reconciled",
            outcome=result.outcome.value,
            source=result.source.value if result.source else None,
        )

        if result.outcome == ReconcileOutcome.MISSING or result.data is None:
            raise MissingConfigurationDataError(
                self.scope_name, self.env, (self.example_file, self.local_file)
            )
        if result.missing_keys:
            raise MissingConfigurationVariablesError(
                self.scope_name, self.env, result.missing_keys
            )

        self._source = result.source
        return Scope(self.scope_name, result.data)

    def get(self) -> Scope:
        """Get the scope produced by the most recent successful load.

        Raises:
            ScopeNotLoadedError: If `load` has not succeeded yet.
        """
        if self._result is None:
            raise ScopeNotLoadedError(self.scope_name)
        return self._result

    def __repr__(self) -> str:
        return (
            f"Loader(local_file={self.local_file!r}, scope={self.scope_name!r}, "
            f"env={self.env!r})"
        )
