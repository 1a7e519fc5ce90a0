"""Read-only configuration scope."""

import copy
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from scopeconf.errors import NoSuchConfigurationVariableError, ScopeNotLoadedError
from scopeconf.parser import ConfigMapping, ConfigValue
from scopeconf.state_machine import ScopeState, ScopeStateMachine


class Scope:
    """A named configuration namespace and its merged values.

    A scope starts UNLOADED and is loaded exactly once, either at
    construction or through `load`. Every read goes through `get`, which
    raises for unknown keys; attribute access is a thin layer over it:

        >>> scope = Scope("configuration", {"api_key": "local1234"})
        >>> scope.api_key
        'local1234'

    Keys that collide with method names (such as `get` or `keys`) are only
    reachable through `get`.
    """

    __slots__ = ("_data", "_name", "_state_machine")

    def __init__(self, name: str, data: Mapping[str, ConfigValue] | None = None) -> None:
        """Initialize the scope.

        Args:
            name: Scope name used in error messages.
            data: Merged configuration; loads the scope immediately if given.
        """
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_data", {})
        object.__setattr__(self, "_state_machine", ScopeStateMachine())
        if data is not None:
            self.load(data)

    @property
    def name(self) -> str:
        """Get the scope name."""
        return self._name

    @property
    def state(self) -> ScopeState:
        """Get the current lifecycle state."""
        return self._state_machine.state

    @property
    def is_loaded(self) -> bool:
        """Check if the scope holds configuration."""
        return self._state_machine.is_loaded()

    def load(self, data: Mapping[str, ConfigValue]) -> None:
        """Attach merged configuration to the scope.

        Args:
            data: Merged configuration mapping.

        Raises:
            ScopeStateError: If the scope is already loaded.
        """
        self._state_machine.transition(ScopeState.LOADED)
        object.__setattr__(self, "_data", copy.deepcopy(dict(data)))

    def get(self, key: str) -> ConfigValue:
        """Read a configuration value.

        Args:
            key: Configuration key.

        Returns:
            The stored value; mappings are returned as read-only views.

        Raises:
            ScopeNotLoadedError: If the scope has not been loaded.
            NoSuchConfigurationVariableError: If the key is not configured.
        """
        self._ensure_loaded()
        try:
            value = self._data[key]
        except KeyError:
            raise NoSuchConfigurationVariableError(key, self._name) from None
        return _read_only(value)

    def keys(self) -> list[str]:
        """Get configured keys in file order."""
        self._ensure_loaded()
        return list(self._data)

    def to_dict(self) -> ConfigMapping:
        """Get a mutable deep copy of the configuration."""
        self._ensure_loaded()
        return copy.deepcopy(self._data)

    def _ensure_loaded(self) -> None:
        if not self._state_machine.is_loaded():
            raise ScopeNotLoadedError(self._name)

    def __getattr__(self, key: str) -> ConfigValue:
        # Only reached when regular attribute lookup fails
        if key.startswith("__") or key in Scope.__slots__:
            raise AttributeError(key)
        return self.get(key)

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"Configuration scope '{self._name}' is read-only")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"Configuration scope '{self._name}' is read-only")

    def __getitem__(self, key: str) -> ConfigValue:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return self._state_machine.is_loaded() and key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scope):
            return NotImplemented
        return (
            self._name == other._name
            and self.state == other.state
            and self._data == other._data
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if not self._state_machine.is_loaded():
            return f"Scope({self._name!r}, state={self.state.name})"
        return f"Scope({self._name!r}, keys={list(self._data)!r})"


def _read_only(value: ConfigValue) -> ConfigValue:
    if isinstance(value, dict):
        return MappingProxyType({key: _read_only(item) for key, item in value.items()})
    if isinstance(value, list):
        return [_read_only(item) for item in value]
    return value
