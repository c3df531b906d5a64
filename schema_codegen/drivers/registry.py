"""Registry mapping driver identifiers to database profiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from schema_codegen.core.exceptions import DriverResolutionError
from schema_codegen.drivers.profiles import DatabaseProfile


@dataclass(frozen=True)
class DriverEntry:
    """A registered driver.

    Attributes:
        identifier: Short name used on the command line and in config files
        qualified_name: Importable dotted path of the profile object or class
        factory: Returns the profile to use for a run
        singleton: Whether ``qualified_name`` is an instance rather than a class
    """

    identifier: str
    qualified_name: str
    factory: Callable[[], DatabaseProfile]
    singleton: bool = True

    def instance(self) -> DatabaseProfile:
        return self.factory()

    @property
    def expression(self) -> str:
        """Python expression that yields the profile in generated code."""
        if self.singleton:
            return self.qualified_name
        return f"{self.qualified_name}()"


class DriverRegistry:
    """Explicit registry of drivers, looked up by identifier or qualified name."""

    def __init__(self) -> None:
        self._entries: dict[str, DriverEntry] = {}

    def register(
        self,
        identifier: str,
        factory: Callable[[], DatabaseProfile],
        qualified_name: str,
        singleton: bool = True,
    ) -> DriverEntry:
        entry = DriverEntry(identifier, qualified_name, factory, singleton)
        self._entries[identifier] = entry
        return entry

    def resolve(self, identifier: str) -> DriverEntry:
        """Find a driver by its identifier or its qualified name.

        Raises:
            DriverResolutionError: If no registered driver matches
        """
        entry = self._entries.get(identifier)
        if entry is not None:
            return entry
        for entry in self._entries.values():
            if entry.qualified_name == identifier:
                return entry
        raise DriverResolutionError(identifier, self.identifiers())

    def identifiers(self) -> list[str]:
        return sorted(self._entries)

    def __contains__(self, identifier: str) -> bool:
        try:
            self.resolve(identifier)
        except DriverResolutionError:
            return False
        return True


driver_registry = DriverRegistry()


def resolve_driver(identifier: str) -> DriverEntry:
    return driver_registry.resolve(identifier)
