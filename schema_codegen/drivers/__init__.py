"""Driver registry, populated with the built-in profiles at import."""

from schema_codegen.drivers import profiles
from schema_codegen.drivers.profiles import DatabaseProfile, GenericProfile
from schema_codegen.drivers.registry import (
    DriverEntry,
    DriverRegistry,
    driver_registry,
    resolve_driver,
)

_PROFILES = "schema_codegen.drivers.profiles"

for _name in ("sqlite", "postgresql", "mysql", "mssql", "oracle"):
    _profile = getattr(profiles, _name)
    driver_registry.register(_name, lambda p=_profile: p, f"{_PROFILES}.{_name}")

driver_registry.register(
    "generic", GenericProfile, f"{_PROFILES}.GenericProfile", singleton=False
)

__all__ = [
    "DatabaseProfile",
    "DriverEntry",
    "DriverRegistry",
    "GenericProfile",
    "driver_registry",
    "resolve_driver",
]
