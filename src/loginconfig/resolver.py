"""
LoginConfig Connection Resolver

Decides, per connection attempt, which configuration source the
authentication handshake consults.

Modes:
- USE_DRIVER_DEFAULT: the driver's built-in source; the global registry is
  never consulted, so overwriting it has no effect on these connections
- USE_GLOBAL_REGISTRY: whatever is installed in the registry right now,
  which may have been replaced by unrelated code
- NATIVE_CREDENTIAL: login configuration is bypassed entirely

Resolution is synchronous and total: it always yields a source (or the
native outcome) and never raises. A missing driver entry is detected by
whoever queries the resolved source.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional

import attrs

from loginconfig.registry import GlobalRegistry, global_registry
from loginconfig.runtime import RuntimeFamily
from loginconfig.settings import AuthSettings
from loginconfig.sources import ConfigurationSource, DriverDefaultSource


class ConnectionAuthMode(Enum):
    """Which configuration a connection attempt authenticates with."""

    USE_DRIVER_DEFAULT = auto()
    USE_GLOBAL_REGISTRY = auto()
    NATIVE_CREDENTIAL = auto()


@attrs.define(frozen=True, slots=True)
class AuthResolution:
    """
    Outcome of resolving one connection attempt.

    INVARIANT: source is None iff mode is NATIVE_CREDENTIAL
    """

    mode: ConnectionAuthMode
    source: Optional[ConfigurationSource] = None

    @property
    def native_credential(self) -> bool:
        return self.mode is ConnectionAuthMode.NATIVE_CREDENTIAL


class ConnectionAuthResolver:
    """
    Per-connection configuration source selection.

    The driver default source is built once, at resolver construction, so
    an unsupported platform fails here rather than at connection time.

    Example:
        resolver = ConnectionAuthResolver()
        source = resolver.resolve(use_driver_default=True)
        modules = source.lookup(DRIVER_CONTEXT_NAME)
    """

    def __init__(
        self,
        registry: Optional[GlobalRegistry] = None,
        family: Optional[RuntimeFamily] = None,
    ) -> None:
        self._registry = registry if registry is not None else global_registry
        self._default = DriverDefaultSource(family)

    @property
    def registry(self) -> GlobalRegistry:
        return self._registry

    @property
    def default_source(self) -> DriverDefaultSource:
        return self._default

    def resolve(self, use_driver_default: bool) -> ConfigurationSource:
        """
        Return the source for a connection attempt.

        Args:
            use_driver_default: True to use the driver's own configuration
                without consulting the registry; False to use whatever the
                registry currently holds
        """
        if use_driver_default:
            return self._default
        return self._registry.current()

    @staticmethod
    def select_mode(settings: AuthSettings) -> ConnectionAuthMode:
        """Map connection settings to a mode. Native credential wins."""
        if settings.use_default_gss_credential:
            return ConnectionAuthMode.NATIVE_CREDENTIAL
        if settings.use_default_jaas_config:
            return ConnectionAuthMode.USE_DRIVER_DEFAULT
        return ConnectionAuthMode.USE_GLOBAL_REGISTRY

    def resolve_settings(self, settings: AuthSettings) -> AuthResolution:
        """Resolve a connection attempt from its settings."""
        mode = self.select_mode(settings)
        if mode is ConnectionAuthMode.NATIVE_CREDENTIAL:
            return AuthResolution(mode=mode)
        source = self.resolve(mode is ConnectionAuthMode.USE_DRIVER_DEFAULT)
        return AuthResolution(mode=mode, source=source)
