"""
LoginConfig Global Registry

Process-wide slot holding the currently active configuration source.

Any code in the process may replace the installed source at any time,
including code unrelated to the driver. The driver installs its own
DelegatingSource once, on first use, wrapping whatever was active then.

Thread-safe: writes are serialized, reads take the current reference
without locking and never observe a partially installed source.
"""

from __future__ import annotations

import threading
from typing import Any, Optional

import attrs
import structlog

from loginconfig.runtime import RuntimeFamily
from loginconfig.sources import ConfigurationSource, DelegatingSource, EmptySource

logger = structlog.get_logger()


@attrs.define
class GlobalRegistry:
    """
    Holder of the active configuration source.

    Example:
        registry = GlobalRegistry()
        registry.install_driver_configuration()

        # Later, from anywhere in the process
        registry.replace(MappingSource({...}))
    """

    _current: ConfigurationSource = attrs.Factory(EmptySource)
    _driver_installed: bool = False
    _lock: threading.Lock = attrs.Factory(threading.Lock)
    _logger: Any = attrs.Factory(lambda: structlog.get_logger())

    def current(self) -> ConfigurationSource:
        """Return the presently installed source."""
        return self._current

    def replace(self, source: ConfigurationSource) -> None:
        """
        Install ``source`` as the active configuration.

        The previous source is discarded. Callers wanting to keep the
        previous source's contexts wrap it in a DelegatingSource first.

        Raises:
            TypeError: if source is not a ConfigurationSource
        """
        if not isinstance(source, ConfigurationSource):
            raise TypeError(
                f"Expected a ConfigurationSource, got {type(source).__name__}"
            )
        with self._lock:
            previous = self._current
            self._current = source
        self._logger.info(
            "configuration_replaced",
            previous=type(previous).__name__,
            current=type(source).__name__,
        )

    @property
    def driver_installed(self) -> bool:
        """True once the driver's first-use initialization has run."""
        return self._driver_installed

    def install_driver_configuration(self, family: Optional[RuntimeFamily] = None) -> bool:
        """
        Driver first-use initialization.

        Wraps the currently installed source in a DelegatingSource and
        installs the wrapper. Runs at most once per registry.

        Args:
            family: Runtime family override (default: running platform)

        Returns:
            True if this call installed the driver configuration,
            False if it was already installed

        Raises:
            PlatformModuleResolutionFailure: on an unrecognized platform
        """
        with self._lock:
            if self._driver_installed:
                return False
            wrapper = DelegatingSource(self._current, family)
            self._current = wrapper
            self._driver_installed = True

        self._logger.info(
            "driver_configuration_installed",
            prior=type(wrapper.prior).__name__,
        )
        return True


# Process-wide registry
global_registry = GlobalRegistry()


def get_configuration() -> ConfigurationSource:
    """Return the source installed in the process-wide registry."""
    return global_registry.current()


def set_configuration(source: ConfigurationSource) -> None:
    """Install ``source`` in the process-wide registry."""
    global_registry.replace(source)
