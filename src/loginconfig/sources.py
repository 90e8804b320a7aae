"""
LoginConfig Configuration Sources

A configuration source answers one question: which login modules are
configured under a given context name.

Sources:
- EmptySource: knows no contexts
- MappingSource: backed by a context-name -> descriptors mapping
- DriverDefaultSource: the driver's built-in Kerberos entry
- DelegatingSource: the driver entry layered over a previously active source

Lookups never raise; an unknown context yields an empty tuple.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Mapping, Optional, Tuple

from loginconfig.core.types import (
    DRIVER_CONTEXT_NAME,
    ControlFlag,
    LoginModuleDescriptor,
    validate_context_name,
)
from loginconfig.runtime import RuntimeFamily, detect_runtime_family, krb5_module_name

Descriptors = Tuple[LoginModuleDescriptor, ...]


class ConfigurationSource(ABC):
    """Capability: look up the login modules configured for a context."""

    @abstractmethod
    def lookup(self, context_name: str) -> Descriptors:
        """Return the descriptors for ``context_name`` (empty if none)."""
        ...

    def refresh(self) -> None:
        """Reload underlying configuration. No-op unless overridden."""
        return None


class EmptySource(ConfigurationSource):
    """Source with no entries. Stands in when nothing was ever installed."""

    def lookup(self, context_name: str) -> Descriptors:
        return ()

    def __repr__(self) -> str:
        return "EmptySource()"


class MappingSource(ConfigurationSource):
    """
    Source backed by a mapping of context names to descriptors.

    The mapping is copied at construction; later changes to the caller's
    dict are not observed.

    Example:
        source = MappingSource({
            "ReportingClient": [LoginModuleDescriptor("krb5.gssapi.Krb5LoginModule")],
        })
        set_configuration(source)
    """

    def __init__(self, entries: Optional[Mapping[str, Iterable[LoginModuleDescriptor]]] = None) -> None:
        self._entries: Dict[str, Descriptors] = {
            validate_context_name(name): tuple(descriptors)
            for name, descriptors in (entries or {}).items()
        }

    def lookup(self, context_name: str) -> Descriptors:
        return self._entries.get(context_name, ())

    @property
    def context_names(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def __repr__(self) -> str:
        return f"MappingSource(contexts={sorted(self._entries)!r})"


class DriverDefaultSource(ConfigurationSource):
    """
    The driver's built-in configuration.

    Supplies exactly one descriptor, for DRIVER_CONTEXT_NAME:
    the Kerberos login module of the running platform, REQUIRED, no options.

    INVARIANT: the descriptor is fixed at construction

    Raises:
        PlatformModuleResolutionFailure: at construction, on an
            unrecognized platform
    """

    def __init__(self, family: Optional[RuntimeFamily] = None) -> None:
        if family is None:
            family = detect_runtime_family()
        self._family = family
        self._entry: Descriptors = (
            LoginModuleDescriptor(
                module=krb5_module_name(family),
                control_flag=ControlFlag.REQUIRED,
                options={},
            ),
        )

    @property
    def family(self) -> RuntimeFamily:
        return self._family

    @property
    def descriptor(self) -> LoginModuleDescriptor:
        return self._entry[0]

    def lookup(self, context_name: str) -> Descriptors:
        if context_name == DRIVER_CONTEXT_NAME:
            return self._entry
        return ()

    def __repr__(self) -> str:
        return f"DriverDefaultSource(family={self._family.name})"


class DelegatingSource(ConfigurationSource):
    """
    Driver configuration layered over a previously active source.

    The driver context always resolves to the driver descriptor; the prior
    source is not consulted for it even when it has its own entry.
    Every other context is forwarded to the prior source unchanged, so
    configuration installed before the driver initialized stays usable.
    """

    def __init__(
        self,
        prior: Optional[ConfigurationSource] = None,
        family: Optional[RuntimeFamily] = None,
    ) -> None:
        self._prior = prior if prior is not None else EmptySource()
        self._driver = DriverDefaultSource(family)

    @property
    def prior(self) -> ConfigurationSource:
        return self._prior

    def lookup(self, context_name: str) -> Descriptors:
        if context_name == DRIVER_CONTEXT_NAME:
            return self._driver.lookup(context_name)
        result = self._prior.lookup(context_name)
        # Externally supplied sources may answer None for unknown contexts
        return () if result is None else result

    def refresh(self) -> None:
        self._prior.refresh()

    def __repr__(self) -> str:
        return f"DelegatingSource(prior={self._prior!r})"
