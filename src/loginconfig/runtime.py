"""
LoginConfig Runtime Detection

Maps the running platform to the Kerberos runtime family that serves it
and to the login module identifier the driver uses on that family.

Runtime families:
- GSSAPI: MIT Kerberos or Heimdal on Unix/Linux/macOS
- SSPI: Windows Security Support Provider Interface

Also reports whether the native GSSAPI library can be loaded, which the
native credential path requires.
"""

from __future__ import annotations

import sys
from enum import Enum, auto
from typing import Optional, Tuple

import structlog

from loginconfig.core.exceptions import PlatformModuleResolutionFailure

logger = structlog.get_logger()

# Check if GSSAPI is available
try:
    import gssapi  # noqa: F401
    _gssapi_available = True
    _gssapi_error: Optional[str] = None
except ImportError as e:
    _gssapi_available = False
    _gssapi_error = str(e)
    logger.debug("gssapi_not_available", error=_gssapi_error)
except OSError as e:
    # gssapi installed but the Kerberos shared library is missing
    _gssapi_available = False
    _gssapi_error = str(e)
    logger.debug("gssapi_library_error", error=_gssapi_error)


def gssapi_available() -> Tuple[bool, Optional[str]]:
    """
    Check if the native GSSAPI library is importable.

    Returns:
        (available, error message or None)
    """
    return _gssapi_available, _gssapi_error


# =============================================================================
# RUNTIME FAMILIES
# =============================================================================


class RuntimeFamily(Enum):
    """Kerberos runtime family serving the current platform."""

    GSSAPI = auto()  # Unix/Linux/macOS
    SSPI = auto()    # Windows


# Login module identifiers, one per runtime family
GSSAPI_KRB5_MODULE = "krb5.gssapi.Krb5LoginModule"
SSPI_KRB5_MODULE = "krb5.sspi.Krb5LoginModule"

# Identifiers are this project's own names for the two families
_KRB5_MODULES = {
    RuntimeFamily.GSSAPI: GSSAPI_KRB5_MODULE,
    RuntimeFamily.SSPI: SSPI_KRB5_MODULE,
}

_SSPI_PLATFORMS = ("win32",)

_GSSAPI_PLATFORM_PREFIXES = (
    "linux",
    "darwin",
    "freebsd",
    "openbsd",
    "netbsd",
    "dragonfly",
    "sunos",
    "aix",
    "cygwin",
)


def detect_runtime_family(platform: Optional[str] = None) -> RuntimeFamily:
    """
    Determine the Kerberos runtime family for a platform.

    Args:
        platform: ``sys.platform``-style identifier (default: running platform)

    Raises:
        PlatformModuleResolutionFailure: if the platform is not recognized
    """
    if platform is None:
        platform = sys.platform

    if platform in _SSPI_PLATFORMS:
        return RuntimeFamily.SSPI
    if platform.startswith(_GSSAPI_PLATFORM_PREFIXES):
        return RuntimeFamily.GSSAPI
    raise PlatformModuleResolutionFailure(platform)


def krb5_module_name(family: RuntimeFamily) -> str:
    """Return the Kerberos login module identifier for a runtime family."""
    return _KRB5_MODULES[family]
