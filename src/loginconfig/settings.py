"""
LoginConfig Settings

Connection-level and process-level switches that steer login
configuration resolution.
"""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

import attrs

from loginconfig.core import types
from loginconfig.core.exceptions import InvalidSettingError

# Connection property names, as they appear in a connection string
USE_DEFAULT_JAAS_CONFIG = "useDefaultJaasConfig"
USE_DEFAULT_GSS_CREDENTIAL = "useDefaultGSSCredential"

# Environment switch enabling the native GSS credential path
NATIVE_GSS_ENV = types.NATIVE_GSS_ENV

_PROPERTY_ALIASES = {
    "usedefaultjaasconfig": USE_DEFAULT_JAAS_CONFIG,
    "use_default_jaas_config": USE_DEFAULT_JAAS_CONFIG,
    "usedefaultgsscredential": USE_DEFAULT_GSS_CREDENTIAL,
    "use_default_gss_credential": USE_DEFAULT_GSS_CREDENTIAL,
}

_TRUE = frozenset({"true", "1", "yes"})


def parse_bool(name: str, value: Any) -> bool:
    """
    Interpret a property value as a boolean.

    Accepts bools and the strings true/false (case-insensitive).

    Raises:
        InvalidSettingError: for anything else
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise InvalidSettingError(name, value)


@attrs.define(frozen=True)
class AuthSettings:
    """
    Per-connection authentication switches.

    Attributes:
        use_default_jaas_config: Resolve the driver's own login
            configuration, ignoring whatever is installed globally
        use_default_gss_credential: Use the native GSS credential and skip
            login configuration entirely
    """

    use_default_jaas_config: bool = False
    use_default_gss_credential: bool = False

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> "AuthSettings":
        """
        Build settings from parsed connection properties.

        Property names are matched case-insensitively; snake_case names
        are accepted too. Unrelated properties are ignored.

        Raises:
            InvalidSettingError: if a recognized property is not a boolean
        """
        values = {}
        for key, value in properties.items():
            canonical = _PROPERTY_ALIASES.get(key.lower())
            if canonical is not None:
                values[canonical] = parse_bool(canonical, value)

        return cls(
            use_default_jaas_config=values.get(USE_DEFAULT_JAAS_CONFIG, False),
            use_default_gss_credential=values.get(USE_DEFAULT_GSS_CREDENTIAL, False),
        )


@attrs.define(frozen=True)
class RuntimeSettings:
    """
    Process-level switches fixed at process start.

    Attributes:
        native_gss_enabled: The process was started with native GSSAPI
            credentials enabled
    """

    native_gss_enabled: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RuntimeSettings":
        """Read settings from the environment (default: ``os.environ``)."""
        if environ is None:
            environ = os.environ
        raw = environ.get(NATIVE_GSS_ENV, "")
        return cls(native_gss_enabled=raw.strip().lower() in _TRUE)
