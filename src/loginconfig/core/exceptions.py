"""
LoginConfig Exception Types

Custom exceptions for login-module configuration errors.
"""

from typing import Optional

from loginconfig.core.types import NATIVE_GSS_ENV


class LoginConfigError(Exception):
    """Base exception for all LoginConfig errors."""

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigurationUnavailable(LoginConfigError):
    """
    No login module is configured for the driver context.

    Raised by the login front when the resolved configuration source
    returns an empty sequence for the driver's reserved context name.
    """

    def __init__(self, context_name: str, message: Optional[str] = None) -> None:
        if message is None:
            message = f"No login modules configured for the driver context '{context_name}'"
        super().__init__(message, code=1)
        self.context_name = context_name


class UnsupportedNativeCredential(LoginConfigError):
    """
    Native GSS credential requested but not usable.

    The process was not started with native GSSAPI support enabled,
    or the native library cannot be loaded.
    """

    MESSAGE = (
        "Native GSS credential requested but native GSSAPI support is not enabled; "
        f"set {NATIVE_GSS_ENV}=true before starting the process"
    )

    def __init__(self, reason: Optional[str] = None) -> None:
        message = self.MESSAGE if reason is None else f"{self.MESSAGE}: {reason}"
        super().__init__(message, code=2)
        self.reason = reason


class PlatformModuleResolutionFailure(LoginConfigError):
    """
    No Kerberos login module is known for the running platform.

    Fatal at DriverDefaultSource construction time.
    """

    def __init__(self, platform: str) -> None:
        super().__init__(
            f"Cannot determine a Kerberos login module for platform '{platform}'",
            code=3,
        )
        self.platform = platform


class InvalidSettingError(LoginConfigError):
    """A connection property has a value that cannot be interpreted."""

    def __init__(self, name: str, value: object) -> None:
        super().__init__(f"Invalid value {value!r} for connection property '{name}'", code=4)
        self.name = name
        self.value = value


class ConnectionFailure(LoginConfigError):
    """
    Connection establishment failed during login configuration.

    The underlying taxonomy error is chained as ``__cause__``.
    """

    pass
