"""
LoginConfig - Kerberos login configuration resolution for database clients

Decides, per connection attempt, which login-module configuration the
driver's Kerberos handshake uses:

- The driver's own default entry, immune to overwrites of the global
  registry (useDefaultJaasConfig=true)
- Whatever is currently installed in the process-wide registry, which any
  code may replace (the default)
- The native GSS credential, bypassing login configuration
  (useDefaultGSSCredential=true)

Example Usage:
    from loginconfig import AuthSettings, DriverLogin

    login = DriverLogin()
    settings = AuthSettings.from_properties({"useDefaultJaasConfig": "true"})

    plan = login.prepare_or_raise(settings)
    print(plan.modules[0].module)
"""

from loginconfig.core.types import DRIVER_CONTEXT_NAME, ControlFlag, LoginModuleDescriptor
from loginconfig.core.exceptions import (
    LoginConfigError,
    ConfigurationUnavailable,
    UnsupportedNativeCredential,
    PlatformModuleResolutionFailure,
    ConnectionFailure,
)
from loginconfig.sources import (
    ConfigurationSource,
    DelegatingSource,
    DriverDefaultSource,
    EmptySource,
    MappingSource,
)
from loginconfig.registry import (
    GlobalRegistry,
    get_configuration,
    global_registry,
    set_configuration,
)
from loginconfig.resolver import AuthResolution, ConnectionAuthMode, ConnectionAuthResolver
from loginconfig.settings import AuthSettings, RuntimeSettings
from loginconfig.login import DriverLogin, LoginPlan

__version__ = "0.1.0"

__all__ = [
    # Main API
    "DriverLogin",
    "LoginPlan",
    "AuthSettings",
    "RuntimeSettings",
    "ConnectionAuthResolver",
    "ConnectionAuthMode",
    "AuthResolution",
    # Registry
    "GlobalRegistry",
    "global_registry",
    "get_configuration",
    "set_configuration",
    # Sources
    "ConfigurationSource",
    "DriverDefaultSource",
    "DelegatingSource",
    "EmptySource",
    "MappingSource",
    # Types
    "DRIVER_CONTEXT_NAME",
    "ControlFlag",
    "LoginModuleDescriptor",
    # Exceptions
    "LoginConfigError",
    "ConfigurationUnavailable",
    "UnsupportedNativeCredential",
    "PlatformModuleResolutionFailure",
    "ConnectionFailure",
    # Metadata
    "__version__",
]
