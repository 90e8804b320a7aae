"""
LoginConfig Core Module

Provides foundational types shared by the configuration sources,
the registry and the login front.

Components:
- types: LoginModuleDescriptor, ControlFlag, context names
- state_machine: Base state machine with transition history
- exceptions: Custom exception types
"""

from loginconfig.core.types import (
    DRIVER_CONTEXT_NAME,
    ControlFlag,
    LoginModuleDescriptor,
    validate_context_name,
)
from loginconfig.core.state_machine import StateMachineBase, Transition
from loginconfig.core.exceptions import (
    LoginConfigError,
    ConfigurationUnavailable,
    UnsupportedNativeCredential,
    PlatformModuleResolutionFailure,
    InvalidSettingError,
    ConnectionFailure,
)

__all__ = [
    # Types
    "DRIVER_CONTEXT_NAME",
    "ControlFlag",
    "LoginModuleDescriptor",
    "validate_context_name",
    # State Machine
    "StateMachineBase",
    "Transition",
    # Exceptions
    "LoginConfigError",
    "ConfigurationUnavailable",
    "UnsupportedNativeCredential",
    "PlatformModuleResolutionFailure",
    "InvalidSettingError",
    "ConnectionFailure",
]
