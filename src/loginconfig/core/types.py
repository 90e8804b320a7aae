"""
LoginConfig Core Types

Value types describing login-module configuration entries.

Design Principles:
- Immutable: descriptors use frozen attrs classes
- Validated: constraints enforced at construction
"""

from __future__ import annotations

from enum import Enum, auto
from types import MappingProxyType
from typing import Any, Mapping, Union

import attrs
from attrs import field, validators


# =============================================================================
# CONSTANTS
# =============================================================================

# Context name reserved by the driver for its own Kerberos login
DRIVER_CONTEXT_NAME = "SQLDriverKerberos"

# Environment switch enabling the native GSS credential path
NATIVE_GSS_ENV = "LOGINCONFIG_GSS_NATIVE"

OptionValue = Union[str, bool]


# =============================================================================
# ENUMS
# =============================================================================


class ControlFlag(Enum):
    """
    Policy for how a login module's outcome affects overall authentication.

    - REQUIRED: must succeed; remaining modules still run
    - REQUISITE: must succeed; failure stops the list
    - SUFFICIENT: success stops the list
    - OPTIONAL: outcome does not decide the result
    """

    REQUIRED = auto()
    REQUISITE = auto()
    SUFFICIENT = auto()
    OPTIONAL = auto()


# =============================================================================
# CONTEXT NAMES
# =============================================================================


def validate_context_name(name: Any) -> str:
    """
    Check that ``name`` is usable as a context name.

    Raises:
        TypeError: if name is not a string
        ValueError: if name is empty
    """
    if not isinstance(name, str):
        raise TypeError(f"Context name must be a string, got {type(name).__name__}")
    if not name:
        raise ValueError("Context name must not be empty")
    return name


# =============================================================================
# LOGIN MODULE DESCRIPTOR
# =============================================================================


def _freeze_options(options: Mapping[str, OptionValue]) -> Mapping[str, OptionValue]:
    return MappingProxyType(dict(options))


def _check_options(instance: Any, attribute: attrs.Attribute, value: Mapping) -> None:
    for key, option in value.items():
        if not isinstance(key, str):
            raise TypeError(f"Option names must be strings, got {key!r}")
        if not isinstance(option, (str, bool)):
            raise TypeError(
                f"Option '{key}' must be a string or boolean, got {type(option).__name__}"
            )


@attrs.define(frozen=True, slots=True)
class LoginModuleDescriptor:
    """
    One entry of a login configuration.

    Identifies a login module implementation, the control flag that
    governs it, and its module-specific options.

    INVARIANT: module is non-empty
    INVARIANT: options are read-only after construction
    """

    module: str = field(validator=[validators.instance_of(str), validators.min_len(1)])
    control_flag: ControlFlag = field(
        default=ControlFlag.REQUIRED,
        validator=validators.instance_of(ControlFlag),
    )
    options: Mapping[str, OptionValue] = field(
        factory=dict,
        converter=_freeze_options,
        validator=_check_options,
        hash=False,
    )

    def __str__(self) -> str:
        return f"{self.module} {self.control_flag.name}"
