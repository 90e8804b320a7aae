"""
LoginConfig Driver Login

The handshake-facing front of login configuration resolution. Run once
per connection attempt, immediately before GSSAPI context establishment:

1. Ensure the driver configuration is installed in the registry (first use)
2. Resolve the connection's mode and configuration source
3. Look up the driver context, or check the native credential path
4. Hand back a LoginPlan, or a connection failure

Attempt state machine:

    INITIAL --SourceResolved--> RESOLVED --ModulesFound--> READY
                                         --AttemptFailed--> FAILED
    INITIAL --NativeRequested--> NATIVE_REQUESTED --NativeAccepted--> READY
                                                  --AttemptFailed--> FAILED
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Dict, Optional, Tuple

import attrs
import structlog
from returns.result import Failure, Result, Success

from loginconfig.core.exceptions import (
    ConfigurationUnavailable,
    ConnectionFailure,
    LoginConfigError,
    UnsupportedNativeCredential,
)
from loginconfig.core.state_machine import StateMachineBase, TransitionEntry
from loginconfig.core.types import DRIVER_CONTEXT_NAME, LoginModuleDescriptor
from loginconfig.resolver import ConnectionAuthMode, ConnectionAuthResolver
from loginconfig.runtime import gssapi_available
from loginconfig.settings import AuthSettings, RuntimeSettings

logger = structlog.get_logger()


# =============================================================================
# ATTEMPT STATES AND EVENTS
# =============================================================================


class AttemptState(Enum):
    """Login attempt state."""

    INITIAL = auto()
    RESOLVED = auto()
    NATIVE_REQUESTED = auto()
    READY = auto()
    FAILED = auto()


@attrs.define(frozen=True, slots=True)
class SourceResolved:
    mode: ConnectionAuthMode


@attrs.define(frozen=True, slots=True)
class NativeRequested:
    pass


@attrs.define(frozen=True, slots=True)
class NativeAccepted:
    pass


@attrs.define(frozen=True, slots=True)
class ModulesFound:
    modules: Tuple[LoginModuleDescriptor, ...]


@attrs.define(frozen=True, slots=True)
class AttemptFailed:
    error: LoginConfigError


@attrs.define(frozen=True, slots=True)
class AttemptContext:
    """Data accumulated over one login attempt."""

    mode: Optional[ConnectionAuthMode] = None
    modules: Tuple[LoginModuleDescriptor, ...] = ()
    error: Optional[LoginConfigError] = None


@attrs.define
class LoginAttempt(StateMachineBase[AttemptState, Any, AttemptContext]):
    """State machine tracking one connection's login configuration."""

    def initial_state(self) -> AttemptState:
        return AttemptState.INITIAL

    def transition_table(self) -> Dict[Tuple[AttemptState, type], TransitionEntry]:
        return {
            (AttemptState.INITIAL, SourceResolved): (
                AttemptState.RESOLVED,
                self._handle_resolved,
            ),
            (AttemptState.INITIAL, NativeRequested): (
                AttemptState.NATIVE_REQUESTED,
                self._handle_native_requested,
            ),
            (AttemptState.RESOLVED, ModulesFound): (
                AttemptState.READY,
                self._handle_modules_found,
            ),
            (AttemptState.RESOLVED, AttemptFailed): (
                AttemptState.FAILED,
                self._handle_failed,
            ),
            (AttemptState.NATIVE_REQUESTED, NativeAccepted): (
                AttemptState.READY,
                lambda event, ctx: ctx,
            ),
            (AttemptState.NATIVE_REQUESTED, AttemptFailed): (
                AttemptState.FAILED,
                self._handle_failed,
            ),
        }

    @staticmethod
    def _handle_resolved(event: SourceResolved, ctx: AttemptContext) -> AttemptContext:
        return attrs.evolve(ctx, mode=event.mode)

    @staticmethod
    def _handle_native_requested(event: NativeRequested, ctx: AttemptContext) -> AttemptContext:
        return attrs.evolve(ctx, mode=ConnectionAuthMode.NATIVE_CREDENTIAL)

    @staticmethod
    def _handle_modules_found(event: ModulesFound, ctx: AttemptContext) -> AttemptContext:
        return attrs.evolve(ctx, modules=event.modules)

    @staticmethod
    def _handle_failed(event: AttemptFailed, ctx: AttemptContext) -> AttemptContext:
        return attrs.evolve(ctx, error=event.error)


# =============================================================================
# LOGIN PLAN
# =============================================================================


@attrs.define(frozen=True, slots=True)
class LoginPlan:
    """
    What the handshake should authenticate with.

    For NATIVE_CREDENTIAL, modules is empty and the handshake acquires
    the default GSS credential itself.
    """

    mode: ConnectionAuthMode
    context_name: str = DRIVER_CONTEXT_NAME
    modules: Tuple[LoginModuleDescriptor, ...] = ()

    @property
    def native_credential(self) -> bool:
        return self.mode is ConnectionAuthMode.NATIVE_CREDENTIAL


# =============================================================================
# DRIVER LOGIN
# =============================================================================


@attrs.define
class DriverLogin:
    """
    Prepares login configuration for connection attempts.

    Example:
        login = DriverLogin()
        settings = AuthSettings.from_properties({"useDefaultJaasConfig": "true"})

        plan = login.prepare_or_raise(settings)
        for module in plan.modules:
            ...  # hand to the GSSAPI handshake
    """

    resolver: ConnectionAuthResolver = attrs.Factory(ConnectionAuthResolver)
    runtime: RuntimeSettings = attrs.Factory(RuntimeSettings.from_env)

    _last_attempt: Optional[LoginAttempt] = None
    _logger: Any = attrs.Factory(lambda: structlog.get_logger())

    @property
    def last_attempt(self) -> Optional[LoginAttempt]:
        """State machine of the most recent attempt."""
        return self._last_attempt

    def prepare(self, settings: AuthSettings) -> Result[LoginPlan, LoginConfigError]:
        """
        Resolve the login configuration for one connection attempt.

        Returns:
            Success(LoginPlan) when the connection can proceed
            Failure(ConfigurationUnavailable) when the resolved source has
                no entry for the driver context
            Failure(UnsupportedNativeCredential) when the native credential
                was requested but native GSSAPI is not enabled
        """
        registry = self.resolver.registry
        if registry.install_driver_configuration(self.resolver.default_source.family):
            self._logger.debug("driver_first_use")

        attempt = LoginAttempt(
            _state=AttemptState.INITIAL,
            _context=AttemptContext(),
        )
        self._last_attempt = attempt

        resolution = self.resolver.resolve_settings(settings)

        if resolution.native_credential:
            attempt.process_event(NativeRequested())
            error = self._check_native_credential()
            if error is not None:
                return self._fail(attempt, error)
            attempt.process_event(NativeAccepted())
            self._logger.info("login_plan_ready", mode=resolution.mode.name)
            return Success(LoginPlan(mode=resolution.mode))

        attempt.process_event(SourceResolved(mode=resolution.mode))
        modules = tuple(resolution.source.lookup(DRIVER_CONTEXT_NAME) or ())
        if not modules:
            return self._fail(attempt, ConfigurationUnavailable(DRIVER_CONTEXT_NAME))

        attempt.process_event(ModulesFound(modules=modules))
        self._logger.info(
            "login_plan_ready",
            mode=resolution.mode.name,
            modules=[m.module for m in modules],
        )
        return Success(LoginPlan(mode=resolution.mode, modules=modules))

    def prepare_or_raise(self, settings: AuthSettings) -> LoginPlan:
        """
        Like prepare(), but raise on failure.

        Raises:
            ConnectionFailure: with the underlying error as __cause__
        """
        result = self.prepare(settings)
        if isinstance(result, Failure):
            error = result.failure()
            raise ConnectionFailure(f"Kerberos login failed: {error.message}") from error
        return result.unwrap()

    def _check_native_credential(self) -> Optional[UnsupportedNativeCredential]:
        if not self.runtime.native_gss_enabled:
            return UnsupportedNativeCredential()
        available, reason = gssapi_available()
        if not available:
            return UnsupportedNativeCredential(reason)
        return None

    def _fail(
        self, attempt: LoginAttempt, error: LoginConfigError
    ) -> Result[LoginPlan, LoginConfigError]:
        attempt.process_event(AttemptFailed(error=error))
        self._logger.warning(
            "login_configuration_failed",
            error=error.message,
            error_type=type(error).__name__,
        )
        return Failure(error)
