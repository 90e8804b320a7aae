"""
Pytest configuration and shared fixtures for LoginConfig tests.
"""

import pytest

from loginconfig.core.types import ControlFlag, LoginModuleDescriptor
from loginconfig.login import DriverLogin
from loginconfig.registry import GlobalRegistry, global_registry
from loginconfig.resolver import ConnectionAuthResolver
from loginconfig.runtime import GSSAPI_KRB5_MODULE, RuntimeFamily
from loginconfig.settings import RuntimeSettings
from loginconfig.sources import MappingSource


# Context used by unrelated code that overwrites the registry
CLIENT_CONTEXT_NAME = "CLIENT_CONTEXT_NAME"


# =============================================================================
# SOURCE FIXTURES
# =============================================================================


@pytest.fixture
def client_context_name() -> str:
    """Context name owned by unrelated code."""
    return CLIENT_CONTEXT_NAME


@pytest.fixture
def family() -> RuntimeFamily:
    """Runtime family pinned so tests do not depend on the host platform."""
    return RuntimeFamily.GSSAPI


@pytest.fixture
def driver_descriptor() -> LoginModuleDescriptor:
    """The descriptor the driver supplies on a GSSAPI platform."""
    return LoginModuleDescriptor(
        module=GSSAPI_KRB5_MODULE,
        control_flag=ControlFlag.REQUIRED,
        options={},
    )


@pytest.fixture
def foreign_source() -> MappingSource:
    """Source installed by unrelated code: has no driver context entry."""
    return MappingSource({
        CLIENT_CONTEXT_NAME: [
            LoginModuleDescriptor(
                module="vendor.kafka.Krb5LoginModule",
                control_flag=ControlFlag.REQUIRED,
            ),
        ],
    })


# =============================================================================
# REGISTRY AND RESOLVER FIXTURES
# =============================================================================


@pytest.fixture
def registry() -> GlobalRegistry:
    """Fresh registry, isolated from the process-wide one."""
    return GlobalRegistry()


@pytest.fixture
def resolver(registry: GlobalRegistry, family: RuntimeFamily) -> ConnectionAuthResolver:
    """Resolver bound to the fresh registry."""
    return ConnectionAuthResolver(registry=registry, family=family)


@pytest.fixture
def driver_login(resolver: ConnectionAuthResolver) -> DriverLogin:
    """Login front with native GSSAPI disabled."""
    return DriverLogin(
        resolver=resolver,
        runtime=RuntimeSettings(native_gss_enabled=False),
    )


@pytest.fixture
def restore_global_registry():
    """Put the process-wide registry back the way the test found it."""
    saved_source = global_registry.current()
    saved_installed = global_registry._driver_installed
    yield global_registry
    global_registry._current = saved_source
    global_registry._driver_installed = saved_installed


# =============================================================================
# PYTEST MARKERS
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "native: marks tests requiring native GSSAPI/SSPI"
    )
