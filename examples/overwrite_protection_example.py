#!/usr/bin/env python3
"""
Login Configuration Overwrite Example

Demonstrates how a connection's useDefaultJaasConfig setting decides
whether an unrelated overwrite of the global registry breaks Kerberos
logins.

1. First connection installs the driver configuration
2. Unrelated code replaces the global registry
3. useDefaultJaasConfig=true connections keep working
4. Default connections fail with a missing login module error
"""

from loginconfig import (
    AuthSettings,
    ConnectionFailure,
    DriverLogin,
    LoginModuleDescriptor,
    MappingSource,
    set_configuration,
)


def connect(login: DriverLogin, properties: dict) -> None:
    settings = AuthSettings.from_properties(properties)
    try:
        plan = login.prepare_or_raise(settings)
    except ConnectionFailure as e:
        print(f"   FAILED: {e}")
        print(f"   Cause:  {type(e.__cause__).__name__}")
        return
    print(f"   OK: mode={plan.mode.name} modules={[m.module for m in plan.modules]}")


def main():
    """Walk through the overwrite scenarios."""

    print("=" * 70)
    print("LoginConfig - Global Registry Overwrite")
    print("=" * 70)
    print()

    login = DriverLogin()

    print("1. Connect before any overwrite")
    print("-" * 40)
    connect(login, {})
    connect(login, {"useDefaultJaasConfig": "true"})
    print()

    print("2. Unrelated code replaces the global registry")
    print("-" * 40)
    set_configuration(MappingSource({
        "KafkaClient": [LoginModuleDescriptor(module="vendor.kafka.Krb5LoginModule")],
    }))
    print("   Installed a configuration with only a KafkaClient entry")
    print()

    print("3. Connect with useDefaultJaasConfig=true")
    print("-" * 40)
    connect(login, {"useDefaultJaasConfig": "true"})
    print()

    print("4. Connect with the global registry")
    print("-" * 40)
    connect(login, {})
    print()

    print("5. Native GSS credential without LOGINCONFIG_GSS_NATIVE")
    print("-" * 40)
    connect(login, {"useDefaultGSSCredential": "true"})


if __name__ == "__main__":
    main()
