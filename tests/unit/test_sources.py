"""
Unit tests for loginconfig.sources module.

Tests the driver default source, delegation to a prior source, and the
mapping-backed source used by external code.
"""

import pytest

from loginconfig.core.exceptions import PlatformModuleResolutionFailure
from loginconfig.core.types import DRIVER_CONTEXT_NAME, ControlFlag, LoginModuleDescriptor
from loginconfig.runtime import GSSAPI_KRB5_MODULE, SSPI_KRB5_MODULE, RuntimeFamily
from loginconfig.sources import (
    ConfigurationSource,
    DelegatingSource,
    DriverDefaultSource,
    EmptySource,
    MappingSource,
)


class RecordingSource(ConfigurationSource):
    """Source that records lookups and refreshes."""

    def __init__(self, answer=()):
        self.answer = answer
        self.lookups = []
        self.refreshed = 0

    def lookup(self, context_name):
        self.lookups.append(context_name)
        return self.answer

    def refresh(self):
        self.refreshed += 1


class TestEmptySource:
    """Tests for EmptySource."""

    def test_returns_empty_for_everything(self):
        """Test every lookup is empty."""
        source = EmptySource()
        assert source.lookup(DRIVER_CONTEXT_NAME) == ()
        assert source.lookup("anything") == ()


class TestMappingSource:
    """Tests for MappingSource."""

    def test_lookup_known_context(self, foreign_source, client_context_name):
        """Test configured context is returned as a tuple."""
        result = foreign_source.lookup(client_context_name)
        assert isinstance(result, tuple)
        assert len(result) == 1
        assert result[0].module == "vendor.kafka.Krb5LoginModule"

    def test_lookup_unknown_context(self, foreign_source):
        """Test unknown context yields empty result."""
        assert foreign_source.lookup(DRIVER_CONTEXT_NAME) == ()

    def test_entries_copied(self):
        """Test later changes to the caller's mapping are not observed."""
        entries = {"A": [LoginModuleDescriptor(module="a.Module")]}
        source = MappingSource(entries)
        entries["B"] = [LoginModuleDescriptor(module="b.Module")]
        assert source.lookup("B") == ()
        assert source.context_names == ("A",)

    def test_refresh_is_noop(self, foreign_source, client_context_name):
        """Test default refresh leaves entries intact."""
        foreign_source.refresh()
        assert len(foreign_source.lookup(client_context_name)) == 1


class TestDriverDefaultSource:
    """Tests for DriverDefaultSource."""

    def test_driver_context_descriptor(self, family, driver_descriptor):
        """Test the driver context yields the fixed descriptor."""
        source = DriverDefaultSource(family)
        assert source.lookup(DRIVER_CONTEXT_NAME) == (driver_descriptor,)

    def test_descriptor_shape(self, family):
        """Test descriptor is REQUIRED with no options."""
        descriptor = DriverDefaultSource(family).descriptor
        assert descriptor.control_flag == ControlFlag.REQUIRED
        assert dict(descriptor.options) == {}

    def test_other_context_empty(self, family, client_context_name):
        """Test any other context yields empty result."""
        source = DriverDefaultSource(family)
        assert source.lookup(client_context_name) == ()

    def test_gssapi_family_module(self):
        """Test GSSAPI family selects the GSSAPI module."""
        source = DriverDefaultSource(RuntimeFamily.GSSAPI)
        assert source.lookup(DRIVER_CONTEXT_NAME)[0].module == GSSAPI_KRB5_MODULE

    def test_sspi_family_module(self):
        """Test SSPI family selects the SSPI module."""
        source = DriverDefaultSource(RuntimeFamily.SSPI)
        assert source.lookup(DRIVER_CONTEXT_NAME)[0].module == SSPI_KRB5_MODULE

    def test_platform_detected_by_default(self):
        """Test construction without a family uses the running platform."""
        source = DriverDefaultSource()
        assert source.family in (RuntimeFamily.GSSAPI, RuntimeFamily.SSPI)

    def test_unknown_platform_fails_at_construction(self, monkeypatch):
        """Test unrecognized platform is fatal at construction."""
        monkeypatch.setattr("loginconfig.runtime.sys.platform", "emscripten")
        with pytest.raises(PlatformModuleResolutionFailure):
            DriverDefaultSource()

    def test_repeated_lookups_identical(self, family):
        """Test descriptor never changes between lookups."""
        source = DriverDefaultSource(family)
        first = source.lookup(DRIVER_CONTEXT_NAME)
        second = source.lookup(DRIVER_CONTEXT_NAME)
        assert first == second
        assert first[0] is second[0]


class TestDelegatingSource:
    """Tests for DelegatingSource."""

    def test_driver_context_overrides_prior(self, family, driver_descriptor):
        """Test driver context ignores the prior source's own entry."""
        prior = MappingSource({
            DRIVER_CONTEXT_NAME: [
                LoginModuleDescriptor(module="other.Module", control_flag=ControlFlag.OPTIONAL),
            ],
        })
        source = DelegatingSource(prior, family)
        assert source.lookup(DRIVER_CONTEXT_NAME) == (driver_descriptor,)

    def test_driver_context_does_not_consult_prior(self, family):
        """Test prior is never asked for the driver context."""
        prior = RecordingSource()
        DelegatingSource(prior, family).lookup(DRIVER_CONTEXT_NAME)
        assert prior.lookups == []

    def test_other_context_forwarded(self, family, foreign_source, client_context_name):
        """Test other contexts are answered by the prior source."""
        source = DelegatingSource(foreign_source, family)
        assert source.lookup(client_context_name) == foreign_source.lookup(client_context_name)

    def test_forwarded_empty_result(self, family, foreign_source):
        """Test empty results from the prior are passed through."""
        source = DelegatingSource(foreign_source, family)
        assert source.lookup("UNKNOWN") == ()

    def test_list_answer_returned_unchanged(self, family):
        """Test a prior answering with a list gets that same list back."""
        answer = [LoginModuleDescriptor(module="a.Module")]
        prior = RecordingSource(answer=answer)
        result = DelegatingSource(prior, family).lookup("Other")
        assert result == prior.lookup("Other")
        assert result is answer

    def test_prior_none_answer_normalized(self, family):
        """Test a prior answering None yields an empty tuple."""
        source = DelegatingSource(RecordingSource(answer=None), family)
        assert source.lookup("UNKNOWN") == ()

    def test_no_prior_uses_empty_source(self, family, driver_descriptor):
        """Test missing prior behaves as an empty source."""
        source = DelegatingSource(None, family)
        assert isinstance(source.prior, EmptySource)
        assert source.lookup(DRIVER_CONTEXT_NAME) == (driver_descriptor,)
        assert source.lookup("UNKNOWN") == ()

    def test_refresh_forwarded(self, family):
        """Test refresh reaches the prior source."""
        prior = RecordingSource()
        DelegatingSource(prior, family).refresh()
        assert prior.refreshed == 1

    def test_matches_driver_default(self, family):
        """Test driver context answer equals DriverDefaultSource's."""
        assert DelegatingSource(None, family).lookup(DRIVER_CONTEXT_NAME) == (
            DriverDefaultSource(family).lookup(DRIVER_CONTEXT_NAME)
        )
