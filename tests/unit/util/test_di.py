"""Tests for provider selection."""

import pytest

from social.util.di import (
    IdentityProvider,
    PersistenceProvider,
    ProdConfigProvider,
    ProdIdentityProvider,
    ProdPersistenceProvider,
    build_providers,
    components,
    get_provider,
)
from tests.di import MockIdentityProvider, MockPersistenceProvider, build_test_container


def test_components():
    assert components() == {"identity", "persistence"}


def test_concrete_provider_is_returned_as_is():
    assert get_provider(ProdConfigProvider, use_mock=True) is ProdConfigProvider


def test_component_implementation_selected_by_flag():
    assert get_provider(IdentityProvider) is ProdIdentityProvider
    assert get_provider(IdentityProvider, use_mock=True) is MockIdentityProvider
    assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider


def test_build_providers_mocks_only_requested_components():
    providers = build_providers(mocked={"identity"})

    types = {type(p) for p in providers}
    assert MockIdentityProvider in types
    assert ProdPersistenceProvider in types


def test_unknown_component_is_rejected():
    with pytest.raises(ValueError, match="Unknown components"):
        build_test_container(unmock={"search"})
