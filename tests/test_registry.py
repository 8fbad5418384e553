import logging

import pytest

from registry import ComponentRegistry


@pytest.fixture
def registry():
    registry = ComponentRegistry("tool")
    registry.register("alpha", lambda: object())
    registry.register("beta", lambda: object())
    registry.register("gamma", lambda: object())
    return registry


def test_everything_allowed_without_filters(registry):
    assert registry.names() == ["alpha", "beta", "gamma"]
    assert not registry.is_allowed("delta")


def test_include_restricts_names(registry):
    registry.apply_filters(include=["beta", "gamma"])

    assert registry.names() == ["beta", "gamma"]


def test_exclude_wins_over_include(registry):
    registry.apply_filters(include=["beta", "gamma"], exclude=["gamma"])

    assert registry.names() == ["beta"]


def test_unknown_filter_names_are_logged(registry, caplog):
    with caplog.at_level(logging.WARNING):
        registry.apply_filters(exclude=["omega"])

    assert "Unknown tool in filters: omega" in caplog.text
    assert registry.names() == ["alpha", "beta", "gamma"]


def test_create_is_memoized(registry):
    assert registry.create("alpha") is registry.create("alpha")
    assert len(registry.create_all()) == 3


def test_register_replaces_instance(registry):
    first = registry.create("alpha")
    registry.register("alpha", lambda: "replacement")

    assert registry.create("alpha") == "replacement"
    assert registry.create("alpha") is not first


def test_create_rejects_filtered_names(registry):
    registry.apply_filters(exclude=["alpha"])

    with pytest.raises(KeyError):
        registry.create("alpha")
    with pytest.raises(KeyError):
        registry.create("delta")
