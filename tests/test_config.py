"""Tests for settings validation."""

import pytest

from offline_sync.config import DEFAULT_STATIC_ASSETS, Settings, _split_assets, setup_logging


def test_derived_partition_names():
    config = Settings(cache_prefix="sevadaan", cache_version="v1.0.0")

    assert config.static_cache_name == "sevadaan-static-v1.0.0"
    assert config.dynamic_cache_name == "sevadaan-dynamic-v1.0.0"
    assert config.root_cache_name == "sevadaan-ngo-v1.0.0"


@pytest.mark.parametrize(
    "overrides",
    [
        {"store_backend": "sqlite"},
        {"cache_version": "  "},
        {"request_timeout": 0},
        {"static_assets": ()},
    ],
)
def test_invalid_settings_rejected(overrides):
    with pytest.raises(ValueError):
        Settings(**overrides)


def test_asset_list_parsing():
    assert _split_assets(None) == DEFAULT_STATIC_ASSETS
    assert _split_assets("/, /app.js ,,/app.css") == ("/", "/app.js", "/app.css")


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("chatty")
