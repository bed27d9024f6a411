"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from modbundle.core.config import DEFAULT_KIT_URL, Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("MODBUNDLE_KIT_URL", raising=False)
    config = Settings(_env_file=None)
    assert config.kit_url == DEFAULT_KIT_URL
    assert config.collision_policy == "overwrite"
    assert config.bundle_filename() == "MH2p_ModKit_Mods_Bundle.zip"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MODBUNDLE_FETCH_TIMEOUT", "2.5")
    monkeypatch.setenv("MODBUNDLE_PRODUCT_NAME", "MIB3")
    config = Settings(_env_file=None)
    assert config.fetch_timeout == 2.5
    assert config.bundle_filename() == "MIB3_ModKit_Mods_Bundle.zip"


@pytest.mark.parametrize("field, value", [
    ("collision_policy", "merge"),
    ("compression", "lzma"),
    ("fetch_timeout", 0),
    ("max_concurrent_fetches", 0),
])
def test_invalid_values(field, value):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: value})
