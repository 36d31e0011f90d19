"""Shared fixtures.

Every test runs against an isolated config directory via
STUB_CALC_CONFIG_PATH so a developer's settings.json never leaks in.
"""

import json

import pytest

from stubcalc.sdk.taxes import load_tax_tables


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point the SDK at an empty config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("STUB_CALC_CONFIG_PATH", str(config_dir))
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    return {"config_dir": config_dir}


@pytest.fixture
def write_settings(isolated_env):
    """Write settings.json into the isolated config directory."""
    def _write(settings: dict):
        path = isolated_env["config_dir"] / "settings.json"
        path.write_text(json.dumps(settings))
        return path
    return _write


@pytest.fixture
def tables_2024():
    return load_tax_tables("2024")


@pytest.fixture
def tables_2025():
    return load_tax_tables("2025")
