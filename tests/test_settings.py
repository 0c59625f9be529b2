# tests/test_settings.py
from pathlib import Path

import pytest
import yaml

from nodehub.services.settings import Settings


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("NODEHUB_PROBE_TIMEOUT", raising=False)
    s = Settings.from_sources(env_file=None)
    assert s.base_dir == (tmp_path / "base").resolve()
    assert s.probe_timeout == 3.0
    assert s.probe_username == "Skyport"
    assert s.api_token == "dev-local-token"
    assert s.expose_api_keys is False


def test_yaml_then_env_precedence(tmp_path, monkeypatch):
    base = tmp_path / "base"
    base.mkdir(parents=True, exist_ok=True)
    (base / "config.yaml").write_text(
        yaml.safe_dump({"probe_timeout": 7.5, "probe_username": "Panel", "api_token": "from-yaml"}), encoding="utf-8"
    )
    monkeypatch.delenv("NODEHUB_PROBE_TIMEOUT", raising=False)
    monkeypatch.setenv("NODEHUB_TOKEN", "from-env")
    s = Settings.from_sources(env_file=None)
    assert s.probe_timeout == 7.5
    assert s.probe_username == "Panel"
    assert s.api_token == "from-env"


def test_env_file(tmp_path, monkeypatch):
    env = tmp_path / ".env"
    env.write_text('# comment\nNODEHUB_EXPOSE_API_KEYS="1"\nNODEHUB_PROBE_USERNAME=daemon\n', encoding="utf-8")
    s = Settings.from_sources(env_file=str(env))
    assert s.expose_api_keys is True
    assert s.probe_username == "daemon"


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("NODEHUB_PROBE_TIMEOUT", "0")
    with pytest.raises(ValueError):
        Settings.from_sources(env_file=None)


def test_with_overrides_only_touches_safe_fields(tmp_path):
    s = Settings.from_sources(env_file=None)
    o = s.with_overrides(base_dir=str(tmp_path / "other"), profile="p2", api_token="hacked")
    assert o.base_dir == (tmp_path / "other").resolve()
    assert o.profile == "p2"
    assert o.api_token == s.api_token
    assert isinstance(o.base_dir, Path)
