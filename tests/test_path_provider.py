"""Tests covering path resolution helpers exposed through the global context."""

from __future__ import annotations

from pathlib import Path

from nodehub.adapters.fs.path_provider import PathProvider
from nodehub.services.app_context import get_ctx
from nodehub.services.settings import Settings


def test_path_provider_layout(tmp_path):
    settings = Settings.from_sources(env_file=None).with_overrides(base_dir=tmp_path / "nodehub-test", profile="test")
    provider = PathProvider.from_settings(settings)

    base = Path(settings.base_dir).expanduser().resolve()
    assert provider.base_dir() == base
    assert provider.state_dir() == base / "state"
    assert provider.logs_dir() == base / "logs"

    provider.ensure_tree()
    assert provider.state_dir().is_dir() and provider.logs_dir().is_dir()


def test_app_context_keeps_db_under_state_dir():
    ctx = get_ctx()
    assert Path(ctx.sql.path).parent == Path(ctx.paths.state_dir())
    assert Path(ctx.paths.state_dir()).parent == Path(ctx.paths.base_dir())
