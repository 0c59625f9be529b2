# tests/smoke/test_kv_sql.py
import sqlite3

import pytest

from nodehub.services.app_context import get_ctx


def test_kv():
    ctx = get_ctx()
    ctx.kv.set("foo", {"a": 1})
    assert ctx.kv.get("foo") == {"a": 1}
    ctx.kv.delete("foo")
    assert ctx.kv.get("foo", "gone") == "gone"


def test_kv_closes_its_connections(monkeypatch):
    ctx = get_ctx()
    opened = []
    connect = ctx.sql.connect

    def _tracking():
        con = connect()
        opened.append(con)
        return con

    monkeypatch.setattr(ctx.sql, "connect", _tracking)
    ctx.kv.set("foo", 1)
    ctx.kv.get("foo")
    ctx.kv.delete("foo")
    assert len(opened) == 3
    for con in opened:
        with pytest.raises(sqlite3.ProgrammingError):
            con.execute("SELECT 1")
