# src/nodehub/adapters/db/sqlite_store.py
# соединение SQLite (SQLite) + простое KV (SQLiteKV)
from __future__ import annotations
import sqlite3, json
from contextlib import closing
from pathlib import Path
from typing import Any, Final

from nodehub.config import const
from nodehub.ports import KV, SQL
from nodehub.ports.paths import PathProvider


class SQLite(SQL):
    def __init__(self, paths: PathProvider):
        self._db_path: Final[Path] = Path(paths.state_dir()) / const.DB_FILE
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        # ленивое создание файла
        with closing(sqlite3.connect(self._db_path)) as con:
            con.execute("PRAGMA journal_mode=WAL")

    @property
    def path(self) -> Path:
        return self._db_path

    def connect(self) -> sqlite3.Connection:
        # короткоживущее соединение на каждую операцию: безопасно из разных задач/потоков
        return sqlite3.connect(self._db_path, timeout=5.0)


class SQLiteKV(KV):
    def __init__(self, sql: SQLite, namespace: str = "kv"):
        self.sql = sql
        self.ns = namespace
        self._ensure()

    def _ensure(self) -> None:
        with closing(self.sql.connect()) as con:
            con.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    ns TEXT NOT NULL,
                    k  TEXT NOT NULL,
                    v  BLOB,
                    PRIMARY KEY (ns, k)
                )
            """
            )
            con.commit()

    def get(self, key: str, default: Any = None) -> Any:
        with closing(self.sql.connect()) as con:
            cur = con.execute("SELECT v FROM kv WHERE ns=? AND k=?", (self.ns, key))
            row = cur.fetchone()
        if not row:
            return default
        return json.loads(row[0])

    def set(self, key: str, value: Any) -> None:
        data = json.dumps(value, ensure_ascii=False)
        with closing(self.sql.connect()) as con:
            con.execute(
                "INSERT INTO kv(ns,k,v) VALUES(?,?,?) ON CONFLICT(ns,k) DO UPDATE SET v=excluded.v",
                (self.ns, key, data),
            )
            con.commit()

    def delete(self, key: str) -> None:
        with closing(self.sql.connect()) as con:
            con.execute("DELETE FROM kv WHERE ns=? AND k=?", (self.ns, key))
            con.commit()
