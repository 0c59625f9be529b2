# src/nodehub/services/settings.py
from __future__ import annotations
from dataclasses import dataclass, replace
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from nodehub.config import const


def _parse_env_file(path: str) -> Dict[str, str]:
    data: Dict[str, str] = {}
    p = Path(path)
    if not p.exists():
        return data
    for line in p.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            k, v = line.split("=", 1)
            data[k.strip()] = v.strip().strip('"').strip("'")
    return data


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at top level")
    return data


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    base_dir: Path
    profile: str = "default"
    probe_timeout: float = const.PROBE_TIMEOUT_SEC
    probe_username: str = const.PROBE_USERNAME
    api_token: str = const.API_TOKEN
    expose_api_keys: bool = False
    log_level: str = "INFO"

    @staticmethod
    def from_sources(env_file: Optional[str] = ".env") -> "Settings":
        """
        Сборка настроек. Приоритет: ENV > .env > {base_dir}/config.yaml > значения по умолчанию.
        """
        env_file_vars = _parse_env_file(env_file) if env_file else {}

        def pick_env(key: str) -> Optional[str]:
            return os.environ.get(key) or env_file_vars.get(key) or None

        override_base = pick_env("NODEHUB_BASE_DIR")
        base = Path(override_base).expanduser().resolve() if override_base else (Path.home() / ".nodehub").resolve()
        file_conf = _load_yaml(base / const.CONFIG_FILE)

        def pick(key: str, yaml_key: str, default: Any) -> Any:
            value = pick_env(key)
            if value is not None:
                return value
            return file_conf.get(yaml_key, default)

        timeout = float(pick("NODEHUB_PROBE_TIMEOUT", "probe_timeout", const.PROBE_TIMEOUT_SEC))
        if timeout <= 0:
            raise ValueError("probe_timeout must be positive")

        return Settings(
            base_dir=base,
            profile=str(pick("NODEHUB_PROFILE", "profile", "default")),
            probe_timeout=timeout,
            probe_username=str(pick("NODEHUB_PROBE_USERNAME", "probe_username", const.PROBE_USERNAME)),
            api_token=str(pick("NODEHUB_TOKEN", "api_token", const.API_TOKEN)),
            expose_api_keys=_as_bool(pick("NODEHUB_EXPOSE_API_KEYS", "expose_api_keys", False)),
            log_level=str(pick("NODEHUB_LOG_LEVEL", "log_level", "INFO")).upper(),
        )

    def with_overrides(self, **kw) -> "Settings":
        # перегружать можно ТОЛЬКО безопасные поля (base_dir/profile)
        safe = {k: v for k, v in kw.items() if k in {"base_dir", "profile"} and v is not None}
        if "base_dir" in safe:
            safe["base_dir"] = Path(safe["base_dir"]).expanduser().resolve()
        return replace(self, **safe)
