# src/nodehub/config/const.py
from __future__ import annotations

# значения по умолчанию; переопределяются через config.yaml / .env / ENV
PROBE_TIMEOUT_SEC: float = 3.0
PROBE_USERNAME: str = "Skyport"
API_TOKEN: str = "dev-local-token"
API_TOKEN_HEADER: str = "X-NodeHub-Token"

CONFIG_FILE: str = "config.yaml"
DB_FILE: str = "nodehub.db"
LOG_FILE: str = "nodehub.log"

# KV keys: ordered id list and one record per node
NODES_KEY: str = "nodes"
NODE_KEY_SUFFIX: str = "_node"
