"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used by both entry points (manifest
path, listener address, TLS material, scan workers and timeouts).
"""

from __future__ import annotations

import os
from typing import Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_optional_int(name: str) -> Optional[int]:
    value = _env_int(name, 0)
    return value if value > 0 else None


# Manifest
PATHS_FILE = os.environ.get("PATHS_FILE", "paths.txt").strip()

# Query service / transport
SERVER_HOST = os.environ.get("SERVER_HOST", "127.0.0.1").strip()
SERVER_PORT = _env_int("SERVER_PORT", 10000)
MCP_TRANSPORT = os.environ.get("MCP_TRANSPORT", "streamable-http").strip()

# TLS
TLS_ENABLED = _env_bool("TLS_ENABLED", False)
TLS_CERT_FILE = os.environ.get("TLS_CERT_FILE", "testdata/server1.pem").strip()
TLS_KEY_FILE = os.environ.get("TLS_KEY_FILE", "testdata/server1.key").strip()

# Scanning
SCAN_WORKERS = _env_optional_int("SCAN_WORKERS")  # None -> CPU count
SORT_MATCHES = _env_bool("SORT_MATCHES", True)
QUERY_TIMEOUT = _env_float("QUERY_TIMEOUT", 30.0)

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip()
