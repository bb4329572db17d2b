from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from .serializer import DEFAULT_KEY


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_list(name: str, default: List[str]) -> List[str]:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return list(default)
    return [x.strip() for x in v.split(",") if x.strip()]


@dataclass
class Settings:
    # Storage
    store_backend: str = "sqlite"  # sqlite | memory
    store_path: str = "~/.local/share/marktree/store.sqlite"
    store_key: str = DEFAULT_KEY

    # Permissions (capability URIs applied at startup; empty = allow all)
    capabilities: List[str] = field(default_factory=list)

    # Logging / UX
    log_level: str = "INFO"
    no_color: bool = False

    @staticmethod
    def from_env() -> "Settings":
        s = Settings()
        s.store_backend = _env_str("MARKTREE_STORE_BACKEND", s.store_backend)
        s.store_path = _env_str("MARKTREE_STORE_PATH", s.store_path)
        s.store_key = _env_str("MARKTREE_STORE_KEY", s.store_key)

        s.capabilities = _env_list("MARKTREE_CAPABILITIES", s.capabilities)

        s.log_level = _env_str("MARKTREE_LOG_LEVEL", s.log_level)
        s.no_color = _env_bool("MARKTREE_NO_COLOR", s.no_color)
        return s

    @staticmethod
    def from_file(path: Path) -> "Settings":
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        s = Settings.from_env()
        for k, v in data.items():
            if hasattr(s, k):
                setattr(s, k, v)
        return s


def load_settings(config_path: Optional[str]) -> Settings:
    if config_path:
        return Settings.from_file(Path(config_path))
    return Settings.from_env()
