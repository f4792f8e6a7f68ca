from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError


@dataclass(frozen=True)
class Config:
    hypixel_api_key: str
    profile_uuid: str
    db_file: str = "data.json"
    refresh_seconds: int = 600
    host: str = "127.0.0.1"
    port: int = 7878


def _required(env: Mapping[str, str], name: str) -> str:
    value = env.get(name, "").strip()
    if not value:
        raise ConfigError(f"You need to provide the environment variable `{name}`")
    return value


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    text = env.get(name, "").strip()
    if not text:
        return default
    try:
        return int(text)
    except ValueError as exc:
        raise ConfigError(f"`{name}` must be an integer, got {text!r}") from exc


def load_config(env: Optional[Mapping[str, str]] = None, dotenv_path: Optional[str] = None) -> Config:
    if env is None:
        load_dotenv(dotenv_path)
        env = os.environ
    return Config(
        hypixel_api_key=_required(env, "HYPIXEL_API_KEY"),
        profile_uuid=_required(env, "PROFILE_UUID"),
        db_file=env.get("BANKER_DB_FILE", "").strip() or "data.json",
        refresh_seconds=_int(env, "BANKER_REFRESH_SECONDS", 600),
        host=env.get("BANKER_HOST", "").strip() or "127.0.0.1",
        port=_int(env, "BANKER_PORT", 7878),
    )
