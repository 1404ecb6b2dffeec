"""Router configuration from a TOML file and the environment."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from .errors import ConfigError

logger = structlog.get_logger("slack_router.config")

TOKEN_ENV_VARS = ("SLACK_VERIFICATION_TOKEN", "slack_verification_token")


@dataclass(frozen=True, slots=True)
class SlackBotConfig:
    token: str | None = None


def _expand_path(s: str | Path) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(str(s))))


def _env(name: str) -> str:
    return (os.environ.get(name) or "").strip()


def _env_token() -> str:
    for name in TOKEN_ENV_VARS:
        value = _env(name)
        if value:
            return value
    return ""


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def config_from_env() -> SlackBotConfig:
    """Build a config from the environment alone."""
    return SlackBotConfig(token=_env_token() or None)


def load_config(path: str | Path) -> SlackBotConfig:
    """Load the router config.

    The file holds an optional ``[slack]`` table with a ``token`` key. A token
    set in ``SLACK_VERIFICATION_TOKEN`` takes precedence over the file. A
    blank token means requests are not checked.

    Raises:
        ConfigError: If the file is missing or unreadable, is not valid TOML,
            or the ``[slack]`` table or its token has the wrong type.
    """
    cfg_path = _expand_path(path)
    if not cfg_path.is_file():
        raise ConfigError(f"missing config at {cfg_path}")

    data = _load_toml(cfg_path)
    slack = data.get("slack", {})
    if not isinstance(slack, dict):
        raise ConfigError("slack must be a table")

    cfg_token = slack.get("token")
    if cfg_token is not None and not isinstance(cfg_token, str):
        raise ConfigError("slack.token must be a string")
    cfg_token = (cfg_token or "").strip()

    env_token = _env_token()
    token = env_token or cfg_token
    token_source = "env" if env_token else ("config" if cfg_token else "none")

    logger.info(
        "slack_router.config.loaded",
        path=str(cfg_path),
        token_source=token_source,
    )
    return SlackBotConfig(token=token or None)
