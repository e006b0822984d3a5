"""Environment-driven configuration for a relay run."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from .models import (
    DEFAULT_EXCLUDE_DAYS,
    DEFAULT_EXCLUDE_HOURS,
    DEFAULT_EXCLUDE_MINUTES,
    DEFAULT_REQUEST_TIMEOUT,
    IFTTTParams,
    RelayConfig,
    SlackParams,
)
from .utils import mask_secret, parse_count, parse_seconds

logger = logging.getLogger(__name__)

SLACK_CHANNEL_ID = "SLACK_CHANNEL_ID"
SLACK_TOKEN = "SLACK_TOKEN"
IFTTT_EVENT_NAME = "IFTTT_EVENT_NAME"
IFTTT_WEBHOOK_TOKEN = "IFTTT_WEBHOOK_TOKEN"


class ConfigError(ValueError):
    """A required setting is absent."""

    def __init__(self, name: str):
        super().__init__(f"${name} is not set")
        self.name = name


def load_env_file(path: Path | None = None) -> bool:
    """Populate ``os.environ`` from a dotenv file without overriding it."""

    target = path if path is not None else find_dotenv(usecwd=True)
    if not target:
        return False
    return load_dotenv(dotenv_path=target, override=False)


def load_config(environ: Mapping[str, str] | None = None) -> RelayConfig:
    env = os.environ if environ is None else environ

    slack = SlackParams(
        channel=_require(env, SLACK_CHANNEL_ID),
        token=_require(env, SLACK_TOKEN),
    )
    ifttt = IFTTTParams(
        event_name=_require(env, IFTTT_EVENT_NAME),
        token=_require(env, IFTTT_WEBHOOK_TOKEN),
    )
    config = RelayConfig(
        slack=slack,
        ifttt=ifttt,
        exclude_days=parse_count(env.get("KAKEIBO_EXCLUDE_DAYS"), DEFAULT_EXCLUDE_DAYS),
        exclude_hours=parse_count(env.get("KAKEIBO_EXCLUDE_HOURS"), DEFAULT_EXCLUDE_HOURS),
        exclude_minutes=parse_count(
            env.get("KAKEIBO_EXCLUDE_MINUTES"), DEFAULT_EXCLUDE_MINUTES
        ),
        request_timeout=parse_seconds(
            env.get("KAKEIBO_REQUEST_TIMEOUT"), DEFAULT_REQUEST_TIMEOUT
        ),
    )
    logger.debug(
        "Конфигурация: канал %s, событие %s, токен Slack %s, окно %dд %dч %dм",
        slack.channel,
        ifttt.event_name,
        mask_secret(slack.token),
        config.exclude_days,
        config.exclude_hours,
        config.exclude_minutes,
    )
    return config


def _require(env: Mapping[str, str], name: str) -> str:
    value = (env.get(name) or "").strip()
    if not value:
        raise ConfigError(name)
    return value
