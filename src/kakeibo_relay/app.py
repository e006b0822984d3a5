"""Application bootstrap for the relay job."""

from __future__ import annotations

import logging

import aiohttp

from .filters import select_recent
from .ifttt import IFTTTAPIProtocol, IFTTTClient, format_timestamp
from .models import FilterWindow, NotifyResult, RelayConfig
from .slack import SlackAPIProtocol, SlackClient

logger = logging.getLogger(__name__)


async def run_relay(
    history: SlackAPIProtocol,
    notifier: IFTTTAPIProtocol,
    window: FilterWindow,
) -> list[NotifyResult]:
    """Fetch, filter and forward once.

    Fetch errors propagate to the caller; delivery failures are reported in
    the returned results only.
    """

    messages = await history.fetch_messages()
    recent = select_recent(messages, window)
    for message in recent:
        logger.info("%s,%s", format_timestamp(message.timestamp), message.text)

    if not recent:
        logger.info("Новых сообщений нет, IFTTT не вызывается")
        return []

    results = await notifier.kick(recent)
    failed = sum(1 for result in results if not result.ok)
    if failed:
        logger.warning("Не доставлено %d из %d сообщений", failed, len(results))
    return results


class KakeiboRelayApp:
    """Tie together Slack and IFTTT clients for a single run."""

    def __init__(self, config: RelayConfig):
        self._config = config

    async def run(self) -> list[NotifyResult]:
        async with aiohttp.ClientSession() as session:
            slack = SlackClient(
                session, self._config.slack, timeout=self._config.request_timeout
            )
            ifttt = IFTTTClient(
                session, self._config.ifttt, timeout=self._config.request_timeout
            )
            return await run_relay(slack, ifttt, self._config.window())
