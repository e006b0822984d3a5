"""IFTTT webhook delivery."""

from __future__ import annotations

import asyncio
import json
import logging
from decimal import Decimal
from typing import Protocol, Sequence

import aiohttp

from .models import DEFAULT_REQUEST_TIMEOUT, IFTTTParams, NotifyResult, SlackMessage

logger = logging.getLogger(__name__)


class IFTTTAPIProtocol(Protocol):
    async def kick(self, messages: Sequence[SlackMessage]) -> list[NotifyResult]: ...


def format_timestamp(value: float) -> str:
    """Render ``value`` as the shortest plain decimal, without a trailing ``.0``."""

    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
    return text


def build_payload(message: SlackMessage) -> str:
    return json.dumps(
        {"value1": format_timestamp(message.timestamp), "value2": message.text},
        ensure_ascii=False,
    )


class IFTTTClient:
    """Post Slack messages to a webhook trigger one by one."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        params: IFTTTParams,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self._session = session
        self.params = params
        self._timeout = timeout

    def build_url(self) -> str:
        return f"{self.params.base_url}/{self.params.event_name}/with/key/{self.params.token}"

    async def kick(self, messages: Sequence[SlackMessage]) -> list[NotifyResult]:
        url = self.build_url()
        results: list[NotifyResult] = []
        for message in messages:
            result = await self._post(url, message)
            if result.ok:
                logger.info(
                    "Сообщение отправлено: %s,%s",
                    format_timestamp(message.timestamp),
                    message.text,
                )
            else:
                logger.warning(
                    "Не удалось отправить сообщение %s в IFTTT: %s",
                    format_timestamp(message.timestamp),
                    result.error,
                )
            results.append(result)
        return results

    async def _post(self, url: str, message: SlackMessage) -> NotifyResult:
        headers = {"Content-Type": "application/json"}
        try:
            timeout_cfg = aiohttp.ClientTimeout(total=self._timeout)
            async with self._session.post(
                url,
                data=build_payload(message).encode("utf-8"),
                headers=headers,
                timeout=timeout_cfg,
            ) as resp:
                await resp.read()
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            return NotifyResult(message=message, ok=False, error=repr(exc))
        if status >= 400:
            return NotifyResult(
                message=message, ok=False, status=status, error=f"статус {status}"
            )
        return NotifyResult(message=message, ok=True, status=status)
