"""Slack conversation history client."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol, Sequence

import aiohttp

from .models import DEFAULT_REQUEST_TIMEOUT, SlackMessage, SlackParams

logger = logging.getLogger(__name__)


class SlackFetchError(RuntimeError):
    """Raised when the channel history cannot be obtained or understood."""

    def __init__(self, reason: str, payload: Any = None):
        super().__init__(reason if payload is None else f"{reason}: {payload!r}")
        self.reason = reason
        self.payload = payload


class SlackAPIProtocol(Protocol):
    async def fetch_messages(self) -> Sequence[SlackMessage]: ...


class SlackClient:
    """Thin asynchronous wrapper around ``conversations.history``."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        params: SlackParams,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self._session = session
        self.params = params
        self._timeout = timeout

    def build_url(self) -> str:
        return f"{self.params.base_url}/{self.params.method}?channel={self.params.channel}"

    async def fetch_messages(self) -> Sequence[SlackMessage]:
        """Return the channel messages in the order Slack reports them."""

        url = self.build_url()
        headers = {"Authorization": f"Bearer {self.params.token}"}
        try:
            timeout_cfg = aiohttp.ClientTimeout(total=self._timeout)
            async with self._session.post(
                url,
                headers=headers,
                timeout=timeout_cfg,
            ) as resp:
                raw = await resp.read()
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise SlackFetchError("failed to get conversations history", exc) from exc

        if status >= 400:
            raise SlackFetchError(
                f"Slack responded with status {status}", raw.decode("utf-8", "replace")
            )
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            # UnicodeDecodeError and JSONDecodeError both land here
            raise SlackFetchError("Slack response is not valid JSON", raw) from exc

        messages = parse_history(payload)
        logger.info(
            "Получено %d сообщений из канала Slack %s", len(messages), self.params.channel
        )
        return messages


def parse_history(payload: Any) -> list[SlackMessage]:
    """Convert a decoded ``conversations.history`` response into messages."""

    if not isinstance(payload, dict):
        raise SlackFetchError("failed to get messages from slack response", payload)
    if payload.get("ok") is False:
        raise SlackFetchError(
            f"Slack rejected the request: {payload.get('error') or 'unknown_error'}",
            payload,
        )
    entries = payload.get("messages")
    if not isinstance(entries, list):
        raise SlackFetchError("failed to get messages from slack response", payload)
    return [_parse_message(entry, payload) for entry in entries]


def _parse_message(entry: Any, payload: Any) -> SlackMessage:
    if not isinstance(entry, dict):
        raise SlackFetchError("unexpected message entry in slack response", payload)
    ts = entry.get("ts")
    text = entry.get("text")
    if not isinstance(ts, str) or not isinstance(text, str):
        raise SlackFetchError("message without ts or text in slack response", entry)
    try:
        timestamp = float(ts)
    except ValueError as exc:
        raise SlackFetchError(f"invalid message timestamp {ts!r}", entry) from exc
    return SlackMessage(timestamp=timestamp, text=text)
