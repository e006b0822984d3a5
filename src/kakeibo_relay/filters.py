"""Recency rules applied before forwarding messages."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import FilterWindow, SlackMessage


def filter_recent(messages: Iterable[SlackMessage], threshold: float) -> list[SlackMessage]:
    """Keep messages strictly newer than ``threshold``, preserving order."""

    return [message for message in messages if message.timestamp > threshold]


def reverse_messages(messages: Sequence[SlackMessage]) -> list[SlackMessage]:
    return list(reversed(messages))


def select_recent(messages: Sequence[SlackMessage], window: FilterWindow) -> list[SlackMessage]:
    """Return the retained messages oldest first.

    Slack lists history newest first, so reversing the retained subset yields
    chronological order for delivery.
    """

    return reverse_messages(filter_recent(messages, window.threshold()))
