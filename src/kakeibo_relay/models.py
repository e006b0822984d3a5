"""Data models used across the relay job."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

SLACK_BASE_URL = "https://slack.com/api"
SLACK_API_METHOD = "conversations.history"
IFTTT_BASE_URL = "https://maker.ifttt.com/trigger"

DEFAULT_EXCLUDE_DAYS = 0
DEFAULT_EXCLUDE_HOURS = 0
DEFAULT_EXCLUDE_MINUTES = 10
DEFAULT_REQUEST_TIMEOUT = 15.0


@dataclass(frozen=True, slots=True)
class SlackMessage:
    """Subset of the Slack payload forwarded to the webhook."""

    timestamp: float
    text: str


@dataclass(slots=True)
class SlackParams:
    """Where and how to read the channel history."""

    channel: str
    token: str
    base_url: str = SLACK_BASE_URL
    method: str = SLACK_API_METHOD


@dataclass(slots=True)
class IFTTTParams:
    """Webhook trigger identity."""

    event_name: str
    token: str
    base_url: str = IFTTT_BASE_URL


@dataclass(slots=True)
class FilterWindow:
    """Trailing time span subtracted from ``reference`` to form the threshold."""

    reference: datetime
    exclude_days: int = DEFAULT_EXCLUDE_DAYS
    exclude_hours: int = DEFAULT_EXCLUDE_HOURS
    exclude_minutes: int = DEFAULT_EXCLUDE_MINUTES

    def threshold(self) -> float:
        """Return the cutoff as whole epoch seconds."""

        moment = (
            self.reference
            - timedelta(days=self.exclude_days)
            - timedelta(hours=self.exclude_hours)
            - timedelta(minutes=self.exclude_minutes)
        )
        return float(math.floor(moment.timestamp()))


@dataclass(slots=True)
class RelayConfig:
    """Everything a single run needs, built once by the entry point."""

    slack: SlackParams
    ifttt: IFTTTParams
    exclude_days: int = DEFAULT_EXCLUDE_DAYS
    exclude_hours: int = DEFAULT_EXCLUDE_HOURS
    exclude_minutes: int = DEFAULT_EXCLUDE_MINUTES
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def window(self, reference: datetime | None = None) -> FilterWindow:
        moment = reference if reference is not None else datetime.now().astimezone()
        return FilterWindow(
            reference=moment,
            exclude_days=self.exclude_days,
            exclude_hours=self.exclude_hours,
            exclude_minutes=self.exclude_minutes,
        )


@dataclass(slots=True)
class NotifyResult:
    """Outcome of a single webhook delivery."""

    message: SlackMessage
    ok: bool
    status: int | None = None
    error: str | None = None
