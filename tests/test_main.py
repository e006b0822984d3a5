from __future__ import annotations

from pathlib import Path

import pytest

from kakeibo_relay import __main__ as cli
from kakeibo_relay.models import NotifyResult, RelayConfig, SlackMessage
from kakeibo_relay.slack import SlackFetchError

REQUIRED = ("SLACK_CHANNEL_ID", "SLACK_TOKEN", "IFTTT_EVENT_NAME", "IFTTT_WEBHOOK_TOKEN")


@pytest.fixture
def configured_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.chdir(tmp_path)
    for name in REQUIRED:
        monkeypatch.setenv(name, f"{name.lower()}-value")
    return tmp_path


def test_main_exits_with_usage_error_when_config_missing(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.chdir(tmp_path)
    for name in REQUIRED:
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 2


def test_main_returns_failure_on_fetch_error(
    configured_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def failing_run(self: cli.KakeiboRelayApp) -> list[NotifyResult]:
        raise SlackFetchError("failed to get conversations history")

    monkeypatch.setattr(cli.KakeiboRelayApp, "run", failing_run)

    assert cli.main([]) == 1


def test_main_succeeds_even_if_deliveries_fail(
    configured_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    seen: list[RelayConfig] = []

    async def partial_run(self: cli.KakeiboRelayApp) -> list[NotifyResult]:
        seen.append(self._config)
        return [NotifyResult(message=SlackMessage(timestamp=1.0, text="x"), ok=False)]

    monkeypatch.setattr(cli.KakeiboRelayApp, "run", partial_run)

    assert cli.main(["--log-level", "debug"]) == 0
    assert seen[0].slack.channel == "slack_channel_id-value"
    assert seen[0].ifttt.token == "ifttt_webhook_token-value"


def test_main_loads_explicit_env_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.chdir(tmp_path)
    for name in REQUIRED:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    env_file = tmp_path / "relay.env"
    env_file.write_text("\n".join(f"{name}=from-file" for name in REQUIRED) + "\n")
    seen: list[RelayConfig] = []

    async def recording_run(self: cli.KakeiboRelayApp) -> list[NotifyResult]:
        seen.append(self._config)
        return []

    monkeypatch.setattr(cli.KakeiboRelayApp, "run", recording_run)

    assert cli.main(["--env-file", str(env_file)]) == 0
    assert seen[0].slack.token == "from-file"
