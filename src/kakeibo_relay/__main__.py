"""Command line entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .app import KakeiboRelayApp
from .config import ConfigError, load_config, load_env_file
from .slack import SlackFetchError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Forward recent Slack messages to IFTTT")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Путь к файлу .env (по умолчанию ищется в текущем каталоге)",
    )
    parser.add_argument("--log-level", default="INFO", help="Уровень логирования")
    args = parser.parse_args(argv)

    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    load_env_file(args.env_file)
    try:
        config = load_config()
    except ConfigError as exc:
        parser.error(str(exc))

    logger = logging.getLogger(__name__)
    try:
        asyncio.run(KakeiboRelayApp(config).run())
    except SlackFetchError as exc:
        logger.error("Не удалось получить историю Slack: %s", exc)
        return 1
    except KeyboardInterrupt:
        logger.info("Остановка по запросу пользователя")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
