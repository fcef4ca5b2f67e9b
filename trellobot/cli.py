#!/usr/bin/env python3
"""
Trello job tracker bot - command line entry point

Usage:
    trellobot replies      # classify unread replies and move cards
    trellobot jobs         # archive cards whose job posting is gone
    trellobot serve        # keep-alive web server

Environment Variables:
    TRELLOBOT_ENV: development (default), production, testing
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (optional)
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Callable, List, Optional

import yaml
from dotenv import load_dotenv

from trellobot.ai import get_optional_provider, get_provider
from trellobot.config import Config, ConfigError
from trellobot.gmail import GmailClient
from trellobot.logging_config import get_logger, setup_logging
from trellobot.notifier import Notifier
from trellobot.pipelines import RunAborted, jobs, replies
from trellobot.trello import TrelloClient

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trellobot",
        description="Keep a Trello job-application board in sync with Gmail replies.",
    )
    parser.add_argument("--config", type=Path, help="YAML settings file (default: ./config.yaml)")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--json-logs", action="store_true", help="Log as JSON lines")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("replies", help="Classify unread replies and move matching cards")
    subparsers.add_parser("jobs", help="Move cards whose job posting was deleted")
    serve_parser = subparsers.add_parser("serve", help="Run the keep-alive web server")
    serve_parser.add_argument("--port", type=int, help="Port to listen on (default: $PORT or 10000)")
    return parser


def guarded_run(
    notifier: Notifier, error_title: str, crash_title: str, run: Callable[[], object]
) -> int:
    """
    Run a pipeline and turn its outcome into an exit code.

    Configuration errors and unhandled exceptions are notified here;
    RunAborted was already notified by the pipeline.
    """
    try:
        run()
    except ConfigError as e:
        logger.error(str(e))
        notifier.send(error_title, str(e))
        return 1
    except RunAborted:
        return 1
    except Exception as e:
        logger.critical("--- Critical Error ---")
        logger.exception(f"An unhandled error occurred: {e}")
        notifier.send(crash_title, f"Script crashed: {e}")
        return 1
    return 0


def run_replies(config: Config) -> int:
    notifier = Notifier.from_config(config)

    def run():
        config.validate_for_replies()
        gmail = GmailClient(config.credentials_file, config.token_file)
        trello = TrelloClient(config.trello_api_key, config.trello_token)
        provider = get_optional_provider(config)
        replies.run_reply_classifier(config, gmail, trello, provider, notifier)

    return guarded_run(notifier, replies.ERROR_TITLE, replies.CRASH_TITLE, run)


def run_jobs(config: Config) -> int:
    notifier = Notifier.from_config(config)

    def run():
        config.validate_for_jobs()
        trello = TrelloClient(config.trello_api_key, config.trello_token)
        provider = get_provider(config)
        jobs.run_job_checker(config, trello, provider, notifier)

    return guarded_run(notifier, jobs.ERROR_TITLE, jobs.CRASH_TITLE, run)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Trello job tracker bot."""
    args = build_parser().parse_args(argv)

    load_dotenv(Path.cwd() / ".env")

    env = os.environ.get("TRELLOBOT_ENV", "development")
    setup_logging(
        level=args.log_level or os.environ.get("LOG_LEVEL"),
        json_logs=args.json_logs or env == "production",
        command=args.command,
    )

    try:
        config = Config(config_path=args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Configuration Error: {e}")
        return 1

    if args.command == "replies":
        return run_replies(config)
    if args.command == "jobs":
        return run_jobs(config)

    from trellobot.server import serve

    serve(config, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
