"""
Logging setup for the Trello job tracker bot.

Interactive runs get a short colored console format. Scheduled runs
(TRELLOBOT_ENV=production) log JSON lines and keep a rotating log file, with
every record tagged by the command that produced it.
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

LOGS_DIR = Path.cwd() / "logs"
LOG_FILE_NAME = "trellobot.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

LEVEL_BY_ENV = {
    "development": logging.DEBUG,
    "production": logging.INFO,
    "testing": logging.WARNING,
}

# HTTP and Google client internals log every request at INFO
QUIET_LOGGERS = (
    "urllib3",
    "httpcore",
    "httpx",
    "werkzeug",
    "googleapiclient.discovery",
    "googleapiclient.discovery_cache",
    "google_auth_oauthlib",
)


class CommandFilter(logging.Filter):
    """Stamp records with the CLI command (replies, jobs, serve)."""

    def __init__(self, command: str):
        super().__init__()
        self.command = command

    def filter(self, record: logging.LogRecord) -> bool:
        record.command = self.command
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        command = getattr(record, "command", None)
        if command:
            entry["command"] = command
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Human-readable console lines; colors only on a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = False):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        level = f"{record.levelname:<8}"
        color = self.LEVEL_COLORS.get(record.levelno)
        if self.use_color and color:
            level = f"{color}{level}{self.RESET}"

        line = f"{stamp} {level} {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def resolve_level(level: Optional[str], env: str) -> int:
    if level:
        return getattr(logging, level.upper(), logging.INFO)
    return LEVEL_BY_ENV.get(env, logging.INFO)


def setup_logging(
    level: Optional[str] = None,
    json_logs: bool = False,
    log_file: Optional[str] = None,
    command: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the root logger for one CLI invocation.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL; defaults by TRELLOBOT_ENV
        json_logs: Write JSON lines to stderr instead of the console format
        log_file: Rotating log file path; production runs default to logs/trellobot.log
        command: CLI command name added to JSON records

    Returns:
        The configured root logger
    """
    env = os.environ.get("TRELLOBOT_ENV", "development")
    log_level = resolve_level(level, env)

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    stream = logging.StreamHandler(sys.stderr)
    if json_logs:
        stream.setFormatter(JSONFormatter())
    else:
        stream.setFormatter(ConsoleFormatter(use_color=sys.stderr.isatty()))
    root.addHandler(stream)

    if log_file is None and env == "production":
        LOGS_DIR.mkdir(exist_ok=True)
        log_file = str(LOGS_DIR / LOG_FILE_NAME)
    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
        )
        file_handler.setFormatter(JSONFormatter())
        root.addHandler(file_handler)

    if command:
        for handler in root.handlers:
            handler.addFilter(CommandFilter(command))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
