"""
Configuration for the Trello job tracker bot.

Secrets and Trello list ids come from the environment (optionally loaded
from .env). Tunables come from an optional config.yaml.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

DEFAULT_CONFIG_FILE = Path("config.yaml")

# Environment variable names
TRELLO_API_KEY = "TRELLO_API_KEY"
TRELLO_TOKEN = "TRELLO_TOKEN"
SENT_CV_LIST = "TRELLO_SENT_CV_LIST_ID"
ESTABLISHED_CONTACT_LIST = "TRELLO_ESTABLISHED_CONTACT_LIST_ID"
INITIAL_INTERVIEW_LIST = "TRELLO_INITIAL_INTERVIEW_LIST_ID"
CODING_INTERVIEW_LIST = "TRELLO_CODING_INTERVIEW_LIST_ID"
ARCHITECTURE_INTERVIEW_LIST = "TRELLO_ARCHITECTURE_INTERVIEW_LIST_ID"
MANAGEMENT_AND_HR_LIST = "TRELLO_MANAGEMENT_AND_HR_LIST_ID"
DROPPED_INITIAL_LIST = "TRELLO_DROPPED_INITIAL_LIST_ID"
JOB_DELETED_LIST = "TRELLO_JOB_DELETED_FROM_WEBSITE_LIST_ID"
GROQ_API_KEY = "GROQ_API_KEY"
ANTHROPIC_API_KEY = "ANTHROPIC_API_KEY"
NTFY_TOPIC = "NTFY_TOPIC"
MY_EMAIL = "MY_EMAIL"

# API key variable per AI provider
PROVIDER_KEYS = {
    "groq": GROQ_API_KEY,
    "claude": ANTHROPIC_API_KEY,
}


class ConfigError(Exception):
    """Raised when the settings for a run are missing or invalid."""

    def __init__(self, missing: List[str], message: Optional[str] = None):
        self.missing = missing
        if message is None:
            message = f"Missing required environment variables: {', '.join(missing)}"
        super().__init__(message)


class Config:
    """Configuration manager for the Trello job tracker bot."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        config_path: Optional[Path] = None,
    ):
        """
        Assemble configuration from the environment and an optional YAML file.

        Args:
            environ: Mapping of environment variables (defaults to os.environ)
            config_path: Path to a YAML settings file. When given it must exist;
                when omitted ./config.yaml is used if present.
        """
        self._env = dict(os.environ if environ is None else environ)
        self.config_path = config_path
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load tunables from the YAML file, if any."""
        path = self.config_path
        if path is None:
            if not DEFAULT_CONFIG_FILE.exists():
                return {}
            path = DEFAULT_CONFIG_FILE
        elif not path.exists():
            raise FileNotFoundError(
                f"Config file not found: {path}\n"
                f"Copy config.example.yaml to config.yaml and adjust it."
            )

        with open(path, "r") as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level")

        self._validate_config(config)
        return config

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate tunables so bad values fail at startup."""
        # (section, field, accepted types, minimum)
        numeric_fields = [
            ("gmail", "max_results", int, 1),
            ("checker", "delay_seconds", (int, float), 0),
            ("notifications", "subject_max_length", int, 4),
        ]
        for section, field, types, minimum in numeric_fields:
            value = (config.get(section) or {}).get(field)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, types):
                kind = "an integer" if types is int else "a number"
                raise ValueError(f"Config value {section}.{field} must be {kind}, got {value!r}")
            if value < minimum:
                raise ValueError(f"Config value {section}.{field} must be at least {minimum}")

        tz_name = (config.get("gmail") or {}).get("timezone")
        if tz_name is not None:
            if not isinstance(tz_name, str) or not tz_name.strip():
                raise ValueError(
                    f"Config value gmail.timezone must be a timezone name, got {tz_name!r}"
                )
            try:
                ZoneInfo(tz_name)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(
                    f"Config value gmail.timezone is not a known timezone: {tz_name!r}"
                ) from e

    def env(self, name: str) -> Optional[str]:
        """Get an environment value, treating blank strings as unset."""
        value = self._env.get(name)
        if value is None:
            return None
        value = value.strip()
        return value or None

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a YAML configuration value by dot-notation key.

        Example: config.get('ai.provider')
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    # ===== VALIDATION =====

    def missing(self, *names: str) -> List[str]:
        """Return the environment variable names that are unset."""
        return [name for name in names if not self.env(name)]

    def require(self, *names: str) -> None:
        """Raise ConfigError if any of the named variables is unset."""
        missing = self.missing(*names)
        if missing:
            raise ConfigError(missing)

    def validate_for_replies(self) -> None:
        """Check the settings the reply classifier cannot run without."""
        self.require(TRELLO_API_KEY, TRELLO_TOKEN, SENT_CV_LIST, MY_EMAIL)

    def validate_for_jobs(self) -> None:
        """Check the settings the job status checker cannot run without."""
        if self.ai_provider not in PROVIDER_KEYS:
            raise ConfigError(
                [],
                f"Unknown AI provider: '{self.ai_provider}'. "
                f"Available providers: {', '.join(PROVIDER_KEYS)}"
            )
        self.require(
            TRELLO_API_KEY,
            TRELLO_TOKEN,
            PROVIDER_KEYS[self.ai_provider],
            SENT_CV_LIST,
            JOB_DELETED_LIST,
        )

    # ===== TRELLO =====

    @property
    def trello_api_key(self) -> Optional[str]:
        return self.env(TRELLO_API_KEY)

    @property
    def trello_token(self) -> Optional[str]:
        return self.env(TRELLO_TOKEN)

    @property
    def sent_cv_list_id(self) -> Optional[str]:
        """List holding applications that are waiting for a reply."""
        return self.env(SENT_CV_LIST)

    @property
    def job_deleted_list_id(self) -> Optional[str]:
        """List for cards whose posting was taken down."""
        return self.env(JOB_DELETED_LIST)

    def list_id(self, env_name: str) -> Optional[str]:
        """Get a routing list id by its environment variable name."""
        return self.env(env_name)

    # ===== GMAIL =====

    @property
    def my_email(self) -> Optional[str]:
        return self.env(MY_EMAIL)

    @property
    def gmail_max_results(self) -> int:
        return int(self.get("gmail.max_results", 20))

    @property
    def gmail_query(self) -> str:
        return self.get("gmail.query", "is:inbox is:unread")

    @property
    def credentials_file(self) -> Path:
        return Path(self.get("gmail.credentials_file", "credentials.json"))

    @property
    def token_file(self) -> Path:
        return Path(self.get("gmail.token_file", "token.json"))

    @property
    def timezone(self) -> str:
        """Timezone used when logging email dates."""
        return self.get("gmail.timezone", "Asia/Jerusalem")

    # ===== AI =====

    @property
    def ai_provider(self) -> str:
        return str(self.get("ai.provider", "groq")).lower()

    @property
    def ai_model(self) -> Optional[str]:
        """Model used for reply classification (provider default if unset)."""
        return self.get("ai.model")

    @property
    def ai_browse_model(self) -> Optional[str]:
        """Model used for web-browsing job status checks (provider default if unset)."""
        return self.get("ai.browse_model")

    @property
    def ai_api_key(self) -> Optional[str]:
        env_name = PROVIDER_KEYS.get(self.ai_provider)
        return self.env(env_name) if env_name else None

    # ===== JOB CHECKER =====

    @property
    def check_delay_seconds(self) -> float:
        return float(self.get("checker.delay_seconds", 5))

    # ===== NOTIFICATIONS =====

    @property
    def ntfy_topic(self) -> Optional[str]:
        return self.env(NTFY_TOPIC)

    @property
    def ntfy_server(self) -> str:
        return str(self.get("notifications.server", "https://ntfy.sh")).rstrip("/")

    @property
    def subject_max_length(self) -> int:
        return int(self.get("notifications.subject_max_length", 30))

    # ===== UTILITY METHODS =====

    def configured_integrations(self) -> Dict[str, bool]:
        """Report which integrations have their credentials set."""
        return {
            "trello": not self.missing(TRELLO_API_KEY, TRELLO_TOKEN),
            "ai": self.ai_api_key is not None,
            "notifications": self.ntfy_topic is not None,
            "gmail": self.credentials_file.exists() or self.token_file.exists(),
        }
