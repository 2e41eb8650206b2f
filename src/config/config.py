"""SendSafely action configuration from YAML file.

Loads from config/config.yaml:
- SendSafely connection settings (base URL, API key, API secret)
- Retry settings for SDK calls
- Logging settings

Environment variables ARE supported using ${VAR_NAME} syntax in YAML files,
and the SENDSAFELY_* / LOG_* variables override whatever the file says.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from core.resilience.retry import RetryConfig

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://app.sendsafely.com"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_LOG_FORMATS = ("console", "json")


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load YAML file and return dict."""
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR_NAME} and ${VAR_NAME:-default} environment variables in config data."""
    if isinstance(data, dict):
        return {key: _expand_env_vars(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        # Support both ${VAR} and ${VAR:-default} syntax
        pattern = r"\$\{([^}:]+)(?::-(([^}]*))?)?\}"

        def replacer(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else match.group(0)
            return os.getenv(var_name, default_value)

        return re.sub(pattern, replacer, data)
    else:
        return data


# Default config file: config/config.yaml in src/ directory
DEFAULT_CONFIG_FILE = Path(__file__).parent.parent / "config" / "config.yaml"


@dataclass
class NodeConfig:
    """SendSafely action configuration.

    Configuration structure:
        sendsafely:
          base_url: https://app.sendsafely.com
          api_key: ${SENDSAFELY_API_KEY}
          api_secret: ${SENDSAFELY_API_SECRET}
          request_timeout_seconds: 30
        retry:
          max_retries: 3
          base_delay: 1.0
          max_jitter: 0.2
        logging:
          level: INFO
          format: console
          file: null

    All delays in seconds.
    """

    # =========================================================================
    # SENDSAFELY CONNECTION
    # =========================================================================
    base_url: str = DEFAULT_BASE_URL
    api_key: str = ""
    api_secret: str = ""
    request_timeout_seconds: int = 30

    # =========================================================================
    # RETRY
    # =========================================================================
    max_retries: int = 3
    base_delay: float = 1.0
    max_jitter: float = 0.2

    # =========================================================================
    # LOGGING
    # =========================================================================
    log_level: str = "INFO"
    log_format: str = "console"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Ensure proper types from YAML/env vars."""
        self.base_url = str(self.base_url or DEFAULT_BASE_URL).rstrip("/")
        self.api_key = str(self.api_key or "")
        self.api_secret = str(self.api_secret or "")
        self.request_timeout_seconds = int(self.request_timeout_seconds)
        self.max_retries = int(self.max_retries)
        self.base_delay = float(self.base_delay)
        self.max_jitter = float(self.max_jitter)
        self.log_level = str(self.log_level).upper()
        self.log_format = str(self.log_format).lower()

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret)

    def retry_config(self) -> RetryConfig:
        return RetryConfig(
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            max_jitter=self.max_jitter,
        )

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any setting is out of range
        """
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got {self.base_url!r}")
        if self.request_timeout_seconds <= 0:
            raise ValueError(
                f"request_timeout_seconds must be > 0, got {self.request_timeout_seconds}"
            )
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.base_delay < 0:
            raise ValueError(f"base_delay must be >= 0, got {self.base_delay}")
        if self.max_jitter < 0:
            raise ValueError(f"max_jitter must be >= 0, got {self.max_jitter}")
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, got {self.log_level!r}"
            )
        if self.log_format not in VALID_LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {', '.join(VALID_LOG_FORMATS)}, got {self.log_format!r}"
            )

    def masked(self) -> Dict[str, Any]:
        """Effective settings with secrets masked, for display."""
        return {
            "base_url": self.base_url,
            "api_key": _mask(self.api_key),
            "api_secret": _mask(self.api_secret),
            "request_timeout_seconds": self.request_timeout_seconds,
            "max_retries": self.max_retries,
            "base_delay": self.base_delay,
            "max_jitter": self.max_jitter,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "log_file": self.log_file,
        }


def _mask(value: str) -> str:
    if not value:
        return "<not set>"
    if len(value) <= 8:
        return "***"
    return f"{value[:4]}***"


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> NodeConfig:
    """Load configuration from config.yaml, then apply environment overrides.

    A missing file is not an error: the action can run entirely from
    SENDSAFELY_* environment variables.

    Environment variables ARE supported using ${VAR_NAME} syntax in YAML files.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_FILE
    config_path = Path(config_path)

    if config_path.exists():
        logger.info(f"Loading configuration from file: {config_path}")
    else:
        logger.debug(f"No configuration file at {config_path}, using environment and defaults")

    yaml_data = _expand_env_vars(load_yaml(config_path))

    sendsafely = yaml_data.get("sendsafely", {}) or {}
    retry = yaml_data.get("retry", {}) or {}
    log_settings = yaml_data.get("logging", {}) or {}

    values: Dict[str, Any] = {
        "base_url": os.getenv("SENDSAFELY_BASE_URL") or sendsafely.get("base_url", DEFAULT_BASE_URL),
        "api_key": os.getenv("SENDSAFELY_API_KEY") or sendsafely.get("api_key", ""),
        "api_secret": os.getenv("SENDSAFELY_API_SECRET") or sendsafely.get("api_secret", ""),
        "request_timeout_seconds": os.getenv("SENDSAFELY_REQUEST_TIMEOUT_SECONDS")
        or sendsafely.get("request_timeout_seconds", 30),
        "max_retries": os.getenv("SENDSAFELY_MAX_RETRIES") or retry.get("max_retries", 3),
        "base_delay": os.getenv("SENDSAFELY_BASE_DELAY") or retry.get("base_delay", 1.0),
        "max_jitter": retry.get("max_jitter", 0.2),
        "log_level": os.getenv("LOG_LEVEL") or log_settings.get("level", "INFO"),
        "log_format": os.getenv("LOG_FORMAT") or log_settings.get("format", "console"),
        "log_file": log_settings.get("file"),
    }

    if overrides:
        logger.debug(f"Applying overrides: {list(overrides.keys())}")
        values.update(overrides)

    config = NodeConfig(**values)

    if not config.has_credentials:
        logger.warning("SendSafely API credentials not configured")
    else:
        logger.info("SendSafely API authentication configured")

    logger.debug("Validating configuration...")
    config.validate()
    logger.debug("Configuration validation passed")

    return config


_node_config: Optional[NodeConfig] = None


def get_config() -> NodeConfig:
    """Get or load the singleton config instance."""
    global _node_config
    if _node_config is None:
        _node_config = load_config()
    return _node_config


def set_config(config: NodeConfig) -> None:
    """Set the singleton config instance (useful for testing)."""
    global _node_config
    _node_config = config


def reset_config() -> None:
    """Reset the singleton config instance (forces reload on next get_config() call)."""
    global _node_config
    _node_config = None
