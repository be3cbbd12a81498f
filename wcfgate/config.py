"""Gateway Configuration System.

Loads and validates configuration from ~/.wcfgate/config.json (or the path in
the WCFGATE_CONFIG environment variable). Uses Pydantic for schema validation
with sensible defaults; a missing or invalid file yields the defaults.

Usage:
    from wcfgate.config import get_config, save_config

    config = get_config()
    print(config.server.port)
    print(config.attachments.poll_interval_seconds)
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WCFGATE_CONFIG"
CONFIG_DIR = Path.home() / ".wcfgate"
CONFIG_PATH = CONFIG_DIR / "config.json"

# Current config schema version
CONFIG_VERSION = 1


class ServerConfig(BaseModel):
    """HTTP server settings.

    Attributes:
        host: Bind address.
        port: Bind port.
        cors_origins: Origins allowed by the CORS middleware.
    """

    host: str = "127.0.0.1"
    port: int = Field(default=10010, ge=1, le=65535)
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost", "http://127.0.0.1", "tauri://localhost"]
    )


class BackendConfig(BaseModel):
    """How to obtain the backend capability.

    Attributes:
        factory: ``module:callable`` returning a connected backend. The
            callable runs once at startup.
    """

    factory: str | None = None


class AttachmentsConfig(BaseModel):
    """Attachment pipeline and outbound image staging.

    Attributes:
        poll_interval_seconds: Sleep between decrypt polls. Request timeouts
            count poll attempts, so this is the unit of those timeouts.
        image_dir: Where base64/URL images are written before sending.
        download_timeout_seconds: HTTP timeout when fetching remote images.
    """

    poll_interval_seconds: float = Field(default=1.0, gt=0.0, le=60.0)
    image_dir: str = str(CONFIG_DIR / "images")
    download_timeout_seconds: float = Field(default=30.0, gt=0.0, le=600.0)


class RateLimitConfig(BaseModel):
    """Per-client request rate limiting.

    Attributes:
        enabled: Whether rate limiting is active.
        default_limit: slowapi limit string applied to every route.
    """

    enabled: bool = True
    default_limit: str = "600/minute"


class LoggingConfig(BaseModel):
    """Logging output.

    Attributes:
        level: Root log level name.
        json_format: Emit JSON lines instead of plain text.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_format: bool = False


class GatewayConfig(BaseModel):
    """Gateway configuration schema."""

    config_version: int = CONFIG_VERSION
    server: ServerConfig = Field(default_factory=ServerConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)
    attachments: AttachmentsConfig = Field(default_factory=AttachmentsConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# Module-level singleton with thread safety
_config: GatewayConfig | None = None
_config_lock = threading.Lock()


def default_config_path() -> Path:
    """Config path from the environment, else ~/.wcfgate/config.json."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else CONFIG_PATH


def load_config(config_path: Path | None = None) -> GatewayConfig:
    """Load configuration from file, return defaults if missing/invalid.

    Args:
        config_path: Optional path to config file.

    Returns:
        GatewayConfig instance with loaded or default values.
    """
    path = config_path or default_config_path()

    if not path.exists():
        logger.debug("Config file not found at %s, using defaults", path)
        return GatewayConfig()

    try:
        with path.open(encoding="utf-8") as f:
            data: dict[str, Any] = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning("Invalid JSON in config file %s: %s, using defaults", path, e)
        return GatewayConfig()
    except OSError as e:
        logger.warning("Cannot read config file %s: %s, using defaults", path, e)
        return GatewayConfig()

    try:
        return GatewayConfig.model_validate(data)
    except ValidationError as e:
        logger.warning("Config validation failed: %s, using defaults", e)
        return GatewayConfig()


def save_config(config: GatewayConfig, config_path: Path | None = None) -> bool:
    """Save configuration to file.

    Returns:
        True if saved successfully, False otherwise.
    """
    path = config_path or default_config_path()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(config.model_dump(), f, indent=2)
        os.chmod(path, 0o600)
        logger.debug("Configuration saved to %s", path)
        return True
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        return False


def get_config() -> GatewayConfig:
    """Get singleton configuration instance.

    Uses double-check locking for thread safety.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:
                _config = load_config()
    return _config


def reset_config() -> None:
    """Reset singleton configuration for testing."""
    global _config
    with _config_lock:
        _config = None
