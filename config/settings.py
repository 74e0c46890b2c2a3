"""
Settings

Loads monitor configuration from environment variables (and a .env file
when present).
"""

import os
import re
from urllib.parse import urlparse
from dotenv import load_dotenv

DEFAULT_CHECK_INTERVAL = 60
DEFAULT_REQUEST_TIMEOUT = 10
DEFAULT_EMBED_COLOR = "#dedede"

WEBHOOK_PATH_PATTERN = re.compile(r"^/api/(v\d+/)?webhooks/\d+/[\w-]+/?$")


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""


class Settings:
    """Resolved configuration for a monitor process."""

    def __init__(self, website_url, webhook_url, database_url=None, site_name=None,
                 check_interval=DEFAULT_CHECK_INTERVAL, request_timeout=DEFAULT_REQUEST_TIMEOUT,
                 embed_color=DEFAULT_EMBED_COLOR, log_level="INFO", log_file=None):
        self.website_url = website_url
        self.webhook_url = webhook_url
        self.database_url = database_url
        self.site_name = site_name or urlparse(website_url).hostname or website_url
        self.check_interval = check_interval
        self.request_timeout = request_timeout
        self.embed_color = embed_color
        self.log_level = log_level
        self.log_file = log_file

    def __repr__(self):
        # webhook token stays out of logs
        return (f"Settings(website_url={self.website_url!r}, site_name={self.site_name!r}, "
                f"persistence={'sql' if self.database_url else 'memory'}, "
                f"check_interval={self.check_interval})")


def _positive_number(name, raw, default):
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def is_discord_webhook_url(url):
    """
    Check that a URL has the shape of a Discord webhook.

    Args:
        url (str): Candidate webhook URL

    Returns:
        bool: True if the URL is https and points at /api/webhooks/<id>/<token>
    """
    parsed = urlparse(url)
    return parsed.scheme == "https" and bool(parsed.netloc) and bool(WEBHOOK_PATH_PATTERN.match(parsed.path))


def load_settings(environ=None):
    """
    Build Settings from the environment.

    Args:
        environ (dict, optional): Mapping to read instead of os.environ.
            When omitted, a .env file in the working directory is loaded first.

    Returns:
        Settings: Resolved configuration

    Raises:
        ConfigError: If WEBSITE_URL or WEBHOOK_URL is missing, or a value is malformed
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    website_url = (environ.get("WEBSITE_URL") or "").strip()
    webhook_url = (environ.get("WEBHOOK_URL") or "").strip()

    missing = [name for name, value in (("WEBSITE_URL", website_url), ("WEBHOOK_URL", webhook_url)) if not value]
    if missing:
        raise ConfigError(f"Please provide {' and '.join(missing)} in the environment or .env file.")

    if urlparse(website_url).scheme not in ("http", "https"):
        raise ConfigError(f"WEBSITE_URL must be an http(s) URL, got {website_url!r}")
    if not is_discord_webhook_url(webhook_url):
        raise ConfigError("WEBHOOK_URL does not look like a Discord webhook URL")

    return Settings(
        website_url=website_url,
        webhook_url=webhook_url.rstrip("/"),
        database_url=(environ.get("DATABASE_URL") or "").strip() or None,
        site_name=(environ.get("SITE_NAME") or "").strip() or None,
        check_interval=_positive_number("CHECK_INTERVAL", environ.get("CHECK_INTERVAL"), DEFAULT_CHECK_INTERVAL),
        request_timeout=_positive_number("REQUEST_TIMEOUT", environ.get("REQUEST_TIMEOUT"), DEFAULT_REQUEST_TIMEOUT),
        embed_color=(environ.get("EMBED_COLOR") or "").strip() or DEFAULT_EMBED_COLOR,
        log_level=(environ.get("LOG_LEVEL") or "INFO").strip().upper(),
        log_file=(environ.get("LOG_FILE") or "").strip() or None,
    )
