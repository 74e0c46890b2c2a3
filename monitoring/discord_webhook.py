"""
Discord Webhook Sink

Posts status embeds to a Discord webhook and checks whether a previously
posted message is still visible in the channel.
"""

import logging
import requests

from monitoring.status import MessageLookup

logger = logging.getLogger(__name__)

# Discord JSON error code for "Unknown Message"
UNKNOWN_MESSAGE_CODE = 10008


def parse_color(color):
    """
    Convert a colour to the integer form Discord embeds expect.

    Args:
        color (str or int): "#dedede", "dedede", "0xdedede" or an int

    Returns:
        int: RGB value
    """
    if isinstance(color, int):
        return color
    value = color.strip().lower()
    if value.startswith("#"):
        value = value[1:]
    elif value.startswith("0x"):
        value = value[2:]
    return int(value, 16)


def build_embed(title, description, color, timestamp):
    """
    Build a Discord embed payload.

    Args:
        title (str): Embed title
        description (str): Embed body
        color (str or int): Embed colour
        timestamp (datetime): Time shown in the embed footer

    Returns:
        dict: Embed object
    """
    return {
        "title": title,
        "description": description,
        "color": parse_color(color),
        "timestamp": timestamp.isoformat(),
    }


class DiscordWebhook:
    """Minimal client for the Discord webhook execute/get-message endpoints."""

    def __init__(self, webhook_url, timeout=10, session=None):
        self.webhook_url = webhook_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, embed):
        """
        Post an embed to the webhook.

        Returns:
            str or None: The message ID, or None if the post failed
        """
        try:
            response = self.session.post(
                self.webhook_url,
                params={"wait": "true"},
                json={"embeds": [embed]},
                timeout=self.timeout,
            )
            response.raise_for_status()
            message_id = response.json()["id"]
        except Exception as e:
            logger.error(f"Failed to send Discord message: {e}")
            return None

        logger.info(f"Discord message sent successfully. Message ID: {message_id}")
        return str(message_id)

    def fetch(self, message_id):
        """
        Check whether a message posted by this webhook still exists.

        Returns:
            MessageLookup: EXISTS, NOT_FOUND only for Discord's Unknown Message
                error, UNKNOWN for anything else
        """
        try:
            response = self.session.get(f"{self.webhook_url}/messages/{message_id}", timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching message {message_id}: {e}")
            return MessageLookup.UNKNOWN

        if response.ok:
            return MessageLookup.EXISTS

        if response.status_code == 404 and _error_code(response) == UNKNOWN_MESSAGE_CODE:
            logger.info(f"Message {message_id} no longer exists")
            return MessageLookup.NOT_FOUND

        logger.error(f"Error fetching message {message_id}: HTTP {response.status_code} {response.text[:200]}")
        return MessageLookup.UNKNOWN


def _error_code(response):
    try:
        body = response.json()
    except ValueError:
        return None
    return body.get("code") if isinstance(body, dict) else None
