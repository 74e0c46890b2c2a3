"""
Status Model

Types shared by the probe, the webhook sink and the persistence layer.
"""

from datetime import datetime, timezone
from enum import Enum


class Status(Enum):
    UP = "up"
    DOWN = "down"


class MessageLookup(Enum):
    """Outcome of asking the sink whether a posted message is still visible."""

    EXISTS = "exists"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class ProbeResult:
    """
    Result of a single availability probe.

    `error` is the HTTP status code as a string when a response was received,
    "Unknown" when the request never got one, and None when the site is up.
    """

    def __init__(self, status, error=None, status_code=None, elapsed_ms=None):
        self.status = status
        self.error = error
        self.status_code = status_code
        self.elapsed_ms = elapsed_ms

    @property
    def is_up(self):
        return self.status is Status.UP

    def __repr__(self):
        return f"ProbeResult(status={self.status.value}, error={self.error!r}, status_code={self.status_code})"


class NotificationRecord:
    """The last notification sent for a status and its message id at the sink."""

    def __init__(self, status, message_id, sent_at=None):
        self.status = status
        self.message_id = str(message_id)
        self.sent_at = sent_at or datetime.now(timezone.utc)

    def __eq__(self, other):
        if not isinstance(other, NotificationRecord):
            return NotImplemented
        return (self.status, self.message_id, self.sent_at) == (other.status, other.message_id, other.sent_at)

    def __repr__(self):
        return f"NotificationRecord(status={self.status.value}, message_id={self.message_id!r}, sent_at={self.sent_at.isoformat()})"
