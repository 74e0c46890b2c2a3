"""
Availability Monitor

Runs one probe -> classify -> compare -> notify cycle at a time. The last
known status is carried in a MonitorState passed into every cycle.
"""

import logging
from datetime import datetime, timezone

from monitoring.probe import probe
from monitoring.status import MessageLookup, NotificationRecord
from monitoring.discord_webhook import DiscordWebhook, build_embed
from monitoring.store import create_store

logger = logging.getLogger(__name__)


class MonitorState:
    """Mutable state threaded through monitor cycles."""

    def __init__(self, last_status=None, cycle_count=0):
        self.last_status = last_status
        self.cycle_count = cycle_count

    @classmethod
    def restore(cls, store):
        """
        Recover the last announced status from a store.

        Returns:
            MonitorState: last_status is the status of the newest record, or None
        """
        record = store.latest()
        if record is None:
            return cls()
        logger.info(f"Restored last notified status: {record.status.value} (message {record.message_id})")
        return cls(last_status=record.status)


class AvailabilityMonitor:
    """
    Probe a site and announce status changes to a webhook sink.

    Args:
        url (str): Site to probe
        sink: Object with send(embed) -> message id or None and
            fetch(message_id) -> MessageLookup
        store: NotificationRecord store (get/put/discard/latest)
        site_name (str): Name used in message titles
        color (str or int): Embed colour
        timeout (float): Probe timeout in seconds
        probe_func (callable, optional): Replacement for monitoring.probe.probe
        clock (callable, optional): Returns the current aware datetime
    """

    def __init__(self, url, sink, store, site_name, color="#dedede", timeout=10,
                 probe_func=None, clock=None):
        self.url = url
        self.sink = sink
        self.store = store
        self.site_name = site_name
        self.color = color
        self.timeout = timeout
        self.probe_func = probe_func or probe
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def run_cycle(self, state):
        """
        Run one probe-and-notify cycle.

        Returns:
            ProbeResult: Outcome of this cycle's probe
        """
        state.cycle_count += 1
        result = self.probe_func(self.url, timeout=self.timeout)
        self.decide_and_notify(result, state)
        return result

    def decide_and_notify(self, result, state):
        """
        Notify on a status change, or re-send if the current status message was deleted.

        Returns:
            str or None: ID of the message sent this cycle, if any
        """
        new_status = result.status

        if new_status != state.last_status:
            logger.info(f"Status changed: {state.last_status.value if state.last_status else 'none'} -> {new_status.value}")
            message_id = self._announce(result)
            state.last_status = new_status
            if message_id is None:
                # an older message for this status must not stand in for this announcement
                self.store.discard(new_status)
            return message_id

        record = self.store.get(new_status)
        if record is None:
            return None

        lookup = self.sink.fetch(record.message_id)
        if lookup is MessageLookup.NOT_FOUND:
            logger.info(f"{new_status.value} message {record.message_id} was deleted; resending")
            message_id = self._announce(result)
            if message_id is None:
                # deleted message must not trigger another resend next cycle
                self.store.discard(new_status)
            return message_id
        if lookup is MessageLookup.UNKNOWN:
            # Ambiguous sink error: assume the message is still there
            logger.warning(f"Could not verify message {record.message_id}; assuming it still exists")
        return None

    def _announce(self, result):
        title, description = self.describe(result)
        return self.send(title, description, self.color, self.clock(), result.status)

    def describe(self, result):
        """
        Title and description for a probe result.
        """
        if result.is_up:
            return f"{self.site_name} is Available", "Available"
        return f"{self.site_name} is Reporting Error", f"HTTP ERROR {result.error or 'Unknown'}"

    def send(self, title, description, color, timestamp, status):
        """
        Post a notification and record it as the current one for its status.

        Returns:
            str or None: Message ID, or None if the sink rejected it
        """
        message_id = self.sink.send(build_embed(title, description, color, timestamp))
        if message_id is None:
            return None
        self.store.put(status, NotificationRecord(status, message_id, timestamp))
        return message_id


def create_monitor(settings):
    """
    Wire a monitor from Settings: Discord webhook sink plus the configured store.

    Returns:
        tuple: (AvailabilityMonitor, MonitorState restored from the store)
    """
    store = create_store(settings.database_url)
    monitor = AvailabilityMonitor(
        url=settings.website_url,
        sink=DiscordWebhook(settings.webhook_url, timeout=settings.request_timeout),
        store=store,
        site_name=settings.site_name,
        color=settings.embed_color,
        timeout=settings.request_timeout,
    )
    return monitor, MonitorState.restore(store)
