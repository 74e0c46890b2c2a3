"""
Shared test fixtures: a scripted probe, a fake webhook sink and a fixed clock.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from monitoring.monitor import AvailabilityMonitor, MonitorState
from monitoring.status import Status, MessageLookup, ProbeResult
from monitoring.store import InMemoryNotificationStore

WEBSITE_URL = "https://example.com/health"
WEBHOOK_URL = "https://discord.com/api/webhooks/123456789/abc-DEF_token"


class FakeSink:
    """Records sent embeds; message lookups answer from `lookups` or EXISTS."""

    def __init__(self, fail_sends=False):
        self.sent = []
        self.fetched = []
        self.lookups = {}
        self.fail_sends = fail_sends

    def send(self, embed):
        if self.fail_sends:
            return None
        self.sent.append(embed)
        return f"msg-{len(self.sent)}"

    def fetch(self, message_id):
        self.fetched.append(message_id)
        return self.lookups.get(message_id, MessageLookup.EXISTS)


class ScriptedProbe:
    """Returns one ProbeResult per call, built from a list of HTTP codes (None = network error)."""

    def __init__(self, codes):
        self.codes = list(codes)
        self.calls = 0

    def __call__(self, url, timeout=10):
        code = self.codes[self.calls]
        self.calls += 1
        if code is None:
            return ProbeResult(Status.DOWN, error="Unknown")
        if 200 <= code < 300:
            return ProbeResult(Status.UP, status_code=code)
        return ProbeResult(Status.DOWN, error=str(code), status_code=code)


class StepClock:
    def __init__(self, start=datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc), step=timedelta(seconds=60)):
        self.now = start
        self.step = step

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def store():
    return InMemoryNotificationStore()


@pytest.fixture
def make_monitor(sink, store):
    def _make(codes, sink=sink, store=store):
        return AvailabilityMonitor(
            url=WEBSITE_URL,
            sink=sink,
            store=store,
            site_name="Dantotsu",
            probe_func=ScriptedProbe(codes),
            clock=StepClock(),
        )
    return _make


@pytest.fixture
def state():
    return MonitorState()
