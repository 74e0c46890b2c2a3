"""
Availability Probe

Issues a single bounded-timeout GET against the monitored site and
classifies the outcome as UP or DOWN.
"""

import time
import logging
import requests

from monitoring.status import Status, ProbeResult

logger = logging.getLogger(__name__)

USER_AGENT = "site-status-monitor/1.0"


def probe(url, timeout=10, session=None):
    """
    Check whether a URL is reachable.

    Args:
        url (str): URL to GET
        timeout (float): Connect/read timeout in seconds
        session (requests.Session, optional): Session to reuse between cycles

    Returns:
        ProbeResult: UP on a 2xx response, DOWN otherwise. Never raises.
    """
    http = session or requests
    started = time.monotonic()

    try:
        response = http.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
    except Exception as e:
        logger.error(f"Website is down: {e}")
        return ProbeResult(Status.DOWN, error="Unknown")

    elapsed_ms = int((time.monotonic() - started) * 1000)

    if not 200 <= response.status_code < 300:
        logger.error(f"Website is down: HTTP {response.status_code} from {url}")
        return ProbeResult(Status.DOWN, error=str(response.status_code),
                           status_code=response.status_code, elapsed_ms=elapsed_ms)

    logger.info(f"Website is available ({response.status_code} in {elapsed_ms}ms)")
    return ProbeResult(Status.UP, status_code=response.status_code, elapsed_ms=elapsed_ms)
