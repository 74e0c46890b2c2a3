"""
Flask Application Factory

Exposes the monitor as an HTTP-triggered job for serverless or cron
hosting: each request to /api/monitor runs exactly one cycle.
"""

import logging
import threading
from datetime import datetime, timezone
from flask import Flask, jsonify

from config.settings import load_settings
from monitoring.monitor import MonitorState, create_monitor

logger = logging.getLogger(__name__)


def create_app(monitor=None, state=None):
    """
    Create and configure the Flask application.

    Args:
        monitor (AvailabilityMonitor, optional): Pre-built monitor; built from
            the environment when omitted
        state (MonitorState, optional): State to continue from

    Raises:
        ConfigError: If the monitor is built from an incomplete environment
    """
    if monitor is None:
        monitor, restored = create_monitor(load_settings())
        state = state or restored
    if state is None:
        state = MonitorState.restore(monitor.store)

    app = Flask(__name__)
    app.config["MONITOR"] = monitor
    app.config["MONITOR_STATE"] = state
    # threaded servers may overlap requests; cycles must not
    cycle_lock = threading.Lock()

    @app.route('/api/monitor', methods=['GET', 'POST'])
    def run_monitor():
        """Run one probe-and-notify cycle."""
        try:
            with cycle_lock:
                result = monitor.run_cycle(state)
        except Exception as e:
            logger.error(f"Error executing monitoring cycle: {e}", exc_info=True)
            return jsonify({'message': 'Internal Server Error'}), 500
        return jsonify({
            'message': 'Monitoring completed',
            'status': result.status.value,
        })

    @app.route('/api/status')
    def monitoring_status():
        """Health check endpoint reporting the last known status."""
        return jsonify({
            'status': 'ok',
            'site': monitor.url,
            'last_status': state.last_status.value if state.last_status else None,
            'cycles': state.cycle_count,
            'timestamp': datetime.now(timezone.utc).isoformat(),
        })

    return app
