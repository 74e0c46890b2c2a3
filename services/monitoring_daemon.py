"""
Monitoring Daemon

Background service that probes the configured site on a fixed interval
and posts status changes to the Discord webhook.
"""

import sys
import time
import logging
import signal

from config.settings import ConfigError, load_settings
from monitoring.monitor import create_monitor

logger = logging.getLogger(__name__)


class MonitoringDaemon:
    """
    Runs monitor cycles back to back with a fixed delay between them.

    A cycle always finishes before the next one starts; stop() takes effect
    at the next wait.
    """

    def __init__(self, monitor, state, interval=60, sleep=time.sleep):
        self.monitor = monitor
        self.state = state
        self.interval = interval
        self.sleep = sleep
        self.running = False

    def stop(self, signum=None, frame=None):
        """Handle shutdown signals gracefully."""
        if self.running:
            logger.info("Received shutdown signal. Stopping gracefully...")
        self.running = False

    def run(self, max_cycles=None):
        """
        Main daemon loop.

        Args:
            max_cycles (int, optional): Stop after this many cycles; runs forever when None
        """
        self.running = True
        logger.info(f"Starting website monitoring of {self.monitor.url} every {self.interval:g} seconds")

        try:
            while self.running:
                logger.info(f"=== Monitoring Cycle #{self.state.cycle_count + 1} ===")
                try:
                    self.monitor.run_cycle(self.state)
                except KeyboardInterrupt:
                    raise
                except Exception as e:
                    logger.error(f"Error in monitoring cycle: {e}", exc_info=True)

                if max_cycles is not None and self.state.cycle_count >= max_cycles:
                    break
                self._wait()
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
        finally:
            self.running = False
            logger.info("Monitoring Daemon stopped")

    def _wait(self):
        # one-second steps keep shutdown responsive
        remaining = self.interval
        while self.running and remaining > 0:
            step = min(1, remaining)
            self.sleep(step)
            remaining -= step


def configure_logging(level="INFO", log_file=None):
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def main():
    """
    Load settings, wire the monitor and run until stopped.

    Exits with status 1 when configuration is missing.
    """
    try:
        settings = load_settings()
    except ConfigError as e:
        configure_logging()
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    configure_logging(settings.log_level, settings.log_file)
    logger.info(f"Loaded {settings!r}")

    monitor, state = create_monitor(settings)
    daemon = MonitoringDaemon(monitor, state, interval=settings.check_interval)

    signal.signal(signal.SIGINT, daemon.stop)
    signal.signal(signal.SIGTERM, daemon.stop)

    daemon.run()


if __name__ == "__main__":
    main()
