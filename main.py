#!/usr/bin/env python3
"""
Site Status Monitor - Main Entry Point

Starts the monitoring daemon. All configuration comes from the environment
(or a .env file): WEBSITE_URL and WEBHOOK_URL are required.

Usage:
    python main.py
"""

from services.monitoring_daemon import main

if __name__ == "__main__":
    main()
