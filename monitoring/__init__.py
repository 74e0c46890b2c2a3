"""
Monitoring Module

Contains the availability monitor and its collaborators:
- HTTP availability probe
- Discord webhook sink
- Notification record stores
"""
