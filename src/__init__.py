"""
Server Status Board

A Discord bot that keeps one status message per Minecraft server up to date:
- Periodic status polling through the mcstatus.io API
- Online/offline classification with sleeping-server detection
- Hourly player-count history with optional chart images
- Edit-in-place message updates per server
"""

__version__ = "1.0.0"
__author__ = "Server Status Board"
