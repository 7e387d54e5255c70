"""
NoteFeed Backend - Multi-user note feed with revision history

Notes with optional images, append-only edit history and live update
broadcast to connected clients.
"""

__version__ = "1.0.0"
