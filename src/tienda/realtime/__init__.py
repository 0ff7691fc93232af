"""Real-time infrastructure — per-entity notification channels.

Events flow in one direction:
1. Services → channel.broadcast() after every committed write
2. Channel → every WebSocket subscribed to /ws/<entity>

The channel registry is built once by the app factory and handed to
services and WebSocket routes through app.state, never through globals.
"""

from tienda.realtime.channels import BroadcastChannel, ChannelRegistry, build_channels
from tienda.realtime.notifications import Notification, NotificationType

__all__ = [
    "BroadcastChannel",
    "ChannelRegistry",
    "Notification",
    "NotificationType",
    "build_channels",
]
