"""Shared router dependencies.

The cache and the channel registry are built once by the app factory
and parked on app.state; these accessors hand them to the services.
"""

from fastapi import Request

from tienda.cache import Cache
from tienda.realtime.channels import ChannelRegistry


def get_cache(request: Request) -> Cache:
    return request.app.state.cache


def get_channels(request: Request) -> ChannelRegistry:
    return request.app.state.channels
