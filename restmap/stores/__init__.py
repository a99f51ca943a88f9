"""Persistent stores used by restmap front ends."""

from .endpoint_cache import EndpointCache

__all__ = ["EndpointCache"]
