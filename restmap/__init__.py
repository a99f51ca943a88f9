"""Static route-table extraction for Spring MVC projects."""

from .models import FileDescriptor, MethodSignature, RouteRecord
from .scanner import EndpointScanner, scan

__all__ = [
    "EndpointScanner",
    "FileDescriptor",
    "MethodSignature",
    "RouteRecord",
    "scan",
]
