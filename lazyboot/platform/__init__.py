"""
lazyboot Platform Detection & Installation
Host identification, command probing and the tool catalog
"""

from lazyboot.platform.detector import (
    DISTRO_FAMILIES,
    Platform,
    PlatformDetector,
    PlatformFamily,
    detect_platform,
)
from lazyboot.platform.probe import CommandProbe
from lazyboot.platform.tools import Tool, ToolMapper

__all__ = [
    'DISTRO_FAMILIES',
    'Platform',
    'PlatformDetector',
    'PlatformFamily',
    'detect_platform',
    'CommandProbe',
    'Tool',
    'ToolMapper',
]
