#!/usr/bin/env python3
"""
lazyboot Platform Detection
Maps the host to a platform family that selects an installation strategy
"""

import platform
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional


OS_RELEASE = Path('/etc/os-release')


class PlatformFamily(Enum):
    """Platform families sharing one native package manager"""
    MACOS = "macos"
    DEBIAN = "debian-like"
    FEDORA = "fedora-like"
    ARCH = "arch-like"
    UNKNOWN = "unknown"


# os-release ID -> family
DISTRO_FAMILIES: Dict[str, PlatformFamily] = {
    'ubuntu': PlatformFamily.DEBIAN,
    'debian': PlatformFamily.DEBIAN,
    'linuxmint': PlatformFamily.DEBIAN,
    'pop': PlatformFamily.DEBIAN,
    'fedora': PlatformFamily.FEDORA,
    'rhel': PlatformFamily.FEDORA,
    'centos': PlatformFamily.FEDORA,
    'arch': PlatformFamily.ARCH,
    'manjaro': PlatformFamily.ARCH,
    'endeavouros': PlatformFamily.ARCH,
}


@dataclass(frozen=True)
class Platform:
    """Detected host platform"""
    family: PlatformFamily
    distro_id: str
    version: str = ''

    @property
    def is_supported(self) -> bool:
        return self.family is not PlatformFamily.UNKNOWN

    @property
    def display_name(self) -> str:
        if self.family is PlatformFamily.MACOS:
            name = 'macOS'
        else:
            name = self.distro_id or 'unknown'
        return f"{name} {self.version}".strip()


def parse_os_release(text: str) -> Dict[str, str]:
    """
    Parse os-release KEY=value lines

    Values may be single or double quoted; blank lines and comments are skipped.
    """
    fields = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, value = line.split('=', 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in '"\'':
            value = value[1:-1]
        fields[key.strip()] = value
    return fields


class PlatformDetector:
    """
    Detect the platform family of the host

    The kernel name, the os-release file and the command runner can be
    injected so detection is testable off-host.
    """

    def __init__(
        self,
        system: Optional[str] = None,
        os_release: Path = OS_RELEASE,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.system = system
        self.os_release = os_release
        self.runner = runner

    def detect(self) -> Platform:
        """
        Perform platform detection

        Returns:
            Platform; family is UNKNOWN when nothing usable was found
        """
        system = (self.system if self.system is not None else platform.system()).lower()

        if system == 'darwin':
            return Platform(PlatformFamily.MACOS, 'macos', self._macos_version())

        fields = self._read_os_release()
        if fields is None:
            return Platform(PlatformFamily.UNKNOWN, '')

        distro_id = fields.get('ID', '').lower()
        family = DISTRO_FAMILIES.get(distro_id, PlatformFamily.UNKNOWN)
        return Platform(family, distro_id, fields.get('VERSION_ID', ''))

    def _macos_version(self) -> str:
        """Read the product version via sw_vers"""
        try:
            result = self.runner(
                ['sw_vers', '-productVersion'],
                capture_output=True, text=True, check=False
            )
        except OSError:
            return ''
        if result.returncode != 0:
            return ''
        return (result.stdout or '').strip()

    def _read_os_release(self) -> Optional[Dict[str, str]]:
        try:
            text = self.os_release.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError):
            return None
        return parse_os_release(text)


def detect_platform() -> Platform:
    """Run a fresh detection against the current host"""
    return PlatformDetector().detect()
