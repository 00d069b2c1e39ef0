"""
lazyboot Platform-Specific Installers
One installation strategy per platform family
"""

from typing import Dict, Type

from lazyboot.errors import UnsupportedPlatform
from lazyboot.platform.detector import Platform, PlatformFamily
from lazyboot.platform.installers.base import BaseInstaller, InstallStep
from lazyboot.platform.installers.linux import (
    AptInstaller,
    DnfInstaller,
    PacmanInstaller,
)
from lazyboot.platform.installers.macos import HomebrewInstaller
from lazyboot.platform.installers.cross_platform import NpmInstaller


STRATEGIES: Dict[PlatformFamily, Type[BaseInstaller]] = {
    PlatformFamily.MACOS: HomebrewInstaller,
    PlatformFamily.DEBIAN: AptInstaller,
    PlatformFamily.FEDORA: DnfInstaller,
    PlatformFamily.ARCH: PacmanInstaller,
}


def installer_for(platform: Platform, **kwargs) -> BaseInstaller:
    """
    Select the strategy for a detected platform

    Args:
        platform: Detected platform
        kwargs: Passed to the installer (probe, printer, runner, ...)

    Raises:
        UnsupportedPlatform: no strategy exists for the family
    """
    strategy = STRATEGIES.get(platform.family)
    if strategy is None:
        raise UnsupportedPlatform(platform.distro_id)
    return strategy(**kwargs)


__all__ = [
    'BaseInstaller',
    'InstallStep',
    'AptInstaller',
    'DnfInstaller',
    'PacmanInstaller',
    'HomebrewInstaller',
    'NpmInstaller',
    'STRATEGIES',
    'installer_for',
]
