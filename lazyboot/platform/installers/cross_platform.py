#!/usr/bin/env python3
"""
lazyboot Cross-Platform Installers
Global npm installs for CLIs distributed only through npm
"""

from typing import List, Sequence

from lazyboot.platform.installers.base import BaseInstaller


class NpmInstaller(BaseInstaller):
    """Global npm installer, used as a runtime prerequisite by the strategies"""

    MISSING_HINT = "Install Node.js from https://nodejs.org"

    def __init__(self, **kwargs):
        super().__init__('npm', **kwargs)

    def refresh(self):
        # npm resolves against the registry on every install
        pass

    def build_install_command(self, packages: Sequence[str]) -> List[str]:
        return self.sudo(['npm', 'install', '-g', *packages])
