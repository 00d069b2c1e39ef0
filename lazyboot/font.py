#!/usr/bin/env python3
"""
lazyboot Nerd Font Installer
Downloads a patched font into the user font directory
"""

import subprocess
from pathlib import Path
from typing import Optional

from lazyboot.config import LazybootConfig
from lazyboot.console import Printer
from lazyboot.platform.installers.base import Runner, run_checked
from lazyboot.platform.probe import CommandProbe


class NerdFontInstaller:
    """Install the configured Nerd Font for the current user"""

    def __init__(
        self,
        config: LazybootConfig,
        probe: Optional[CommandProbe] = None,
        printer: Optional[Printer] = None,
        runner: Runner = subprocess.run,
    ):
        self.config = config
        self.probe = probe or CommandProbe()
        self.printer = printer or Printer()
        self.runner = runner

    @property
    def target(self) -> Path:
        return self.config.font_path / self.config.font_name

    def install(self) -> Path:
        """
        Download and extract the font, then refresh the font cache

        Returns:
            Directory the font was extracted into

        Raises:
            PackageManagerFailure: download or extraction failed
            OSError: the font directory cannot be created or written
        """
        name = self.config.font_name
        self.printer.info(f"Installing Nerd Font ({name} Nerd Font)...")

        font_dir = self.config.font_path
        font_dir.mkdir(parents=True, exist_ok=True)

        archive = font_dir / f"{name}.zip"
        if archive.exists():
            archive.unlink()

        run_checked(self.runner, self.printer, ['curl', '-fLo', str(archive), self.config.font_url])
        run_checked(self.runner, self.printer, ['unzip', '-o', str(archive), '-d', str(self.target)])
        archive.unlink(missing_ok=True)

        if self.probe.exists('fc-cache'):
            run_checked(self.runner, self.printer, ['fc-cache', '-f', str(font_dir)])

        self.printer.success(f"{name} Nerd Font installed successfully!")
        self.printer.warning(f"Remember to configure your terminal to use '{name} Nerd Font Mono'")
        return self.target
