#!/usr/bin/env python3
"""
lazyboot Errors
Exceptions raised by the bootstrapper and turned into exit codes by the CLI
"""

from typing import List, Optional


class BootstrapError(Exception):
    """Base class for every failure that ends a bootstrap run"""

    exit_code = 1

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class UnsupportedPlatform(BootstrapError):
    """The host could not be mapped to a known platform family"""

    def __init__(self, distro_id: str):
        label = distro_id or 'unknown'
        super().__init__(
            f"Unsupported OS: {label}",
            hint="Please install prerequisites manually using your package manager.",
        )
        self.distro_id = distro_id


class PackageManagerUnavailable(BootstrapError):
    """The platform's native package manager is not on PATH"""

    def __init__(self, package_manager: str, hint: Optional[str] = None):
        super().__init__(f"{package_manager} is not installed!", hint=hint)
        self.package_manager = package_manager


class PackageManagerFailure(BootstrapError):
    """An install command exited with a non-zero status"""

    def __init__(self, cmd: List[str], returncode: int, output: str = ''):
        super().__init__(f"Command failed with exit code {returncode}: {' '.join(cmd)}")
        self.cmd = list(cmd)
        self.returncode = returncode
        self.output = output


class ManualStepRequired(BootstrapError):
    """The operator has to finish an action by hand before re-running"""


class ConfigError(BootstrapError):
    """Invalid configuration file"""
