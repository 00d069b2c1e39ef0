#!/usr/bin/env python3
"""
lazyboot Command Probe
Answers "is this tool on PATH?" without side effects
"""

import re
import shutil
import subprocess
from typing import Optional

from packaging import version as pkg_version

from lazyboot.platform.tools import Tool


VERSION_TIMEOUT = 5
VERSION_PATTERN = re.compile(r'(\d+\.\d+(?:\.\d+)?)')


class CommandProbe:
    """
    Resolve commands on the executable search path

    Absence is a normal result: nothing here raises for a missing command.
    """

    def __init__(self, search_path: Optional[str] = None):
        self.search_path = search_path

    def locate(self, *names: str) -> Optional[str]:
        """
        Find the first resolvable command

        Args:
            names: Alternate command names, checked in order

        Returns:
            Absolute path of the first match, or None
        """
        for name in names:
            found = shutil.which(name, path=self.search_path)
            if found:
                return found
        return None

    def exists(self, *names: str) -> bool:
        return self.locate(*names) is not None

    def version(self, *names: str) -> Optional[str]:
        """Best-effort `<cmd> --version` for display and minimum checks"""
        executable = self.locate(*names)
        if not executable:
            return None

        try:
            result = subprocess.run(
                [executable, '--version'],
                capture_output=True,
                text=True,
                timeout=VERSION_TIMEOUT,
                check=False,
            )
        except (subprocess.SubprocessError, OSError):
            return None

        if result.returncode != 0:
            return None

        # Some tools print their version to stderr
        output = result.stdout or result.stderr or ''
        match = VERSION_PATTERN.search(output)
        return match.group(1) if match else None

    def found_at(self, tool: Tool) -> Optional[str]:
        """Where the tool was found: a command path or a marker path"""
        location = self.locate(*tool.commands) if tool.commands else None
        if location:
            return location
        for path in tool.paths:
            if path.exists():
                return str(path)
        return None

    def satisfies(self, tool: Tool) -> bool:
        """
        True when the tool is present and new enough

        A version that cannot be read or parsed does not block: the tool is
        on PATH, so it is left alone.
        """
        if self.found_at(tool) is None:
            return False
        if not tool.min_version or not tool.commands:
            return True
        return version_satisfied(self.version(*tool.commands), tool.min_version)


def version_satisfied(found: Optional[str], minimum: str) -> bool:
    """Compare a detected version against a minimum"""
    if not found:
        return True
    try:
        return pkg_version.parse(found) >= pkg_version.parse(minimum)
    except pkg_version.InvalidVersion:
        return True
