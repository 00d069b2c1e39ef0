#!/usr/bin/env python3
"""
lazyboot Base Installer Class
Base class for the platform installation strategies
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Optional, Sequence, Set
import subprocess

from lazyboot.console import Printer
from lazyboot.errors import PackageManagerFailure, PackageManagerUnavailable
from lazyboot.platform.probe import CommandProbe
from lazyboot.platform.tools import Tool, ToolMapper


Runner = Callable[..., subprocess.CompletedProcess]


def run_checked(runner: Runner, printer: Printer, cmd: List[str], capture: bool = False) -> subprocess.CompletedProcess:
    """Run a command through `runner`, raising on a non-zero exit"""
    printer.debug(' '.join(cmd))
    try:
        if capture:
            result = runner(cmd, capture_output=True, text=True, check=False)
        else:
            result = runner(cmd, text=True, check=False)
    except (FileNotFoundError, PermissionError) as e:
        raise PackageManagerFailure(cmd, 127, str(e)) from e

    if result.returncode != 0:
        output = ''
        if capture:
            output = (result.stderr or result.stdout or '').strip()
        raise PackageManagerFailure(cmd, result.returncode, output)
    return result


@dataclass
class InstallStep:
    """Ensure one tool is present; `install` only runs when it is not"""
    tool: Tool
    install: Callable[[], None]


class BaseInstaller(ABC):
    """
    Abstract base class for platform installation strategies

    Subclasses declare how each catalog tool is installed in `step_actions`;
    the base class turns those into ordered, idempotent steps.
    """

    # Printed when the package manager itself is missing
    MISSING_HINT: Optional[str] = None

    def __init__(
        self,
        package_manager: str,
        probe: Optional[CommandProbe] = None,
        printer: Optional[Printer] = None,
        runner: Runner = subprocess.run,
        use_sudo: bool = True,
        auto_approve: bool = True,
    ):
        self.package_manager = package_manager
        self.probe = probe or CommandProbe()
        self.printer = printer or Printer()
        self.runner = runner
        self.use_sudo = use_sudo
        self.auto_approve = auto_approve
        self._index_refreshed = False

    @property
    def pm_path(self) -> Optional[str]:
        return self.probe.locate(self.package_manager)

    def preflight(self):
        """
        Check the package manager is usable before any step runs

        Raises:
            PackageManagerUnavailable: the package manager is not on PATH
        """
        if not self.pm_path:
            raise PackageManagerUnavailable(self.package_manager, hint=self.MISSING_HINT)
        self.printer.success(f"{self.package_manager} found: {self.pm_path}")

    @abstractmethod
    def refresh(self):
        """Update the package index"""

    @abstractmethod
    def build_install_command(self, packages: Sequence[str]) -> List[str]:
        """
        Build the native install command

        Args:
            packages: Package names to install in one call

        Returns:
            Command and arguments
        """

    def step_actions(self) -> Dict[str, Callable[[Tool], None]]:
        """Catalog tool name -> install action, in no particular order"""
        return {}

    def has_package(self, package: str) -> bool:
        """Whether the configured repositories offer a package"""
        return False

    def sudo(self, cmd: List[str]) -> List[str]:
        return ['sudo'] + cmd if self.use_sudo else cmd

    def run_command(self, cmd: List[str], capture: bool = False) -> subprocess.CompletedProcess:
        """
        Run a command, streaming its output unless `capture` is set

        Args:
            cmd: Command and arguments
            capture: Capture stdout/stderr instead of passing them through

        Returns:
            CompletedProcess result

        Raises:
            PackageManagerFailure: non-zero exit, or the executable is missing
        """
        return run_checked(self.runner, self.printer, cmd, capture=capture)

    def run_shell(self, script: str) -> subprocess.CompletedProcess:
        """Run a pipeline such as an upstream install script"""
        return self.run_command(['sh', '-c', script])

    def ensure_index(self):
        """Refresh the package index once, right before the first install"""
        if self._index_refreshed:
            return
        # Marked first: a failed refresh is not attempted again by later steps.
        self._index_refreshed = True
        self.refresh()

    def install_packages(self, *packages: str):
        self.ensure_index()
        self.run_command(self.build_install_command(packages))

    def install_tool(self, tool: Tool):
        """Install a tool through its mapped native packages"""
        packages = ToolMapper.get_packages(tool.name, self.package_manager)
        if not packages:
            raise ValueError(f"No {self.package_manager} package mapped for {tool.name}")
        self.printer.info(f"Installing {tool.display_name}...")
        self.install_packages(*packages)

    # Runtime prerequisites

    def install_node(self):
        """Install Node.js and npm from the native repositories"""
        self.printer.info("Installing Node.js and npm first...")
        self.install_packages(*ToolMapper.get_packages('nodejs', self.package_manager))

    def npm(self) -> 'BaseInstaller':
        # Imported here to avoid a cycle: cross_platform subclasses BaseInstaller.
        from lazyboot.platform.installers.cross_platform import NpmInstaller
        return NpmInstaller(
            probe=self.probe,
            printer=self.printer,
            runner=self.runner,
            use_sudo=self.use_sudo,
        )

    def install_via_npm(self, tool: Tool):
        """Install a CLI only distributed through npm, adding npm when absent"""
        if not self.probe.exists('npm'):
            self.install_node()
        self.printer.info(f"Installing {tool.display_name} via npm...")
        self.npm().install_tool(tool)

    def install_via_script(self, tool: Tool):
        """Run the upstream install script mapped for a tool"""
        script = ToolMapper.get_manual_command(tool.name)
        if not script:
            raise ValueError(f"No install script mapped for {tool.name}")
        self.printer.info(f"Installing {tool.display_name} from upstream script...")
        self.run_shell(script)

    # Step execution

    def ensure_present(self, tool: Tool, install: Callable[[], None]) -> bool:
        """
        Probe first, install only when the tool is not satisfied

        Returns:
            True if the install action ran
        """
        if self.probe.satisfies(tool):
            self.printer.success(f"{tool.display_name} already installed")
            return False
        install()
        return True

    def steps(self, tools: Sequence[Tool]) -> List[InstallStep]:
        """Ordered steps for the tools this strategy knows how to install"""
        actions = self.step_actions()
        return [
            InstallStep(tool, partial(actions[tool.name], tool))
            for tool in tools
            if tool.name in actions
        ]

    def run(self, tools: Sequence[Tool]) -> Set[str]:
        """
        Execute the steps strictly in order

        A failing required step propagates and stops the run; a failing
        optional step is reported as a warning.

        Returns:
            Names of the tools whose install action ran
        """
        attempted: Set[str] = set()
        for step in self.steps(tools):
            try:
                if self.ensure_present(step.tool, step.install):
                    attempted.add(step.tool.name)
            except PackageManagerFailure as e:
                if step.tool.required:
                    raise
                attempted.add(step.tool.name)
                self.printer.warning(f"{step.tool.display_name} could not be installed: {e.message}")
        return attempted
