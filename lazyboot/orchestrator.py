#!/usr/bin/env python3
"""
lazyboot Orchestrator
Confirm, identify the platform, run its strategy, verify, and guide the user
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from lazyboot.config import LazybootConfig
from lazyboot.console import Printer
from lazyboot.errors import BootstrapError, PackageManagerFailure, UnsupportedPlatform
from lazyboot.font import NerdFontInstaller
from lazyboot.platform.detector import Platform, PlatformDetector, PlatformFamily
from lazyboot.platform.installers.base import BaseInstaller
from lazyboot.platform.tools import FONT_TOOL_NAME, Tool, extra_tools, prerequisite_tools
from lazyboot.report import Report, VerificationReporter


class State(Enum):
    START = "start"
    CONFIRM = "confirm"
    IDENTIFY = "identify"
    INSTALL = "install"
    REPORT = "report"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class Flow:
    """What one bootstrap run installs and what it tells the user afterwards"""
    title: str
    intro: str
    tools: List[Tool]
    next_steps: List[str]
    offers_font: bool = False
    closing_warning: Optional[str] = None
    platform_notes: Dict[PlatformFamily, List[str]] = field(default_factory=dict)


def prerequisites_flow(config: LazybootConfig) -> Flow:
    config_dir = config.editor_config_path
    return Flow(
        title="LazyVim Prerequisites Installation",
        intro="This will install the following prerequisites:",
        tools=prerequisite_tools(config),
        next_steps=[
            "Clone the LazyVim starter:",
            f"   git clone {config.starter_repo} {config_dir}",
            "Remove the .git folder:",
            f"   rm -rf {config_dir}/.git",
            "Start Neovim:",
            "   nvim",
            "Run :LazyHealth to check if everything is working",
        ],
        offers_font=FONT_TOOL_NAME not in config.skip_tools,
        closing_warning="If you installed a Nerd Font, remember to configure your terminal to use it!",
    )


def extras_flow(config: LazybootConfig) -> Flow:
    return Flow(
        title="LazyVim Optional Tools Installation",
        intro="This will install the following optional tools:",
        tools=extra_tools(config),
        next_steps=[
            "Switch to WezTerm terminal for full graphics support",
            "Restart Neovim",
            "Run :checkhealth in Neovim to verify",
            "Missing Treesitter languages will auto-install when you open those file types",
        ],
        platform_notes={
            PlatformFamily.MACOS: [
                "On macOS, you may need to add WezTerm to your dock or applications folder",
                "Launch WezTerm from Applications or run 'wezterm' in terminal",
            ],
        },
    )


class Bootstrapper:
    """
    Drives one bootstrap run through its states

    start -> confirm -> identify -> install -> report -> done, with `aborted`
    reachable from confirm (declined, exit 0) and from any failure (the
    BootstrapError is re-raised for the CLI to turn into exit 1).
    """

    def __init__(
        self,
        flow: Flow,
        detector: PlatformDetector,
        installer_factory: Callable[[Platform], BaseInstaller],
        reporter: VerificationReporter,
        printer: Printer,
        confirm: Callable[[str], bool],
        font_installer: Optional[NerdFontInstaller] = None,
    ):
        self.flow = flow
        self.detector = detector
        self.installer_factory = installer_factory
        self.reporter = reporter
        self.printer = printer
        self.confirm = confirm
        self.font_installer = font_installer
        self.history: List[State] = []
        self.platform: Optional[Platform] = None
        self.report: Optional[Report] = None

    @property
    def state(self) -> Optional[State]:
        return self.history[-1] if self.history else None

    def _enter(self, state: State):
        self.history.append(state)

    def run(self) -> int:
        """
        Execute the run

        Returns:
            0 when every required tool is satisfied or the user declined,
            1 when a required tool is still missing

        Raises:
            BootstrapError: unsupported platform or a fatal install failure
        """
        try:
            return self._run()
        except BootstrapError:
            self._enter(State.ABORTED)
            raise

    def _run(self) -> int:
        self._enter(State.START)
        self.printer.banner(self.flow.title)
        self.printer.blank()
        self.printer.info(self.flow.intro)
        for tool in self.flow.tools:
            suffix = '' if tool.required else ' [optional]'
            self.printer.bullet(f"{tool.label}{suffix}")
        self.printer.blank()

        self._enter(State.CONFIRM)
        if not self.confirm("Do you want to continue?"):
            self.printer.warning("Installation cancelled.")
            self._enter(State.ABORTED)
            return 0

        self._enter(State.IDENTIFY)
        self.platform = self.detector.detect()
        if not self.platform.is_supported:
            raise UnsupportedPlatform(self.platform.distro_id)
        self.printer.info(f"Detected OS: {self.platform.display_name}")
        installer = self.installer_factory(self.platform)

        self._enter(State.INSTALL)
        self.printer.step(f"Installing on {self.platform.display_name}")
        installer.preflight()
        installed = installer.run(self.flow.tools)
        self.printer.success("Installation steps finished")

        if self.flow.offers_font and self.font_installer is not None:
            if self._install_font():
                installed.add(FONT_TOOL_NAME)

        self._enter(State.REPORT)
        self.printer.blank()
        self.report = self.reporter.verify(self.flow.tools, installed)
        self.reporter.render(self.report)

        self._enter(State.DONE)
        self._print_next_steps()
        return self.report.exit_code

    def _install_font(self) -> bool:
        """Second, scoped prompt; the font is optional so failures only warn"""
        target = self.font_installer.target
        if target.exists():
            self.printer.success(f"{self.font_installer.config.font_name} Nerd Font already installed")
            return False

        self.printer.blank()
        if not self.confirm(f"Do you want to install {self.font_installer.config.font_name} Nerd Font?"):
            return False

        try:
            self.font_installer.install()
        except PackageManagerFailure as e:
            reason = e.message
        except OSError as e:
            reason = str(e)
        else:
            return True
        self.printer.warning(f"Nerd Font could not be installed: {reason}")
        return False

    def _print_next_steps(self):
        self.printer.blank()
        self.printer.success("Installation complete!")
        self.printer.blank()
        self.printer.info("Next steps:")
        number = 0
        for line in self.flow.next_steps:
            if line.startswith(' '):
                self.printer.line(line, indent=2)
            else:
                number += 1
                self.printer.line(f"{number}. {line}", indent=2)
        self.printer.blank()

        if self.platform is not None:
            for note in self.flow.platform_notes.get(self.platform.family, []):
                self.printer.warning(note)
        if self.flow.closing_warning:
            self.printer.warning(self.flow.closing_warning)


def verify_only(tools: List[Tool], reporter: VerificationReporter) -> Report:
    """Report on the host without installing anything"""
    report = reporter.verify(tools)
    reporter.render(report)
    return report


# Flows with the built-in defaults; the CLI rebuilds them from the loaded config
PREREQUISITES = prerequisites_flow(LazybootConfig())
EXTRAS = extras_flow(LazybootConfig())
