#!/usr/bin/env python3
"""
lazyboot CLI - Command-line interface
Click-based entry point for bootstrapping a LazyVim workstation
"""

import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, TypeVar

import click
from rich.console import Console
from rich.markup import escape

from lazyboot import __version__
from lazyboot.config import ConfigManager, LazybootConfig
from lazyboot.console import Printer
from lazyboot.errors import BootstrapError, PackageManagerFailure
from lazyboot.font import NerdFontInstaller
from lazyboot.orchestrator import Bootstrapper, Flow, extras_flow, prerequisites_flow, verify_only
from lazyboot.platform.detector import Platform, PlatformDetector
from lazyboot.platform.installers import BaseInstaller, installer_for
from lazyboot.platform.probe import CommandProbe
from lazyboot.platform.tools import extra_tools, prerequisite_tools
from lazyboot.report import VerificationReporter


console = Console(highlight=False)

T = TypeVar('T')

AFFIRMATIVE = re.compile(r'^[Yy]')


def _confirm(message: str) -> bool:
    """y/N prompt; anything but an answer starting with y declines, EOF included"""
    try:
        answer = click.prompt(f"{message} [y/N]", default='', show_default=False)
    except click.Abort:
        click.echo()
        return False
    return bool(AFFIRMATIVE.match(answer.strip()))


def _report_error(printer: Printer, error: BootstrapError):
    printer.error(error.message)
    if isinstance(error, PackageManagerFailure) and error.output:
        for line in error.output.splitlines():
            printer.line(line, indent=2)
    if error.hint:
        for line in error.hint.splitlines():
            printer.line(line)


def _guarded(printer: Printer, action: Callable[[], T]) -> T:
    """Run `action`, turning a BootstrapError into a printed error and exit status"""
    try:
        return action()
    except BootstrapError as e:
        _report_error(printer, e)
        sys.exit(e.exit_code)


@dataclass
class Session:
    """Collaborators shared by every subcommand of one invocation"""
    config: LazybootConfig
    printer: Printer
    config_source: Optional[Path] = None
    probe: CommandProbe = field(default_factory=CommandProbe)
    detector: PlatformDetector = field(default_factory=PlatformDetector)

    @property
    def reporter(self) -> VerificationReporter:
        return VerificationReporter(self.probe, self.printer)

    def installer_for(self, platform: Platform) -> BaseInstaller:
        return installer_for(
            platform,
            probe=self.probe,
            printer=self.printer,
            use_sudo=self.config.use_sudo,
            auto_approve=self.config.auto_approve,
        )

    def bootstrapper(self, flow: Flow) -> Bootstrapper:
        font_installer = None
        if flow.offers_font:
            font_installer = NerdFontInstaller(self.config, self.probe, self.printer)
        return Bootstrapper(
            flow,
            self.detector,
            self.installer_for,
            self.reporter,
            self.printer,
            confirm=_confirm,
            font_installer=font_installer,
        )

    def bootstrap(self, flow: Flow):
        exit_code = _guarded(self.printer, self.bootstrapper(flow).run)
        sys.exit(exit_code)


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version and exit')
@click.option('--debug', is_flag=True, help='Echo each command before it runs')
@click.option('--config', 'config_path', default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Configuration file (default: .lazyboot.yml search)')
@click.pass_context
def main(ctx, version, debug, config_path):
    """
    lazyboot - LazyVim workstation bootstrapper

    Installs Neovim and the command-line tools LazyVim depends on using the
    native package manager of macOS, Debian/Ubuntu, Fedora/RHEL or Arch.

    Examples:
        lazyboot                 # Install prerequisites
        lazyboot extras          # Install optional rendering tools
        lazyboot check           # Verify without installing
        lazyboot config --init   # Write a default .lazyboot.yml
    """
    if version:
        click.echo(f"lazyboot v{__version__}")
        ctx.exit(0)

    printer = Printer(console, debug=debug)
    source = config_path or ConfigManager.find_config()
    if source is not None and not source.exists():
        printer.warning(f"Config file {source} not found, using defaults")
        source = None
    config = _guarded(printer, lambda: ConfigManager.load_config(source))
    ctx.obj = Session(config, printer, config_source=source)

    if ctx.invoked_subcommand is None:
        ctx.invoke(install)


@main.command()
@click.pass_obj
def install(session: Session):
    """
    Install the LazyVim prerequisites.

    Neovim (>= 0.11), git, curl, a C compiler, ripgrep, fd, fzf,
    tree-sitter-cli and lazygit, then optionally a Nerd Font.
    """
    session.bootstrap(prerequisites_flow(session.config))


@main.command()
@click.pass_obj
def extras(session: Session):
    """
    Install optional rendering tools.

    WezTerm, ImageMagick, Ghostscript, Tectonic and mermaid-cli for image,
    PDF, LaTeX and diagram support inside Neovim.
    """
    session.bootstrap(extras_flow(session.config))


@main.command()
@click.option('--all', 'include_extras', is_flag=True, help='Also verify the optional rendering tools')
@click.pass_obj
def check(session: Session, include_extras: bool):
    """
    Verify installed tools without changing anything.

    Exits 1 when a required prerequisite is missing.
    """
    tools = prerequisite_tools(session.config)
    if include_extras:
        tools += extra_tools(session.config)
    report = verify_only(tools, session.reporter)
    sys.exit(report.exit_code)


@main.command()
@click.option('--init', 'init_config', is_flag=True, help='Write a default .lazyboot.yml in the current directory')
@click.option('--force', is_flag=True, help='Overwrite an existing .lazyboot.yml')
@click.pass_obj
def config(session: Session, init_config: bool, force: bool):
    """
    Show the detected platform and effective configuration.
    """
    printer = session.printer

    if init_config:
        target = Path.cwd() / ConfigManager.DEFAULT_CONFIG_NAME
        if target.exists() and not force:
            printer.warning(f"{target} already exists (use --force to overwrite)")
            sys.exit(1)
        path = ConfigManager.create_default_config(Path.cwd())
        printer.success(f"Created {path}")
        return

    platform = session.detector.detect()
    status = "supported" if platform.is_supported else "unsupported"
    printer.step("Platform")
    printer.line(f"OS: {platform.display_name or 'unknown'} ({platform.family.value}, {status})", indent=2)

    printer.step("Configuration")
    printer.line(f"Source: {session.config_source or 'built-in defaults'}", indent=2)

    cfg = session.config
    rows = [
        ["package_manager.use_sudo", str(cfg.use_sudo)],
        ["package_manager.auto_approve", str(cfg.auto_approve)],
        ["editor.min_version", cfg.editor_min_version],
        ["editor.starter_repo", cfg.starter_repo],
        ["editor.config_dir", cfg.editor_config_dir],
        ["font.name", cfg.font_name],
        ["font.url", cfg.font_url],
        ["font.directory", cfg.font_directory],
        ["skip_tools", ', '.join(cfg.skip_tools) or '-'],
    ]
    printer.table("Effective configuration", ["Key", "Value"], [[key, escape(value)] for key, value in rows])


if __name__ == '__main__':
    main()
