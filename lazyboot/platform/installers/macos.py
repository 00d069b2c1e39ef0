#!/usr/bin/env python3
"""
lazyboot macOS Installer
Installation strategy for macOS using Homebrew
"""

from typing import Callable, Dict, List, Sequence

from lazyboot.errors import ManualStepRequired
from lazyboot.platform.installers.base import BaseInstaller
from lazyboot.platform.tools import Tool


class HomebrewInstaller(BaseInstaller):
    """macOS strategy using Homebrew (never sudo)"""

    MISSING_HINT = (
        'Please install Homebrew first: https://brew.sh\n'
        'Run: /bin/bash -c "$(curl -fsSL https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh)"'
    )

    # Tools that need a tap or a cask
    SPECIAL_INSTALLS = {
        'lazygit': {'tap': 'jesseduffield/lazygit'},
        'wezterm': {'cask': True},
    }

    def __init__(self, **kwargs):
        kwargs['use_sudo'] = False
        super().__init__('brew', **kwargs)

    def refresh(self):
        self.printer.info("Updating Homebrew...")
        self.run_command(['brew', 'update'])

    def build_install_command(self, packages: Sequence[str]) -> List[str]:
        return ['brew', 'install', *packages]

    def step_actions(self) -> Dict[str, Callable[[Tool], None]]:
        return {
            'toolchain': self._install_command_line_tools,
            'neovim': self._install_neovim,
            'git': self.install_tool,
            'curl': self.install_tool,
            'ripgrep': self.install_tool,
            'fd': self.install_tool,
            'fzf': self.install_tool,
            'tree-sitter-cli': self.install_tool,
            'lazygit': self._install_special,
            'wezterm': self._install_special,
            'imagemagick': self.install_tool,
            'ghostscript': self.install_tool,
            'tectonic': self.install_tool,
            'mermaid-cli': self.install_via_npm,
        }

    def _tap_if_needed(self, tap: str):
        """Add a homebrew tap if not already present"""
        result = self.run_command(['brew', 'tap'], capture=True)
        if tap in (result.stdout or '').split():
            return
        self.run_command(['brew', 'tap', tap])

    def _install_special(self, tool: Tool):
        special = self.SPECIAL_INSTALLS[tool.name]
        self.printer.info(f"Installing {tool.display_name}...")
        self.ensure_index()
        if 'tap' in special:
            self._tap_if_needed(special['tap'])
        if special.get('cask'):
            self.run_command(['brew', 'install', '--cask', tool.name])
            return
        self.run_command(self.build_install_command([tool.name]))

    def _install_neovim(self, tool: Tool):
        """Install, or upgrade an existing Neovim below the minimum version"""
        if self.probe.exists(*tool.commands):
            self.printer.warning("Upgrading Neovim to latest version...")
            self.ensure_index()
            self.run_command(['brew', 'upgrade', 'neovim'])
            return
        self.install_tool(tool)

    def _install_command_line_tools(self, tool: Tool):
        """
        The compiler comes with the Xcode Command Line Tools, whose installer
        is a GUI dialog; the run cannot continue until it finishes.
        """
        self.printer.warning("C compiler not found. Installing Xcode Command Line Tools...")
        self.run_command(['xcode-select', '--install'])
        raise ManualStepRequired(
            "Xcode Command Line Tools installation started",
            hint="Please complete the Xcode Command Line Tools installation and run this again.",
        )
