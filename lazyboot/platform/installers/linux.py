#!/usr/bin/env python3
"""
lazyboot Linux Installers
Installation strategies for Debian-, Fedora- and Arch-family distributions
"""

import json
import platform
import tempfile
from pathlib import Path
from typing import Callable, Dict, List, Sequence

from lazyboot.errors import PackageManagerFailure
from lazyboot.platform.installers.base import BaseInstaller
from lazyboot.platform.tools import Tool


NEOVIM_PPA = 'ppa:neovim-ppa/unstable'
NODESOURCE_URL = 'https://deb.nodesource.com/setup_lts.x'
LAZYGIT_LATEST_API = 'https://api.github.com/repos/jesseduffield/lazygit/releases/latest'
LAZYGIT_DOWNLOAD = (
    'https://github.com/jesseduffield/lazygit/releases/latest/download/'
    'lazygit_{version}_Linux_{arch}.tar.gz'
)
WEZTERM_KEY_URL = 'https://apt.fury.io/wez/gpg.key'
WEZTERM_KEYRING = '/usr/share/keyrings/wezterm-fury.gpg'
WEZTERM_SOURCE = f'deb [signed-by={WEZTERM_KEYRING}] https://apt.fury.io/wez/ * *'
WEZTERM_LIST = '/etc/apt/sources.list.d/wezterm.list'


def release_arch(machine: str) -> str:
    """Map platform.machine() to the arch suffix of lazygit release assets"""
    machine = machine.lower()
    if machine in ('aarch64', 'arm64'):
        return 'arm64'
    if machine in ('armv6l', 'armv7l'):
        return 'armv6'
    return 'x86_64'


class AptInstaller(BaseInstaller):
    """Debian/Ubuntu strategy using apt"""

    def __init__(self, **kwargs):
        super().__init__('apt', **kwargs)

    def refresh(self):
        self.printer.info("Updating package lists...")
        self.run_command(self.sudo(['apt-get', 'update']))

    def build_install_command(self, packages: Sequence[str]) -> List[str]:
        cmd = ['apt-get', 'install']
        if self.auto_approve:
            cmd.append('-y')
            cmd.extend([
                '-o', 'Dpkg::Options::=--force-confdef',
                '-o', 'Dpkg::Options::=--force-confold',
            ])
        cmd.extend(packages)
        return self.sudo(cmd)

    def step_actions(self) -> Dict[str, Callable[[Tool], None]]:
        return {
            'toolchain': self.install_tool,
            'neovim': self._install_neovim,
            'git': self.install_tool,
            'curl': self.install_tool,
            'ripgrep': self.install_tool,
            'fd': self._install_fd,
            'fzf': self.install_tool,
            'tree-sitter-cli': self.install_via_npm,
            'lazygit': self._install_lazygit,
            'wezterm': self._install_wezterm,
            'imagemagick': self.install_tool,
            'ghostscript': self.install_tool,
            'tectonic': self.install_via_script,
            'mermaid-cli': self.install_via_npm,
        }

    def install_node(self):
        """Node.js LTS from NodeSource; the distribution package lags behind"""
        self.printer.info("Installing Node.js and npm first...")
        self.ensure_index()
        shell = ['sudo', '-E', 'bash', '-'] if self.use_sudo else ['bash', '-']
        self.run_shell(f"curl -fsSL {NODESOURCE_URL} | {' '.join(shell)}")
        self.run_command(self.build_install_command(['nodejs']))

    def _install_neovim(self, tool: Tool):
        """Distribution packages are too old; use the unstable PPA"""
        self.printer.warning("Installing/Updating Neovim to latest version...")
        self.ensure_index()
        self.run_command(self.sudo(['add-apt-repository', NEOVIM_PPA, '-y']))
        self.refresh()
        self.run_command(self.build_install_command(['neovim']))

    def _install_fd(self, tool: Tool):
        """Debian names the binary fdfind; expose it as fd too"""
        self.install_tool(tool)
        fdfind = self.probe.locate('fdfind')
        if fdfind and not self.probe.exists('fd'):
            self.run_command(self.sudo(['ln', '-sf', fdfind, '/usr/local/bin/fd']))

    def _install_lazygit(self, tool: Tool):
        """Not packaged for Debian: install the latest release binary"""
        self.printer.info(f"Installing {tool.display_name}...")
        result = self.run_command(['curl', '-fsSL', LAZYGIT_LATEST_API], capture=True)
        try:
            tag = json.loads(result.stdout)['tag_name']
        except (ValueError, KeyError, TypeError) as e:
            raise PackageManagerFailure(
                ['curl', '-fsSL', LAZYGIT_LATEST_API], 1, f"unexpected release metadata: {e}"
            ) from e

        url = LAZYGIT_DOWNLOAD.format(
            version=tag.lstrip('v'),
            arch=release_arch(platform.machine()),
        )
        with tempfile.TemporaryDirectory(prefix='lazyboot-') as workdir:
            archive = Path(workdir) / 'lazygit.tar.gz'
            self.run_command(['curl', '-fsSLo', str(archive), url])
            self.run_command(['tar', '-xf', str(archive), '-C', workdir, 'lazygit'])
            self.run_command(self.sudo(['install', str(Path(workdir) / 'lazygit'), '/usr/local/bin']))

    def _install_wezterm(self, tool: Tool):
        """WezTerm ships through its own apt repository"""
        self.printer.info(f"Installing {tool.display_name}...")
        self.run_shell(
            f"curl -fsSL {WEZTERM_KEY_URL} | "
            f"{' '.join(self.sudo(['gpg', '--yes', '--dearmor', '-o', WEZTERM_KEYRING]))}"
        )
        self.run_shell(
            f"echo '{WEZTERM_SOURCE}' | {' '.join(self.sudo(['tee', WEZTERM_LIST]))} > /dev/null"
        )
        # The new source needs an index refresh whether or not one already ran
        self._index_refreshed = True
        self.refresh()
        self.run_command(self.build_install_command(['wezterm']))


class DnfInstaller(BaseInstaller):
    """Fedora/RHEL strategy using dnf"""

    def __init__(self, **kwargs):
        super().__init__('dnf', **kwargs)

    def refresh(self):
        # dnf refreshes expired metadata on every transaction
        pass

    def build_install_command(self, packages: Sequence[str]) -> List[str]:
        cmd = ['dnf', 'install']
        if self.auto_approve:
            cmd.append('-y')
        cmd.extend(packages)
        return self.sudo(cmd)

    def has_package(self, package: str) -> bool:
        try:
            self.run_command(['dnf', 'info', '--quiet', package], capture=True)
        except PackageManagerFailure:
            return False
        return True

    def step_actions(self) -> Dict[str, Callable[[Tool], None]]:
        return {
            'toolchain': self.install_tool,
            'neovim': self.install_tool,
            'git': self.install_tool,
            'curl': self.install_tool,
            'ripgrep': self.install_tool,
            'fd': self.install_tool,
            'fzf': self.install_tool,
            'tree-sitter-cli': self._install_tree_sitter,
            'lazygit': self._copr_action('atim/lazygit'),
            'wezterm': self._copr_action('wezfurlong/wezterm-nightly'),
            'imagemagick': self.install_tool,
            'ghostscript': self.install_tool,
            'tectonic': self.install_via_script,
            'mermaid-cli': self.install_via_npm,
        }

    def enable_copr(self, repository: str):
        self.run_command(self.sudo(['dnf', 'copr', 'enable', '-y', repository]))

    def _copr_action(self, repository: str) -> Callable[[Tool], None]:
        """Install action that enables a COPR repository before the package"""
        def install(tool: Tool):
            self.printer.info(f"Enabling COPR repository {repository}...")
            self.enable_copr(repository)
            self.install_tool(tool)
        return install

    def _install_tree_sitter(self, tool: Tool):
        if self.has_package('tree-sitter-cli'):
            self.install_tool(tool)
            return
        self.printer.warning("tree-sitter-cli not in repos, installing via npm...")
        self.install_via_npm(tool)


class PacmanInstaller(BaseInstaller):
    """Arch Linux strategy using pacman"""

    def __init__(self, **kwargs):
        super().__init__('pacman', **kwargs)

    def refresh(self):
        self.printer.info("Synchronizing package databases...")
        self.run_command(self.sudo(['pacman', '-Sy']))

    def build_install_command(self, packages: Sequence[str]) -> List[str]:
        cmd = ['pacman', '-S']
        if self.auto_approve:
            cmd.append('--noconfirm')
        cmd.append('--needed')
        cmd.extend(packages)
        return self.sudo(cmd)

    def has_package(self, package: str) -> bool:
        try:
            self.run_command(['pacman', '-Si', package], capture=True)
        except PackageManagerFailure:
            return False
        return True

    def step_actions(self) -> Dict[str, Callable[[Tool], None]]:
        return {
            'toolchain': self.install_tool,
            'neovim': self.install_tool,
            'git': self.install_tool,
            'curl': self.install_tool,
            'ripgrep': self.install_tool,
            'fd': self.install_tool,
            'fzf': self.install_tool,
            'tree-sitter-cli': self._install_tree_sitter,
            'lazygit': self.install_tool,
            'wezterm': self.install_tool,
            'imagemagick': self.install_tool,
            'ghostscript': self.install_tool,
            'tectonic': self.install_tool,
            'mermaid-cli': self.install_via_npm,
        }

    def _install_tree_sitter(self, tool: Tool):
        if self.has_package('tree-sitter-cli'):
            self.install_tool(tool)
            return
        self.printer.warning("tree-sitter-cli not found, installing via npm...")
        self.install_via_npm(tool)
