#!/usr/bin/env python3
"""
lazyboot Tool Catalog
The external tools LazyVim depends on, and their package names per manager
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from lazyboot.config import LazybootConfig


@dataclass(frozen=True)
class Tool:
    """An external dependency checked by command (or marker path) presence"""
    name: str
    display_name: str
    commands: Tuple[str, ...]
    required: bool
    description: str = ''
    min_version: Optional[str] = None
    paths: Tuple[Path, ...] = ()

    @property
    def label(self) -> str:
        if self.description:
            return f"{self.display_name} ({self.description})"
        return self.display_name


# Prerequisites, in install and report order
PREREQUISITES: Tuple[Tool, ...] = (
    Tool('toolchain', 'C compiler', ('cc', 'gcc', 'clang'), True,
         'for nvim-treesitter'),
    Tool('neovim', 'Neovim', ('nvim',), True, 'the editor', min_version='0.11'),
    Tool('git', 'Git', ('git',), True, 'version control'),
    Tool('curl', 'curl', ('curl',), True, 'for blink.cmp'),
    Tool('ripgrep', 'ripgrep', ('rg',), True, 'for live grep'),
    Tool('fd', 'fd', ('fd', 'fdfind'), True, 'for file finding'),
    Tool('fzf', 'fzf', ('fzf',), True, 'for fuzzy finding'),
    Tool('tree-sitter-cli', 'tree-sitter-cli', ('tree-sitter',), True, 'for syntax parsing'),
    Tool('lazygit', 'lazygit', ('lazygit',), False, 'Git TUI'),
)

# Optional rendering helpers and terminal
EXTRAS: Tuple[Tool, ...] = (
    Tool('wezterm', 'WezTerm', ('wezterm',), False, 'terminal with graphics support'),
    Tool('imagemagick', 'ImageMagick', ('magick', 'convert'), False, 'image processing'),
    Tool('ghostscript', 'Ghostscript', ('gs',), False, 'PDF rendering'),
    Tool('tectonic', 'Tectonic', ('tectonic',), False, 'LaTeX rendering'),
    Tool('mermaid-cli', 'Mermaid CLI', ('mmdc',), False, 'diagram rendering'),
)

FONT_TOOL_NAME = 'nerd-font'


def font_tool(config: 'LazybootConfig') -> Tool:
    """The patched monospace font, satisfied by its extracted directory"""
    return Tool(
        FONT_TOOL_NAME,
        f"{config.font_name} Nerd Font",
        (),
        False,
        'patched monospace font',
        paths=(config.font_path / config.font_name,),
    )


def catalog_names() -> Set[str]:
    return {tool.name for tool in PREREQUISITES + EXTRAS} | {FONT_TOOL_NAME}


def prerequisite_tools(config: 'LazybootConfig') -> List[Tool]:
    """Prerequisites with configured overrides applied"""
    tools = []
    for tool in PREREQUISITES:
        if tool.name in config.skip_tools:
            continue
        if tool.name == 'neovim':
            tool = replace(tool, min_version=config.editor_min_version)
        tools.append(tool)
    if FONT_TOOL_NAME not in config.skip_tools:
        tools.append(font_tool(config))
    return tools


def extra_tools(config: 'LazybootConfig') -> List[Tool]:
    return [tool for tool in EXTRAS if tool.name not in config.skip_tools]


class ToolMapper:
    """
    Maps catalog tool names to package names for different package managers

    A list value installs several packages in one call; a missing key means
    the strategy installs the tool some other way.
    """

    TOOL_PACKAGES: Dict[str, Dict[str, object]] = {
        'toolchain': {
            'apt': ['build-essential', 'cmake', 'gettext', 'ninja-build', 'unzip', 'curl', 'wget', 'git'],
            'dnf': ['@development-tools', 'cmake', 'ninja-build', 'curl', 'wget', 'git', 'gcc-c++'],
            'pacman': ['base-devel', 'cmake', 'ninja', 'curl', 'wget', 'git'],
        },
        'neovim': {
            'apt': 'neovim',
            'dnf': 'neovim',
            'pacman': 'neovim',
            'brew': 'neovim',
        },
        'git': {
            'apt': 'git',
            'dnf': 'git',
            'pacman': 'git',
            'brew': 'git',
        },
        'curl': {
            'apt': 'curl',
            'dnf': 'curl',
            'pacman': 'curl',
            'brew': 'curl',
        },
        'ripgrep': {
            'apt': 'ripgrep',
            'dnf': 'ripgrep',
            'pacman': 'ripgrep',
            'brew': 'ripgrep',
        },
        'fd': {
            'apt': 'fd-find',
            'dnf': 'fd-find',
            'pacman': 'fd',
            'brew': 'fd',
        },
        'fzf': {
            'apt': 'fzf',
            'dnf': 'fzf',
            'pacman': 'fzf',
            'brew': 'fzf',
        },
        'tree-sitter-cli': {
            'dnf': 'tree-sitter-cli',
            'pacman': 'tree-sitter-cli',
            'brew': ['tree-sitter', 'tree-sitter-cli'],
            'npm': 'tree-sitter-cli',
        },
        'lazygit': {
            'dnf': 'lazygit',
            'pacman': 'lazygit',
            'brew': 'jesseduffield/lazygit/lazygit',
        },
        'wezterm': {
            'apt': 'wezterm',
            'dnf': 'wezterm',
            'pacman': 'wezterm',
            'brew': 'wezterm',
        },
        'imagemagick': {
            'apt': 'imagemagick',
            'dnf': 'ImageMagick',
            'pacman': 'imagemagick',
            'brew': 'imagemagick',
        },
        'ghostscript': {
            'apt': 'ghostscript',
            'dnf': 'ghostscript',
            'pacman': 'ghostscript',
            'brew': 'ghostscript',
        },
        'tectonic': {
            'pacman': 'tectonic',
            'brew': 'tectonic',
            'manual': 'curl --proto =https --tlsv1.2 -fsSL https://drop-sh.fullyjustified.net | sh',
        },
        'mermaid-cli': {
            'npm': '@mermaid-js/mermaid-cli',
        },
        'nodejs': {
            'apt': 'nodejs',
            'dnf': ['nodejs', 'npm'],
            'pacman': ['nodejs', 'npm'],
            'brew': 'node',
        },
    }

    @classmethod
    def get_packages(cls, tool: str, package_manager: str) -> List[str]:
        """
        Get the package names for a tool on a specific package manager

        Args:
            tool: Catalog name (e.g., 'ripgrep', 'fd')
            package_manager: Package manager (e.g., 'apt', 'brew')

        Returns:
            Package names, empty when the manager has no mapping
        """
        value = cls.TOOL_PACKAGES.get(tool, {}).get(package_manager)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)

    @classmethod
    def get_manual_command(cls, tool: str) -> Optional[str]:
        return cls.TOOL_PACKAGES.get(tool, {}).get('manual')
