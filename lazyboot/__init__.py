"""
lazyboot - LazyVim Workstation Bootstrapper
Installs Neovim and the tools LazyVim depends on with the native package manager.
"""

__version__ = "0.3.0"
__author__ = "lazyboot contributors"
__license__ = "MIT"

# Submodules are imported on-demand; the CLI pulls in everything it needs

__all__ = ["__version__"]
