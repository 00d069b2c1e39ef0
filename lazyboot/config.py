#!/usr/bin/env python3
"""
lazyboot Configuration Management
Handles .lazyboot.yml configuration files
"""

import os
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field

from lazyboot.errors import ConfigError
from lazyboot.platform.tools import catalog_names


DEFAULT_FONT_URL = "https://github.com/ryanoasis/nerd-fonts/releases/latest/download/Hack.zip"


@dataclass
class LazybootConfig:
    """lazyboot configuration structure"""

    version: str = "1"

    # Package manager invocation
    use_sudo: bool = True
    auto_approve: bool = True

    # Editor
    editor_min_version: str = "0.11"
    starter_repo: str = "https://github.com/LazyVim/starter"
    editor_config_dir: str = "~/.config/nvim"

    # Nerd Font
    font_name: str = "Hack"
    font_url: str = DEFAULT_FONT_URL
    font_directory: str = "~/.local/share/fonts"

    # Catalog names left out of every flow
    skip_tools: List[str] = field(default_factory=list)

    @property
    def font_path(self) -> Path:
        return Path(os.path.expanduser(self.font_directory))

    @property
    def editor_config_path(self) -> Path:
        return Path(os.path.expanduser(self.editor_config_dir))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LazybootConfig':
        """Create config from dictionary"""
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping")

        config = cls()
        config.version = str(data.get('version', config.version))

        package_manager = _section(data, 'package_manager')
        config.use_sudo = bool(package_manager.get('use_sudo', config.use_sudo))
        config.auto_approve = bool(package_manager.get('auto_approve', config.auto_approve))

        editor = _section(data, 'editor')
        config.editor_min_version = str(editor.get('min_version', config.editor_min_version))
        config.starter_repo = editor.get('starter_repo', config.starter_repo)
        config.editor_config_dir = editor.get('config_dir', config.editor_config_dir)

        font = _section(data, 'font')
        config.font_name = font.get('name', config.font_name)
        config.font_url = font.get('url', config.font_url)
        config.font_directory = font.get('directory', config.font_directory)

        skip_tools = data.get('skip_tools') or []
        if not isinstance(skip_tools, list):
            raise ConfigError("'skip_tools' must be a list of tool names")
        config.skip_tools = [str(name) for name in skip_tools]

        config.validate()
        return config

    def validate(self):
        """Reject values the bootstrapper cannot act on"""
        unknown = sorted(set(self.skip_tools) - catalog_names())
        if unknown:
            raise ConfigError(
                f"Unknown tool(s) in skip_tools: {', '.join(unknown)}",
                hint=f"Known tools: {', '.join(sorted(catalog_names()))}",
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for YAML export"""
        return {
            'version': self.version,
            'package_manager': {
                'use_sudo': self.use_sudo,
                'auto_approve': self.auto_approve,
            },
            'editor': {
                'min_version': self.editor_min_version,
                'starter_repo': self.starter_repo,
                'config_dir': self.editor_config_dir,
            },
            'font': {
                'name': self.font_name,
                'url': self.font_url,
                'directory': self.font_directory,
            },
            'skip_tools': list(self.skip_tools),
        }


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping")
    return value


class ConfigManager:
    """Manage lazyboot configuration files"""

    DEFAULT_CONFIG_NAME = ".lazyboot.yml"
    ENV_VAR = "LAZYBOOT_CONFIG"

    @staticmethod
    def user_config_path() -> Path:
        return Path.home() / ".config" / "lazyboot" / "config.yml"

    @staticmethod
    def find_config(start_path: Path = None) -> Optional[Path]:
        """
        Find the configuration file to use

        Order: LAZYBOOT_CONFIG, .lazyboot.yml walking up from start_path,
        then ~/.config/lazyboot/config.yml.

        Args:
            start_path: Starting directory (default: current directory)

        Returns:
            Path to the config file or None if not found
        """
        if ConfigManager.ENV_VAR in os.environ:
            return Path(os.environ[ConfigManager.ENV_VAR])

        current = start_path or Path.cwd()

        # Walk up directory tree
        while current != current.parent:
            config_file = current / ConfigManager.DEFAULT_CONFIG_NAME
            if config_file.exists():
                return config_file
            current = current.parent

        user_config = ConfigManager.user_config_path()
        if user_config.exists():
            return user_config

        return None

    @staticmethod
    def load_config(config_path: Path = None) -> LazybootConfig:
        """
        Load configuration from YAML

        Args:
            config_path: Path to config file (default: search)

        Returns:
            LazybootConfig object

        Raises:
            ConfigError: the file exists but cannot be parsed or is invalid
        """
        if config_path is None:
            config_path = ConfigManager.find_config()

        # Return default config if no file found
        if config_path is None or not config_path.exists():
            return LazybootConfig()

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {config_path}: {e}") from e

        if data is None:
            return LazybootConfig()

        return LazybootConfig.from_dict(data)

    @staticmethod
    def save_config(config: LazybootConfig, config_path: Path) -> Path:
        """
        Save configuration to YAML

        Args:
            config: LazybootConfig object
            config_path: Path where to save

        Returns:
            The path written
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(
                config.to_dict(),
                f,
                default_flow_style=False,
                sort_keys=False,
                indent=2
            )

        return config_path

    @staticmethod
    def create_default_config(project_root: Path) -> Path:
        """
        Create default .lazyboot.yml in a directory

        Args:
            project_root: Target directory

        Returns:
            Path to created config file
        """
        config_path = project_root / ConfigManager.DEFAULT_CONFIG_NAME
        return ConfigManager.save_config(LazybootConfig(), config_path)
