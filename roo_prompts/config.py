"""
Configuration management.

This module provides configuration loading for prompt assembly: where custom
modes live, which experiments are on, browser settings and logging.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .prompts.system import BrowserSettings, Viewport

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class PromptConfig:
    """Configuration for prompt and mode assembly."""

    # Paths
    project_root: Optional[Path] = None
    global_config_dir: Path = field(default_factory=lambda: Path.home() / ".roo-code")

    # Experiment id -> enabled
    experiments: Dict[str, bool] = field(default_factory=dict)

    # Browser
    supports_browser_use: bool = False
    browser_viewport_width: int = 900
    browser_viewport_height: int = 600

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def from_file(cls, path: Path) -> "PromptConfig":
        """
        Load configuration from JSON file.

        Args:
            path: Path to configuration file

        Returns:
            Loaded PromptConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            json.JSONDecodeError: If config file is invalid JSON
        """
        with open(path) as f:
            data = json.load(f)

        config = cls()

        if "paths" in data:
            paths = data["paths"]
            if paths.get("project_root"):
                config.project_root = Path(paths["project_root"]).expanduser()
            if paths.get("global_config_dir"):
                config.global_config_dir = Path(paths["global_config_dir"]).expanduser()

        if "experiments" in data:
            config.experiments = {str(k): bool(v) for k, v in data["experiments"].items()}

        if "browser" in data:
            browser = data["browser"]
            config.supports_browser_use = browser.get("enabled", config.supports_browser_use)
            viewport = browser.get("viewport", {})
            config.browser_viewport_width = viewport.get("width", config.browser_viewport_width)
            config.browser_viewport_height = viewport.get("height", config.browser_viewport_height)

        if "logging" in data:
            log_config = data["logging"]
            config.log_level = log_config.get("level", config.log_level)
            config.log_format = log_config.get("format", config.log_format)

        logger.info(f"Loaded configuration from {path}")
        return config

    @classmethod
    def from_env(cls) -> "PromptConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - ROO_PROJECT_ROOT: Project root directory
        - ROO_CONFIG_DIR: Global config directory (default: ~/.roo-code)
        - ROO_EXPERIMENTS: Comma-separated list of enabled experiment ids
        - ROO_SUPPORTS_BROWSER: "1"/"true"/"yes" to enable browser sections
        - ROO_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

        Returns:
            PromptConfig loaded from environment
        """
        config = cls()

        if os.getenv("ROO_PROJECT_ROOT"):
            config.project_root = Path(os.getenv("ROO_PROJECT_ROOT")).expanduser()

        if os.getenv("ROO_CONFIG_DIR"):
            config.global_config_dir = Path(os.getenv("ROO_CONFIG_DIR")).expanduser()

        if os.getenv("ROO_EXPERIMENTS"):
            config.experiments = {
                name.strip(): True
                for name in os.getenv("ROO_EXPERIMENTS").split(",")
                if name.strip()
            }

        if os.getenv("ROO_SUPPORTS_BROWSER"):
            config.supports_browser_use = os.getenv("ROO_SUPPORTS_BROWSER").lower() in ("1", "true", "yes")

        if os.getenv("ROO_LOG_LEVEL"):
            config.log_level = os.getenv("ROO_LOG_LEVEL")

        logger.info("Loaded configuration from environment variables")
        return config

    @classmethod
    def get_default(cls) -> "PromptConfig":
        """Get default configuration."""
        return cls()

    def browser_settings(self) -> BrowserSettings:
        """Browser settings for ``build_system_prompt``."""
        return BrowserSettings(
            viewport=Viewport(width=self.browser_viewport_width, height=self.browser_viewport_height)
        )

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            "paths": {
                "project_root": str(self.project_root) if self.project_root else None,
                "global_config_dir": str(self.global_config_dir),
            },
            "experiments": dict(self.experiments),
            "browser": {
                "enabled": self.supports_browser_use,
                "viewport": {
                    "width": self.browser_viewport_width,
                    "height": self.browser_viewport_height,
                },
            },
            "logging": {
                "level": self.log_level,
                "format": self.log_format,
            },
        }

    def save_to_file(self, path: Path) -> None:
        """Save configuration to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved configuration to {path}")

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        if self.browser_viewport_width <= 0 or self.browser_viewport_height <= 0:
            raise ValueError("browser viewport dimensions must be positive")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

        logger.debug("Configuration validated successfully")


def load_config(
    config_file: Optional[Path] = None,
    use_env: bool = True
) -> PromptConfig:
    """
    Load configuration from file and/or environment.

    Priority order:
    1. Config file (if provided and present)
    2. Environment variables (if use_env=True)
    3. Defaults

    Returns:
        Loaded and validated PromptConfig
    """
    if config_file and config_file.exists():
        config = PromptConfig.from_file(config_file)
    elif use_env:
        config = PromptConfig.from_env()
    else:
        config = PromptConfig.get_default()

    config.validate()
    return config


def setup_logging(config: PromptConfig) -> None:
    """Configure logging for the ``roo_prompts`` package."""
    level = getattr(logging, config.log_level.upper())
    logging.basicConfig(level=level, format=config.log_format)
    logging.getLogger("roo_prompts").setLevel(level)
