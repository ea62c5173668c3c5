"""
Configuration module for the US Constitution reader.

This module centralizes all configuration values, paths, and constants
used throughout the application. It supports environment variables for
deployment-specific settings and an optional YAML build configuration.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import os
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

# Base paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = BASE_DIR / "data"
SITE_DIR = BASE_DIR / "site"
GENERATED_DIR = SITE_DIR / "generated"
DIST_DIR = BASE_DIR / "dist"
LOGS_DIR = BASE_DIR / "logs"

DEFAULT_CONFIG_FILE = BASE_DIR / "usconst.yaml"


class DataPaths:
    """Canonical data files."""
    CONSTITUTION_JSON = DATA_DIR / "constitution.json"


class SitePaths:
    """Static page sources."""
    INDEX_HTML = SITE_DIR / "index.html"


class OutputPaths:
    """Generated artifact names."""
    PRERENDER_HTML = "constitution-prerender.html"
    SEARCH_INDEX_JSON = "search-index.json"
    LLM_MARKDOWN = "llm.md"
    LLM_MARKDOWN_PATH = BASE_DIR / LLM_MARKDOWN


class Markers:
    """Textual markers in the page template that delimit generated HTML."""
    TOC_START = "<!-- GENERATED_TOC_START -->"
    TOC_END = "<!-- GENERATED_TOC_END -->"
    CONTENT_START = "<!-- GENERATED_CONTENT_START -->"
    CONTENT_END = "<!-- GENERATED_CONTENT_END -->"


class ServerConfig:
    """Preview server defaults."""
    HOST = "localhost"
    PORT = 8000


class BuildOptions:
    """Site building options."""
    LOG_LEVEL_CHOICES = ["debug", "info", "warning", "error"]


# Environment variables
class Environment:
    """Environment variable configuration."""

    @staticmethod
    def get_name() -> str:
        """Get the deployment environment name."""
        return os.environ.get("USCONST_ENV", "development").lower()

    @staticmethod
    def get_config_path() -> Path:
        """Get the YAML build configuration path."""
        custom_path = os.environ.get("USCONST_CONFIG")
        return Path(custom_path) if custom_path else DEFAULT_CONFIG_FILE


# Logging configuration
class LogConfig:
    """Logging configuration."""
    LOG_FILE = LOGS_DIR / "process.log"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
    DEFAULT_LEVEL = "INFO"

    @classmethod
    def get_config(cls) -> Dict[str, Any]:
        """Resolve logging settings for the current environment."""
        env_name = Environment.get_name()
        log_file = os.environ.get("LOG_FILE")

        config = {
            "log_level": os.environ.get("LOG_LEVEL", cls.DEFAULT_LEVEL),
            "log_file": Path(log_file) if log_file else cls.LOG_FILE,
            "log_format": cls.LOG_FORMAT,
            "date_format": cls.LOG_DATE_FORMAT,
            "enable_console": True,
            # File logging is opt-in outside production
            "enable_file": bool(log_file) or env_name == "production",
            "max_bytes": 10 * 1024 * 1024,
            "backup_count": 5,
            "structured": os.environ.get("LOG_FORMAT") == "json",
        }

        if env_name == "test":
            config["log_level"] = os.environ.get("LOG_LEVEL", "WARNING")
        elif env_name == "production":
            config["structured"] = True

        return config


class BuildPaths:
    """Resolved file locations for one build run."""

    def __init__(
        self,
        data_file: Path = DataPaths.CONSTITUTION_JSON,
        index_html: Path = SitePaths.INDEX_HTML,
        generated_dir: Path = GENERATED_DIR,
        llm_file: Path = OutputPaths.LLM_MARKDOWN_PATH,
        dist_dir: Path = DIST_DIR,
    ):
        self.data_file = Path(data_file)
        self.index_html = Path(index_html)
        self.generated_dir = Path(generated_dir)
        self.llm_file = Path(llm_file)
        self.dist_dir = Path(dist_dir)

    @property
    def site_dir(self) -> Path:
        return self.index_html.parent

    @property
    def prerender_html(self) -> Path:
        return self.generated_dir / OutputPaths.PRERENDER_HTML

    @property
    def search_index(self) -> Path:
        return self.generated_dir / OutputPaths.SEARCH_INDEX_JSON

    def __repr__(self):
        return (
            f"BuildPaths(data_file={self.data_file}, index_html={self.index_html}, "
            f"generated_dir={self.generated_dir}, llm_file={self.llm_file}, "
            f"dist_dir={self.dist_dir})"
        )


# Keys accepted in the YAML build configuration
BUILD_CONFIG_KEYS = ("data_file", "index_html", "generated_dir", "llm_file", "dist_dir")


def load_build_config(config_path: Optional[Path] = None) -> Dict[str, Path]:
    """
    Load path overrides from a YAML build configuration file.

    Relative paths are resolved against the directory of the config file.
    A missing file yields an empty mapping.

    Args:
        config_path: Path to the YAML file (defaults to the environment setting)

    Returns:
        Mapping of BuildPaths argument names to paths

    Raises:
        InvalidConfigurationException: If the file is not a mapping or has unknown keys
    """
    from usconst.exceptions import InvalidConfigurationException

    config_path = Path(config_path) if config_path else Environment.get_config_path()
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidConfigurationException(
                str(config_path), "YAML could not be parsed", {"error": str(e)}
            ) from e

    if not isinstance(raw, dict):
        raise InvalidConfigurationException(str(config_path), "top level must be a mapping")

    unknown = sorted(set(raw) - set(BUILD_CONFIG_KEYS))
    if unknown:
        raise InvalidConfigurationException(
            str(config_path), f"unknown keys: {', '.join(unknown)}"
        )

    base = config_path.parent
    return {
        key: (base / value if not Path(value).is_absolute() else Path(value))
        for key, value in raw.items()
        if value is not None
    }


def get_build_paths(config_path: Optional[Path] = None, **overrides) -> BuildPaths:
    """Build paths from defaults, the YAML config, and explicit overrides (in that order)."""
    settings = load_build_config(config_path)
    settings.update({k: Path(v) for k, v in overrides.items() if v is not None})
    return BuildPaths(**settings)


def validate_config(paths: BuildPaths) -> None:
    """Validate that the input files for a build exist."""
    from usconst.exceptions import ConfigurationException

    for required in (paths.data_file, paths.index_html):
        if not required.exists():
            raise ConfigurationException(
                f"Required file not found: {required}", {"path": str(required)}
            )
