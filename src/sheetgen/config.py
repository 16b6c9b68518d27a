"""
Application configuration management.

This module handles loading and accessing configuration from multiple sources
with a clear priority order:

    1. Environment variables (highest priority) - for scripted runs
    2. Config file (config/sheetgen.ini) - for local setups
    3. Built-in defaults (lowest priority) - sensible fallbacks

Configuration is loaded once at module import time and cached. The AppConfig
dataclass provides typed access to all settings.

Usage:
    from sheetgen.config import config

    # Access settings
    print(config.rules.absolute_path)
    print(config.generation.strict_locks)

Environment Variable Mapping:
    SHEETGEN_RULES_PATH     -> rules.path
    SHEETGEN_SEED           -> generation.seed
    SHEETGEN_STRICT_LOCKS   -> generation.strict_locks
    SHEETGEN_LOG_LEVEL      -> logging.level
    SHEETGEN_LOG_FORMAT     -> logging.format
"""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Installed package directory (contains the bundled data/rules)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (contains src/, config/)
PROJECT_ROOT = PACKAGE_DIR.parent.parent

# Config file paths
CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "sheetgen.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "sheetgen.example.ini"

LOG_FORMATS = ("simple", "detailed")


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class RulesSettings:
    """Rule-table location."""

    path: str = "data/rules"

    @property
    def absolute_path(self) -> Path:
        """
        Get absolute path to the rules directory.

        Relative paths resolve against the project root when that directory
        exists there, otherwise against the installed package, which ships
        the default ruleset.
        """
        p = Path(self.path)
        if p.is_absolute():
            return p
        project_path = PROJECT_ROOT / p
        if project_path.exists():
            return project_path
        return PACKAGE_DIR / p


@dataclass
class GenerationSettings:
    """Character generation behaviour."""

    seed: int | None = None  # None = ambient entropy
    strict_locks: bool = True


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "WARNING"
    format: Literal["simple", "detailed"] = "simple"


@dataclass
class AppConfig:
    """
    Complete application configuration.

    Aggregates all settings sections. Access via the module-level `config`
    singleton.
    """

    rules: RulesSettings = field(default_factory=RulesSettings)
    generation: GenerationSettings = field(default_factory=GenerationSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @property
    def is_reproducible(self) -> bool:
        """True when a fixed seed is configured."""
        return self.generation.seed is not None


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _parse_bool(value: str) -> bool:
    """Parse a string value to boolean."""
    return value.lower() in ("true", "yes", "1", "on", "enabled")


def _parse_seed(value: str) -> int | None:
    """Parse a seed value; blank means no seed."""
    if not value or value.strip() == "":
        return None
    return int(value.strip())


def _load_from_ini(parser: configparser.ConfigParser, cfg: AppConfig) -> None:
    """Load configuration from parsed INI file into AppConfig."""
    # Rules section
    if parser.has_section("rules"):
        if parser.has_option("rules", "path"):
            cfg.rules.path = parser.get("rules", "path")

    # Generation section
    if parser.has_section("generation"):
        if parser.has_option("generation", "seed"):
            cfg.generation.seed = _parse_seed(parser.get("generation", "seed"))
        if parser.has_option("generation", "strict_locks"):
            cfg.generation.strict_locks = _parse_bool(parser.get("generation", "strict_locks"))

    # Logging section
    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            cfg.logging.level = parser.get("logging", "level").upper()
        if parser.has_option("logging", "format"):
            val = parser.get("logging", "format").lower()
            if val in LOG_FORMATS:
                cfg.logging.format = val  # type: ignore[assignment]


def _apply_env_overrides(cfg: AppConfig) -> None:
    """Apply environment variable overrides to configuration."""
    # Rules settings
    if env_rules := os.getenv("SHEETGEN_RULES_PATH"):
        cfg.rules.path = env_rules

    # Generation settings
    if env_seed := os.getenv("SHEETGEN_SEED"):
        cfg.generation.seed = _parse_seed(env_seed)
    if env_strict := os.getenv("SHEETGEN_STRICT_LOCKS"):
        cfg.generation.strict_locks = _parse_bool(env_strict)

    # Logging settings
    if env_log := os.getenv("SHEETGEN_LOG_LEVEL"):
        cfg.logging.level = env_log.upper()
    if env_format := os.getenv("SHEETGEN_LOG_FORMAT"):
        if env_format.lower() in LOG_FORMATS:
            cfg.logging.format = env_format.lower()  # type: ignore[assignment]


def load_config() -> AppConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables
        2. config/sheetgen.ini
        3. config/sheetgen.example.ini (fallback for development)
        4. Built-in defaults

    Returns:
        AppConfig: Fully populated configuration object.
    """
    cfg = AppConfig()

    # Determine which config file to use
    config_file = None
    if CONFIG_FILE.exists():
        config_file = CONFIG_FILE
    elif CONFIG_EXAMPLE.exists():
        config_file = CONFIG_EXAMPLE

    if config_file:
        parser = configparser.ConfigParser()
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    # Apply environment variable overrides (highest priority)
    _apply_env_overrides(cfg)

    return cfg


def reload_config() -> "AppConfig":
    """
    Reload configuration from disk and environment.

    This updates the module-level `config` singleton.

    Returns:
        AppConfig: The newly loaded configuration.
    """
    global config
    config = load_config()
    return config


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

# Load configuration once at module import time
config = load_config()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_config_status() -> dict:
    """
    Get configuration status for diagnostics.

    Returns a dictionary with configuration source information.
    """
    return {
        "config_file_exists": CONFIG_FILE.exists(),
        "config_file_path": str(CONFIG_FILE),
        "using_example": not CONFIG_FILE.exists() and CONFIG_EXAMPLE.exists(),
        "rules_path": str(config.rules.absolute_path),
        "rules_path_exists": config.rules.absolute_path.is_dir(),
        "reproducible": config.is_reproducible,
    }


def print_config_summary() -> None:
    """Print a summary of current configuration to stdout."""
    status = get_config_status()
    print("\n" + "=" * 60)
    print("SHEETGEN CONFIGURATION")
    print("=" * 60)
    print(f"Config file: {status['config_file_path']}")
    print(f"File exists: {status['config_file_exists']}")
    if status["using_example"]:
        print("NOTE: Using example config (copy to sheetgen.ini to customise)")
    print("-" * 60)
    print(f"Rules:        {status['rules_path']}")
    print(f"Seed:         {config.generation.seed}")
    print(f"Strict locks: {config.generation.strict_locks}")
    print(f"Log level:    {config.logging.level}")
    print("=" * 60 + "\n")


# =============================================================================
# TEST HELPERS
# =============================================================================


class use_rules_path:
    """
    Context manager for pointing the config at another rules directory.

    Usage:
        from sheetgen.config import use_rules_path

        def test_something(tmp_path):
            with use_rules_path(tmp_path):
                rules = load_rules(config.rules.absolute_path)

    Args:
        rules_path: Path to the rules directory
    """

    def __init__(self, rules_path: Path | str):
        self.rules_path = Path(rules_path)
        self.original_path: str | None = None

    def __enter__(self) -> Path:
        """Point config at the temporary rules directory."""
        self.original_path = config.rules.path
        config.rules.path = str(self.rules_path)
        return self.rules_path

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Restore original rules path."""
        if self.original_path is not None:
            config.rules.path = self.original_path
        return None
