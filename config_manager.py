#!/usr/bin/env python3
"""
Configuration Manager for mdsaad
Handles display defaults and catalog settings with backup and atomic writes
"""

import os
import json
import time
import shutil
import threading
from pathlib import Path
from typing import Dict, Any, Optional

from logger import get_logger

MDSAAD_VERSION = "1.2.0"
CONFIG_DIR_ENV = "MDSAAD_CONFIG_DIR"
DEFAULT_CONFIG_DIR = "~/.config-mdsaad"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_DIRECTIONS = ["left", "right", "top", "bottom", "up", "down"]

log = get_logger("config")


def default_config_dir() -> Path:
    """Resolve the configuration directory, honouring MDSAAD_CONFIG_DIR."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path(DEFAULT_CONFIG_DIR).expanduser()


class ConfigurationManager:
    """Centralized configuration management with persistence and error recovery."""

    def __init__(self, config_dir: Optional[str] = None):
        self._lock = threading.RLock()
        self._config_cache = {}
        self._cache_timestamp = 0
        self._cache_ttl = 5.0  # seconds

        if config_dir is None:
            self.config_dir = default_config_dir()
        else:
            self.config_dir = Path(config_dir).expanduser()

        self.config_file = self.config_dir / "config.json"
        self.backup_file = self.config_dir / "config.json.backup"
        self.cache_dir = self.config_dir / "cache"

        self.defaults = {
            # Display
            "default_color": "white",
            "color_scheme": "default",
            "animation": "typewriter",
            "animated": False,
            "speed": 100,
            "slide_direction": "right",

            # Catalog
            "art_dir": "",  # empty means the bundled art
            "search_limit": 10,
            "popular_limit": 5,
            "metadata_ttl_hours": 24,

            # Logging
            "log_level": "WARNING",
            "log_to_file": True,

            # Metadata
            "_config_version": None,
            "_created_timestamp": None,
            "_last_updated": None,
            "_update_count": 0
        }

        self._ensure_directory()
        self._initialize_config()

    def _ensure_directory(self) -> bool:
        """Ensure configuration directory exists and is writable."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)

            test_file = self.config_dir / ".test_write"
            test_file.write_text("test")
            test_file.unlink()
            return True

        except PermissionError:
            log.warning("Permission denied: %s", self.config_dir)
            return False
        except OSError as e:
            log.warning("Directory error: %s", e)
            return False

    def _create_backup(self) -> bool:
        """Create backup of current configuration."""
        try:
            if self.config_file.exists():
                shutil.copy2(str(self.config_file), str(self.backup_file))
                return True
        except OSError as e:
            log.debug("Backup failed: %s", e)
        return False

    def _restore_from_backup(self) -> bool:
        """Restore configuration from backup."""
        try:
            if self.backup_file.exists():
                shutil.copy2(str(self.backup_file), str(self.config_file))
                return True
        except OSError as e:
            log.debug("Restore failed: %s", e)
        return False

    def _validate_config(self, config: Dict[str, Any]) -> bool:
        """Validate configuration structure, repairing bad values in place."""
        if not isinstance(config, dict):
            return False

        for key in ("default_color", "color_scheme", "animation"):
            if key in config and not isinstance(config.get(key), str):
                config[key] = self.defaults[key]

        speed = config.get("speed", self.defaults["speed"])
        if isinstance(speed, bool) or not isinstance(speed, int) or speed <= 0:
            config["speed"] = self.defaults["speed"]

        for key in ("search_limit", "popular_limit", "metadata_ttl_hours"):
            value = config.get(key, self.defaults[key])
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                config[key] = self.defaults[key]

        if config.get("slide_direction", "right") not in VALID_DIRECTIONS:
            config["slide_direction"] = self.defaults["slide_direction"]

        level = config.get("log_level", "WARNING")
        if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
            config["log_level"] = self.defaults["log_level"]
        else:
            config["log_level"] = level.upper()

        if not isinstance(config.get("art_dir", ""), str):
            config["art_dir"] = ""

        for key in ("animated", "log_to_file"):
            if key in config and not isinstance(config[key], bool):
                config[key] = self.defaults[key]

        return True

    def _initialize_config(self):
        """Create the config file on first run."""
        with self._lock:
            if not self.config_file.exists():
                initial_config = self.defaults.copy()
                initial_config["_created_timestamp"] = time.time()
                initial_config["_config_version"] = MDSAAD_VERSION
                if self._save_config_unsafe(initial_config):
                    log.info("Initialized mdsaad configuration at %s", self.config_file)

    def _load_config_unsafe(self) -> Dict[str, Any]:
        """Load configuration without locking (internal use)."""
        attempts = 0
        max_attempts = 3

        while attempts < max_attempts:
            try:
                if not self.config_file.exists():
                    return self.defaults.copy()

                content = self.config_file.read_text(encoding='utf-8').strip()
                if not content:
                    raise ValueError("Empty configuration file")

                config = json.loads(content)

                if not self._validate_config(config):
                    raise ValueError("Invalid configuration structure")

                merged_config = self.defaults.copy()
                merged_config.update(config)
                if not merged_config.get("_config_version"):
                    merged_config["_config_version"] = MDSAAD_VERSION

                self._config_cache = merged_config
                self._cache_timestamp = time.time()
                return merged_config

            except (json.JSONDecodeError, ValueError) as e:
                log.warning("Config corruption (attempt %d): %s", attempts + 1, e)

                if attempts == 0 and self._restore_from_backup():
                    log.info("Restored configuration from backup")
                    attempts += 1
                    continue

                if attempts >= max_attempts - 1:
                    log.info("Creating fresh configuration")
                    fresh_config = self.defaults.copy()
                    fresh_config["_created_timestamp"] = time.time()
                    fresh_config["_config_version"] = MDSAAD_VERSION
                    self._save_config_unsafe(fresh_config)
                    return fresh_config

            except OSError as e:
                log.error("Config load error (attempt %d): %s", attempts + 1, e)

            attempts += 1

        log.warning("Using default configuration")
        return self.defaults.copy()

    def _save_config_unsafe(self, config: Dict[str, Any]) -> bool:
        """Save configuration without locking (internal use)."""
        temp_file = self.config_file.with_suffix('.tmp')
        try:
            if not self._validate_config(config):
                log.error("Invalid configuration data")
                return False

            self._create_backup()

            config["_config_version"] = MDSAAD_VERSION
            config["_last_updated"] = time.time()
            config["_update_count"] = config.get("_update_count", 0) + 1

            self.config_dir.mkdir(parents=True, exist_ok=True)
            with temp_file.open('w', encoding='utf-8') as f:
                json.dump(config, f, indent=2, ensure_ascii=False, sort_keys=True)
                f.flush()
                os.fsync(f.fileno())

            temp_file.replace(self.config_file)

            self._config_cache = config.copy()
            self._cache_timestamp = time.time()
            return True

        except (OSError, TypeError, ValueError) as e:
            log.error("Save config error: %s", e)
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def load_config(self, use_cache: bool = True) -> Dict[str, Any]:
        """Load configuration with caching."""
        with self._lock:
            if (use_cache and self._config_cache and
                    time.time() - self._cache_timestamp < self._cache_ttl):
                return self._config_cache.copy()
            return self._load_config_unsafe().copy()

    def save_config(self, config: Dict[str, Any]) -> bool:
        """Save configuration."""
        with self._lock:
            success = self._save_config_unsafe(config)
            if success:
                log.debug("Configuration saved to %s", self.config_file)
            return success

    def get_value(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        config = self.load_config()
        return config.get(key, default)

    def set_value(self, key: str, value: Any) -> bool:
        """Set a configuration value."""
        config = self.load_config()
        old_value = config.get(key)

        if old_value != value:
            config[key] = value
            success = self.save_config(config)
            if success:
                log.info("Updated %s: %s -> %s", key, old_value, value)
            return success

        return True

    def update_values(self, updates: Dict[str, Any]) -> bool:
        """Update multiple configuration values."""
        config = self.load_config()
        changed = False

        for key, value in updates.items():
            if config.get(key) != value:
                config[key] = value
                changed = True

        if changed:
            return self.save_config(config)

        return True

    def reset_to_defaults(self) -> bool:
        """Reset configuration to default values."""
        self._create_backup()
        fresh_config = self.defaults.copy()
        fresh_config["_created_timestamp"] = time.time()
        fresh_config["_update_count"] = 0
        return self.save_config(fresh_config)

    def get_config_info(self) -> Dict[str, Any]:
        """Get information about the configuration system."""
        config = self.load_config()

        return {
            "config_file": str(self.config_file),
            "backup_file": str(self.backup_file),
            "cache_dir": str(self.cache_dir),
            "config_exists": self.config_file.exists(),
            "backup_exists": self.backup_file.exists(),
            "config_version": config.get("_config_version"),
            "last_updated": config.get("_last_updated"),
            "created_timestamp": config.get("_created_timestamp"),
            "update_count": config.get("_update_count", 0),
            "cache_valid": time.time() - self._cache_timestamp < self._cache_ttl
        }


def coerce_value(key: str, raw: str, defaults: Dict[str, Any]) -> Any:
    """Convert a command-line string to the type of the default for ``key``."""
    default = defaults.get(key)
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"Expected a boolean for {key}, got {raw!r}")
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw


# Global instance
_global_config_manager = None


def get_config_manager(config_dir: Optional[str] = None) -> ConfigurationManager:
    """Get global configuration manager instance."""
    global _global_config_manager
    if _global_config_manager is None or (
            config_dir is not None and Path(config_dir).expanduser() != _global_config_manager.config_dir):
        _global_config_manager = ConfigurationManager(config_dir)
    return _global_config_manager
