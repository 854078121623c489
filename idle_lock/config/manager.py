"""Configuration management for Idle Lock."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from idle_lock.core.controller import (
    DEFAULT_PROMPT_MESSAGE,
    DEFAULT_TIMEOUT_MS,
    FallbackPolicy,
)
from idle_lock.core.overlay import DEFAULT_BUTTON_TEXT, DEFAULT_TITLE

DEFAULT_CONFIG: Dict[str, Any] = {
    "timeout_ms": DEFAULT_TIMEOUT_MS,
    "prompt_message": DEFAULT_PROMPT_MESSAGE,
    "overlay_title": DEFAULT_TITLE,
    "unlock_button_text": DEFAULT_BUTTON_TEXT,
    "fallback_policy": FallbackPolicy.UNLOCK.value,
    "log_level": "INFO",
    "log_file": None,
    "log_file_level": None,
}


class ConfigManager:
    """Manages configuration loading and validation."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / ".config" / "idle-lock"
        self.config_file = self.config_dir / "config.json"
        self.default_config = DEFAULT_CONFIG.copy()

    def load_config(self, config_path: Optional[Path] = None) -> Dict[str, Any]:
        """Load configuration from file or create default."""
        config = self.default_config.copy()

        load_path = config_path or self.config_file

        if load_path.exists():
            try:
                with open(load_path, "r") as f:
                    if load_path.suffix.lower() in [".yml", ".yaml"]:
                        user_config = yaml.safe_load(f) or {}
                    else:
                        user_config = json.load(f)

                if isinstance(user_config, dict):
                    config.update(user_config)
                else:
                    print(
                        f"Warning: Config file {load_path} does not contain a mapping"
                    )
                    print("Using default configuration.")
            except (json.JSONDecodeError, yaml.YAMLError, OSError) as e:
                print(f"Warning: Error loading config from {load_path}: {e}")
                print("Using default configuration.")
        else:
            self.save_config(config, load_path)

        return config

    def save_config(
        self, config: Dict[str, Any], config_path: Optional[Path] = None
    ) -> None:
        """Save configuration to file."""
        save_path = config_path or self.config_file
        save_path.parent.mkdir(parents=True, exist_ok=True)

        with open(save_path, "w") as f:
            json.dump(config, f, indent=2)

    def validate_config(self, config: Dict[str, Any]) -> bool:
        """Validate configuration values."""
        for key in ["timeout_ms", "prompt_message", "fallback_policy"]:
            if key not in config:
                print(f"Error: Missing required configuration key: {key}")
                return False

        timeout_ms = config["timeout_ms"]
        if (
            isinstance(timeout_ms, bool)
            or not isinstance(timeout_ms, int)
            or timeout_ms <= 0
        ):
            print("Error: timeout_ms must be a positive integer")
            return False

        for key in ["prompt_message", "overlay_title", "unlock_button_text"]:
            if key in config and not isinstance(config[key], str):
                print(f"Error: {key} must be a string")
                return False

        for key in ["log_level", "log_file_level"]:
            if config.get(key) is not None and not isinstance(config[key], str):
                print(f"Error: {key} must be a string")
                return False

        valid_policies = [policy.value for policy in FallbackPolicy]
        if config["fallback_policy"] not in valid_policies:
            print(f"Error: fallback_policy must be one of {', '.join(valid_policies)}")
            return False

        return True

    def get_fallback_policy(self, config: Dict[str, Any]) -> FallbackPolicy:
        """Get the fallback policy enum for a validated configuration."""
        return FallbackPolicy(config.get("fallback_policy", FallbackPolicy.UNLOCK.value))

    def get_log_file_path(self, config: Dict[str, Any]) -> Optional[Path]:
        """Get the full path for the log file, if one is configured."""
        log_file = config.get("log_file")
        if not log_file:
            return None
        path = Path(log_file)
        if path.is_absolute():
            return path
        return self.config_dir / path
