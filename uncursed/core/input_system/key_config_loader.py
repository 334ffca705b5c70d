"""
Configuration loader for key bindings.

This module handles loading and parsing of YAML configuration files
for customizable menu keys.
"""
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..input import DEFAULT_KEY_NAMES, KeyAction, KeyBindings, resolve_key_name
from ..log_manager import LogManager


DEFAULT_CONFIG_PATH = "assets/config/key_mappings.yaml"


class KeyConfigLoader:
    """Loads and manages key binding configurations from YAML files."""

    def __init__(self, config_path: Optional[str] = None, log_manager: Optional[LogManager] = None):
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.log_manager = log_manager
        self._config: dict[str, Any] = {}
        self._key_names: dict[KeyAction, list[Union[str, int]]] = {}
        self._active_scheme: str = "default"

    def _resolve_path(self) -> Path:
        if os.path.isabs(self.config_path):
            return Path(self.config_path)
        # Relative paths are taken from the project root
        project_root = Path(__file__).parent.parent.parent.parent
        return project_root / self.config_path

    def load_config(self) -> bool:
        """
        Load configuration from the YAML file.

        Returns:
            bool: True if config was loaded successfully; on False the
            built-in bindings are in effect
        """
        config_file = self._resolve_path()
        if not config_file.exists():
            self._warn(f"Key config file not found: {config_file}")
            self._load_fallback_config()
            return False

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self._error(f"Error loading key config: {e}")
            self._load_fallback_config()
            return False

        if not isinstance(self._config, dict):
            self._error(f"Key config must be a mapping, got {type(self._config).__name__}")
            self._load_fallback_config()
            return False

        shape_error = self._find_shape_error()
        if shape_error:
            self._error(f"Malformed key config: {shape_error}")
            self._load_fallback_config()
            return False

        config_section = self._config.get("config") or {}
        self._active_scheme = str(config_section.get("active_scheme") or "default")
        self._parse_bindings()
        return True

    def _find_shape_error(self) -> Optional[str]:
        """Describe the first section that is not a mapping, if any."""
        for section in ("config", "bindings", "schemes"):
            value = self._config.get(section)
            if value is not None and not isinstance(value, dict):
                return f"'{section}' must be a mapping, got {type(value).__name__}"
        for name, scheme in (self._config.get("schemes") or {}).items():
            if scheme is None:
                continue
            if not isinstance(scheme, dict):
                return f"scheme '{name}' must be a mapping, got {type(scheme).__name__}"
            overrides = scheme.get("overrides")
            if overrides is not None and not isinstance(overrides, dict):
                return f"overrides of scheme '{name}' must be a mapping, got {type(overrides).__name__}"
        return None

    def _parse_bindings(self) -> None:
        """Parse the bindings section, applying the active scheme's overrides."""
        self._key_names = {action: list(names) for action, names in DEFAULT_KEY_NAMES.items()}

        final_bindings = dict(self._config.get("bindings") or {})
        schemes_config = self._config.get("schemes") or {}
        if self._active_scheme != "default" and self._active_scheme in schemes_config:
            overrides = (schemes_config[self._active_scheme] or {}).get("overrides") or {}
            final_bindings.update(overrides)

        for action_name, key_names in final_bindings.items():
            try:
                action = KeyAction(str(action_name).lower())
            except ValueError:
                self._warn(f"Unknown action '{action_name}' in key config")
                continue
            if not isinstance(key_names, list):
                key_names = [key_names]
            self._key_names[action] = key_names

    def _load_fallback_config(self) -> None:
        """Use the built-in bindings when the file cannot be used."""
        self._config = {}
        self._active_scheme = "default"
        self._key_names = {action: list(names) for action, names in DEFAULT_KEY_NAMES.items()}
        self._system("Loaded fallback key configuration")

    def get_bindings(self, key_codes: dict[str, int]) -> KeyBindings:
        """
        Build key bindings for a surface.

        Args:
            key_codes: The surface's named special keys

        Returns:
            KeyBindings: Bindings for every action; unknown key names are skipped
        """
        if not self._key_names:
            self._load_fallback_config()
        for action, names in self._key_names.items():
            for name in names:
                if resolve_key_name(name, key_codes) is None:
                    self._warn(f"Unknown key '{name}' for action '{action.value}'")
        return KeyBindings.from_names(self._key_names, key_codes)

    def get_key_names(self, action: KeyAction) -> list[Union[str, int]]:
        return list(self._key_names.get(action, []))

    def get_available_schemes(self) -> list[str]:
        schemes = self._config.get("schemes") or {}
        return ["default"] + [name for name in schemes if name != "default"]

    def get_active_scheme(self) -> str:
        return self._active_scheme

    def set_active_scheme(self, scheme_name: str) -> bool:
        """
        Set the active key scheme.

        Args:
            scheme_name: Name of the scheme to activate

        Returns:
            bool: True if scheme was set successfully
        """
        if scheme_name not in self.get_available_schemes():
            return False
        self._active_scheme = scheme_name
        self._parse_bindings()
        return True

    def reload_config(self) -> bool:
        return self.load_config()

    def validate_config(self) -> dict[str, Any]:
        """
        Validate the loaded configuration.

        Returns:
            Dict: Validation results including errors and warnings
        """
        errors = []
        warnings = []

        bindings = self._config.get("bindings") or {}
        known = {action.value for action in KeyAction}
        for action in KeyAction:
            if action.value not in bindings:
                warnings.append(f"No binding for '{action.value}', using default")
        for action_name in bindings:
            if str(action_name).lower() not in known:
                errors.append(f"Unknown action in config: {action_name}")

        scheme = self._active_scheme
        if scheme != "default" and scheme not in (self._config.get("schemes") or {}):
            errors.append(f"Active scheme '{scheme}' is not defined")

        return {
            "valid": len(errors) == 0,
            "errors": errors,
            "warnings": warnings,
            "active_scheme": self._active_scheme,
        }

    def _system(self, text: str) -> None:
        if self.log_manager is not None:
            self.log_manager.system(text)

    def _warn(self, text: str) -> None:
        if self.log_manager is not None:
            self.log_manager.warning(text)

    def _error(self, text: str) -> None:
        if self.log_manager is not None:
            self.log_manager.error(text)
