"""
Configuration loader for JSON files
"""
import os
import json
from pathlib import Path
from typing import Optional, Dict, Any
from colorama import Fore, Style

from ..errors import ConfigurationError


DEFAULT_MAX_WORKERS = 8

# Default configuration with placeholder values.
# Used to bootstrap config.json when it does not exist yet.
DEFAULT_CONFIG: Dict[str, Any] = {
    "aws_profile": "",
    "aws_region": "",
    "staging_dir": "",
    "state_file": "",
    "max_workers": DEFAULT_MAX_WORKERS,
    "exclude": "",
    "artifact_username": "",
    "artifact_password": "",
    "artifact_dir": "",
}

SENSITIVE_MARKERS = ('token', 'key', 'password', 'secret')


def get_config_home() -> Path:
    """Directory holding config.json and the default state file.

    ``$SITESYNC_HOME`` wins; otherwise ``./.sitesync`` under the working
    directory, next to the site being deployed.
    """
    env_home = os.getenv("SITESYNC_HOME")
    if env_home:
        return Path(env_home).expanduser()
    return Path.cwd() / ".sitesync"


class ConfigLoader:
    """Handles loading and saving configuration files."""

    @staticmethod
    def get_config_path(filename):
        """
        Get full path to configuration file.

        Args:
            filename: Configuration filename

        Returns:
            Full path to config file
        """
        return str(get_config_home() / filename)

    @staticmethod
    def ensure_config_exists():
        """
        Ensure config.json exists, creating it with defaults if missing.

        Returns:
            Path to the config.json file
        """
        config_path = Path(ConfigLoader.get_config_path("config.json"))

        if not config_path.exists():
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, 'w') as f:
                json.dump(DEFAULT_CONFIG, f, indent=2)
            print(
                f"{Fore.YELLOW}[INFO] Created default config.json at "
                f"{config_path}{Style.RESET_ALL}"
            )

        return config_path

    @staticmethod
    def load_config_json():
        """
        Load main config.json file.
        Creates the file with default values if it does not exist.

        Returns:
            Configuration dictionary merged over the defaults

        Raises:
            ConfigurationError: If the file is not a JSON object
        """
        config_path = ConfigLoader.ensure_config_exists()

        try:
            with open(config_path, 'r') as f:
                loaded = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Error loading {config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"{config_path} must contain a JSON object")

        config = dict(DEFAULT_CONFIG)
        config.update(loaded)
        return config

    @staticmethod
    def get_state_file(config: Dict[str, Any]) -> str:
        """Resolve the state file path from *config*.

        Args:
            config: Configuration dictionary

        Returns:
            Configured ``state_file`` or ``<config home>/state.json``
        """
        state_file = (config.get('state_file') or '').strip()
        if state_file:
            return os.path.expanduser(state_file)
        return ConfigLoader.get_config_path("state.json")


def get_max_workers(config: Optional[Dict[str, Any]]) -> int:
    """Extract the upload pool size from config.

    Args:
        config: Configuration dictionary

    Returns:
        Positive worker count, ``DEFAULT_MAX_WORKERS`` when unset

    Raises:
        ConfigurationError: If the value is not a positive integer

    Example:
        >>> get_max_workers({'max_workers': 4})
        4
        >>> get_max_workers(None)
        8
    """
    if not config or config.get('max_workers') in (None, ""):
        return DEFAULT_MAX_WORKERS

    value = config['max_workers']
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(f"max_workers must be a positive integer, got {value!r}")
    return value


def get_staging_dir(config: Optional[Dict[str, Any]]) -> Optional[str]:
    """Return the configured staging directory or None for a temp dir."""
    if not config:
        return None
    staging_dir = (config.get('staging_dir') or '').strip()
    return os.path.expanduser(staging_dir) if staging_dir else None


def mask_value(key: str, value: Any) -> Any:
    """Hide all but the first characters of secret-looking settings."""
    if any(marker in key.lower() for marker in SENSITIVE_MARKERS):
        if value and len(str(value)) > 4:
            return f"{str(value)[:4]}...{'*' * 8}"
    return value


def handle_config_update(config_json_string):
    """Handle config update command.

    Args:
        config_json_string: JSON string with config updates

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config_updates = json.loads(config_json_string)
    except json.JSONDecodeError as e:
        print(f"{Fore.RED}[ERROR] Invalid JSON in --config argument: {e}{Style.RESET_ALL}")
        return 1

    if not isinstance(config_updates, dict):
        print(f"{Fore.RED}[ERROR] --config must be a JSON object (dictionary){Style.RESET_ALL}")
        return 1

    invalid_keys = [key for key in config_updates if key not in DEFAULT_CONFIG]
    if invalid_keys:
        print(f"{Fore.RED}[ERROR] Invalid configuration key(s): {', '.join(invalid_keys)}{Style.RESET_ALL}")
        print(f"\n{Fore.YELLOW}Valid keys in config.json:{Style.RESET_ALL}")
        for key in sorted(DEFAULT_CONFIG):
            print(f"  • {key}")
        return 1

    try:
        current_config = ConfigLoader.load_config_json()
    except ConfigurationError as e:
        print(f"{Fore.RED}[ERROR] {e}{Style.RESET_ALL}")
        return 1

    current_config.update(config_updates)

    try:
        get_max_workers(current_config)
    except ConfigurationError as e:
        print(f"{Fore.RED}[ERROR] {e}{Style.RESET_ALL}")
        return 1

    config_path = ConfigLoader.get_config_path("config.json")
    with open(config_path, 'w') as f:
        json.dump(current_config, f, indent=2)

    print(f"\n{Fore.GREEN}[SUCCESS] Configuration updated successfully{Style.RESET_ALL}")
    print(f"\n{Fore.CYAN}Updated values:{Style.RESET_ALL}")
    for key, value in config_updates.items():
        print(f"  {key}: {mask_value(key, value)}")

    print(f"\n{Fore.CYAN}Config file: {config_path}{Style.RESET_ALL}\n")
    return 0
