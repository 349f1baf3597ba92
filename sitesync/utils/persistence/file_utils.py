"""
File system utilities
"""
import json
import logging
import os

log = logging.getLogger(__name__)


def ensure_dir(directory):
    """
    Ensure directory exists, create if it doesn't.

    Args:
        directory: Directory path
    """
    if directory:
        os.makedirs(directory, exist_ok=True)


def save_json(filepath, data, compact=True):
    """
    Save data to JSON file.

    The payload is written to a sibling temp file first and moved into
    place, so an interrupted write never truncates existing state.

    Args:
        filepath: Path to JSON file
        data: Data to serialize
        compact: If True, use single-line format (default)

    Returns:
        True if successful
    """
    temp_path = f"{filepath}.tmp"
    try:
        ensure_dir(os.path.dirname(filepath))

        with open(temp_path, 'w') as f:
            if compact:
                json.dump(data, f, separators=(',', ':'))
            else:
                json.dump(data, f, indent=2, sort_keys=True)
        os.replace(temp_path, filepath)
        return True
    except (OSError, TypeError, ValueError) as e:
        log.error("Error saving JSON to %s: %s", filepath, e)
        return False


def load_json(filepath, default=None):
    """
    Load data from JSON file.

    Args:
        filepath: Path to JSON file
        default: Default value if file doesn't exist

    Returns:
        Loaded data or default value
    """
    if not os.path.exists(filepath):
        return default

    try:
        with open(filepath, 'r') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        log.error("Error loading JSON from %s: %s", filepath, e)
        return default
