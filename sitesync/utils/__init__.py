"""Utility modules for SiteSync.

Sub-packages:
- persistence/ — file I/O and the site state store
- display/ — plan and state rendering
- aws/ — boto3 session and client factories
"""

from .config_loader import ConfigLoader, handle_config_update
from .file_filter import filter_state
from .key_codec import encode_key, decode_key
from .logger import get_logger, setup_logging

__all__ = [
    'ConfigLoader',
    'handle_config_update',
    'filter_state',
    'encode_key',
    'decode_key',
    'get_logger',
    'setup_logging',
]
