"""Persistence utilities sub-package.

Contains file I/O helpers and the site state store.
"""
from .file_utils import (
    ensure_dir,
    save_json,
    load_json,
)
from .state_store import StateStore

__all__ = [
    'ensure_dir',
    'save_json',
    'load_json',
    'StateStore',
]
