"""
Data models for SiteSync
"""

from .file_entry import FileEntry
from .plan import ReconciliationPlan
from .site_state import SiteState

__all__ = ['FileEntry', 'ReconciliationPlan', 'SiteState']
