"""Mode handlers for SiteSync CLI.

Subcommand handlers:
  - PlanHandler        → sitesync plan
  - ApplyHandler       → sitesync apply
  - RefreshHandler     → sitesync refresh
  - DestroyHandler     → sitesync destroy
  - ImportHandler      → sitesync import
  - InvalidateHandler  → sitesync invalidate
  - FetchHandler       → sitesync fetch
"""
from .base_handler import ModeHandler
from .plan_handler import PlanHandler
from .apply_handler import ApplyHandler
from .refresh_handler import RefreshHandler
from .destroy_handler import DestroyHandler
from .import_handler import ImportHandler
from .invalidate_handler import InvalidateHandler
from .fetch_handler import FetchHandler

__all__ = [
    'ModeHandler',
    'PlanHandler',
    'ApplyHandler',
    'RefreshHandler',
    'DestroyHandler',
    'ImportHandler',
    'InvalidateHandler',
    'FetchHandler',
]
