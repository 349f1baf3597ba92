"""Display utilities sub-package.

Contains banner, plan rendering and next-command suggestion helpers.
"""
from .display_utils import (
    print_banner,
    print_next_command_box,
    display_plan,
    display_state,
)

__all__ = [
    'print_banner',
    'print_next_command_box',
    'display_plan',
    'display_state',
]
