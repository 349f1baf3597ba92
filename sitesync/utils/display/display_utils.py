"""
Display and UI utilities for SiteSync
"""
from colorama import Fore, Style

from ..key_codec import decode_key


def print_banner():
    """Display SiteSync banner."""
    banner = (
        f"\n{Fore.CYAN}  ╺┳╸ SiteSync{Style.RESET_ALL}"
        f"  {Fore.WHITE}— static site deployment to S3{Style.RESET_ALL}\n"
    )
    print(banner)


def _box_text_line(text, width, color=None):
    """Return a box row with *text* left-aligned inside the borders.

    Args:
        text: Visible text (no ANSI codes).
        width: Total box width including border characters.
        color: Optional ``colorama`` colour applied to *text*.
    """
    inner = width - 2  # space between │…│
    if color:
        padded = f"  {color}{text}{Style.RESET_ALL}{' ' * max(0, inner - len(text) - 2)}"
    else:
        padded = f"  {text}{' ' * max(0, inner - len(text) - 2)}"
    return f"{Fore.CYAN}│{Style.RESET_ALL}{padded}{Fore.CYAN}│{Style.RESET_ALL}"


def print_next_command_box(description, command, width=62, title="Next Step"):
    """Print the 'Next Step' suggestion box.

    Args:
        description: Human-readable description of the next step
        command: The CLI command to suggest
        width: Box width in characters (default 62).
        title: Box title label (default "Next Step").
    """
    blank = f"{Fore.CYAN}│{Style.RESET_ALL}{' ' * (width - 2)}{Fore.CYAN}│{Style.RESET_ALL}"

    title_str = f"─ {title} "
    print(f"\n{Fore.CYAN}╭{title_str}{'─' * (width - len(title_str) - 1)}╮{Style.RESET_ALL}")
    print(_box_text_line(description, width))
    print(blank)
    print(_box_text_line(command, width, Fore.GREEN))
    print(blank)
    print(f"{Fore.CYAN}╰{'─' * (width - 2)}╯{Style.RESET_ALL}")


def display_plan(plan, verbose=False):
    """Render a reconciliation plan.

    Unchanged files are still uploaded; they are counted separately so
    the reader can tell real content changes from refreshes.

    Args:
        plan: ReconciliationPlan to display
        verbose: List every key, not only changed and deleted ones
    """
    changed = sorted(plan.changed)
    unchanged = sorted(plan.unchanged)
    deletes = sorted(plan.to_delete)

    print(
        f"  {Fore.WHITE}{len(plan.to_put)}{Style.RESET_ALL} to upload "
        f"({Fore.GREEN}{len(changed)} changed{Style.RESET_ALL}, "
        f"{Fore.LIGHTBLACK_EX}{len(unchanged)} unchanged{Style.RESET_ALL})  "
        f"{Fore.WHITE}{len(deletes)}{Style.RESET_ALL} to delete\n"
    )

    for key in changed:
        print(f"  {Fore.GREEN}+ {decode_key(key)}{Style.RESET_ALL}")
    if verbose:
        for key in unchanged:
            print(f"  {Fore.LIGHTBLACK_EX}~ {decode_key(key)}{Style.RESET_ALL}")
    for key in deletes:
        print(f"  {Fore.RED}- {decode_key(key)}{Style.RESET_ALL}")

    if plan.is_empty():
        print(f"  {Fore.YELLOW}Nothing to do.{Style.RESET_ALL}")


def display_state(state):
    """Render a recorded site state."""
    status = (
        f"{Fore.GREEN}deployed{Style.RESET_ALL}" if state.exists
        else f"{Fore.YELLOW}not deployed{Style.RESET_ALL}"
    )
    print(f"  Bucket : {Fore.WHITE}{state.bucket}{Style.RESET_ALL} ({status})")
    if state.path:
        print(f"  Archive: {state.path}")
    if state.exclude:
        print(f"  Exclude: {state.exclude}")
    print(f"  Files  : {len(state.files)}")
    for key in sorted(state.files):
        print(
            f"    {Fore.LIGHTBLACK_EX}{state.files[key]}{Style.RESET_ALL}  {decode_key(key)}"
        )
