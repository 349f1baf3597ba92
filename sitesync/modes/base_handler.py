"""Base mode handler with template method pattern."""
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
from colorama import Fore, Style

from ..models.site_state import SiteState
from ..utils.display.display_utils import print_next_command_box


class ModeHandler(ABC):
    """Abstract base class for all mode handlers."""

    def __init__(self, app, args=None):
        """Initialize mode handler with the SiteSync application.

        Args:
            app: Main SiteSync CLI instance with config and state store
            args: Parsed command line arguments
        """
        self.app = app
        self.config = app.config
        self.state_store = app.state_store
        self.args = args

    def execute(self) -> int:
        """Execute mode workflow (Template Method).

        Errors from the reconciliation core propagate to the caller
        unchanged; the CLI entry point reports them.

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        self.display_banner()

        if not self.validate_prerequisites():
            return 1

        context = self.prepare_context()
        if context is None:
            return 1

        result = self.execute_workflow(context)

        if result:
            self.save_results(result)
            self.display_completion(result)
            self.suggest_next_command(result)

        return 0 if result else 1

    @abstractmethod
    def display_banner(self):
        """Display mode-specific banner."""

    def validate_prerequisites(self) -> bool:
        """Validate prerequisites for this mode.

        Returns:
            True if prerequisites are met, False otherwise
        """
        return True

    @abstractmethod
    def prepare_context(self) -> Optional[Dict[str, Any]]:
        """Prepare execution context.

        Returns:
            Context dictionary with required data, or None if preparation failed
        """

    @abstractmethod
    def execute_workflow(self, context: Dict[str, Any]) -> Any:
        """Execute mode-specific workflow.

        Args:
            context: Prepared context dictionary

        Returns:
            Result object (mode-specific), or None/False if failed
        """

    def save_results(self, result: Any):
        """Persist workflow results. Default: nothing to save."""

    def display_completion(self, result: Any):
        """Display completion message."""
        print(f"\n{Fore.GREEN}[SUCCESS] Done.{Style.RESET_ALL}\n")

    def suggest_next_command(self, result):
        """Print contextual next-command suggestion. Override in subclasses."""

    # ── Shared helpers ─────────────────────────────────────────────────

    def desired_state(self) -> SiteState:
        """Build the requested site state from ``--bucket/--path/--exclude``."""
        exclude = self.args.exclude
        if exclude is None:
            exclude = self.config.get('exclude', '')
        return SiteState(bucket=self.args.bucket, path=self.args.path, exclude=exclude)

    def require_recorded_state(self, bucket) -> Optional[SiteState]:
        """Return the recorded state of *bucket* or print an error."""
        state = self.state_store.get(bucket)
        if state is None:
            print(f"{Fore.RED}[ERROR] No recorded state for bucket '{bucket}'{Style.RESET_ALL}")
            managed = self.state_store.buckets()
            if managed:
                print(f"{Fore.YELLOW}Managed buckets: {', '.join(managed)}{Style.RESET_ALL}")
            print(f"{Fore.YELLOW}[TIP] Run: sitesync import --bucket {bucket}{Style.RESET_ALL}")
        return state

    @staticmethod
    def suggest(description, command):
        print_next_command_box(description, command)
