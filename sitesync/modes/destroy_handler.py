"""Handler for the 'destroy' subcommand.

Usage:
    sitesync destroy --bucket <BUCKET> [--yes]
"""
from colorama import Fore, Style

from ..models.site_state import SiteState
from .base_handler import ModeHandler


class DestroyHandler(ModeHandler):
    """Handles ``sitesync destroy`` — remove every object from the bucket."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Destroy{Style.RESET_ALL}\n")

    def validate_prerequisites(self) -> bool:
        if self.args.yes:
            return True
        choice = input(
            f"{Fore.YELLOW}Delete ALL objects in '{self.args.bucket}'? (y/N): {Style.RESET_ALL}"
        ).strip().lower()
        return choice == 'y'

    def prepare_context(self):
        state = self.state_store.get(self.args.bucket) or SiteState(bucket=self.args.bucket)
        return {'state': state}

    def execute_workflow(self, context):
        return self.app.get_site_resource().delete(context['state'])

    def save_results(self, result):
        self.state_store.remove(result.bucket)

    def display_completion(self, result):
        print(f"\n{Fore.GREEN}[SUCCESS] Bucket '{result.bucket}' cleared{Style.RESET_ALL}\n")
