"""Handler for the 'invalidate' subcommand.

Usage:
    sitesync invalidate --bucket <BUCKET> --distribution-id <ID>
"""
from colorama import Fore, Style

from .base_handler import ModeHandler


class InvalidateHandler(ModeHandler):
    """Handles ``sitesync invalidate`` — purge deployed files from CloudFront."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ CloudFront Invalidation{Style.RESET_ALL}\n")

    def prepare_context(self):
        state = self.require_recorded_state(self.args.bucket)
        if state is None:
            return None
        return {'files': state.files}

    def execute_workflow(self, context):
        invalidation_id = self.app.get_invalidation_resource().create(
            self.args.distribution_id, context['files']
        )
        if invalidation_id is None:
            print(f"{Fore.YELLOW}[INFO] Nothing to invalidate{Style.RESET_ALL}")
            return True
        return invalidation_id

    def display_completion(self, result):
        if result is not True:
            print(f"\n{Fore.GREEN}[SUCCESS] Invalidation {result} created{Style.RESET_ALL}\n")
