"""Handler for the 'import' subcommand.

Usage:
    sitesync import --bucket <BUCKET>
"""
from colorama import Fore, Style

from ..utils.display.display_utils import display_state
from .base_handler import ModeHandler


class ImportHandler(ModeHandler):
    """Handles ``sitesync import`` — adopt an existing bucket."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Import{Style.RESET_ALL}\n")

    def validate_prerequisites(self) -> bool:
        if self.state_store.get(self.args.bucket) is not None:
            print(f"{Fore.RED}[ERROR] Bucket '{self.args.bucket}' is already managed{Style.RESET_ALL}")
            print(f"{Fore.YELLOW}[TIP] Run: sitesync refresh --bucket {self.args.bucket}{Style.RESET_ALL}")
            return False
        return True

    def prepare_context(self):
        return {'bucket': self.args.bucket}

    def execute_workflow(self, context):
        state = self.app.get_site_resource().import_state(context['bucket'])
        if not state.exists:
            print(f"{Fore.RED}[ERROR] Bucket '{context['bucket']}' does not exist{Style.RESET_ALL}")
            return None
        display_state(state)
        return state

    def save_results(self, result):
        self.state_store.put(result)

    def suggest_next_command(self, result):
        self.suggest(
            'Preview deploying a new archive',
            f'sitesync plan --bucket {result.bucket} --path <ARCHIVE>',
        )
