"""Handler for the 'refresh' subcommand.

Usage:
    sitesync refresh --bucket <BUCKET>
"""
from colorama import Fore, Style

from ..utils.display.display_utils import display_state
from .base_handler import ModeHandler


class RefreshHandler(ModeHandler):
    """Handles ``sitesync refresh`` — re-read the bucket into the state file."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Refresh{Style.RESET_ALL}\n")

    def prepare_context(self):
        state = self.require_recorded_state(self.args.bucket)
        if state is None:
            return None
        return {'state': state}

    def execute_workflow(self, context):
        prior = context['state']
        state = self.app.get_site_resource().read(prior)

        drift = set(prior.files.items()) ^ set(state.files.items())
        if not state.exists:
            print(f"{Fore.YELLOW}[WARNING] Bucket '{state.bucket}' no longer exists{Style.RESET_ALL}")
        elif drift:
            print(f"{Fore.YELLOW}[WARNING] Bucket contents drifted from the recorded state{Style.RESET_ALL}")

        display_state(state)
        return state

    def save_results(self, result):
        self.state_store.put(result)
