"""Handler for the 'plan' subcommand.

Usage:
    sitesync plan --bucket <BUCKET> --path <ARCHIVE> [--exclude <SUBSTRING>]
"""
from colorama import Fore, Style

from ..utils.display.display_utils import display_plan
from .base_handler import ModeHandler


class PlanHandler(ModeHandler):
    """Handles ``sitesync plan`` — show what an apply would change."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Plan{Style.RESET_ALL}\n")

    def prepare_context(self):
        return {
            'prior': self.state_store.get(self.args.bucket),
            'state': self.desired_state(),
        }

    def execute_workflow(self, context):
        resource = self.app.get_site_resource()
        plan = resource.plan(context['prior'], context['state'])
        display_plan(plan, verbose=self.args.verbose)
        return plan

    def display_completion(self, result):
        print()

    def suggest_next_command(self, result):
        self.suggest(
            'Apply the plan to the bucket',
            f'sitesync apply --bucket {self.args.bucket} --path {self.args.path}',
        )
