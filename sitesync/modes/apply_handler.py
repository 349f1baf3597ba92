"""Handler for the 'apply' subcommand.

Usage:
    sitesync apply --bucket <BUCKET> --path <ARCHIVE> [--exclude <SUBSTRING>]
"""
from colorama import Fore, Style

from .base_handler import ModeHandler


class ApplyHandler(ModeHandler):
    """Handles ``sitesync apply`` — create or update the site in a bucket."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Apply{Style.RESET_ALL}\n")

    def prepare_context(self):
        return {
            'prior': self.state_store.get(self.args.bucket),
            'state': self.desired_state(),
        }

    def execute_workflow(self, context):
        resource = self.app.get_site_resource()
        prior = context['prior']

        if prior is not None and prior.exists:
            print(f"  Updating site in '{Fore.WHITE}{prior.bucket}{Style.RESET_ALL}'...")
            return resource.update(prior, context['state'])

        print(f"  Creating site in '{Fore.WHITE}{self.args.bucket}{Style.RESET_ALL}'...")
        return resource.create(context['state'])

    def save_results(self, result):
        self.state_store.put(result)

    def display_completion(self, result):
        print(
            f"\n{Fore.GREEN}[SUCCESS] {len(result.files)} file(s) deployed to "
            f"{result.bucket}{Style.RESET_ALL}\n"
        )

    def suggest_next_command(self, result):
        self.suggest(
            'Invalidate cached copies on the CDN',
            f'sitesync invalidate --bucket {result.bucket} --distribution-id <ID>',
        )
