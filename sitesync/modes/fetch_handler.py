"""Handler for the 'fetch' subcommand.

Usage:
    sitesync fetch --repository <URL> --artifact <PATH> [--dest <DIR>]
"""
from colorama import Fore, Style

from ..services.artifact_fetcher import fetch_artifact
from .base_handler import ModeHandler


class FetchHandler(ModeHandler):
    """Handles ``sitesync fetch`` — download a site archive."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Fetch Artifact{Style.RESET_ALL}\n")

    def prepare_context(self):
        return {
            'username': self.args.username or self.config.get('artifact_username', ''),
            'password': self.args.password or self.config.get('artifact_password', ''),
            'dest_dir': self.args.dest or self.config.get('artifact_dir') or None,
        }

    def execute_workflow(self, context):
        return fetch_artifact(
            self.args.repository,
            self.args.artifact,
            username=context['username'],
            password=context['password'],
            dest_dir=context['dest_dir'],
        )

    def display_completion(self, result):
        print(f"\n{Fore.GREEN}[SUCCESS] Artifact saved to {result}{Style.RESET_ALL}\n")

    def suggest_next_command(self, result):
        self.suggest(
            'Preview deploying the downloaded archive',
            f'sitesync plan --bucket <BUCKET> --path {result}',
        )
