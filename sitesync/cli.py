"""
SiteSync - Main CLI interface
Deploy a zipped static site to an S3 bucket with plan/apply semantics.

CLI-first subcommand model. Each command prints a contextual
"next command" suggestion, creating a guided pipeline without menus.
"""
import sys
import signal
import argparse
from colorama import init, Fore, Style

from .errors import SiteSyncError
from .utils.config_loader import (
    ConfigLoader, handle_config_update, get_max_workers, get_staging_dir
)
from .utils.display.display_utils import print_banner
from .utils.persistence.state_store import StateStore

# Initialize colorama
init(autoreset=True)

# ── Help-text epilogs for subcommands ──────────────────────────────────────

PLAN_EXAMPLES = """\
Examples:
  sitesync plan --bucket www.example.com --path build/site.zip
  sitesync plan --bucket www.example.com --path site.zip --exclude .map

Workflow:
  fetch → plan → apply → invalidate
"""

APPLY_EXAMPLES = """\
Examples:
  sitesync apply --bucket www.example.com --path build/site.zip
  sitesync apply --bucket www.example.com --path site.zip --exclude drafts/

Unchanged files are uploaded again; files missing from the archive are
deleted once every upload succeeded.

Workflow:
  fetch → plan → apply → invalidate
"""

IMPORT_EXAMPLES = """\
Examples:
  sitesync import --bucket www.example.com

Records the current bucket contents so the next apply only deletes
objects that are missing from the new archive.
"""

INVALIDATE_EXAMPLES = """\
Examples:
  sitesync invalidate --bucket www.example.com --distribution-id E2QWRUHEXAMPLE
"""

FETCH_EXAMPLES = """\
Examples:
  sitesync fetch --repository https://repo.example.com/releases --artifact site-1.2.0.zip
  sitesync fetch --repository https://repo.example.com/releases --artifact site.zip \\
      --username deploy --password secret --dest /tmp/artifacts
"""


class SiteSync:
    """Main CLI application class."""

    def __init__(self, config=None):
        """Initialize CLI application.

        Args:
            config: Loaded configuration; read from disk when omitted
        """
        self.config = config if config is not None else ConfigLoader.load_config_json()
        self.state_store = StateStore(ConfigLoader.get_state_file(self.config))
        self.site_resource = None
        self.invalidation_resource = None

        # Setup signal handler for graceful shutdown
        signal.signal(signal.SIGINT, self.signal_handler)

    def signal_handler(self, sig, frame):
        """Handle Ctrl+C gracefully."""
        print(f"\n\n{Fore.YELLOW}[INFO] Interrupted, nothing further will be sent{Style.RESET_ALL}")
        sys.exit(130)

    def get_site_resource(self):
        """Return the bucket resource, building the S3 client on first use."""
        if self.site_resource is None:
            from .services.site_resource import SiteResource
            from .utils.aws.aws_utils import build_remote_store

            self.site_resource = SiteResource(
                build_remote_store(self.config),
                staging_dir=get_staging_dir(self.config),
                max_workers=get_max_workers(self.config),
            )
        return self.site_resource

    def get_invalidation_resource(self):
        """Return the CloudFront invalidation resource."""
        if self.invalidation_resource is None:
            from .services.invalidation import InvalidationResource
            from .utils.aws.aws_utils import build_cloudfront_client

            self.invalidation_resource = InvalidationResource(
                build_cloudfront_client(self.config)
            )
        return self.invalidation_resource


def create_argument_parser():
    """Create and configure the subparser-based argument parser."""
    parser = argparse.ArgumentParser(
        prog='sitesync',
        description='SiteSync — deploy a zipped static site to S3',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global flags (apply to all subcommands)
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')
    parser.add_argument('--quiet', action='store_true', help='Only log warnings and errors')
    parser.add_argument('--config', help='Update config.json with JSON string')

    # Shared parent so --verbose works after the subcommand name too
    _verbose_parent = argparse.ArgumentParser(add_help=False)
    _verbose_parent.add_argument('--verbose', action='store_true', default=argparse.SUPPRESS,
                                 help='Enable verbose output')

    # Site arguments shared by plan and apply
    _site_parent = argparse.ArgumentParser(add_help=False)
    _site_parent.add_argument('--bucket', required=True, help='Target S3 bucket')
    _site_parent.add_argument('--path', required=True, help='Path to the zipped site archive')
    _site_parent.add_argument('--exclude', default=None,
                              help='Skip files whose path contains this substring '
                                   '(default: "exclude" from config)')

    _bucket_parent = argparse.ArgumentParser(add_help=False)
    _bucket_parent.add_argument('--bucket', required=True, help='Target S3 bucket')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ── plan ───────────────────────────────────────────────────────────
    subparsers.add_parser(
        'plan',
        parents=[_verbose_parent, _site_parent],
        help='Show the uploads and deletions an apply would perform',
        epilog=PLAN_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # ── apply ──────────────────────────────────────────────────────────
    subparsers.add_parser(
        'apply',
        parents=[_verbose_parent, _site_parent],
        help='Upload the archive and delete removed files',
        epilog=APPLY_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # ── refresh ────────────────────────────────────────────────────────
    subparsers.add_parser(
        'refresh',
        parents=[_verbose_parent, _bucket_parent],
        help='Re-read the bucket into the recorded state',
    )

    # ── destroy ────────────────────────────────────────────────────────
    destroy_parser = subparsers.add_parser(
        'destroy',
        parents=[_verbose_parent, _bucket_parent],
        help='Delete every object in the bucket',
    )
    destroy_parser.add_argument('--yes', action='store_true', help='Skip the confirmation prompt')

    # ── import ─────────────────────────────────────────────────────────
    subparsers.add_parser(
        'import',
        parents=[_verbose_parent, _bucket_parent],
        help='Start managing an existing bucket',
        epilog=IMPORT_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # ── invalidate ─────────────────────────────────────────────────────
    invalidate_parser = subparsers.add_parser(
        'invalidate',
        parents=[_verbose_parent, _bucket_parent],
        help='Invalidate the deployed files on a CloudFront distribution',
        epilog=INVALIDATE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    invalidate_parser.add_argument('--distribution-id', required=True, help='CloudFront distribution ID')

    # ── fetch ──────────────────────────────────────────────────────────
    fetch_parser = subparsers.add_parser(
        'fetch',
        parents=[_verbose_parent],
        help='Download a site archive from an artifact repository',
        epilog=FETCH_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    fetch_parser.add_argument('--repository', required=True, help='Repository base URL')
    fetch_parser.add_argument('--artifact', required=True, help='Artifact path within the repository')
    fetch_parser.add_argument('--username', help='Basic auth user (default: "artifact_username" from config)')
    fetch_parser.add_argument('--password', help='Basic auth password (default: "artifact_password" from config)')
    fetch_parser.add_argument('--dest', help='Download directory (default: "artifact_dir" from config)')

    return parser


# ── Main Entry Point ──────────────────────────────────────────────────────

def main(argv=None):
    """Main CLI entry point."""
    from .utils.logger import setup_logging

    parser = create_argument_parser()
    args = parser.parse_args(argv)

    # Initialise the logging subsystem based on --verbose/--quiet
    setup_logging(verbose=getattr(args, 'verbose', False), quiet=args.quiet)

    # Handle --config (no bucket needed)
    if args.config:
        return handle_config_update(args.config)

    if args.command is None:
        print_banner()
        parser.print_help()
        return 0

    from .modes.plan_handler import PlanHandler
    from .modes.apply_handler import ApplyHandler
    from .modes.refresh_handler import RefreshHandler
    from .modes.destroy_handler import DestroyHandler
    from .modes.import_handler import ImportHandler
    from .modes.invalidate_handler import InvalidateHandler
    from .modes.fetch_handler import FetchHandler

    try:
        app = SiteSync()

        # Route to handler
        handlers = {
            'plan': lambda: PlanHandler(app, args),
            'apply': lambda: ApplyHandler(app, args),
            'refresh': lambda: RefreshHandler(app, args),
            'destroy': lambda: DestroyHandler(app, args),
            'import': lambda: ImportHandler(app, args),
            'invalidate': lambda: InvalidateHandler(app, args),
            'fetch': lambda: FetchHandler(app, args),
        }

        handler_factory = handlers.get(args.command)
        if not handler_factory:
            parser.print_help()
            return 1

        return handler_factory().execute()
    except SiteSyncError as e:
        print(f"{Fore.RED}[ERROR] {e}{Style.RESET_ALL}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
