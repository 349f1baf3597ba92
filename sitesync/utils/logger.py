"""Console logging for SiteSync.

Log records go to stderr with a coloured ``[LEVEL]`` tag, leaving stdout
to the plan and state output of the CLI. ``--verbose`` switches on
per-object DEBUG records, tagged with the emitting module and upload
worker; ``--quiet`` keeps only warnings and errors.

Usage::

    from sitesync.utils.logger import get_logger

    log = get_logger(__name__)
    log.info("Uploading %d object(s) to %s", count, bucket)
"""
import logging
import sys

from colorama import Fore, Style

__all__ = ["ColouredFormatter", "get_logger", "setup_logging"]

ROOT_LOGGER_NAME = "sitesync"

_LEVEL_COLOURS = {
    logging.DEBUG: Fore.LIGHTBLACK_EX,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}

_configured = False


class ColouredFormatter(logging.Formatter):
    """``[LEVEL] message`` with the tag coloured by severity.

    Args:
        detailed: Also show the short module name and, for records emitted
            by upload workers, the thread name
    """

    def __init__(self, detailed: bool = False):
        super().__init__("%(message)s")
        self.detailed = detailed

    def format(self, record: logging.LogRecord) -> str:
        tag = f"{_LEVEL_COLOURS.get(record.levelno, '')}[{record.levelname}]{Style.RESET_ALL}"
        message = super().format(record)
        if not self.detailed:
            return f"{tag} {message}"

        origin = record.name.rsplit(".", 1)[-1]
        if record.threadName and record.threadName != "MainThread":
            origin = f"{origin}@{record.threadName}"
        return f"{tag} {Fore.LIGHTBLACK_EX}{origin}:{Style.RESET_ALL} {message}"


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    return logging.DEBUG if verbose else logging.INFO


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the ``sitesync`` logger tree.

    Safe to call repeatedly; the single stderr handler is reused and only
    its level and detail are updated.

    Args:
        verbose: Show DEBUG records with their origin
        quiet: Show warnings and errors only (wins over *verbose*)

    Returns:
        The configured ``sitesync`` logger
    """
    global _configured  # noqa: PLW0603

    level = _level_for(verbose, quiet)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    root.propagate = False

    handler = next(
        (h for h in root.handlers if isinstance(h.formatter, ColouredFormatter)), None
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        root.addHandler(handler)
    handler.setLevel(level)
    handler.setFormatter(ColouredFormatter(detailed=verbose and not quiet))

    _configured = True
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for *name* inside the ``sitesync`` tree.

    Modules outside the package are nested under it, so one
    :func:`setup_logging` call governs every record SiteSync emits.
    """
    if not _configured:
        setup_logging()

    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
