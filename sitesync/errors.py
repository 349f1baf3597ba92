"""Exception hierarchy for SiteSync.

Every error raised by the reconciliation core derives from
:class:`SiteSyncError` so the CLI can report the first failure and exit.
"""


class SiteSyncError(Exception):
    """Base class for all SiteSync errors."""


class ConfigurationError(SiteSyncError):
    """Raised when configuration values are invalid."""


class ExtractionError(SiteSyncError):
    """Raised when an archive is missing, unreadable or malformed."""


class HashError(SiteSyncError):
    """Raised when a local file cannot be read for fingerprinting."""


class RemoteStoreError(SiteSyncError):
    """Raised when the object store rejects an operation."""


class UploadError(RemoteStoreError):
    """Raised when an object upload fails."""


class DeleteError(RemoteStoreError):
    """Raised when an object deletion fails."""


class NotFoundError(RemoteStoreError):
    """Raised when the bucket does not exist.

    Only recoverable while reading observed state, where it means
    "nothing deployed yet".
    """


class InvalidationError(SiteSyncError):
    """Raised when a CDN invalidation request fails."""


class ArtifactDownloadError(SiteSyncError):
    """Raised when an artifact cannot be downloaded from the repository."""
