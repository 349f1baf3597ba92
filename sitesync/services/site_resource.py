"""
Declarative lifecycle of a deployed site.

Maps the provisioning lifecycle (diff, create, read, update, delete,
import) onto the reconciliation core. Each call works on its own staging
directory and returns a new :class:`SiteState`; persisting that state is
the caller's job.
"""
from typing import Dict, Iterable, Optional

from ..errors import NotFoundError
from ..models.file_entry import FileEntry
from ..models.plan import ReconciliationPlan
from ..models.site_state import SiteState
from ..utils.config_loader import DEFAULT_MAX_WORKERS
from ..utils.file_filter import filter_state
from ..utils.logger import get_logger
from .archive_extractor import ArchiveExtractor
from .checksum import fingerprint
from .reconciler import DiffReconciler

log = get_logger(__name__)


def desired_files(entries: Iterable[FileEntry], exclude: str = "") -> Dict[str, str]:
    """Fingerprint *entries* and build the filtered desired state map."""
    state = {}
    for entry in entries:
        entry.fingerprint = fingerprint(entry.full_path)
        state[entry.key] = entry.fingerprint
    return filter_state(state, exclude)


class SiteResource:
    """Site lifecycle bound to one object store.

    Args:
        store: :class:`RemoteStore` the site is deployed to
        staging_dir: Parent directory for extraction, temp dir when None
        max_workers: Concurrent upload limit
        decorator: Optional :class:`MetadataDecorator` override
    """

    def __init__(self, store, staging_dir=None, max_workers=DEFAULT_MAX_WORKERS, decorator=None):
        self.staging_dir = staging_dir
        self.reconciler = DiffReconciler(store, decorator=decorator, max_workers=max_workers)

    # ── Plan ───────────────────────────────────────────────────────────

    def diff(self, state: SiteState) -> SiteState:
        """Return *state* with ``files`` set to the desired state map."""
        with ArchiveExtractor(self.staging_dir) as extractor:
            entries = extractor.extract(state.path)
            files = desired_files(entries, state.exclude)
        return state.copy(files=files)

    def plan(self, prior: Optional[SiteState], state: SiteState) -> ReconciliationPlan:
        """Plan the changes an apply of *state* would make over *prior*."""
        previous = prior.files if prior is not None and prior.exists else {}
        return DiffReconciler.plan(previous, self.diff(state).files)

    # ── Apply ──────────────────────────────────────────────────────────

    def create(self, state: SiteState) -> SiteState:
        """Upload the full desired set into an empty record."""
        log.info("Creating site. bucket=%s", state.bucket)
        return self._converge({}, state)

    def update(self, prior: SiteState, state: SiteState) -> SiteState:
        """Re-upload every desired file, then delete the removed ones."""
        if prior.bucket != state.bucket:
            raise ValueError(
                f"Bucket is the site identity; cannot update {prior.bucket} into {state.bucket}"
            )
        log.info("Updating site. bucket=%s", state.bucket)
        return self._converge(prior.files, state)

    def read(self, state: SiteState) -> SiteState:
        """Refresh ``files`` from the bucket listing.

        A vanished bucket clears the identity so the next apply creates
        the site again.
        """
        log.info("Reading bucket. bucket=%s", state.bucket)
        try:
            files = self.reconciler.observed_state(state.bucket, state.exclude, missing_ok=False)
        except NotFoundError:
            log.warning("Bucket %s no longer exists", state.bucket)
            return state.copy(files={}, resource_id="")
        return state.copy(files=files, resource_id=state.bucket)

    def delete(self, state: SiteState) -> SiteState:
        """Remove every object from the bucket."""
        self.reconciler.delete_all(state.bucket)
        return state.copy(files={}, resource_id="")

    def import_state(self, bucket: str) -> SiteState:
        """Adopt an existing bucket as a site record."""
        return self.read(SiteState(bucket=bucket, resource_id=bucket))

    def _converge(self, previous: Dict[str, str], state: SiteState) -> SiteState:
        with ArchiveExtractor(self.staging_dir) as extractor:
            entries = extractor.extract(state.path)
            desired = desired_files(entries, state.exclude)
            plan = DiffReconciler.plan(previous, desired)
            uploaded, deleted = self.reconciler.apply(plan, entries, state.bucket)

        log.info("Site applied. bucket=%s uploaded=%d deleted=%d", state.bucket, uploaded, deleted)
        return state.copy(files=desired, resource_id=state.bucket)
