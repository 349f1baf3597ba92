"""
Diff and apply between a previous and a desired state map.

Planning is pure: every desired key is uploaded and every key that only
exists in the previous state is deleted. Applying uploads through a
bounded worker pool, stops at the first failure and only deletes once
all uploads of the same apply have succeeded.
"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Iterable, Tuple

from ..errors import HashError, NotFoundError
from ..models.file_entry import FileEntry
from ..models.plan import ReconciliationPlan
from ..utils.config_loader import DEFAULT_MAX_WORKERS
from ..utils.file_filter import filter_state
from ..utils.key_codec import decode_key, encode_key
from ..utils.logger import get_logger
from .checksum import clean_etag
from .metadata_decorator import MetadataDecorator

log = get_logger(__name__)


class DiffReconciler:
    """Plans and applies bucket changes against a :class:`RemoteStore`.

    Args:
        store: Object store the plan is applied to
        decorator: Metadata decorator for uploads (a default one if omitted)
        max_workers: Upper bound on concurrent uploads; 1 runs them in order
    """

    def __init__(self, store, decorator=None, max_workers=DEFAULT_MAX_WORKERS):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.store = store
        self.decorator = decorator or MetadataDecorator()
        self.max_workers = max_workers

    @staticmethod
    def plan(previous: Dict[str, str], desired: Dict[str, str]) -> ReconciliationPlan:
        """Compute the put and delete sets.

        Unchanged keys stay in ``to_put``; every apply re-uploads the
        complete desired set.

        Example:
            >>> plan = DiffReconciler.plan({"a": "1", "b": "2"}, {"b": "2", "c": "3"})
            >>> sorted(plan.to_put), sorted(plan.to_delete)
            (['b', 'c'], ['a'])
        """
        to_put = frozenset(desired)
        to_delete = frozenset(previous) - to_put
        unchanged = frozenset(
            key for key in to_put
            if key in previous and previous[key] == desired[key]
        )
        return ReconciliationPlan(to_put=to_put, to_delete=to_delete, unchanged=unchanged)

    def observed_state(self, bucket: str, exclude: str = "",
                       missing_ok: bool = True) -> Dict[str, str]:
        """Build a state map from the objects currently in *bucket*.

        A missing bucket reads as an empty state so first-time creation
        and out-of-band deletion look the same. Pass ``missing_ok=False``
        to get the :class:`NotFoundError` instead.
        """
        try:
            objects = self.store.list_objects(bucket)
        except NotFoundError:
            if not missing_ok:
                raise
            log.info("Bucket %s does not exist, treating as empty", bucket)
            return {}

        state = {encode_key(key): clean_etag(etag) for key, etag in objects}
        return filter_state(state, exclude)

    def apply(self, plan: ReconciliationPlan, entries: Iterable[FileEntry],
              bucket: str) -> Tuple[int, int]:
        """Upload ``plan.to_put`` then delete ``plan.to_delete``.

        Plan keys are encoded; objects are named by the decoded path.

        Args:
            plan: Output of :meth:`plan`
            entries: Extracted files; must cover every key in ``to_put``
            bucket: Target bucket

        Returns:
            Tuple of (uploaded count, deleted count)

        Raises:
            ValueError: If a key to put has no matching entry
            SiteSyncError: The first store or read failure, unchanged
        """
        by_key = {entry.key: entry for entry in entries}
        missing = sorted(plan.to_put - set(by_key))
        if missing:
            raise ValueError(f"No extracted file for key(s): {', '.join(missing)}")

        uploads = self.decorator.decorate_all(by_key[key] for key in sorted(plan.to_put))

        log.info("Uploading %d object(s) to %s", len(uploads), bucket)
        self._put_all(bucket, uploads)

        deletes = sorted(plan.to_delete)
        if deletes:
            log.info("Deleting %d object(s) from %s", len(deletes), bucket)
        for key in deletes:
            self.store.delete_object(bucket, decode_key(key))

        return len(uploads), len(deletes)

    def delete_all(self, bucket: str) -> int:
        """Delete every object in *bucket*.

        Returns:
            Number of objects deleted
        """
        keys = sorted(key for key, _ in self.store.list_objects(bucket))
        log.info("Clearing bucket. bucket=%s objects=%d", bucket, len(keys))
        for key in keys:
            self.store.delete_object(bucket, key)
        return len(keys)

    # ── Upload helpers ─────────────────────────────────────────────────

    def _put_all(self, bucket, uploads):
        if self.max_workers == 1 or len(uploads) <= 1:
            for entry in uploads:
                self._put(bucket, entry)
            return

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(self._put, bucket, entry) for entry in uploads]
            try:
                for future in as_completed(futures):
                    future.result()
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

    def _put(self, bucket, entry):
        try:
            body = open(entry.full_path, 'rb')
        except OSError as e:
            raise HashError(f"Cannot read {entry.full_path}: {e}") from e

        with body:
            self.store.put_object(
                bucket, entry.relative_path, body,
                content_type=entry.content_type,
                content_encoding=entry.content_encoding,
                cache_control=entry.cache_control,
                expires=entry.expires,
            )
