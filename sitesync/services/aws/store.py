"""Object store interface consumed by the reconciliation core."""
from abc import ABC, abstractmethod
from typing import BinaryIO, List, Tuple


class RemoteStore(ABC):
    """Abstract flat-namespace object store.

    Implementations raise the :mod:`sitesync.errors` taxonomy:
    :class:`NotFoundError` when the bucket does not exist,
    :class:`UploadError` / :class:`DeleteError` when an object operation
    is rejected and :class:`RemoteStoreError` for any other failure.
    They must be safe to call from several upload threads at once.
    """

    @abstractmethod
    def list_objects(self, bucket: str) -> List[Tuple[str, str]]:
        """List every object in *bucket*.

        Returns:
            ``(key, etag)`` pairs; ETags are returned as the store reports
            them and may still carry quotes
        """

    @abstractmethod
    def put_object(self, bucket: str, key: str, body: BinaryIO, content_type: str = "",
                   content_encoding: str = "", cache_control: str = "",
                   expires: str = "") -> None:
        """Upload *body* under *key*. Empty metadata values are not sent."""

    @abstractmethod
    def delete_object(self, bucket: str, key: str) -> None:
        """Delete *key* from *bucket*."""
