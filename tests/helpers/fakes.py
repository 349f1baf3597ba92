"""In-memory collaborators for exercising the reconciliation core."""

from __future__ import annotations

import threading

from sitesync.errors import NotFoundError, UploadError
from sitesync.services.aws.store import RemoteStore
from sitesync.services.checksum import fingerprint_bytes


class FakeRemoteStore(RemoteStore):
    """Bucket held in a dict of key to quoted ETag.

    Records every call in order so tests can assert that deletes follow
    all puts. Upload workers run concurrently, hence the lock.
    """

    def __init__(self, objects=None, *, missing=False, fail_on=()):
        self.objects: dict[str, str] = dict(objects or {})
        self.missing = missing
        self.fail_on = set(fail_on)
        self.puts: dict[str, dict[str, object]] = {}
        self.deletes: list[str] = []
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def list_objects(self, bucket):
        if self.missing:
            raise NotFoundError(f"Bucket {bucket} does not exist")
        return [(key, f'"{etag}"') for key, etag in sorted(self.objects.items())]

    def put_object(self, bucket, key, body, content_type="", content_encoding="",
                   cache_control="", expires=""):
        if key in self.fail_on:
            raise UploadError(f"Failed to upload {key}")
        data = body.read()
        with self._lock:
            self.calls.append(("put", key))
            self.puts[key] = {
                "body": data,
                "content_type": content_type,
                "content_encoding": content_encoding,
                "cache_control": cache_control,
                "expires": expires,
            }
            self.objects[key] = fingerprint_bytes(data)

    def delete_object(self, bucket, key):
        with self._lock:
            self.calls.append(("delete", key))
            self.deletes.append(key)
            self.objects.pop(key, None)
