"""
Declarative site resource state
"""


class SiteState:
    """
    Recorded state of one deployed site.

    Mirrors the resource schema: ``bucket`` is the identity key, ``path``
    the archive location, ``exclude`` the optional substring filter and
    ``files`` the computed map of encoded key to fingerprint.
    ``resource_id`` is empty until the site exists in the bucket.
    """

    def __init__(self, bucket, path="", exclude="", files=None, resource_id=""):
        self.bucket = bucket
        self.path = path
        self.exclude = exclude
        self.files = dict(files) if files else {}
        self.resource_id = resource_id

    @property
    def exists(self):
        return bool(self.resource_id)

    def copy(self, **changes):
        """Return a copy with the given attributes replaced."""
        data = {
            "bucket": self.bucket,
            "path": self.path,
            "exclude": self.exclude,
            "files": self.files,
            "resource_id": self.resource_id,
        }
        data.update(changes)
        return SiteState(**data)

    def __eq__(self, other):
        if not isinstance(other, SiteState):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"SiteState(bucket={self.bucket!r}, files={len(self.files)})"

    def to_dict(self):
        """Serialize to dictionary"""
        return {
            "bucket": self.bucket,
            "path": self.path,
            "exclude": self.exclude,
            "files": dict(self.files),
            "id": self.resource_id,
        }

    @classmethod
    def from_dict(cls, data):
        """Deserialize from dictionary"""
        return cls(
            bucket=data.get("bucket", ""),
            path=data.get("path", ""),
            exclude=data.get("exclude", ""),
            files=data.get("files", {}),
            resource_id=data.get("id", ""),
        )
