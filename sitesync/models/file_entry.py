"""
File entry model for files discovered in an extracted archive
"""
import posixpath

from ..utils.key_codec import encode_key


class FileEntry:
    """
    Represents one regular file extracted from a site archive.

    ``relative_path`` is the logical identity of the file and the only
    field that survives into a state-map key. The delivery metadata
    fields stay empty until :class:`MetadataDecorator` fills them in.
    """

    def __init__(self, full_path, relative_path, fingerprint="", content_type="",
                 content_encoding="", cache_control="", expires=""):
        """
        Initialize a FileEntry.

        Args:
            full_path: Absolute path of the file inside the staging directory
            relative_path: POSIX path relative to the extraction root
            fingerprint: Content hash in S3 ETag format
            content_type: MIME type sent with the upload
            content_encoding: Content-Encoding header value
            cache_control: Cache-Control header value
            expires: Expires header value
        """
        self.full_path = full_path
        self.relative_path = relative_path
        self.fingerprint = fingerprint
        self.content_type = content_type
        self.content_encoding = content_encoding
        self.cache_control = cache_control
        self.expires = expires

    @property
    def key(self):
        """State-map key for this file."""
        return encode_key(self.relative_path)

    @property
    def file_name(self):
        """Last component of the relative path."""
        return posixpath.basename(self.relative_path)

    def __repr__(self):
        return f"FileEntry({self.relative_path!r}, fingerprint={self.fingerprint!r})"
