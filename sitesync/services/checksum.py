"""
Content fingerprints in S3 ETag format.

Objects uploaded in one request get the hex MD5 of their body as ETag.
Multipart uploads get the MD5 of the concatenated part digests followed
by ``-<parts>``. Uploads are split into ``PART_SIZE`` parts (see
:mod:`sitesync.services.aws.operations`), so a local fingerprint equals
the remote ETag for unchanged content.
"""
import hashlib

from ..errors import HashError

# Part size for multipart uploads
PART_SIZE = 5 * 1024 * 1024


def _combine(part_digests):
    if len(part_digests) <= 1:
        if not part_digests:
            return hashlib.md5(b"").hexdigest()
        return part_digests[0].hex()

    combined = hashlib.md5(b"".join(part_digests)).hexdigest()
    return f"{combined}-{len(part_digests)}"


def fingerprint_bytes(content: bytes, part_size: int = PART_SIZE) -> str:
    """Fingerprint an in-memory byte string.

    Example:
        >>> fingerprint_bytes(b"hello")
        '5d41402abc4b2a76b9719d911017c592'
    """
    digests = [
        hashlib.md5(content[pos:pos + part_size]).digest()
        for pos in range(0, len(content), part_size)
    ]
    return _combine(digests)


def fingerprint(path: str, part_size: int = PART_SIZE) -> str:
    """Fingerprint the file at *path*.

    The file is read one part at a time, which yields the same digest as
    hashing the whole content while keeping memory bounded.

    Raises:
        HashError: If the file cannot be read
    """
    digests = []
    try:
        with open(path, 'rb') as fh:
            for chunk in iter(lambda: fh.read(part_size), b""):
                digests.append(hashlib.md5(chunk).digest())
    except OSError as e:
        raise HashError(f"Cannot read {path}: {e}") from e

    return _combine(digests)


def clean_etag(etag: str) -> str:
    """Strip the quoting S3 puts around ETag values."""
    return (etag or "").strip('\\"')
