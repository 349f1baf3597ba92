"""
Delivery metadata for uploaded files.

Derives Content-Type, Content-Encoding, Cache-Control and Expires for
each file from its extension, its leading bytes and its name.
"""
import mimetypes
import posixpath
from typing import Iterable, List

from ..errors import HashError
from ..models.file_entry import FileEntry
from ..utils.logger import get_logger

log = get_logger(__name__)

SNIFF_LENGTH = 512

JAVASCRIPT_TYPE = "application/javascript"
JAVASCRIPT_TYPES = frozenset({
    "application/javascript",
    "application/x-javascript",
    "text/javascript",
})
GZIP_TYPES = frozenset({"application/gzip", "application/x-gzip"})
GZIP_ENCODING = "gzip"

INDEX_FILE_NAME = "index.html"
NO_CACHE = "no-cache, no-store, must-revalidate"
EXPIRES_NOW = "0"

TEXT_PLAIN = "text/plain; charset=utf-8"
OCTET_STREAM = "application/octet-stream"

_HTML_TAGS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1",
    b"<DIV", b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B",
    b"<BODY", b"<BR", b"<P", b"<!--",
)

# (signature, offset, content type); first match wins
_SIGNATURES = (
    (b"%PDF-", 0, "application/pdf"),
    (b"%!PS-Adobe-", 0, "application/postscript"),
    (b"\xfe\xff", 0, "text/plain; charset=utf-16be"),
    (b"\xff\xfe", 0, "text/plain; charset=utf-16le"),
    (b"\xef\xbb\xbf", 0, TEXT_PLAIN),
    (b"GIF87a", 0, "image/gif"),
    (b"GIF89a", 0, "image/gif"),
    (b"\x89PNG\r\n\x1a\n", 0, "image/png"),
    (b"\xff\xd8\xff", 0, "image/jpeg"),
    (b"BM", 0, "image/bmp"),
    (b"WEBPVP", 8, "image/webp"),
    (b"\x00\x00\x01\x00", 0, "image/x-icon"),
    (b"wOFF", 0, "font/woff"),
    (b"wOF2", 0, "font/woff2"),
    (b"OTTO", 0, "font/otf"),
    (b"\x00\x01\x00\x00", 0, "font/ttf"),
    (b"OggS\x00", 0, "application/ogg"),
    (b"ID3", 0, "audio/mpeg"),
    (b"\x1f\x8b\x08", 0, "application/x-gzip"),
    (b"PK\x03\x04", 0, "application/zip"),
    (b"Rar!\x1a\x07", 0, "application/x-rar-compressed"),
    (b"\x00asm", 0, "application/wasm"),
)

_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)


def _is_tag_terminated(data: bytes, length: int) -> bool:
    return len(data) > length and data[length:length + 1] in (b" ", b">")


def sniff_content_type(data: bytes) -> str:
    """Guess a MIME type from the leading bytes of a file.

    Recognises markup, common image/font/archive signatures and falls back
    to plain text or ``application/octet-stream``.
    """
    head = data[:SNIFF_LENGTH]
    stripped = head.lstrip(b"\t\n\x0c\r ")
    upper = stripped.upper()

    for tag in _HTML_TAGS:
        if upper.startswith(tag) and _is_tag_terminated(upper, len(tag)):
            return "text/html; charset=utf-8"
    if stripped.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"

    for signature, offset, content_type in _SIGNATURES:
        if head[offset:offset + len(signature)] == signature:
            return content_type

    if any(byte in _BINARY_BYTES for byte in head):
        return OCTET_STREAM
    return TEXT_PLAIN


def _base_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


class MetadataDecorator:
    """Fills in delivery metadata on :class:`FileEntry` objects.

    Extension lookups use a private ``mimetypes.MimeTypes`` instance
    built from Python's bundled table, so ``/etc/mime.types`` and friends
    cannot change the result between machines.
    """

    def __init__(self):
        self._types = mimetypes.MimeTypes()

    def type_by_extension(self, relative_path: str) -> str:
        ext = posixpath.splitext(relative_path)[1]
        if not ext:
            return ""
        types_map = self._types.types_map[True]
        return types_map.get(ext) or types_map.get(ext.lower(), "")

    def decorate(self, entry: FileEntry) -> FileEntry:
        """Enrich *entry* in place and return it.

        Order matters: the extension lookup comes first, sniffing fills
        gaps and exposes pre-compressed script bundles, and the entry
        page rule overrides any cache policy.

        Raises:
            HashError: If the file cannot be read for sniffing
        """
        content_type = self.type_by_extension(entry.relative_path)
        sniffed = ""

        if not content_type or _base_type(content_type) in JAVASCRIPT_TYPES:
            sniffed = sniff_content_type(self._read_head(entry.full_path))
            if not content_type:
                content_type = sniffed

        ext = posixpath.splitext(entry.relative_path)[1].lower()
        is_gzip = _base_type(sniffed) in GZIP_TYPES or _base_type(content_type) in GZIP_TYPES
        if is_gzip and ext == ".js":
            entry.content_encoding = GZIP_ENCODING
            content_type = JAVASCRIPT_TYPE

        entry.content_type = content_type

        if entry.file_name == INDEX_FILE_NAME:
            entry.cache_control = NO_CACHE
            entry.expires = EXPIRES_NOW

        log.debug(
            "Decorated %s type=%s encoding=%s cache=%s",
            entry.relative_path, entry.content_type,
            entry.content_encoding or "-", entry.cache_control or "-",
        )
        return entry

    def decorate_all(self, entries: Iterable[FileEntry]) -> List[FileEntry]:
        return [self.decorate(entry) for entry in entries]

    @staticmethod
    def _read_head(path: str) -> bytes:
        try:
            with open(path, 'rb') as fh:
                return fh.read(SNIFF_LENGTH)
        except OSError as e:
            raise HashError(f"Cannot read {path}: {e}") from e
