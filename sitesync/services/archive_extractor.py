"""
Site archive extraction into a scoped staging directory.
"""
import os
import shutil
import tempfile
import zipfile
import zlib
from typing import List, Optional

from ..errors import ExtractionError
from ..models.file_entry import FileEntry
from ..utils.logger import get_logger

log = get_logger(__name__)

SITE_DIR_NAME = "site"


class ArchiveExtractor:
    """Unpacks a zip archive and lists the regular files it contains.

    Use as a context manager: the staging directory is acquired on entry
    and removed on every exit path, so the returned entries are only
    valid inside the ``with`` block.

    Args:
        staging_root: Directory to stage files in. ``None`` allocates a
            fresh temporary directory per invocation.

    Example:
        >>> with ArchiveExtractor() as extractor:
        ...     entries = extractor.extract("site.zip")
    """

    def __init__(self, staging_root: Optional[str] = None):
        self.staging_root = staging_root
        self._workdir = None

    def __enter__(self):
        if self.staging_root:
            os.makedirs(self.staging_root, exist_ok=True)
            self._workdir = tempfile.mkdtemp(prefix="sitesync-", dir=self.staging_root)
        else:
            self._workdir = tempfile.mkdtemp(prefix="sitesync-")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    @property
    def site_dir(self) -> str:
        if self._workdir is None:
            raise RuntimeError("ArchiveExtractor must be used as a context manager")
        return os.path.join(self._workdir, SITE_DIR_NAME)

    def cleanup(self):
        """Remove the staging directory."""
        if self._workdir and os.path.exists(self._workdir):
            shutil.rmtree(self._workdir)
        self._workdir = None

    def extract(self, archive_path: str) -> List[FileEntry]:
        """Extract *archive_path* and return its files.

        The site directory is wiped before extraction so repeated calls
        with the same archive produce the same tree.

        Args:
            archive_path: Path to a zip archive

        Returns:
            FileEntry list sorted by relative path

        Raises:
            ExtractionError: If the archive is missing, malformed or
                contains members outside the extraction root
        """
        log.debug("Extracting archive. path=%s", archive_path)

        site_dir = self.site_dir
        if os.path.exists(site_dir):
            shutil.rmtree(site_dir)
        os.makedirs(site_dir)

        try:
            with zipfile.ZipFile(archive_path) as archive:
                self._check_members(archive, site_dir)
                archive.extractall(site_dir)
        except (OSError, EOFError, RuntimeError, NotImplementedError, zlib.error,
                zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise ExtractionError(f"Cannot extract {archive_path}: {e}") from e

        entries = self._walk(site_dir)
        log.info("Extracted %d file(s) from %s", len(entries), os.path.basename(archive_path))
        return entries

    @staticmethod
    def _check_members(archive, site_dir):
        root = os.path.realpath(site_dir)
        for name in archive.namelist():
            target = os.path.realpath(os.path.join(root, name))
            if target != root and not target.startswith(root + os.sep):
                raise ExtractionError(f"Archive member escapes extraction root: {name}")

    @staticmethod
    def _walk(site_dir) -> List[FileEntry]:
        entries = []
        for root, dirs, files in os.walk(site_dir):
            dirs.sort()
            for filename in files:
                full_path = os.path.join(root, filename)
                if not os.path.isfile(full_path) or os.path.islink(full_path):
                    continue
                rel_path = os.path.relpath(full_path, site_dir).replace(os.sep, '/')
                entries.append(FileEntry(full_path=full_path, relative_path=rel_path))

        entries.sort(key=lambda entry: entry.relative_path)
        return entries
