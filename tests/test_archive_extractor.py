from __future__ import annotations

import os
import struct
import zipfile

import pytest

from sitesync.errors import ExtractionError
from sitesync.services.archive_extractor import ArchiveExtractor


def test_extract_lists_regular_files_sorted(make_zip):
    archive = make_zip({
        "index.html": "<html></html>",
        "assets/": b"",
        "assets/app.js": "console.log(1)",
        "about/index.html": "<html></html>",
    })

    with ArchiveExtractor() as extractor:
        entries = extractor.extract(archive)
        paths = [entry.relative_path for entry in entries]

        assert all(os.path.isfile(entry.full_path) for entry in entries)

    assert paths == ["about/index.html", "assets/app.js", "index.html"]


def test_staging_directory_is_removed_on_exit(make_zip):
    archive = make_zip({"index.html": "hi"})

    with ArchiveExtractor() as extractor:
        site_dir = extractor.site_dir
        extractor.extract(archive)
        assert os.path.isdir(site_dir)

    assert not os.path.exists(site_dir)


def test_staging_directory_is_removed_on_error(tmp_path):
    staging = tmp_path / "staging"

    with pytest.raises(ExtractionError):
        with ArchiveExtractor(str(staging)) as extractor:
            extractor.extract(str(tmp_path / "missing.zip"))

    assert os.listdir(staging) == []


def test_repeated_extraction_is_idempotent(make_zip):
    first = make_zip({"a.txt": "a", "b.txt": "b"}, name="first.zip")
    second = make_zip({"a.txt": "a"}, name="second.zip")

    with ArchiveExtractor() as extractor:
        extractor.extract(first)
        entries = extractor.extract(second)

    assert [entry.relative_path for entry in entries] == ["a.txt"]


def test_malformed_archive_raises(tmp_path):
    archive = tmp_path / "broken.zip"
    archive.write_bytes(b"definitely not a zip")

    with ArchiveExtractor() as extractor, pytest.raises(ExtractionError):
        extractor.extract(str(archive))


def test_corrupt_compressed_member_raises(tmp_path):
    archive = tmp_path / "corrupt.zip"
    page = "".join(f"<p>paragraph {i}</p>" for i in range(2000))
    with zipfile.ZipFile(archive, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("index.html", page)
    with zipfile.ZipFile(archive) as zf:
        info = zf.getinfo("index.html")

    data = bytearray(archive.read_bytes())
    name_len, extra_len = struct.unpack("<HH", data[info.header_offset + 26:info.header_offset + 30])
    start = info.header_offset + 30 + name_len + extra_len
    for pos in range(start, start + 20):
        data[pos] ^= 0xFF
    archive.write_bytes(bytes(data))

    with ArchiveExtractor() as extractor, pytest.raises(ExtractionError):
        extractor.extract(str(archive))


def test_member_escaping_root_is_rejected(make_zip):
    archive = make_zip({"../evil.txt": "boom"})

    with ArchiveExtractor() as extractor, pytest.raises(ExtractionError):
        extractor.extract(archive)


def test_site_dir_requires_context_manager():
    with pytest.raises(RuntimeError):
        ArchiveExtractor().site_dir
