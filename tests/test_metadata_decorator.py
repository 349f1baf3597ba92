from __future__ import annotations

import gzip

import pytest

from sitesync.errors import HashError
from sitesync.models.file_entry import FileEntry
from sitesync.services.metadata_decorator import (
    EXPIRES_NOW,
    JAVASCRIPT_TYPES,
    NO_CACHE,
    MetadataDecorator,
    sniff_content_type,
)

PNG_HEADER = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


@pytest.fixture
def decorator() -> MetadataDecorator:
    return MetadataDecorator()


@pytest.fixture
def write_entry(tmp_path):
    def _write(relative_path: str, content: bytes) -> FileEntry:
        full_path = tmp_path / relative_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_bytes(content)
        return FileEntry(full_path=str(full_path), relative_path=relative_path)

    return _write


def test_index_page_is_never_cached(decorator, write_entry):
    entry = decorator.decorate(write_entry("index.html", b"<html></html>"))

    assert entry.content_type.startswith("text/html")
    assert entry.cache_control == NO_CACHE
    assert entry.expires == EXPIRES_NOW


def test_nested_index_page_is_never_cached(decorator, write_entry):
    entry = decorator.decorate(write_entry("docs/index.html", b"<html></html>"))

    assert entry.cache_control == NO_CACHE


@pytest.mark.parametrize("name", ["about.html", "index.htm", "index.html.bak"])
def test_other_files_get_no_cache_policy(decorator, write_entry, name):
    entry = decorator.decorate(write_entry(name, b"<html></html>"))

    assert entry.cache_control == ""
    assert entry.expires == ""


def test_type_comes_from_extension(decorator, write_entry):
    entry = decorator.decorate(write_entry("logo.svg", b"<svg/>"))

    assert entry.content_type == "image/svg+xml"
    assert entry.content_encoding == ""


def test_plain_script_keeps_javascript_type(decorator, write_entry):
    entry = decorator.decorate(write_entry("app.js", b"console.log('hi');"))

    assert entry.content_type in JAVASCRIPT_TYPES
    assert entry.content_encoding == ""


def test_gzipped_script_is_served_as_javascript(decorator, write_entry):
    entry = decorator.decorate(write_entry("assets/app.js", gzip.compress(b"console.log(1);")))

    assert entry.content_type == "application/javascript"
    assert entry.content_encoding == "gzip"


def test_gzipped_non_script_gets_no_encoding(decorator, write_entry):
    entry = decorator.decorate(write_entry("data.bin", gzip.compress(b"payload")))

    assert entry.content_encoding == ""


def test_unknown_extension_is_sniffed(decorator, write_entry):
    entry = decorator.decorate(write_entry("image.blob", PNG_HEADER))

    assert entry.content_type == "image/png"


def test_missing_extension_is_sniffed(decorator, write_entry):
    entry = decorator.decorate(write_entry("README", b"just some words"))

    assert entry.content_type == "text/plain; charset=utf-8"


def test_unreadable_file_raises_hash_error(decorator, tmp_path):
    entry = FileEntry(full_path=str(tmp_path / "gone"), relative_path="gone")

    with pytest.raises(HashError):
        decorator.decorate(entry)


def test_decorate_all_keeps_order(decorator, write_entry):
    entries = [write_entry("b.css", b"body{}"), write_entry("a.txt", b"a")]

    result = decorator.decorate_all(entries)

    assert [entry.relative_path for entry in result] == ["b.css", "a.txt"]
    assert result[0].content_type == "text/css"


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"  <!DOCTYPE html><html>", "text/html; charset=utf-8"),
        (b"<?xml version='1.0'?>", "text/xml; charset=utf-8"),
        (b"%PDF-1.7", "application/pdf"),
        (b"GIF89a....", "image/gif"),
        (b"\x1f\x8b\x08\x00", "application/x-gzip"),
        (b"\x00\x01\x02\x03", "application/octet-stream"),
        (b"", "text/plain; charset=utf-8"),
    ],
)
def test_sniff_content_type(data, expected):
    assert sniff_content_type(data) == expected
