from __future__ import annotations

import zipfile
from typing import TYPE_CHECKING

import pytest

from tests.helpers.fakes import FakeRemoteStore

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture
def make_zip(tmp_path: Path) -> Callable[..., str]:
    """Build a zip archive from ``{member name: content}``.

    Names ending in ``/`` become directory entries.
    """

    def _make(files: dict[str, bytes | str], name: str = "site.zip") -> str:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as archive:
            for member, content in files.items():
                if isinstance(content, str):
                    content = content.encode()
                archive.writestr(member, content)
        return str(path)

    return _make


@pytest.fixture
def store() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def sitesync_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    monkeypatch.setenv("SITESYNC_HOME", str(home))
    return home
