from __future__ import annotations

import pytest

from sitesync.errors import NotFoundError, UploadError
from sitesync.models.file_entry import FileEntry
from sitesync.models.plan import ReconciliationPlan
from sitesync.services.reconciler import DiffReconciler
from tests.helpers.fakes import FakeRemoteStore


@pytest.fixture
def entries(tmp_path):
    def _entries(*paths: str) -> list[FileEntry]:
        result = []
        for relative_path in paths:
            full_path = tmp_path / relative_path
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(relative_path.encode())
            result.append(FileEntry(full_path=str(full_path), relative_path=relative_path))
        return result

    return _entries


def test_plan_puts_every_desired_key_and_deletes_removed_ones():
    plan = DiffReconciler.plan({"a": "1", "b": "2"}, {"b": "2", "c": "3"})

    assert plan.to_put == {"b", "c"}
    assert plan.to_delete == {"a"}
    assert plan.unchanged == {"b"}
    assert plan.changed == {"c"}


def test_plan_sets_are_disjoint():
    plan = DiffReconciler.plan({"a": "1", "b": "2"}, {"a": "9"})

    assert not plan.to_put & plan.to_delete


def test_plan_from_empty_previous_puts_everything():
    assert DiffReconciler.plan({}, {"x": "1"}) == ReconciliationPlan(to_put={"x"})


def test_identical_states_still_reupload():
    plan = DiffReconciler.plan({"a": "1"}, {"a": "1"})

    assert plan.to_put == {"a"}
    assert not plan.to_delete
    assert not plan.is_empty()


def test_max_workers_must_be_positive(store):
    with pytest.raises(ValueError):
        DiffReconciler(store, max_workers=0)


@pytest.mark.parametrize("max_workers", [1, 4])
def test_apply_deletes_only_after_all_puts(entries, max_workers):
    store = FakeRemoteStore({"old.txt": "x", "stale/page.html": "y"})
    files = entries("index.html", "assets/app.js", "robots.txt")
    plan = DiffReconciler.plan(
        {"old%%txt": "x", "stale/page%%html": "y"},
        {entry.key: "fp" for entry in files},
    )

    uploaded, deleted = DiffReconciler(store, max_workers=max_workers).apply(plan, files, "site")

    assert (uploaded, deleted) == (3, 2)
    kinds = [kind for kind, _ in store.calls]
    assert kinds == ["put", "put", "put", "delete", "delete"]
    assert sorted(store.deletes) == ["old.txt", "stale/page.html"]


def test_apply_uploads_under_relative_path(entries, store):
    files = entries("assets/app.min.js")
    plan = DiffReconciler.plan({}, {files[0].key: "fp"})

    DiffReconciler(store).apply(plan, files, "site")

    assert list(store.puts) == ["assets/app.min.js"]
    assert store.puts["assets/app.min.js"]["body"] == b"assets/app.min.js"


def test_apply_decorates_uploads(entries, store):
    files = entries("index.html")
    plan = DiffReconciler.plan({}, {files[0].key: "fp"})

    DiffReconciler(store).apply(plan, files, "site")

    put = store.puts["index.html"]
    assert put["cache_control"] == "no-cache, no-store, must-revalidate"
    assert put["expires"] == "0"


def test_sequential_apply_stops_at_first_failure(entries):
    store = FakeRemoteStore({"old.txt": "x"}, fail_on={"b.txt"})
    files = entries("a.txt", "b.txt", "c.txt")
    plan = DiffReconciler.plan({"old%%txt": "x"}, {entry.key: "fp" for entry in files})

    with pytest.raises(UploadError):
        DiffReconciler(store, max_workers=1).apply(plan, files, "site")

    assert list(store.puts) == ["a.txt"]
    assert store.deletes == []


def test_concurrent_apply_failure_skips_deletes(entries):
    store = FakeRemoteStore({"old.txt": "x"}, fail_on={"b.txt"})
    files = entries("a.txt", "b.txt", "c.txt", "d.txt")
    plan = DiffReconciler.plan({"old%%txt": "x"}, {entry.key: "fp" for entry in files})

    with pytest.raises(UploadError):
        DiffReconciler(store, max_workers=3).apply(plan, files, "site")

    assert "b.txt" not in store.puts
    assert store.deletes == []


def test_apply_requires_entry_for_every_put(entries, store):
    plan = ReconciliationPlan(to_put={"missing%%txt"})

    with pytest.raises(ValueError):
        DiffReconciler(store).apply(plan, entries("a.txt"), "site")

    assert store.calls == []


def test_observed_state_encodes_keys_and_cleans_etags():
    store = FakeRemoteStore({"index.html": "abc", "assets/app.js.map": "def-2"})

    state = DiffReconciler(store).observed_state("site")

    assert state == {"index%%html": "abc", "assets/app%%js%%map": "def-2"}


def test_observed_state_applies_exclusion():
    store = FakeRemoteStore({"index.html": "abc", "assets/app.js.map": "def"})

    assert DiffReconciler(store).observed_state("site", exclude=".map") == {"index%%html": "abc"}


def test_missing_bucket_reads_as_empty():
    store = FakeRemoteStore(missing=True)

    assert DiffReconciler(store).observed_state("site") == {}


def test_missing_bucket_can_be_reported():
    store = FakeRemoteStore(missing=True)

    with pytest.raises(NotFoundError):
        DiffReconciler(store).observed_state("site", missing_ok=False)


def test_delete_all_removes_every_object():
    store = FakeRemoteStore({"a.txt": "1", "b/c.txt": "2"})

    assert DiffReconciler(store).delete_all("site") == 2
    assert store.objects == {}
