import threading
from pathlib import Path

from zelkova.watcher import ChangeKind, FileChange, diff_snapshots, scan_files, start_watcher


def _make_vault(root: Path) -> None:
    (root / "a.md").write_text("a")
    (root / "notes.txt").write_text("x")
    (root / "sub").mkdir()
    (root / "sub" / "b.md").write_text("b")
    (root / ".zelkova").mkdir()
    (root / ".zelkova" / "hidden.md").write_text("h")


def test_scan_finds_markdown_recursively(tmp_path):
    _make_vault(tmp_path)
    snapshot = scan_files(tmp_path)
    assert set(snapshot) == {tmp_path / "a.md", tmp_path / "sub" / "b.md"}


def test_scan_skips_hidden_directories(tmp_path):
    _make_vault(tmp_path)
    assert tmp_path / ".zelkova" / "hidden.md" not in scan_files(tmp_path)


def test_scan_missing_directory_is_empty(tmp_path):
    assert scan_files(tmp_path / "absent") == {}


def test_scan_records_mtime(tmp_path):
    note = tmp_path / "a.md"
    note.write_text("a")
    assert scan_files(tmp_path)[note] == note.stat().st_mtime_ns


def test_diff_reports_new_modified_deleted():
    a, b, c = Path("a.md"), Path("b.md"), Path("c.md")
    changes = diff_snapshots({a: 1, b: 1}, {a: 2, c: 1})
    assert changes == [
        FileChange(a, ChangeKind.MODIFIED),
        FileChange(c, ChangeKind.NEW),
        FileChange(b, ChangeKind.DELETED),
    ]


def test_diff_of_equal_snapshots_is_empty():
    snapshot = {Path("a.md"): 5}
    assert diff_snapshots(snapshot, dict(snapshot)) == []


def test_watcher_reports_new_file(tmp_path):
    seen = []
    found = threading.Event()

    def on_change(change):
        seen.append(change)
        found.set()

    stop = start_watcher(tmp_path, on_change, interval=0.05)
    try:
        note = tmp_path / "new.md"
        note.write_text("hello")
        assert found.wait(5)
    finally:
        stop.set()
    assert seen[0] == FileChange(note, ChangeKind.NEW)


def test_watcher_survives_callback_errors(tmp_path):
    calls = []
    second = threading.Event()

    def on_change(change):
        calls.append(change.path)
        if len(calls) == 1:
            raise RuntimeError("boom")
        second.set()

    stop = start_watcher(tmp_path, on_change, interval=0.05)
    try:
        (tmp_path / "one.md").write_text("1")
        (tmp_path / "other.txt").write_text("ignored")
        deadline = threading.Event()
        while not calls and not deadline.wait(0.05):
            pass
        (tmp_path / "two.md").write_text("2")
        assert second.wait(5)
    finally:
        stop.set()
    assert tmp_path / "two.md" in calls
    assert all(path.suffix == ".md" for path in calls)