# tests/test_materializer.py
from pathlib import Path

from icoder.models.editor import FileItem
from icoder.services.materializer import WorkspaceMaterializer


def listing(root: Path):
    return sorted(str(p.relative_to(root)) for p in root.rglob("*") if p.is_file())


def test_save_with_clear_first_leaves_exactly_the_given_files(materializer):
    materializer.save([{"name": "old.html", "content": "old"}, {"name": "js/old.js", "content": "1"}])
    files = [{"name": "index.html", "content": "<h1>new</h1>"}, {"name": "src/app.js", "content": "go()"}]
    result = materializer.save(files, clear_first=True)

    assert result.success
    assert result.written == 2
    assert listing(materializer.preview_root) == ["index.html", "src/app.js"]
    assert (materializer.preview_root / "src" / "app.js").read_text() == "go()"


def test_save_without_clear_keeps_previous_files(materializer):
    materializer.save([{"name": "a.txt", "content": "a"}])
    materializer.save([{"name": "b.txt", "content": "b"}])
    assert listing(materializer.preview_root) == ["a.txt", "b.txt"]


def test_save_reports_preview_url(materializer):
    assert materializer.save([]).preview_url == "http://testserver/preview/index.html"


def test_clear_first_with_no_files_empties_preview(materializer):
    materializer.save([{"name": "stale.txt", "content": "s"}])
    assert materializer.save([], clear_first=True).success
    assert listing(materializer.preview_root) == []


def test_unwritable_entries_are_skipped(materializer):
    files = [
        {"name": "ok.txt", "content": "fine"},
        {"name": "binary.bin", "content": 42},
        {"content": "nameless"},
        None,
        {"name": "dir", "content": "", "isDirectory": True},
    ]
    result = materializer.save(files, clear_first=True)
    assert result.success
    assert listing(materializer.preview_root) == ["ok.txt"]


def test_non_list_files_writes_nothing(materializer):
    assert materializer.save("not a list").success
    assert materializer.sync(None).success


def test_accepts_file_items(materializer):
    materializer.save([FileItem(id="1", name="m.md", content="# hi")], clear_first=True)
    assert (materializer.preview_root / "m.md").read_text() == "# hi"


def test_paths_are_kept_inside_root(materializer, tmp_path):
    materializer.save(
        [{"name": "../outside.txt", "content": "x"}, {"name": "/abs.txt", "content": "y"}],
        clear_first=True,
    )
    assert not (tmp_path / "outside.txt").exists()
    assert listing(materializer.preview_root) == ["abs.txt"]


def test_sync_never_removes_earlier_files(materializer):
    materializer.sync([{"name": "node_modules/pkg/index.js", "content": "module"}])
    result = materializer.sync([{"name": "package.json", "content": "{}"}])
    assert result.success
    assert listing(materializer.workspace_root) == ["node_modules/pkg/index.js", "package.json"]


def test_sync_does_not_touch_preview(materializer):
    materializer.sync([{"name": "only-in-workspace.txt", "content": "w"}])
    assert listing(materializer.preview_root) == []


def test_filesystem_error_is_reported(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("i am a file")
    m = WorkspaceMaterializer(blocker / "preview", blocker / "workspace")

    saved = m.save([{"name": "a.txt", "content": "a"}], clear_first=True)
    synced = m.sync([{"name": "a.txt", "content": "a"}])

    assert not saved.success and saved.error
    assert not synced.success and synced.error


def test_nul_in_name_is_reported_not_raised(materializer):
    result = materializer.save([{"name": "a\x00b", "content": "x"}], clear_first=True)
    assert not result.success
    assert result.error

    synced = materializer.sync([{"name": "a\x00b", "content": "x"}])
    assert not synced.success and synced.error


def test_unencodable_content_is_reported_not_raised(materializer):
    result = materializer.save([{"name": "a.txt", "content": "\ud800"}])
    assert not result.success
    assert result.error
