# tests/test_file_ops.py
from icoder.models.agent import FileOperation
from icoder.models.editor import FileItem
from icoder.services.file_ops import apply_file_operations, language_for


def op(type_, path, content=None):
    return FileOperation(type=type_, path=path, content=content)


def test_language_from_extension():
    assert language_for("app.tsx") == "typescript"
    assert language_for("README.MD") == "markdown"
    assert language_for("Makefile") == "plaintext"
    assert language_for("notes.txt") == "plaintext"


def test_create_appends_new_file_with_language():
    result = apply_file_operations([], [op("create", "main.py", "print(1)")])
    assert len(result.files) == 1
    f = result.files[0]
    assert (f.name, f.content, f.language, f.is_directory) == ("main.py", "print(1)", "python", False)
    assert f.id
    assert result.lines == ["Created main.py"]


def test_write_on_absent_path_behaves_like_create():
    via_write = apply_file_operations([], [op("write", "a.js", "x")]).files
    via_create = apply_file_operations([], [op("create", "a.js", "x")]).files
    strip = lambda files: [(f.name, f.content, f.language) for f in files]
    assert strip(via_write) == strip(via_create)


def test_upsert_keeps_id_and_position():
    files = [
        FileItem(id="1", name="a.txt", content="old"),
        FileItem(id="2", name="b.txt", content="b"),
    ]
    result = apply_file_operations(files, [op("create", "a.txt", "new")])
    assert [(f.id, f.name, f.content) for f in result.files] == [("1", "a.txt", "new"), ("2", "b.txt", "b")]
    # the input snapshot is left alone
    assert files[0].content == "old"


def test_later_operations_on_same_path_win():
    ops = [op("create", "x.txt", "1"), op("write", "x.txt", "2"), op("write", "x.txt", "3")]
    result = apply_file_operations([], ops)
    assert [(f.name, f.content) for f in result.files] == [("x.txt", "3")]
    assert result.lines == ["Created x.txt", "Updated x.txt", "Updated x.txt"]


def test_delete_missing_path_is_noop():
    files = [FileItem(id="1", name="keep.txt", content="k")]
    result = apply_file_operations(files, [op("delete", "ghost.txt")])
    assert result.files == files


def test_create_then_delete_leaves_nothing():
    result = apply_file_operations([], [op("create", "tmp.txt", "t"), op("delete", "tmp.txt")])
    assert result.files == []


def test_read_is_a_noop_without_line():
    files = [FileItem(id="1", name="a.txt", content="a")]
    result = apply_file_operations(files, [op("read", "a.txt")])
    assert result.files == files
    assert result.lines == []


def test_missing_content_becomes_empty_string():
    result = apply_file_operations([], [op("create", "empty.txt")])
    assert result.files[0].content == ""


def test_applying_same_ops_twice_is_idempotent_on_content():
    ops = [op("create", "a.txt", "A"), op("write", "b.txt", "B"), op("delete", "c.txt")]
    once = apply_file_operations([], ops).files
    twice = apply_file_operations(once, ops).files
    assert [(f.id, f.name, f.content) for f in once] == [(f.id, f.name, f.content) for f in twice]
