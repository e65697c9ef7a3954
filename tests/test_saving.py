import tempfile
import os
from unittest.mock import MagicMock, patch
from modaled.editor import Editor
from modaled.model import TextModel, CursorPosition


def create_editor():
    return Editor(terminal=MagicMock())


def test_save_file_creates_file():
    """Test that save_file creates a new file with content."""
    editor = create_editor()
    editor.model = TextModel(lines=["First line", "Second line", "Third line"])

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_filename = os.path.join(temp_dir, "new.txt")
        result = editor.save_file(temp_filename)
        assert result == True

        with open(temp_filename, 'r', encoding='utf-8') as f:
            content = f.read()
        assert content == "First line\nSecond line\nThird line"

        # Filename and modified flag were updated
        assert editor.filename == temp_filename
        assert editor.modified == False


def test_save_file_utf8_encoding():
    """Test that files are saved with UTF-8 encoding."""
    editor = create_editor()
    editor.model = TextModel(lines=["Hello 世界", "Café", "Σωκράτης"])

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_filename = os.path.join(temp_dir, "utf8.txt")
        assert editor.save_file(temp_filename) == True
        with open(temp_filename, 'r', encoding='utf-8') as f:
            assert f.read() == "Hello 世界\nCafé\nΣωκράτης"


def test_load_file_sets_filename():
    """Test that load_file sets the filename and loads content."""
    editor = create_editor()

    with tempfile.NamedTemporaryFile(mode='w', suffix='.txt', delete=False, encoding='utf-8') as f:
        f.write("Line 1\nLine 2\nLine 3")
        temp_filename = f.name

    try:
        editor.model.cursor = CursorPosition(0, 0)
        editor.load_file(temp_filename)
        assert editor.filename == temp_filename
        assert editor.model.lines == ("Line 1", "Line 2", "Line 3")
        assert editor.model.cursor == CursorPosition(0, 0)
        assert editor.modified == False
    finally:
        if os.path.exists(temp_filename):
            os.remove(temp_filename)


def test_load_nonexistent_file():
    """A missing file gives an empty document still bound to the path."""
    editor = create_editor()
    editor.load_file("/nonexistent/file.txt")

    assert editor.filename == "/nonexistent/file.txt"
    assert editor.model.lines == ("",)
    assert editor.modified == False


def test_load_unreadable_path_is_not_bound():
    """A path that exists but cannot be read must not be overwritten by 's'."""
    editor = create_editor()
    with tempfile.TemporaryDirectory() as temp_dir:
        editor.load_file(temp_dir)
        assert editor.filename is None
        assert editor.model.lines == ("",)
        assert editor.status_message == f"Error: Cannot read {temp_dir}"


def test_save_failure_keeps_document_and_reports():
    editor = create_editor()
    editor.model = TextModel(lines=["keep me"])
    editor.modified = True

    with tempfile.TemporaryDirectory() as temp_dir:
        target = os.path.join(temp_dir, "missing_dir", "file.txt")
        result = editor.save_file(target)

    assert result == False
    assert editor.status_message == f"Error: Cannot save to {target}"
    assert editor.model.lines == ("keep me",)
    assert editor.modified == True
    assert editor.filename is None


def test_save_permission_denied_message():
    editor = create_editor()
    with tempfile.TemporaryDirectory() as temp_dir:
        target = os.path.join(temp_dir, "file.txt")
        with patch('modaled.buffer.os.replace', side_effect=PermissionError(13, "Permission denied")):
            result = editor.save_file(target)
        assert result == False
        assert editor.status_message == f"Error: Permission denied saving {target}"
        # Temp file was cleaned up and target never created
        assert os.listdir(temp_dir) == []


def test_save_disk_full_message():
    import errno
    editor = create_editor()
    with tempfile.TemporaryDirectory() as temp_dir:
        target = os.path.join(temp_dir, "file.txt")
        with patch('modaled.buffer.os.fsync', side_effect=OSError(errno.ENOSPC, "No space left")):
            assert editor.save_file(target) == False
        assert editor.status_message == "Error: No space left on device"


def test_save_load_round_trip_through_editor():
    editor = create_editor()
    lines = ["alpha", "", "\tgamma", "delta "]
    editor.model = TextModel(lines=lines)
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "round.txt")
        assert editor.save_file(path)
        other = create_editor()
        other.load_file(path)
        assert list(other.model.lines) == lines
