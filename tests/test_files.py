import os

import pytest

from labelctl.errors import FileQueueError
from labelctl.files import confirm_batch_if_needed, discover_pending, mark_used
from labelctl.models import PENDING, USED, QueuedFile


def test_discover_pending_filters_by_extension(label_dir):
    (label_dir / "b.zpl").write_text("^XA^XZ")
    (label_dir / "a.ZPL").write_text("^XA^XZ")
    (label_dir / "c.used").write_text("^XA^XZ")
    (label_dir / "notes.txt").write_text("hi")
    (label_dir / "dir.zpl").mkdir()

    files = discover_pending(label_dir, "zpl")
    assert [f.name for f in files] == ["a.ZPL", "b.zpl"]
    assert all(f.state == PENDING for f in files)


def test_discover_pending_empty_directory(label_dir):
    assert discover_pending(label_dir) == []


def test_discover_pending_missing_directory(tmp_path):
    with pytest.raises(FileQueueError):
        discover_pending(tmp_path / "nope")


def test_confirm_single_file_does_not_prompt():
    asked = []
    assert confirm_batch_if_needed(1, asked.append) is True
    assert confirm_batch_if_needed(0, asked.append) is True
    assert asked == []


@pytest.mark.parametrize("answer,expected", [
    ("y", True), ("Y", True), (" yes ", True),
    ("n", False), ("", False), ("sure", False), (None, False),
])
def test_confirm_multiple_files(answer, expected):
    asked = []

    def _prompt(text):
        asked.append(text)
        return answer

    assert confirm_batch_if_needed(2, _prompt) is expected
    assert len(asked) == 1


def test_mark_used_renames_extension(label_dir):
    path = label_dir / "label1.zpl"
    path.write_text("^XA^XZ")
    qf = mark_used(QueuedFile(path=path))

    assert qf.state == USED
    assert qf.path == label_dir / "label1.used"
    assert not path.exists()
    assert (label_dir / "label1.used").read_text() == "^XA^XZ"


def test_mark_used_custom_extension(label_dir):
    path = label_dir / "label1.zpl"
    path.write_text("x")
    qf = mark_used(QueuedFile(path=path), ".printed")
    assert qf.path.name == "label1.printed"


def test_mark_used_missing_file_leaves_state(label_dir):
    qf = QueuedFile(path=label_dir / "gone.zpl")
    with pytest.raises(FileQueueError):
        mark_used(qf)
    assert qf.state == PENDING
    assert qf.path.name == "gone.zpl"


def test_mark_used_twice_is_rejected(label_dir):
    path = label_dir / "label1.zpl"
    path.write_text("x")
    qf = mark_used(QueuedFile(path=path))
    with pytest.raises(FileQueueError):
        mark_used(qf)


def test_used_files_are_not_rediscovered(label_dir):
    (label_dir / "label1.zpl").write_text("x")
    for qf in discover_pending(label_dir):
        mark_used(qf)
    assert discover_pending(label_dir) == []
    assert sorted(os.listdir(label_dir)) == ["label1.used"]
