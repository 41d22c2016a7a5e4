import io
import re

from syslab.dirwatch import Watcher, list_directory


def test_list_directory_includes_dot_entries_and_files(tmp_path):
    (tmp_path / "alpha.txt").write_text("a")
    (tmp_path / "beta").mkdir()
    names = list_directory(tmp_path)
    assert names[:2] == [".", ".."]
    assert set(names[2:]) == {"alpha.txt", "beta"}


def test_tick_lists_directory(tmp_path):
    (tmp_path / "gamma.txt").write_text("g")
    out = io.StringIO()
    watcher = Watcher(tmp_path, out=out, clock=lambda: 0.0)
    text = watcher.tick()
    assert re.match(r"Time\t\d\d:\d\d:\d\d\ncontent directory: \n", text)
    assert "gamma.txt\n" in text
    assert text.endswith("\n\n")
    assert out.getvalue() == text


def test_toggle_pauses_and_resumes(tmp_path):
    out = io.StringIO()
    watcher = Watcher(tmp_path, out=out)
    watcher.toggle(20)
    assert watcher.paused is True
    assert "Otrzymano sygnal 20" in out.getvalue()
    assert watcher.tick() is None
    written = out.getvalue()
    watcher.toggle(20)
    assert watcher.paused is False
    assert out.getvalue() == written
    assert watcher.tick() is not None and "content directory" in out.getvalue()