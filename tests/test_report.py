import io

import pytest

from syslab.blocks import BlockTable
from syslab.report import Timing, main, run_commands, timed

DIFF = "1c1\n< a\n---\n> b\n3c3\n< c\n---\n> d\n"


@pytest.fixture
def loaded_table(tmp_path):
    path = tmp_path / "result.txt"
    path.write_text(DIFF)
    table = BlockTable(2, path)
    table.load_result()
    return table


def test_timing_format():
    text = Timing(1.5, 0.25, 0.0).format("removeBlock")
    assert text == (
        "Operation: removeBlock\n"
        "Real time: 1.500000\n"
        "User time: 0.250000\n"
        "System time: 0.000000\n\n"
    )


def test_timed_measures_non_negative():
    with timed() as timing:
        sum(range(10000))
    assert timing.real >= 0
    assert timing.user >= 0
    assert timing.system >= 0


def test_wrong_command_logged(loaded_table):
    report = io.StringIO()
    run_commands(loaded_table, ["bogus"], report)
    assert report.getvalue().startswith("Operation: wrong function called\n")


def test_remove_operation_command(loaded_table):
    report = io.StringIO()
    run_commands(loaded_table, ["removeOperation", "0", "1"], report)
    assert loaded_table.operation_count(0) == 1
    assert report.getvalue().count("Operation: removeOperation\n") == 1


def test_remove_block_command(loaded_table):
    report = io.StringIO()
    run_commands(loaded_table, ["removeBlock", "0", "bogus"], report)
    assert loaded_table.block(0) is None
    assert report.getvalue().count("Operation: ") == 2


def test_missing_argument(loaded_table):
    with pytest.raises(ValueError):
        run_commands(loaded_table, ["removeOperation", "0"], io.StringIO())


def test_main_too_few_arguments(capsys):
    assert main(["createTable"]) == 1
    assert "more than 3 arguments" in capsys.readouterr().out


def test_main_requires_create_table(capsys):
    assert main(["removeBlock", "3"]) == 1
    assert "createTable" in capsys.readouterr().out


def test_main_writes_report(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["createTable", "3", "nothing"]) == 0
    assert "Operation: wrong function called" in (tmp_path / "raport.txt").read_text()