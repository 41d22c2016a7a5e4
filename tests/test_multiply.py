import random

import pytest

from syslab.matrices import Matrix, check_tests, read_matrix
from syslab.multiply import (
    MatrixFile,
    column_range,
    load_tasks,
    main,
    multiply_columns,
    output_width,
    prepare_output,
    run,
    worker_task,
)


def _random_matrix(rng, rows, columns):
    return Matrix([[rng.randint(-100, 100) for _ in range(columns)] for _ in range(rows)])


def _write_tasks(tmp_path, shapes, seed=7):
    rng = random.Random(seed)
    lines = []
    matrices = []
    for index, (rows, inner, columns) in enumerate(shapes):
        a = _random_matrix(rng, rows, inner)
        b = _random_matrix(rng, inner, columns)
        a_path = tmp_path / f"{index}_A"
        b_path = tmp_path / f"{index}_B"
        c_path = tmp_path / f"{index}_C"
        a_path.write_text(a.format())
        b_path.write_text(b.format())
        lines.append(f"{a_path} {b_path} {c_path}\n")
        matrices.append((a, b, c_path))
    list_path = tmp_path / "tests_list"
    list_path.write_text("".join(lines))
    return list_path, matrices


@pytest.mark.parametrize("columns", [1, 2, 9, 10, 57, 1000])
def test_output_width_fits_largest_product(columns):
    width = output_width(columns)
    assert 10 ** (width - 3) >= columns * 100 * 100
    assert len(str(-columns * 100 * 100)) <= width


def test_output_width_grows_with_columns():
    assert output_width(1000) > output_width(1)


def test_output_width_rejects_zero():
    with pytest.raises(ValueError):
        output_width(0)


def test_prepare_output_fills_placeholders(tmp_path):
    path = tmp_path / "out"
    prepare_output(path, 3, 4, 5)
    lines = path.read_text().split("\n")
    assert lines[-1] == ""
    assert lines[:-1] == ["@" * 20] * 3


@pytest.mark.parametrize("columns,workers", [(5, 1), (5, 2), (7, 3), (10, 4), (3, 3), (4, 8)])
def test_column_ranges_partition_columns(columns, workers):
    covered = []
    for worker in range(min(workers, columns)):
        start, end = column_range(worker, workers, columns)
        covered.extend(range(start, end + 1))
    assert covered == list(range(columns))


def test_single_worker_takes_all_columns():
    assert column_range(0, 1, 5) == (0, 4)


def test_column_range_rejects_no_workers():
    with pytest.raises(ValueError):
        column_range(0, 0, 5)


def test_load_tasks_measures_and_prepares(tmp_path):
    list_path, matrices = _write_tasks(tmp_path, [(2, 3, 4)])
    tasks = load_tasks(list_path)
    assert len(tasks) == 1
    a, b, c = tasks[0]
    assert (a.rows, a.columns) == (2, 3)
    assert (b.rows, b.columns) == (3, 4)
    assert (c.rows, c.columns, c.width) == (2, 4, output_width(3))
    assert c.path == str(matrices[0][2])
    lines = matrices[0][2].read_text().splitlines()
    assert lines == ["@" * (4 * c.width)] * 2


def test_multiply_columns_returns_product_columns(tmp_path):
    list_path, matrices = _write_tasks(tmp_path, [(3, 2, 4)])
    (a, b, c), = load_tasks(list_path)
    product = matrices[0][0].multiply(matrices[0][1])
    computed = multiply_columns(a, b, c, 1, 2, separate=False)
    expected = [[row[column] for row in product.values] for column in (1, 2)]
    assert computed == expected


def test_multiply_columns_separate_files(tmp_path):
    list_path, matrices = _write_tasks(tmp_path, [(2, 2, 2)])
    (a, b, c), = load_tasks(list_path)
    computed = multiply_columns(a, b, c, 0, 1, separate=True)
    for column, values in enumerate(computed):
        part = (tmp_path / f"0_C_{column}").read_text().splitlines()
        assert [int(line) for line in part] == values
        assert all(len(line) == c.width for line in part)


def test_multiply_columns_rejects_mismatched_shapes(tmp_path):
    a_path = tmp_path / "a"
    b_path = tmp_path / "b"
    a_path.write_text("1 2 \n")
    b_path.write_text("1 \n")
    a = MatrixFile(str(a_path), 1, 2)
    b = MatrixFile(str(b_path), 1, 1)
    c = MatrixFile(str(tmp_path / "c"), 1, 1, output_width(2))
    with pytest.raises(ValueError):
        multiply_columns(a, b, c, 0, 0, separate=False)


def test_single_worker_completes_product(tmp_path):
    list_path, _ = _write_tasks(tmp_path, [(3, 4, 2), (1, 1, 3)])
    tasks = load_tasks(list_path)
    assert worker_task(0, 1, tasks, 1000.0, False) == 2
    assert check_tests(list_path) == [True, True]


def test_worker_without_columns_does_nothing(tmp_path):
    list_path, _ = _write_tasks(tmp_path, [(2, 2, 2)])
    tasks = load_tasks(list_path)
    assert worker_task(5, 6, tasks, 1000.0, False) == 0


def test_run_separate_files(tmp_path):
    list_path, matrices = _write_tasks(tmp_path, [(3, 3, 4), (2, 2, 2)])
    results = run(list_path, 2, 1000.0, separate=True)
    assert [count for _, count, _ in results] == [2, 2]
    assert check_tests(list_path) == [True, True]


def test_run_rejects_no_workers(tmp_path):
    list_path, _ = _write_tasks(tmp_path, [(2, 2, 2)])
    with pytest.raises(ValueError):
        run(list_path, 0, 1000.0)


def test_main_too_few_arguments(capsys):
    assert main(["list"]) == 1
    assert "Too few arguments" in capsys.readouterr().out


def test_main_reports_workers(tmp_path, capsys):
    list_path, _ = _write_tasks(tmp_path, [(2, 3, 2)])
    assert main([str(list_path), "2", "1000", "1"]) == 0
    out = capsys.readouterr().out
    assert out.count("Number of multiplying operations: 1 finished by process:") == 2
    assert check_tests(list_path) == [True]