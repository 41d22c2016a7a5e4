# syslab

A set of small POSIX tools for work with files, processes and signals.
You can run them from the command line or use them as a Python library.
They need a POSIX system. Some of them start other programs: `diff`, `ls` and `paste`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Commands

### Diff blocks: `syslab-blocks`

This keeps a table of blocks. Each block holds the edit operations that `diff` reports for a pair of files.

```
syslab-blocks createTable 20 compareListOfTwoFiles "a.txt:b.txt c.txt:d.txt" removeOperation 0 1 removeBlock 0
```

- The first two arguments must be `createTable` and the table size.
- The output of each `diff` is appended to `result.txt`.
- The real, user and system time of each command that follows is appended to `raport.txt`.

In code, use `syslab.blocks.BlockTable` with these methods:
- `compare_pairs`
- `compare_pair`
- `load_result`
- `remove_block`
- `remove_operation`
- `block`
- `operation`
- `operation_count`
- `clear`

The helpers `count_operations`, `split_operations`, `parse_pairs` and `compare_files` are also available.
A full table raises `TableFullError`.

### Directory listing in child processes: `syslab-dirlist`

```
syslab-dirlist [path]
```

For each subdirectory of the path, this runs `ls -la` in a child process and prints the child's PID.
The path defaults to `.`.

### Matrix tests

```
syslab-generate 10 5 20
syslab-multiply tests_list 4 5.0 1
syslab-check tests_list
```

**`syslab-generate`** takes a count and the lower and upper bounds for the dimensions. It writes that many random pairs of compatible matrices under `tests/`, and writes their names, together with the name of each expected product file, to `tests_list`.

**`syslab-multiply`** takes the list file, the number of worker processes, a CPU time limit in seconds, and an output mode:
- `1`: the workers write their columns into one shared file, under a lock.
- `2`: each worker writes separate column files, which are then joined with `paste`.

Two more arguments are optional: a CPU time limit in seconds and a memory limit in megabytes. Both are set as resource limits on each worker. The command prints, for each worker, the number of tasks it worked on and its resource usage.

**`syslab-check`** multiplies each pair again and prints whether the result file matches the product.

In code, the main entry points are:
- `syslab.matrices.Matrix` and `read_matrix`
- `syslab.multiply.run`
- `syslab.multiply.column_range`

### Signals

```
syslab-dirwatch [path]
syslab-signals
syslab-pingpong <count> <1|2|3>
```

**`syslab-dirwatch`** prints the time and the directory listing every second. Ctrl+Z pauses and resumes the output. Ctrl+C quits.

**`syslab-signals`** prints a table for signals 1 to 22. For each signal it shows whether ignoring, handling, masking and pending take effect in the process and in its child:
- first across a fork;
- then across exec, for ignoring, masking and pending only.

`syslab.signaltable.probe` runs a single fork case.

**`syslab-pingpong`** has a parent send a number of signals to a child, which echoes each one back:
- variant `1` sends them without waiting;
- variant `2` waits for each echo;
- variant `3` uses real-time signals.

It prints the number of signals sent, the number received by the child and the number of echoes received by the parent.

## What is not included

The package does not include these tools:
- a fixed-length record file generator, sorter or copier;
- a directory search by modification or access time;
- a separate signal sender and catcher pair.