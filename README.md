# maclnr

A small command-line tool for managing directories and inspecting the system.
It lists the files in a directory tree by size, removes `.DS_Store` files or
large files, and shows memory use, running processes and storage devices.
The `list` and `scan` commands have a `--watch` mode that clears the screen and
refreshes the output every two seconds until you press Ctrl-C.

## Installation

```
pip install .
```

This installs the `maclnr` command. It runs on macOS and Linux.

## Usage

```
maclnr --version
maclnr --help
```

### List files by size

```
maclnr list --dir ~/Downloads
maclnr list --dir ~/Downloads --min-size 1048576 --output json
maclnr list -d . -o yaml --watch
```

`list` walks the directory recursively (without following symbolic links) and
prints every file whose size is at least `--min-size` bytes (default 0),
largest first. `--output` / `-o` takes `txt` (a table, the default), `json` or
`yaml`. JSON records have the keys `Path` and `Size`; YAML records have `path`
and `size`. `--dir` / `-d` is required.

### Clean a directory

```
maclnr clean --dir ./build --ds-store --dry-run
maclnr clean --dir ./build --min-size 10485760 --verbose --confirm
```

`clean` asks `Are you sure you want to clean the directory ...? (y/N)` before
it deletes anything; only `y` or `yes` goes ahead. Options:

- `--confirm` skips the prompt.
- `--dry-run` prints what would be removed and removes nothing.
- `--verbose` prints each file as it is removed.
- `--ds-store` also removes entries named `.DS_Store`.
- `--min-size N` removes every file of at least `N` bytes.

Files of at least `--min-size` bytes are removed whether or not `--ds-store`
is given, and the default size is 0, which matches every file. Run with
`--dry-run` first.

### Inspect the system

```
maclnr scan memory
maclnr scan process --output json
maclnr scan storage --watch
```

- `memory` runs `vm_stat` on macOS and shows each statistic in bytes; on Linux
  it runs `free -h` and prints its output as it is (or, for JSON and YAML, the
  header words paired with the words of the first data line).
- `process` runs `ps aux` and shows user, PID, %CPU, %MEM and command.
- `storage` runs `diskutil list` on macOS and
  `lsblk -o NAME,FSTYPE,SIZE,MOUNTPOINT` on Linux.

Each one takes `--output txt|json|yaml` (`-o`) and `--watch` (`-w`). Any other
platform is reported as unsupported.

### Exit status

`maclnr` exits with 0 on success, 1 when an argument is missing or a command
fails, and 130 when a watch is interrupted with Ctrl-C. In watch mode, errors
are logged and the loop keeps going.

## Using it from Python

The functions behind the commands can be called directly:

- `maclnr.files.list_files_by_size(directory, min_size)` returns a list of
  `FileEntry(path, size)`, largest first; `list_files` and `clean_dir` print
  as the commands do. An unreadable path raises `WalkError`.
- `maclnr.system` has parsers for the command outputs
  (`parse_mac_memory`, `parse_linux_memory_output`, `parse_ps_output`,
  `parse_diskutil_output`, `parse_lsblk_output`) and the display functions
  `display_memory_usage`, `list_processes` and `list_storage_devices`.
- `maclnr.output` has `render_table`, `format_structured`, `clear_screen` and
  `watch`.

## Development

```
pip install -e .[test]
pytest
```