"""Inspecting memory, processes and storage devices of the running system."""

from __future__ import annotations

import re
import subprocess
import sys

from maclnr.output import STRUCTURED_FORMATS, format_structured, render_table

DEFAULT_PAGE_SIZE = 4096
PS_MIN_FIELDS = 11

_MAC_MEMORY_BANNER = "Mach Virtual Memory Statistics"
_PARTITION_SCHEMES = (
    "GUID_partition_scheme",
    "FDisk_partition_scheme",
    "Apple_partition_scheme",
)
_INTEGER = re.compile(r"^[+-]?\d+$")


class UnsupportedPlatformError(RuntimeError):
    """Raised when the current operating system is neither macOS nor Linux."""

    def __init__(self) -> None:
        super().__init__("unsupported platform")


def _platform() -> str:
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform.startswith("linux"):
        return "linux"
    raise UnsupportedPlatformError()


def _run(args: list[str]) -> str:
    """Run a command and return its standard output."""
    try:
        completed = subprocess.run(args, capture_output=True, text=True, check=True)
    except (OSError, subprocess.SubprocessError) as exc:
        raise RuntimeError(f"executing {args[0]}: {exc}") from exc
    return completed.stdout


def _lines(output: str) -> list[str]:
    """Split text into lines the way a line scanner does."""
    lines = [line.removesuffix("\r") for line in output.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _parse_int(text: str) -> int | None:
    return int(text) if _INTEGER.match(text) else None


def parse_linux_memory_output(output: str) -> dict[str, str] | None:
    """Pair the header words of `free` output with the words of its first data line."""
    lines = output.split("\n")
    if len(lines) < 2:
        return None
    headers = lines[0].split()
    values = lines[1].split()
    return dict(zip(headers, values))


def parse_mac_memory(output: str) -> dict[str, str]:
    """Turn `vm_stat` page counts into byte sizes such as "4096 bytes"."""
    page_size = 0
    counts: dict[str, int] = {}
    for line in _lines(output):
        if line.startswith(_MAC_MEMORY_BANNER):
            continue
        fields = line.split()
        if len(fields) < 2:
            continue
        if fields[0] == "Pagesize:":
            size = _parse_int(fields[1])
            if size is not None:
                page_size = size
            continue
        value = _parse_int(fields[1].removesuffix("."))
        if value is not None:
            counts[fields[0].removesuffix(":")] = value

    if page_size == 0:
        page_size = DEFAULT_PAGE_SIZE
    return {key: f"{value * page_size} bytes" for key, value in counts.items()}


def display_memory_usage(output_format: str = "txt") -> None:
    """Print the memory in use on this system."""
    platform = _platform()
    if platform == "darwin":
        stats = parse_mac_memory(_run(["vm_stat"]))
        if output_format in STRUCTURED_FORMATS:
            print(format_structured(stats, output_format))
        else:
            print(render_table(["Type", "Size"], sorted(stats.items())), end="")
        return

    output = _run(["free", "-h"])
    if output_format in STRUCTURED_FORMATS:
        print(format_structured(parse_linux_memory_output(output), output_format))
    else:
        print(output.strip())


def parse_ps_output(output: str) -> list[dict[str, str]]:
    """Read user, PID, CPU, memory and command from `ps aux` output."""
    processes = []
    for line in output.split("\n")[1:]:
        if not line.strip():
            continue
        fields = line.split()
        if len(fields) >= PS_MIN_FIELDS:
            processes.append(
                {
                    "User": fields[0],
                    "PID": fields[1],
                    "%CPU": fields[2],
                    "%MEM": fields[3],
                    "Command": " ".join(fields[10:]),
                }
            )
    return processes


def list_processes(output_format: str = "txt") -> None:
    """Print every running process."""
    processes = parse_ps_output(_run(["ps", "aux"]))
    if output_format in STRUCTURED_FORMATS:
        print(format_structured(processes, output_format))
        return
    columns = ["User", "PID", "%CPU", "%MEM", "Command"]
    rows = [[process[column] for column in columns] for process in processes]
    print(render_table(columns, rows), end="")


def parse_diskutil_output(output: str) -> list[dict[str, str]]:
    """Group `diskutil list` output into one record per /dev entry."""
    devices: list[dict[str, str]] = []
    current: dict[str, str] | None = None
    for line in _lines(output):
        if line.startswith("/dev/"):
            if current is not None:
                devices.append(current)
            current = {"Identifier": line}
        elif current is None:
            continue
        elif any(scheme in line for scheme in _PARTITION_SCHEMES):
            current["Type"] = line
        elif " (disk" in line:
            parts = line.split(" ")
            current["Name"] = " ".join(parts[:-1])
            current["Size"] = parts[-1]
    if current is not None:
        devices.append(current)
    return devices


def parse_lsblk_output(output: str) -> list[dict[str, str]]:
    """Map each data line of `lsblk` output onto the header columns."""
    headers: list[str] | None = None
    devices = []
    for raw in _lines(output):
        line = raw.strip()
        if not line:
            continue
        fields = line.split()
        if headers is None:
            headers = fields
            continue
        devices.append(dict(zip(headers, fields)))
    return devices


def list_storage_devices(output_format: str = "txt") -> None:
    """Print the storage devices connected to this system."""
    if _platform() == "darwin":
        devices = parse_diskutil_output(_run(["diskutil", "list"]))
    else:
        devices = parse_lsblk_output(
            _run(["lsblk", "-o", "NAME,FSTYPE,SIZE,MOUNTPOINT"])
        )
    if output_format in STRUCTURED_FORMATS:
        print(format_structured(devices, output_format))
        return
    columns = ["Identifier", "Type", "Name", "Size"]
    rows = [[device.get(column, "") for column in columns] for device in devices]
    print(render_table(columns, rows), end="")