import json
import subprocess
import sys

import pytest
import yaml

from maclnr import system
from maclnr.system import (
    UnsupportedPlatformError,
    display_memory_usage,
    list_processes,
    list_storage_devices,
    parse_diskutil_output,
    parse_linux_memory_output,
    parse_lsblk_output,
    parse_mac_memory,
    parse_ps_output,
)

FREE_OUTPUT = (
    "               total        used        free\n"
    "Mem:            15Gi       3.2Gi        10Gi\n"
    "Swap:          2.0Gi          0B       2.0Gi\n"
)

PS_OUTPUT = (
    "USER PID %CPU %MEM VSZ RSS TTY STAT START TIME COMMAND\n"
    "root 1 0.0 0.1 1000 200 ? Ss 10:00 0:01 /sbin/init splash\n"
    "short line\n"
    "\n"
    "alice 42 1.5 2.0 5000 800 pts/0 S 10:01 0:00 python app.py --flag\n"
)

LSBLK_OUTPUT = (
    "NAME FSTYPE SIZE MOUNTPOINT\n"
    "sda  8G\n"
    "sda1 ext4 8G /\n"
    "\n"
)


class _FakeRun:
    def __init__(self, stdout="", error=None):
        self.stdout = stdout
        self.error = error
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append(list(args))
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(args, 0, stdout=self.stdout, stderr="")


def _use(monkeypatch, platform, fake):
    monkeypatch.setattr(sys, "platform", platform)
    monkeypatch.setattr(system.subprocess, "run", fake)


def test_linux_memory_pairs_headers_with_first_data_line():
    data = parse_linux_memory_output(FREE_OUTPUT)
    assert data == {"total": "Mem:", "used": "15Gi", "free": "3.2Gi"}


def test_linux_memory_needs_two_lines():
    assert parse_linux_memory_output("total used free") is None


def test_linux_memory_drops_headers_without_values():
    assert parse_linux_memory_output("a b c\n1\n") == {"a": "1"}


def test_mac_memory_uses_default_page_size():
    output = "Mach Virtual Memory Statistics: (page size of 16384 bytes)\nwired: 1.\n"
    assert parse_mac_memory(output) == {"wired": "4096 bytes"}


def test_mac_memory_uses_reported_page_size():
    output = "Pagesize: 8192\nfree: 1.\n"
    assert parse_mac_memory(output) == {"free": "8192 bytes"}


def test_mac_memory_skips_unparsable_lines():
    output = "Pages free: 100.\nlonely\nactive: abc.\n"
    assert parse_mac_memory(output) == {}


def test_ps_output_parsed():
    processes = parse_ps_output(PS_OUTPUT)
    assert len(processes) == 2
    assert processes[0] == {
        "User": "root",
        "PID": "1",
        "%CPU": "0.0",
        "%MEM": "0.1",
        "Command": "/sbin/init splash",
    }
    assert processes[1]["Command"] == "python app.py --flag"
    assert processes[1]["User"] == "alice"


def test_ps_output_header_only():
    assert parse_ps_output("USER PID %CPU %MEM VSZ RSS TTY STAT START TIME COMMAND\n") == []


def test_diskutil_output_grouped_by_device():
    output = (
        "/dev/disk0 (internal, physical):\n"
        "   0:      GUID_partition_scheme   *500.3 GB   disk0\n"
        "Container (disk3) 500GB\n"
        "/dev/disk1 (external):\n"
        "   0:      FDisk_partition_scheme   *8.0 GB   disk1\n"
    )
    devices = parse_diskutil_output(output)
    assert [d["Identifier"] for d in devices] == [
        "/dev/disk0 (internal, physical):",
        "/dev/disk1 (external):",
    ]
    assert devices[0]["Type"] == "   0:      GUID_partition_scheme   *500.3 GB   disk0"
    assert devices[0]["Name"] == "Container (disk3)"
    assert devices[0]["Size"] == "500GB"
    assert "Name" not in devices[1]


def test_diskutil_output_empty():
    assert parse_diskutil_output("") == []


def test_lsblk_output_mapped_to_headers():
    devices = parse_lsblk_output(LSBLK_OUTPUT)
    assert devices == [
        {"NAME": "sda", "FSTYPE": "8G"},
        {"NAME": "sda1", "FSTYPE": "ext4", "SIZE": "8G", "MOUNTPOINT": "/"},
    ]


def test_unsupported_platform(monkeypatch):
    _use(monkeypatch, "freebsd13", _FakeRun())
    with pytest.raises(UnsupportedPlatformError):
        display_memory_usage("json")
    with pytest.raises(UnsupportedPlatformError):
        list_storage_devices("json")


def test_linux_memory_json(monkeypatch, capsys):
    fake = _FakeRun(FREE_OUTPUT)
    _use(monkeypatch, "linux", fake)
    display_memory_usage("json")
    assert fake.calls == [["free", "-h"]]
    assert json.loads(capsys.readouterr().out) == parse_linux_memory_output(FREE_OUTPUT)


def test_linux_memory_text_prints_raw_output(monkeypatch, capsys):
    _use(monkeypatch, "linux", _FakeRun(FREE_OUTPUT))
    display_memory_usage("txt")
    assert capsys.readouterr().out == FREE_OUTPUT.strip() + "\n"


def test_mac_memory_yaml(monkeypatch, capsys):
    output = "Pagesize: 8192\nfree: 1.\n"
    fake = _FakeRun(output)
    _use(monkeypatch, "darwin", fake)
    display_memory_usage("yaml")
    assert fake.calls == [["vm_stat"]]
    assert yaml.safe_load(capsys.readouterr().out) == {"free": "8192 bytes"}


def test_mac_memory_table(monkeypatch, capsys):
    _use(monkeypatch, "darwin", _FakeRun("free: 1.\n"))
    display_memory_usage("txt")
    out = capsys.readouterr().out
    assert "TYPE" in out
    assert "4096 bytes" in out


def test_command_failure_reported(monkeypatch):
    _use(monkeypatch, "linux", _FakeRun(error=FileNotFoundError("no such file")))
    with pytest.raises(RuntimeError, match="executing free"):
        display_memory_usage("json")


def test_list_processes_json(monkeypatch, capsys):
    fake = _FakeRun(PS_OUTPUT)
    _use(monkeypatch, "linux", fake)
    list_processes("json")
    assert fake.calls == [["ps", "aux"]]
    assert json.loads(capsys.readouterr().out) == parse_ps_output(PS_OUTPUT)


def test_list_processes_table(monkeypatch, capsys):
    _use(monkeypatch, "linux", _FakeRun(PS_OUTPUT))
    list_processes("txt")
    out = capsys.readouterr().out
    assert "/sbin/init splash" in out
    assert "COMMAND" in out


def test_list_storage_linux_yaml(monkeypatch, capsys):
    fake = _FakeRun(LSBLK_OUTPUT)
    _use(monkeypatch, "linux", fake)
    list_storage_devices("yaml")
    assert fake.calls == [["lsblk", "-o", "NAME,FSTYPE,SIZE,MOUNTPOINT"]]
    assert yaml.safe_load(capsys.readouterr().out) == parse_lsblk_output(LSBLK_OUTPUT)


def test_list_storage_mac_table(monkeypatch, capsys):
    fake = _FakeRun("/dev/disk0 (internal):\nContainer (disk3) 500GB\n")
    _use(monkeypatch, "darwin", fake)
    list_storage_devices("txt")
    out = capsys.readouterr().out
    assert fake.calls == [["diskutil", "list"]]
    assert "/dev/disk0 (internal):" in out
    assert "500GB" in out
    assert "IDENTIFIER" in out