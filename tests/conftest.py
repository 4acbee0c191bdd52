"""
Shared fixtures for finley tests.
Creates isolated temporary directories with controlled binaries and a fake decompiler.
"""
import os
import stat
import sys
import tempfile
from pathlib import Path
from typing import Dict, List

import pytest


FAKE_DECOMPILER_SOURCE = '''\
import os
import sys
import time

args = sys.argv[1:]
source = args[0]
output_dir = args[args.index("-o") + 1]
name = os.path.basename(source)

log_path = os.environ.get("FAKE_DECOMPILER_LOG")
if log_path:
    with open(log_path, "a") as log:
        log.write(source + "\\n")

if "slow" in name:
    time.sleep(float(os.environ.get("FAKE_DECOMPILER_DELAY", "5")))

if "broken" in name:
    print("ILSpy: " + name + " is not a .NET assembly")
    sys.exit(3)

with open(os.path.join(output_dir, "Program.cs"), "w") as out:
    out.write("// decompiled from " + name + "\\n")
print("decompiled " + name)
'''


class FakeDecompiler:
    """Handle on the fake ilspycmd script and the log of files it was invoked with."""

    def __init__(self, path: Path, log_path: Path):
        self.path = path
        self.log_path = log_path

    def invocations(self) -> List[str]:
        if not self.log_path.exists():
            return []
        return [line for line in self.log_path.read_text().splitlines() if line]


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def binaries(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled input files for walker and dispatch scenarios:
    - a.dll and b.dll with identical content (b.dll is the duplicate)
    - c.dll with unique content
    - notes.txt (wrong extension)
    - sub/d.dll (identical to a.dll, only reachable recursively)
    - sub/e.exe (unique, only reachable recursively)
    """
    files = {}

    content_a = b"MZ" + b"A" * 1022

    files["a"] = temp_dir / "a.dll"
    files["b"] = temp_dir / "b.dll"
    files["a"].write_bytes(content_a)
    files["b"].write_bytes(content_a)

    files["c"] = temp_dir / "c.dll"
    files["c"].write_bytes(b"MZ" + b"C" * 2046)

    files["txt"] = temp_dir / "notes.txt"
    files["txt"].write_bytes(b"not a binary")

    subdir = temp_dir / "sub"
    subdir.mkdir()
    files["sub_dup"] = subdir / "d.dll"
    files["sub_dup"].write_bytes(content_a)
    files["sub_exe"] = subdir / "e.exe"
    files["sub_exe"].write_bytes(b"MZ" + b"E" * 510)

    return files


@pytest.fixture
def fake_decompiler(tmp_path, monkeypatch) -> FakeDecompiler:
    """
    Writes an executable Python script that behaves like ilspycmd:
    files named *broken* fail with exit status 3, files named *slow* sleep first,
    everything else gets a Program.cs in the output directory.
    """
    if sys.platform == "win32":
        pytest.skip("Fake decompiler relies on a shebang script")

    tools_dir = tmp_path / "tools"
    tools_dir.mkdir()
    script = tools_dir / "ilspycmd"
    script.write_text(f"#!{sys.executable}\n{FAKE_DECOMPILER_SOURCE}")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    log_path = tmp_path / "invocations.log"
    monkeypatch.setenv("FAKE_DECOMPILER_LOG", str(log_path))
    monkeypatch.setenv("PATH", str(tools_dir) + os.pathsep + os.environ.get("PATH", ""))

    return FakeDecompiler(script, log_path)
