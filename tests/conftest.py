from __future__ import annotations

import logging
from typing import Callable, List, Optional

import pytest

from polaroid.igv.client import Transport


class ScriptedTransport(Transport):
    """Fake IGV connection that replies from a script."""

    def __init__(self, responses: Optional[List[Optional[str]]] = None, default: str = "OK"):
        self.responses = list(responses or [])
        self.default = default
        self.sent: List[str] = []
        self.closed = False
        self.on_send: Optional[Callable[[str], None]] = None
        self._pending = 0

    def send_line(self, text: str) -> None:
        self.sent.append(text)
        self._pending += 1
        if self.on_send is not None:
            self.on_send(text)

    def read_line(self) -> Optional[str]:
        assert self._pending == 1, "read without a pending command"
        self._pending -= 1
        if self.responses:
            return self.responses.pop(0)
        return self.default

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def bam_files(tmp_path):
    paths = []
    for name in ("a.bam", "b.bam"):
        p = tmp_path / name
        p.write_bytes(b"")
        paths.append(p)
    return paths


@pytest.fixture
def snapshot_dir(tmp_path):
    d = tmp_path / "snaps"
    d.mkdir()
    return d


@pytest.fixture
def write_config(tmp_path):
    def _write(text: str, name: str = "polaroid.config"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def valid_config_text(bam_files, snapshot_dir):
    return (
        "# test config\n"
        f"bam {bam_files[0]}\n"
        f"bam {bam_files[1]}\n"
        f"snapshot_directory {snapshot_dir}\n"
        "igv_ip 127.0.0.1\n"
        "igv_port 60151\n"
        "delay 0\n"
        "chrX:1-10\n"
        "chrY:1-10\n"
    )


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def scripted_transport():
    return ScriptedTransport
