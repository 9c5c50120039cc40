from __future__ import annotations

import gzip
from collections.abc import Callable
from pathlib import Path

import pytest

ACCESS_LINES = [
    "host:127.0.0.1\tident:-\tuser:frank\ttime:[10/Oct/2000:13:55:36 -0700]\treq:GET /a HTTP/1.0\tstatus:200",
    "host:127.0.0.1\tident:-\tuser:-\ttime:[10/Oct/2000:13:55:37 -0700]\treq:GET /b HTTP/1.0\tstatus:404",
    "host:10.0.0.2\tident:-\tuser:anna\ttime:[10/Oct/2000:13:55:38 -0700]\treq:POST /c HTTP/1.0\tstatus:500",
]


@pytest.fixture
def access_lines() -> list[str]:
    return list(ACCESS_LINES)


@pytest.fixture
def access_text() -> str:
    return "\n".join(ACCESS_LINES) + "\n"


@pytest.fixture
def write_ltsv() -> Callable[[Path, list[str]], None]:
    def _write(path: Path, lines: list[str], *, eol: str = "\n") -> None:
        path.write_bytes("".join(line + eol for line in lines).encode("utf-8"))

    return _write


@pytest.fixture
def write_gz() -> Callable[[Path, list[str]], None]:
    def _write(path: Path, lines: list[str]) -> None:
        with gzip.open(path, "wb") as f:
            f.write("".join(line + "\n" for line in lines).encode("utf-8"))

    return _write
