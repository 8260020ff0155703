from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

TOOK_LINES = [
    "Took 100ms",
    "Took 950ms",
    "Took 50ms",
    "Took 10ms",
    "Took 5ms",
    "Not a result",
]


@pytest.fixture
def took_lines() -> list[str]:
    return list(TOOK_LINES)


@pytest.fixture
def write_log() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.write_text("\n".join(TOOK_LINES) + "\n", encoding="utf-8")

    return _write


@pytest.fixture
def write_bytes() -> Callable[[Path, list[bytes]], None]:
    def _write(path: Path, lines: list[bytes]) -> None:
        path.write_bytes(b"".join(line + b"\n" for line in lines))

    return _write
