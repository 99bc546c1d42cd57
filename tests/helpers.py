"""
Shared helpers for timing-based tests.
"""

from __future__ import annotations

import io
import time
from dataclasses import dataclass
from typing import List, Sequence, Union


@dataclass(frozen=True)
class Sleep:
    ms: int


@dataclass(frozen=True)
class Write:
    text: str


@dataclass(frozen=True)
class WriteLn:
    text: str


Op = Union[Sleep, Write, WriteLn]


class TimedInput(io.RawIOBase):
    """Raw stream that yields scripted chunks and sleeps between them."""

    def __init__(self, ops: Sequence[Op]) -> None:
        self._ops = list(ops)
        self._index = 0
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buf) -> int:
        while not self._pending:
            if self._index >= len(self._ops):
                return 0
            op = self._ops[self._index]
            self._index += 1
            if isinstance(op, Sleep):
                time.sleep(op.ms / 1000)
            elif isinstance(op, WriteLn):
                self._pending = f"{op.text}\n".encode("utf-8")
            else:
                self._pending = op.text.encode("utf-8")

        n = min(len(buf), len(self._pending))
        buf[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n


def timed_lines(ops: Sequence[Op]) -> io.TextIOWrapper:
    """Text stream over scripted ops, read line by line like stdin."""
    return io.TextIOWrapper(
        io.BufferedReader(TimedInput(ops)), encoding="utf-8", newline=""
    )


def total_sleep_ms(ops: Sequence[Op]) -> int:
    return sum(op.ms for op in ops if isinstance(op, Sleep))


def output_lines(text: str) -> List[str]:
    """Split on newlines only, keeping carriage returns inside lines."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines
