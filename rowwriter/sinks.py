"""
Purpose: Output sinks for serialized rows.
Description: FileSink appends to a path with a full open/write/close cycle per call and probes the
             path fresh each time; ConsoleSink writes to the live stdout stream.
Key Functions/Classes: FileSink, ConsoleSink.

AIDEV-NOTE: Do not hold the file open between calls; every write re-opens at end of file.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from .errors import SinkError


class FileSink:
    name = "file"

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        try:
            self.path.stat()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise SinkError(self.name, f"cannot stat {self.path}: {exc}", path=str(self.path)) from exc
        return True

    def write(self, text: str) -> None:
        # Append mode creates the file if needed and positions every write at end of file.
        try:
            with self.path.open("a", newline="", encoding="utf-8") as f:
                f.write(text)
        except OSError as exc:
            raise SinkError(self.name, f"cannot write {self.path}: {exc}", path=str(self.path)) from exc


class ConsoleSink:
    name = "console"

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved per call so a replaced sys.stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> None:
        try:
            self.stream.write(text)
            self.stream.flush()
        except (OSError, ValueError) as exc:
            raise SinkError(self.name, f"cannot write to console: {exc}") from exc
