"""
Purpose: Stateful CSV writer for a fixed record shape.
Description: Decides per call and per sink whether a header precedes the data line, then appends to a
             file, the console, or both. The file header follows file presence; the console header
             follows the session flag.
Key Functions/Classes: CSVWriter.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, TextIO

from .codec import RowFormat
from .config import Config, HeaderPolicy
from .errors import SinkError
from .sinks import ConsoleSink, FileSink
from .writer_logging import get_logger, log_event


logger = get_logger()


class CSVWriter:
    """Append rows of one record shape to a file and/or the console.

    Use one writer per target file, called sequentially. Two writers on the same
    path can both see the file as absent and both write a header.

    In ``both`` mode the file is written first and the console write is always
    attempted; the first failure is raised with any later one in ``secondary``.
    """

    def __init__(self, row_format: RowFormat, config: Config, *, stream: Optional[TextIO] = None) -> None:
        self.row_format = row_format
        self.config = config
        self._header_emitted = False
        self._file_sink = FileSink(config.file_path) if config.destination_policy.writes_file else None
        self._console_sink = ConsoleSink(stream) if config.destination_policy.writes_console else None

    @property
    def header_emitted(self) -> bool:
        return self._header_emitted

    def add_row(self, record: Any) -> None:
        # Serialize first so a bad record leaves the session untouched.
        line = self.row_format.serialize(record)

        file_existed = self._file_sink.exists() if self._file_sink is not None else False

        policy = self.config.header_policy
        if policy is HeaderPolicy.NEVER:
            header_file = header_console = False
        elif policy is HeaderPolicy.ALWAYS:
            header_file = header_console = True
        else:
            header_file = not file_existed
            header_console = not self._header_emitted

        self._header_emitted = True

        errors: List[SinkError] = []
        if self._file_sink is not None:
            self._emit(self._file_sink, line, header_file, errors)
        if self._console_sink is not None:
            self._emit(self._console_sink, line, header_console, errors)

        if errors:
            first = errors[0]
            first.secondary.extend(errors[1:])
            raise first

    def _emit(self, sink: Any, line: str, with_header: bool, errors: List[SinkError]) -> None:
        text = self.row_format.header + line if with_header else line
        try:
            sink.write(text)
        except SinkError as exc:
            log_event(logger, "sink_failed", level=logging.ERROR, sink=sink.name, error=str(exc))
            errors.append(exc)
            return
        log_event(logger, "row_written", sink=sink.name, header=with_header)
