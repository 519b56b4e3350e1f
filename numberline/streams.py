"""Input source and output sink helpers."""

from __future__ import annotations

import io
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

from .exceptions import InputError, OutputError

STDIN_PATH = "-"

# Split on "\n" only; a lone "\r" stays part of the line.
LINE_NEWLINE = "\n"


def open_source(path: str | None) -> TextIO:
    """Open the input source for reading.

    Lines are split on ``\\n`` only, so a bare carriage return is kept as
    line content rather than starting a new line.

    Args:
        path: File to read. None or ``-`` selects standard input.

    Returns:
        TextIO: Text stream opened in UTF-8 for named files.

    Raises:
        InputError: If the path is missing, inaccessible, or not a file.

    Examples:
        with open_source("notes.txt") as handle:
            first_line = handle.readline()
    """
    if path is None or path == STDIN_PATH:
        if isinstance(sys.stdin, io.TextIOWrapper):
            sys.stdin.reconfigure(newline=LINE_NEWLINE)
        return sys.stdin
    try:
        return open(path, "r", encoding="UTF-8", newline=LINE_NEWLINE)
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        raise InputError(f"{path}: {error.strerror}") from error


def read_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines from `stream` with one trailing ``\\r\\n`` or ``\\n`` removed.

    A last line lacking a terminator is still yielded.

    Raises:
        InputError: If the stream cannot be read or decoded.
    """
    try:
        for line in stream:
            if line.endswith("\r\n"):
                yield line[:-2]
            elif line.endswith("\n"):
                yield line[:-1]
            else:
                yield line
    except UnicodeDecodeError as error:
        raise InputError(f"cannot decode input: {error.reason}") from error


def write_lines(lines: Iterable[str], stream: TextIO) -> None:
    """Write each line followed by a newline, then flush.

    Lines are pulled and written one at a time so input and output stay
    interleaved for a streaming source.

    Raises:
        BrokenPipeError: If the reader of `stream` has gone away.
        OutputError: If writing fails for any other reason.
        InputError: If reading the underlying source fails while iterating.
    """
    try:
        for line in lines:
            stream.write(f"{line}\n")
        stream.flush()
    except BrokenPipeError:
        raise
    except InputError:
        raise
    except OSError as error:
        raise OutputError(f"write error: {error.strerror or error}") from error
