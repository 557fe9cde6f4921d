"""Output sink writing rendered bytes to standard output or a file."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

from renderers import ConversionError

logger = logging.getLogger(__name__)

STDOUT_NAME = "<stdout>"


class OutputError(ConversionError):
    """Base exception for output failures; carries the destination and cause."""

    def __init__(self, message: str, path: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause


class OutputCreationError(OutputError):
    """Raised when the destination file cannot be created."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Error creating {path}: {cause}", path, cause)


class OutputWriteError(OutputError):
    """Raised when writing to an opened destination fails."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Error writing output to {path}: {cause}", path, cause)


@contextmanager
def open_destination(destination: Optional[str]) -> Iterator[BinaryIO]:
    """Yield a binary stream for ``destination``; stdout when it is empty.

    Files are created (or truncated) and always closed on exit. Standard
    output is left open and only flushed when the body succeeds.
    """

    if not destination:
        stream = sys.stdout.buffer
        yield stream
        stream.flush()
        return

    try:
        handle = open(destination, "wb")
    except OSError as exc:
        raise OutputCreationError(destination, exc) from exc

    with handle:
        yield handle


def write_output(content: bytes, destination: Optional[str] = None) -> None:
    """Write rendered bytes to ``destination`` (stdout when empty)."""

    name = destination or STDOUT_NAME
    with open_destination(destination) as stream:
        try:
            stream.write(content)
            stream.flush()
        except OSError as exc:
            raise OutputWriteError(name, exc) from exc
    logger.debug("Wrote %d bytes to %s", len(content), name)
