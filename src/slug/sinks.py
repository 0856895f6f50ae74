"""
Output sinks and the resilient write path.

Every sink exposes write(text) -> int, flush() and close(). Only FileSink
owns a handle, so close() is a no-op everywhere else and callers never
have to inspect the underlying object.

ResilientSink wraps a primary sink:
  - primary write fails  → notice + payload go to stdout
  - stdout fails as well → DoubleFault, handed to on_double_fault (abort)
"""

from __future__ import annotations

import io
import os
import sys
from pathlib import Path
from typing import Callable, Optional, Protocol, TextIO, runtime_checkable

from slug.errors import ConfigurationError, DoubleFault, WriteFailure

ENCODING = "utf-8"


@runtime_checkable
class Sink(Protocol):
    """Anything with a name, an is_file tag and write/flush/close."""

    name: str
    is_file: bool

    def write(self, data: str) -> int: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


def _write_to(stream, data: str) -> int:
    """Write text to a text or binary stream."""
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return stream.write(data.encode(ENCODING))
    return stream.write(data)


class StreamSink:
    """Any caller-supplied writable stream. Not owned: close() does nothing."""

    is_file = False

    def __init__(self, stream, name: str | None = None):
        if not hasattr(stream, "write"):
            raise TypeError(f"Expected a writable stream, got {type(stream).__name__}")
        self.stream = stream
        self.name = name or getattr(stream, "name", None) or type(stream).__name__

    def write(self, data: str) -> int:
        return _write_to(self.stream, data)

    def flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()

    def close(self) -> None:
        pass


class ConsoleSink:
    """
    stdout or stderr, looked up on every write so that replacing
    sys.stdout/sys.stderr (redirection, pytest capture) is honoured.
    """

    is_file = False

    def __init__(self, which: str = "stdout"):
        if which not in ("stdout", "stderr"):
            raise ValueError(f"Unknown console stream '{which}'")
        self.name = which

    @property
    def stream(self) -> TextIO:
        return getattr(sys, self.name)

    def write(self, data: str) -> int:
        return _write_to(self.stream, data)

    def flush(self) -> None:
        self.stream.flush()

    def close(self) -> None:
        pass


class FileSink:
    """A file opened for append. Owned: close() releases the handle."""

    is_file = True

    def __init__(self, path: str | Path, handle: TextIO):
        self.path = Path(path)
        self.name = str(self.path)
        self._file: Optional[TextIO] = handle

    @classmethod
    def open(cls, path: str | Path) -> "FileSink":
        """Open `path` for append, creating it if absent."""
        try:
            handle = open(path, "a", encoding=ENCODING)
        except OSError as e:
            raise ConfigurationError(f"cannot open log file {path}: {e}", path=str(path)) from e
        return cls(path, handle)

    @property
    def closed(self) -> bool:
        return self._file is None

    def write(self, data: str) -> int:
        if self._file is None:
            raise ValueError(f"log file {self.name} is closed")
        return self._file.write(data)

    def flush(self) -> None:
        if self._file is not None:
            self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


def as_sink(target) -> Sink:
    """Wrap a stream, "stdout"/"stderr", or return anything implementing Sink unchanged."""
    if isinstance(target, Sink):
        return target
    if isinstance(target, str):
        return ConsoleSink(target)
    if target is sys.stdout:
        return ConsoleSink("stdout")
    if target is sys.stderr:
        return ConsoleSink("stderr")
    return StreamSink(target)


def abort_on_double_fault(fault: DoubleFault) -> None:
    """Default double-fault handler: no output path is left, abort."""
    try:
        os.write(2, f"slug: {fault}\n".encode(ENCODING, "replace"))
    except OSError:
        pass
    os.abort()


class ResilientSink:
    """
    Write path with a stdout fallback.

    A failed primary write is retried on the fallback as a notice line
    followed by the original payload. A failed fallback is a DoubleFault.
    """

    def __init__(
        self,
        primary: Sink,
        fallback: Sink | None = None,
        on_double_fault: Callable[[DoubleFault], None] | None = None,
    ):
        self.primary = primary
        self.fallback = fallback if fallback is not None else ConsoleSink("stdout")
        self.on_double_fault = on_double_fault or abort_on_double_fault

    def write_checked(self, data: str) -> int:
        """Write to the primary sink only. Raises WriteFailure."""
        try:
            return self.primary.write(data)
        except Exception as e:
            raise WriteFailure(self.primary.name, e) from e

    def write(self, data: str) -> int:
        """Write to the primary sink, falling back to stdout on failure."""
        try:
            return self.write_checked(data)
        except WriteFailure as failure:
            return self._fall_back(failure, data)

    def _fall_back(self, failure: WriteFailure, data: str) -> int:
        try:
            self.fallback.write(f"slug: {failure}\n")
            return self.fallback.write(data)
        except Exception as e:
            self.on_double_fault(DoubleFault(failure, e))
            return 0

    def flush(self) -> None:
        self.primary.flush()

    def close(self) -> None:
        self.primary.close()
