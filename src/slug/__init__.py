"""
slug: leveled logging to many destinations.

A DestinationSet fans one call out to every destination whose tier matches;
each destination renders its own prefix/body/suffix template and writes to
its own sink, falling back to stdout if that sink fails.

The module-level functions use a process-wide default set (console output,
built on first use). Prefer constructing a DestinationSet and passing it
around; the functions here are for scripts.
"""

from typing import Any

from slug.levels import (
    Severity, NO_LEVEL, DEBUG, INFO, WARNING, ERROR, DISABLED, level_name,
)
from slug.render import Template, render
from slug.sinks import ConsoleSink, FileSink, ResilientSink, StreamSink
from slug.destinations import Destination, new_console_destination, new_destination
from slug.core import (
    DestinationSet,
    default_set,
    new_default_set,
    reset_default_set,
    set_default_set,
)
from slug.errors import (
    SlugError,
    ConfigurationError,
    WriteFailure,
    DoubleFault,
    PanicError,
)

__version__ = "0.1.0"

__all__ = [
    "Severity", "NO_LEVEL", "DEBUG", "INFO", "WARNING", "ERROR", "DISABLED", "level_name",
    "Template", "render",
    "ConsoleSink", "FileSink", "ResilientSink", "StreamSink",
    "Destination", "new_console_destination", "new_destination",
    "DestinationSet", "default_set", "new_default_set", "reset_default_set", "set_default_set",
    "SlugError", "ConfigurationError", "WriteFailure", "DoubleFault", "PanicError",
    "print_at", "println_at", "sprint_at",
    "println", "debug", "info", "warning", "error",
    "sprint", "sdebug", "sinfo", "swarning", "serror",
    "fatal", "panic",
]


# ── Default-set shortcuts ─────────────────────────────────────────────

def print_at(level: int, *args: Any) -> None:
    default_set().emit_at(level, *args)


def println_at(level: int, *args: Any) -> None:
    default_set().println_at(level, *args)


def sprint_at(level: int, *args: Any) -> list[str]:
    return default_set().collect_at(level, *args)


def println(*args: Any) -> None:
    default_set().println(*args)


def debug(*args: Any) -> None:
    default_set().debug(*args)


def info(*args: Any) -> None:
    default_set().info(*args)


def warning(*args: Any) -> None:
    default_set().warning(*args)


def error(*args: Any) -> None:
    default_set().error(*args)


def sprint(*args: Any) -> list[str]:
    return default_set().sprint(*args)


def sdebug(*args: Any) -> list[str]:
    return default_set().sdebug(*args)


def sinfo(*args: Any) -> list[str]:
    return default_set().sinfo(*args)


def swarning(*args: Any) -> list[str]:
    return default_set().swarning(*args)


def serror(*args: Any) -> list[str]:
    return default_set().serror(*args)


def fatal(*args: Any) -> None:
    """Error line to the default set, then exit(1)."""
    default_set().fatal(*args)


def panic(*args: Any) -> None:
    """Raise PanicError with the default set's rendered error lines."""
    default_set().panic(*args)
