"""
DestinationSet: one log call, many destinations.

The gate: most calls below the set's gate exit after a single comparison.
Past the gate, members are visited in insertion order and each one decides
for itself whether the level is its tier (NO_LEVEL always is).

Usage:
    log = new_default_set()
    log.gate = INFO
    log.debug("ignored")                 # below the gate
    log.warning("disk", 91, "% full")    # stderr, "Warning:" prefix
    lines = log.sinfo("rendered only")   # strings, nothing written

Not thread-safe: mutate `gate` or add members from one thread, or lock
around it. Writes are not serialised beyond what the streams do.
"""

from __future__ import annotations

import sys
import threading
from typing import Any, Iterator, Optional

from slug.destinations import Destination
from slug.errors import PanicError
from slug.levels import (
    NO_LEVEL, DEBUG, INFO, WARNING, ERROR, level_name, resolve_level,
)
from slug.routing import gated, matches

NEWLINE = "\n"


class DestinationSet:
    """Ordered destinations behind one set-wide gate."""

    # Re-export levels for convenience: DestinationSet.DEBUG, etc.
    NO_LEVEL = NO_LEVEL
    DEBUG = DEBUG
    INFO = INFO
    WARNING = WARNING
    ERROR = ERROR

    def __init__(self, *destinations: Destination, gate: int | str = NO_LEVEL):
        self.gate: int = resolve_level(gate)
        self._members: list[Destination] = list(destinations)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Destination]:
        return iter(self._members)

    def __repr__(self) -> str:
        return f"DestinationSet(gate={level_name(self.gate)}, members={len(self._members)})"

    # ── Membership ────────────────────────────────────────────────

    def add(self, *destinations: Destination) -> None:
        """Append destinations. No de-duplication."""
        self._members.extend(destinations)

    @property
    def members(self) -> tuple[Destination, ...]:
        return tuple(self._members)

    def set_gate(self, level: int | str) -> None:
        self.gate = resolve_level(level)

    # ── Fan-out ───────────────────────────────────────────────────

    def _targets(self, level: int) -> list[Destination]:
        return [d for d in self._members if matches(level, d.threshold)]

    def emit_at(self, level: int, *args: Any, end: str = "") -> None:
        """Write at `level` to every matching member, in insertion order."""
        if gated(self.gate, level):
            return
        for dest in self._targets(level):
            dest.emit(level, *args, end=end)

    print_at = emit_at

    def println_at(self, level: int, *args: Any) -> None:
        """As emit_at(), each rendered line newline-terminated."""
        self.emit_at(level, *args, end=NEWLINE)

    def collect_at(self, level: int, *args: Any) -> list[str]:
        """Rendered output of every matching member. Nothing is written."""
        if gated(self.gate, level):
            return []
        outs = []
        for dest in self._targets(level):
            text = dest.render_for(level, *args)
            if text:
                outs.append(text)
        return outs

    sprint_at = collect_at

    # ── Convenience methods ───────────────────────────────────────

    def print(self, *args: Any) -> None:
        """Level-less entry, no newline."""
        if self.gate > NO_LEVEL:
            return
        self.emit_at(NO_LEVEL, *args)

    def println(self, *args: Any) -> None:
        if self.gate > NO_LEVEL:
            return
        self.println_at(NO_LEVEL, *args)

    def debug(self, *args: Any) -> None:
        if self.gate > DEBUG:
            return
        self.println_at(DEBUG, *args)

    def info(self, *args: Any) -> None:
        if self.gate > INFO:
            return
        self.println_at(INFO, *args)

    def warning(self, *args: Any) -> None:
        if self.gate > WARNING:
            return
        self.println_at(WARNING, *args)

    def error(self, *args: Any) -> None:
        if self.gate > ERROR:
            return
        self.println_at(ERROR, *args)

    def sprint(self, *args: Any) -> list[str]:
        return self.collect_at(NO_LEVEL, *args)

    def sdebug(self, *args: Any) -> list[str]:
        return self.collect_at(DEBUG, *args)

    def sinfo(self, *args: Any) -> list[str]:
        return self.collect_at(INFO, *args)

    def swarning(self, *args: Any) -> list[str]:
        return self.collect_at(WARNING, *args)

    def serror(self, *args: Any) -> list[str]:
        return self.collect_at(ERROR, *args)

    # ── Terminal conditions ───────────────────────────────────────

    def fatal(self, *args: Any) -> None:
        """Error line to every matching member regardless of the gate, then exit(1)."""
        for dest in self._targets(ERROR):
            dest.emit(ERROR, *args, end=NEWLINE)
        self.flush()
        sys.exit(1)

    def panic(self, *args: Any) -> None:
        """Raise PanicError carrying the rendered error lines."""
        raise PanicError(self.serror(*args))

    # ── Lifecycle ─────────────────────────────────────────────────

    def flush(self) -> None:
        for dest in self._members:
            dest.flush()

    def close(self) -> None:
        """Release every file-backed member."""
        for dest in self._members:
            dest.close()

    def describe(self) -> dict:
        return {
            "gate": self.gate,
            "gate_name": level_name(self.gate),
            "destinations": [d.describe() for d in self._members],
        }


# ── Defaults ──────────────────────────────────────────────────────────

def new_default_set(color: bool = True) -> DestinationSet:
    """
    Five console destinations: level-less, debug and info on stdout,
    warning and error on stderr.
    """
    return DestinationSet(
        Destination(NO_LEVEL, "stdout", color=color),
        Destination(DEBUG, "stdout", color=color),
        Destination(INFO, "stdout", color=color),
        Destination(WARNING, "stderr", color=color),
        Destination(ERROR, "stderr", color=color),
    )


_default: Optional[DestinationSet] = None
_default_lock = threading.Lock()


def default_set() -> DestinationSet:
    """Get or create the process-wide default set."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = new_default_set()
    return _default


def set_default_set(log_set: DestinationSet) -> None:
    """Replace the process-wide default set."""
    global _default
    with _default_lock:
        _default = log_set


def reset_default_set() -> None:
    """
    Discard the default set. For testing only.
    File-backed members are closed before discarding.
    """
    global _default
    with _default_lock:
        if _default is not None:
            _default.close()
            _default = None
