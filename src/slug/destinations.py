"""
Single destinations.

A Destination is one (threshold, per-tier templates, sink) triple. For each
call it decides on its own whether to render and write, or to do nothing:

    dest = Destination(threshold=WARNING, output="stderr")
    dest.render_for(WARNING, "disk", 91)   # "2026/02/12 14:32:05 | Warning: disk 91 "
    dest.render_for(ERROR, "disk", 91)     # "" (exact tier match only)
    dest.render_for(NO_LEVEL, "hello")     # always rendered

Templates are owned by the destination; template() hands out copies.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from slug.colors import colorize
from slug.errors import DoubleFault
from slug.levels import (
    NO_LEVEL, DEBUG, INFO, WARNING, ERROR, TIERS, level_name, resolve_level,
)
from slug.render import Template, render
from slug.routing import matches
from slug.sinks import FileSink, ResilientSink, Sink, as_sink

DEFAULT_FORMAT = "%t | %s"
DEFAULT_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"

LABELS = {
    DEBUG: "Debug:",
    INFO: "Info:",
    WARNING: "Warning:",
    ERROR: "Error:",
}


def default_prefix(level: int, color: bool = True) -> str:
    """Level label followed by a space, coloured if requested. Empty for NO_LEVEL."""
    label = LABELS.get(level)
    if label is None:
        return ""
    return (colorize(label, level) if color else label) + " "


def default_templates(color: bool = True, format: str = DEFAULT_FORMAT) -> dict[int, Template]:
    return {tier: Template(format, default_prefix(tier, color), "") for tier in TIERS}


class Destination:
    """One output with its own threshold and templates."""

    def __init__(
        self,
        threshold: int | str = NO_LEVEL,
        output: Any = "stdout",
        color: bool = True,
        time_format: str = DEFAULT_TIME_FORMAT,
        templates: dict[int, Template] | None = None,
        on_double_fault: Callable[[DoubleFault], None] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._threshold = resolve_level(threshold)
        self._color = color
        self.time_format = time_format
        self._clock = clock
        self._templates = default_templates(color)
        for tier, tmpl in (templates or {}).items():
            self._templates[resolve_level(tier)] = tmpl.copy()
        self._sink = ResilientSink(as_sink(output), on_double_fault=on_double_fault)

    def __repr__(self) -> str:
        return (
            f"Destination(threshold={level_name(self._threshold)}, "
            f"output={self._sink.primary.name!r})"
        )

    # ── Threshold ─────────────────────────────────────────────────

    @property
    def threshold(self) -> int:
        return self._threshold

    @threshold.setter
    def threshold(self, value: int | str) -> None:
        self._threshold = resolve_level(value)

    def set_threshold(self, level: int | str) -> None:
        """Set the tier this destination renders. Any int is accepted."""
        self.threshold = level

    # ── Templates ─────────────────────────────────────────────────

    def template(self, level: int) -> Template:
        """Copy of the template for `level`."""
        return self._template_for(level).copy()

    def _template_for(self, level: int) -> Template:
        tmpl = self._templates.get(level)
        if tmpl is None:
            raise ValueError(f"No template for level {level_name(level)}")
        return tmpl

    def _render_template(self, level: int) -> Template:
        # Levels outside the named tiers render with the level-less template
        return self._templates.get(level) or self._templates[NO_LEVEL]

    def _tiers(self, level: int | str | None) -> list[Template]:
        if level is None:
            return list(self._templates.values())
        return [self._template_for(resolve_level(level))]

    def set_format(self, format: str, level: int | str | None = None) -> None:
        """Set the format for one tier, or for every tier if `level` is None."""
        for tmpl in self._tiers(level):
            tmpl.format = format

    def set_prefix(self, prefix: str, level: int | str | None = None) -> None:
        for tmpl in self._tiers(level):
            tmpl.prefix = prefix

    def set_suffix(self, suffix: str, level: int | str | None = None) -> None:
        for tmpl in self._tiers(level):
            tmpl.suffix = suffix

    def set_template(
        self,
        level: int | str,
        format: str | None = None,
        prefix: str | None = None,
        suffix: str | None = None,
    ) -> None:
        """Replace any of format/prefix/suffix for one tier."""
        tmpl = self._template_for(resolve_level(level))
        if format is not None:
            tmpl.format = format
        if prefix is not None:
            tmpl.prefix = prefix
        if suffix is not None:
            tmpl.suffix = suffix

    # ── Colour ────────────────────────────────────────────────────

    @property
    def color(self) -> bool:
        return self._color

    def enable_color(self) -> None:
        """Restore the default tier prefixes, coloured."""
        self._set_color(True)

    def disable_color(self) -> None:
        """Restore the default tier prefixes, plain."""
        self._set_color(False)

    def _set_color(self, color: bool) -> None:
        self._color = color
        for tier, tmpl in self._templates.items():
            tmpl.prefix = default_prefix(tier, color)

    # ── Rendering ─────────────────────────────────────────────────

    def render_for(self, level: int, *args: Any) -> str:
        """Rendered text if this destination matches `level`, else ""."""
        if not matches(level, self._threshold):
            return ""
        tmpl = self._render_template(level)
        return render(tmpl.format, tmpl.prefix, tmpl.suffix, args, self._timestamp())

    def render_format_for(self, level: int, format: str, *args: Any) -> str:
        """As render_for(), with a caller-supplied base format."""
        if not matches(level, self._threshold):
            return ""
        tmpl = self._render_template(level)
        return render(format, tmpl.prefix, tmpl.suffix, args, self._timestamp())

    def _timestamp(self) -> str:
        return self._clock().strftime(self.time_format)

    # ── Emission ──────────────────────────────────────────────────

    def emit(self, level: int, *args: Any, end: str = "") -> None:
        """Render and write. Write failures fall back to stdout and are not raised."""
        text = self.render_for(level, *args)
        if text:
            self._sink.write(text + end)

    def emit_checked(self, level: int, *args: Any, end: str = "") -> None:
        """Render and write to the primary sink only. Raises WriteFailure."""
        text = self.render_for(level, *args)
        if text:
            self._sink.write_checked(text + end)

    # ── Output ────────────────────────────────────────────────────

    @property
    def output(self) -> Sink:
        return self._sink.primary

    def set_output(self, output: Any) -> None:
        """
        Rebind to a stream, "stdout"/"stderr" or a sink. A previous file is
        closed once the new output is in place; an invalid target keeps it.
        """
        sink = as_sink(output)
        previous = self._sink.primary
        if sink is previous:
            return
        self._sink.primary = sink
        previous.close()

    def set_output_file(self, path: str | Path) -> None:
        """
        Append to `path`, creating it if absent. Raises ConfigurationError
        if the file cannot be opened; the current output is kept in that case.
        """
        sink = FileSink.open(path)
        self.set_output(sink)

    def flush(self) -> None:
        self._sink.flush()

    def close(self) -> None:
        """Release a file output. Streams are left open."""
        self._sink.close()

    def describe(self) -> dict:
        return {
            "threshold": self._threshold,
            "threshold_name": level_name(self._threshold),
            "output": self._sink.primary.name,
            "file": self._sink.primary.is_file,
            "color": self._color,
        }


def new_console_destination(color: bool = True) -> Destination:
    """Level-less console destination on stdout."""
    return Destination(threshold=NO_LEVEL, output="stdout", color=color)


new_destination = new_console_destination
