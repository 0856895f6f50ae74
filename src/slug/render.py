"""
Message rendering.

One formatting primitive used by every destination:

    render(format, prefix, suffix, args)

The body is "%s" for the prefix, one "%s " per argument and a trailing "%s"
for the suffix. The body then fills the first "%s" of the base format, e.g.

    render("[TEST] %s\\n", "", "", ("hello",))  ->  "[TEST] hello \\n"

Nothing is escaped: a "%s" inside dynamic content is left as-is in the body,
but a caller-supplied format is taken literally.
"""

from dataclasses import dataclass
from typing import Any, Sequence

PLACEHOLDER = "%s"
TIME_TOKEN = "%t"


@dataclass
class Template:
    """Format, prefix and suffix for one severity tier."""
    format: str = PLACEHOLDER
    prefix: str = ""
    suffix: str = ""

    def copy(self) -> "Template":
        return Template(self.format, self.prefix, self.suffix)


def body_format(arg_count: int) -> str:
    """Effective body format for `arg_count` arguments. Built fresh each call."""
    return PLACEHOLDER + (PLACEHOLDER + " ") * arg_count + PLACEHOLDER


def render(
    format: str,
    prefix: str,
    suffix: str,
    args: Sequence[Any] = (),
    timestamp: str | None = None,
) -> str:
    """
    Render one emission.

    Values are stringified with str(). If `timestamp` is given, every "%t"
    in the base format is replaced by it; otherwise the token is left alone.
    """
    values = [prefix, *(str(a) for a in args), suffix]
    body = _substitute(body_format(len(args)), values)

    frame = format
    if timestamp is not None:
        frame = frame.replace(TIME_TOKEN, timestamp)

    head, sep, tail = frame.partition(PLACEHOLDER)
    if not sep:
        return frame + body
    return head + body + tail


def _substitute(fmt: str, values: Sequence[str]) -> str:
    """Fill each "%s" in `fmt` with the next value, left to right."""
    pieces = fmt.split(PLACEHOLDER)
    out = [pieces[0]]
    for value, piece in zip(values, pieces[1:]):
        out.append(value)
        out.append(piece)
    return "".join(out)
