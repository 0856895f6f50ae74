"""
Exception taxonomy.

    SlugError
    ├── ConfigurationError   sink cannot be opened, config is invalid (OSError)
    ├── WriteFailure         a sink rejected a write (OSError)
    ├── DoubleFault          the stdout fallback failed too
    └── PanicError           raised by panic(), carries the rendered lines
"""

from __future__ import annotations


class SlugError(Exception):
    """Base class for all slug errors."""


class ConfigurationError(SlugError, OSError):
    """A destination could not be set up."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class WriteFailure(SlugError, OSError):
    """A sink rejected a write."""

    def __init__(self, sink: str, cause: BaseException):
        super().__init__(f"write to {sink} failed: {cause}")
        self.sink = sink
        self.cause = cause


class DoubleFault(SlugError):
    """The fallback write failed after the primary write failed."""

    def __init__(self, primary: WriteFailure, cause: BaseException):
        super().__init__(f"{primary}; fallback to stdout failed: {cause}")
        self.primary = primary
        self.cause = cause


class PanicError(SlugError):
    """Unrecoverable condition raised by panic(). Carries the rendered lines."""

    def __init__(self, messages: list[str]):
        super().__init__("".join(messages).rstrip("\n") or "panic")
        self.messages = list(messages)
