"""
Severity levels.

Lower is more verbose. NO_LEVEL is the level-less tier that a destination
always renders; DISABLED sits above ERROR and is only useful as a threshold.
"""

from enum import IntEnum


class Severity(IntEnum):
    """Ordered severity scale, shared process-wide."""
    NO_LEVEL = -2    # Level-less, always printed by a destination
    DEBUG = -1
    INFO = 0
    WARNING = 1
    ERROR = 2
    DISABLED = 3     # Above ERROR: silences leveled output

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        """Resolve level from string name, case-insensitive."""
        key = name.strip().upper().replace("-", "_")
        key = _ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{name}'. "
                f"Valid levels: {', '.join(m.name for m in cls)}"
            )


_ALIASES = {
    "NOLEVEL": "NO_LEVEL",
    "NONE": "NO_LEVEL",
    "WARN": "WARNING",
}

NO_LEVEL = Severity.NO_LEVEL
DEBUG = Severity.DEBUG
INFO = Severity.INFO
WARNING = Severity.WARNING
ERROR = Severity.ERROR
DISABLED = Severity.DISABLED

# Tiers that carry a template. DISABLED is a threshold, never an emission.
TIERS: tuple[Severity, ...] = (NO_LEVEL, DEBUG, INFO, WARNING, ERROR)

LEVEL_NAMES: dict[int, str] = {member.value: member.name for member in Severity}


def level_name(level: int) -> str:
    """Get display name for a level value. Falls back to numeric string."""
    return LEVEL_NAMES.get(level, str(level))


def resolve_level(value: int | str) -> int:
    """Convert level name or int to numeric level. Ints are not validated."""
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str):
        return Severity.from_name(value).value
    raise TypeError(f"Expected int or str for level, got {type(value).__name__}")
