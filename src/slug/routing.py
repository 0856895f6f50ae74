"""
Level matching.

Two rules, deliberately asymmetric:

1. Set gate: a set skips every emission strictly below its gate
   (gate > level). One comparison, no work done.
2. Destination match: a destination renders only its own tier
   (level == threshold). NO_LEVEL bypasses the check and always renders.

Rule 2 is an exact match, not >=. A WARNING destination never fires for
ERROR; one destination per tier is the intended composition.
"""

from slug.levels import NO_LEVEL


def gated(gate: int, level: int) -> bool:
    """True if a set with this gate suppresses `level`."""
    return gate > level


def matches(level: int, threshold: int) -> bool:
    """True if a destination at `threshold` renders an emission at `level`."""
    return level == NO_LEVEL or level == threshold
