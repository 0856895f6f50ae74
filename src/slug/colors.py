"""ANSI colouring for the default tier prefixes."""

from slug.levels import DEBUG, INFO, WARNING, ERROR

COLORS = {
    DEBUG: "\033[35m",      # magenta
    INFO: "\033[36m",       # cyan
    WARNING: "\033[33m",    # yellow
    ERROR: "\033[31m",      # red
}
RESET = "\033[0m"


def colorize(text: str, level: int) -> str:
    """Wrap text in the level's colour. Levels without a colour pass through."""
    color = COLORS.get(level)
    if not color:
        return text
    return f"{color}{text}{RESET}"
