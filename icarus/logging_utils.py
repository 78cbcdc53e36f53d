"""Logging utilities for icarus exploration runs.

Provides color-coded output to distinguish exploration, backtracking, and outcomes.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types
    BLUE = "\033[94m"      # Forward exploration moves
    YELLOW = "\033[93m"    # Backtracking along known routes
    RED = "\033[91m"       # Fatal exploration errors
    GREEN = "\033[92m"     # Treasure found
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if ICARUS_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("ICARUS_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def log_explore(message: str) -> None:
    """Log a forward exploration move (blue)."""
    print(colored(message, Color.BLUE))


def log_backtrack(message: str) -> None:
    """Log a backtracking move (yellow)."""
    print(colored(message, Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error (red)."""
    print(colored(message, Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(message, Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(message, Color.CYAN))


# Markers for operation types (color-blind accessible)
LOG_TAG_EXPLORE = "[•]"     # Forward move into an unvisited room
LOG_TAG_BACKTRACK = "[<]"   # Replaying a known route
LOG_TAG_ERROR = "[!]"       # Fatal error
LOG_TAG_SUCCESS = "[✓]"     # Success
LOG_TAG_INFO = "[i]"        # Information
