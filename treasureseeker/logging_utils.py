"""Logging utilities for Treasure Seeker sessions.

Each helper prints one tagged line. Colors separate world traces from player notices
and failures; the tag carries the same meaning when color is off.
"""

import os
from enum import Enum

NO_COLOR_ENV = "TREASURE_NO_COLOR"
VERBOSE_ENV = "TREASURE_VERBOSE"

# Line prefixes; they survive NO_COLOR_ENV and color-blind terminals
LOG_TAG_DETERMINISTIC = "[•]"
LOG_TAG_NOTICE = "[?]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"


class Color(Enum):
    """ANSI escapes keyed by the kind of line they mark."""

    BLUE = "\033[94m"    # world traces, shown only when verbose
    YELLOW = "\033[93m"  # rejected player actions
    RED = "\033[91m"     # malformed saves and other failures
    GREEN = "\033[92m"   # reset
    CYAN = "\033[96m"    # session info
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap ``text`` in ``color``; returned unchanged when NO_COLOR_ENV is set."""
    if os.getenv(NO_COLOR_ENV):
        return text
    start = (Color.BOLD.value if bold else "") + color.value
    return f"{start}{text}{Color.RESET.value}"


def is_verbose() -> bool:
    """True when VERBOSE_ENV asks for per-operation traces."""
    return os.getenv(VERBOSE_ENV, "").lower() in {"1", "true", "yes"}


def log_deterministic(message: str) -> None:
    """Log a deterministic world operation (blue). Only shown when verbose."""
    if is_verbose():
        print(colored(f"{LOG_TAG_DETERMINISTIC} {message}", Color.BLUE))


def log_notice(message: str) -> None:
    """Tell the player an action was refused (yellow)."""
    print(colored(f"{LOG_TAG_NOTICE} {message}", Color.YELLOW))


def log_error(message: str) -> None:
    """Report a failure such as a malformed save (red)."""
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """Confirm a completed reset (green)."""
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Print session status (cyan)."""
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))

