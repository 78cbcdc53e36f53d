"""
Icarus Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from typing import Optional

from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _optional_int(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return None


class Config:
    """Application configuration loaded from environment variables."""

    # Seed used by explorers that were given neither a seed nor an RNG.
    # Unset means every run shuffles exits differently.
    SEED_RAW: Optional[str] = os.getenv("ICARUS_SEED")
    DEFAULT_SEED: Optional[int] = _optional_int(SEED_RAW)

    # Print one trace line per command sent to the oracle
    VERBOSE: bool = os.getenv("ICARUS_VERBOSE", "").lower() in ("1", "true", "yes")

    # Disable ANSI colors (read again at print time by logging_utils)
    NO_COLOR: bool = bool(os.getenv("ICARUS_NO_COLOR"))

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors for malformed values."""
        if cls.SEED_RAW not in (None, "") and cls.DEFAULT_SEED is None:
            raise ValueError(
                f"ICARUS_SEED must be an integer, got {cls.SEED_RAW!r}. "
                "Unset it to let every run pick its own shuffle order."
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        seed = cls.DEFAULT_SEED if cls.DEFAULT_SEED is not None else "random"
        lines = [
            "Icarus Configuration:",
            f"  Seed: {seed}",
            f"  Verbose: {cls.VERBOSE}",
            f"  Colors: {'off' if cls.NO_COLOR else 'on'}",
        ]
        return "\n".join(lines)
