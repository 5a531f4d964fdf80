"""
Shared utilities for the PSO Records Leaderboard.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import html
import logging
import math
import re
import shutil
import tempfile
from pathlib import Path

from src.config import DISPLAY_MODES, REMAINING_SUFFIX

# --- Shared Regex Patterns ---
# POV links: only http(s) URLs are rendered as anchors
POV_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# --- Value Helpers ---
def is_missing(value) -> bool:
    """True for None and NaN (pandas fills absent JSON keys with NaN)."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def as_text(value) -> str:
    """Render a raw field for display, missing values become ''."""
    return "" if is_missing(value) else str(value)


def normalize(value) -> str:
    """Trim and lowercase for case-insensitive matching."""
    return as_text(value).strip().lower()


def sort_text(value: str) -> tuple[str, str]:
    """Collation key: case-insensitive first, raw text as tie-break."""
    return (value.casefold(), value)


def sort_number(value) -> float:
    """Numeric sort key; anything non-numeric sorts after all numbers."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return math.inf
    return math.inf if math.isnan(number) else number


# --- Formatting ---
def escape_html(value) -> str:
    """Escape the five HTML-significant characters, quotes included."""
    return html.escape(as_text(value), quote=True).replace("&#x27;", "&#39;")


def format_time(seconds) -> str:
    """
    Format a signed number of seconds as m'ss.

    Negative values are countdowns and get a " Remaining" suffix.
    Non-numeric and non-finite input renders as ''.

    Examples:
        454 -> "7'34"
        -60 -> "1'00 Remaining"
    """
    if isinstance(seconds, bool):
        return ""
    try:
        n = float(seconds)
    except (TypeError, ValueError):
        return ""
    if not math.isfinite(n):
        return ""

    magnitude = abs(n)
    minutes = int(magnitude // 60)
    rest = magnitude % 60
    if rest.is_integer():
        ss = f"{int(rest):02d}"
    else:
        ss = str(rest).rjust(2, "0")

    if n < 0:
        return f"{minutes}'{ss}{REMAINING_SUFFIX}"
    return f"{minutes}'{ss}"


def is_pov_url(value) -> bool:
    return bool(POV_URL_RE.match(as_text(value)))


# --- File Operations ---
def atomic_write_text(text: str, path: Path, suffix: str = '.html') -> None:
    """
    Write text to a file atomically using a temporary file.

    This prevents a half-written page if the write is interrupted.

    Args:
        text: Content to write
        path: Destination path
        suffix: Suffix for the temporary file
    """
    logger = setup_logging(__name__)

    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            delete=False,
            suffix=suffix,
            dir=path.parent  # Same filesystem for atomic move
        ) as tmp:
            tmp.write(text)
            tmp_path = Path(tmp.name)

        shutil.move(str(tmp_path), str(path))
        logger.debug(f"Atomically wrote {len(text)} characters to {path}")

    except Exception:
        if 'tmp_path' in locals() and tmp_path.exists():
            tmp_path.unlink()
        raise


def atomic_write_csv(df, path: Path, **kwargs) -> None:
    """
    Write a DataFrame to CSV atomically using a temporary file.

    Args:
        df: pandas DataFrame to write
        path: Destination path for the CSV file
        **kwargs: Additional arguments to pass to df.to_csv()
    """
    atomic_write_text(df.to_csv(**kwargs), path, suffix='.csv')


# --- Validation ---
def validate_display_mode(mode: str) -> None:
    """
    Validate that a display mode is allowed.

    Raises:
        ValueError: If mode is not in DISPLAY_MODES
    """
    if mode not in DISPLAY_MODES:
        raise ValueError(
            f"Invalid display mode: '{mode}'. "
            f"Allowed values: {', '.join(sorted(DISPLAY_MODES))}"
        )


def validate_row_limit(limit: int | None) -> None:
    """
    Validate an optional row limit (None or 0 means no limit).

    Raises:
        ValueError: If limit is negative or not an integer
    """
    if limit is None:
        return
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError(f"Invalid row limit: {limit!r}. Expected an integer or None")
    if limit < 0:
        raise ValueError(f"Invalid row limit: {limit}. Must not be negative")


__all__ = [
    # Logging
    'setup_logging',
    # Values
    'is_missing',
    'as_text',
    'normalize',
    'sort_text',
    'sort_number',
    # Formatting
    'escape_html',
    'format_time',
    'is_pov_url',
    'POV_URL_RE',
    # File operations
    'atomic_write_text',
    'atomic_write_csv',
    # Validation
    'validate_display_mode',
    'validate_row_limit',
]
