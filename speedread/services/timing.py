"""
Timing helpers for RSVP playback.

Every word is shown for the same base duration derived from the WPM
setting; these helpers turn that into tick intervals and reading-time
estimates for the remaining text.
"""

from speedread.exceptions import InvalidWpmError


def calculate_base_duration_ms(wpm: int) -> float:
    """
    Calculate the word display duration from WPM (words per minute).

    Args:
        wpm: Target reading speed in words per minute.

    Returns:
        Duration in milliseconds for one word.

    Raises:
        InvalidWpmError: If wpm is not positive.

    Examples:
        >>> calculate_base_duration_ms(300)
        200.0
        >>> calculate_base_duration_ms(600)
        100.0
    """
    if wpm <= 0:
        raise InvalidWpmError(wpm)

    # 60,000 ms per minute / words per minute = ms per word
    return 60_000.0 / wpm


def estimate_reading_time_ms(word_count: int, wpm: int) -> float:
    """
    Estimate the time needed to read word_count words at wpm.

    Examples:
        >>> estimate_reading_time_ms(300, 300)
        60000.0
    """
    return max(0, word_count) * calculate_base_duration_ms(wpm)


def format_duration(total_ms: float) -> str:
    """
    Format a duration as a short human-readable string.

    Examples:
        >>> format_duration(45_000)
        '45 sec'
        >>> format_duration(360_000)
        '6 min'
        >>> format_duration(4_140_000)
        '1 hr 9 min'
    """
    total_seconds = int(total_ms / 1000)

    if total_seconds < 60:
        return f"{total_seconds} sec"

    total_minutes = total_seconds // 60
    if total_minutes < 60:
        return f"{total_minutes} min"

    hours = total_minutes // 60
    minutes = total_minutes % 60

    if minutes == 0:
        return f"{hours} hr"

    return f"{hours} hr {minutes} min"
