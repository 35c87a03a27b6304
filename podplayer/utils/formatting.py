def format_duration(seconds):
    """
    Format a duration in seconds as HH:MM:SS.

    Fractions are dropped; anything non-numeric or negative renders as zero.

    >>> format_duration(3725)
    '01:02:05'
    >>> format_duration(59.9)
    '00:00:59'
    """
    try:
        seconds = int(seconds)
    except (ValueError, TypeError, OverflowError):
        return "00:00:00"

    if seconds <= 0:
        return "00:00:00"

    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    remaining_seconds = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{remaining_seconds:02d}"
