"""Human-readable formatting for sizes and durations."""

SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_bytes(num_bytes: int, decimals: int = 2) -> str:
    """Format a byte count with a binary unit.

    Example:
        1536 -> "1.5 KB"
    """
    if num_bytes <= 0:
        return "0 Bytes"

    value = float(num_bytes)
    index = 0
    while value >= 1024 and index < len(SIZE_UNITS) - 1:
        value /= 1024
        index += 1

    decimals = max(decimals, 0)
    text = f"{value:.{decimals}f}"
    # Drop trailing zeros: 2.50 -> 2.5, 3.00 -> 3
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[index]}"


def format_duration(ms: int | float) -> str:
    """Format milliseconds as ``850ms``, ``2.5s`` or ``1m 5s``."""
    if ms < 1000:
        return f"{int(ms)}ms"
    if ms < 60_000:
        return f"{ms / 1000:.1f}s"
    minutes = int(ms // 60_000)
    seconds = int((ms % 60_000) // 1000)
    return f"{minutes}m {seconds}s"
