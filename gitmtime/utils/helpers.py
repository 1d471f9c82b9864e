"""Helper utility functions."""

from datetime import datetime, timezone
from typing import Iterable


def format_timestamp(epoch: int, format_str: str = '%Y-%m-%dT%H:%M:%SZ') -> str:
    """
    Format seconds since the epoch as a UTC timestamp.
    
    Args:
        epoch: Seconds since the epoch
        format_str: Output format string
        
    Returns:
        Formatted timestamp string
    """
    try:
        return datetime.fromtimestamp(epoch, tz=timezone.utc).strftime(format_str)
    except (OverflowError, OSError, ValueError):
        return str(epoch)


def summarize_paths(paths: Iterable[str], limit: int = 5) -> str:
    """
    Render a short, sorted preview of a path collection for log messages.
    
    Args:
        paths: Paths to show
        limit: Maximum number of paths listed before eliding
        
    Returns:
        Comma-separated preview, e.g. "a.txt, b.txt (+3 more)"
    """
    ordered = sorted(paths)
    shown = ", ".join(ordered[:limit])
    if len(ordered) > limit:
        shown += f" (+{len(ordered) - limit} more)"
    return shown
