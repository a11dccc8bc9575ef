"""Small formatting helpers shared by media widgets."""

import os

from core.services.interfaces import MediaFile


def format_duration(seconds: int) -> str:
    """Format whole seconds as M:SS (minutes are not wrapped into hours).

    Args:
        seconds: Duration in seconds

    Returns:
        str: Formatted duration string, "-:--" for negative input
    """
    if seconds < 0:
        return "-:--"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


def media_files(paths: list[str]) -> list[MediaFile]:
    """Wrap chosen file paths, skipping entries that are not regular files."""
    return [MediaFile(path=p, name=os.path.basename(p)) for p in paths if os.path.isfile(p)]
