# Folder Server v.0.1.0
# Copyright (C) 2025 EGT Maks Tymoshenko (Ukraine)
# License: MIT
# Summary: Human-Readable Sizes, Dates And Path Display Helpers.

from datetime import datetime

LISTING_DATE_FORMAT = "%b %d, %Y"
VIEWER_DATE_FORMAT = "%b %d, %Y %H:%M:%S"

_SIZE_UNITS = "KMGTPE"


def format_file_size(size: int) -> str:
    """
    Return Binary-Unit Size String.
    0..1023 -> "N B", 1024 -> "1.0 KiB", 1048576 -> "1.0 MiB".
    """
    unit = 1024
    if size < unit:
        return f"{size} B"
    div, exp = unit, 0
    n = size // unit
    while n >= unit:
        div *= unit
        exp += 1
        n //= unit
    return f"{size / div:.1f} {_SIZE_UNITS[exp]}iB"


def format_date(mtime: float) -> str:
    """Return Short Local Date Used On Listing Cards."""
    return datetime.fromtimestamp(mtime).strftime(LISTING_DATE_FORMAT)


def format_timestamp(mtime: float) -> str:
    """Return Local Date And Time Used On The Media Viewer."""
    return datetime.fromtimestamp(mtime).strftime(VIEWER_DATE_FORMAT)


def shorten_path_display(path: str, max_len: int = 70) -> str:
    """
    Viewer Path Line: Long Paths Become "..." Plus As Many Trailing Segments As Fit.
    The File Name Itself Is Always Kept, Even When It Alone Is Too Long.
    """
    if not path:
        return "/"
    if len(path) <= max_len:
        return path
    budget = max_len - len("...")
    tail = ""
    for segment in reversed(path.split("/")):
        candidate = "/" + segment + tail
        if tail and len(candidate) > budget:
            break
        tail = candidate
    return "..." + tail
