# Folder Server v.0.1.0
# Copyright (C) 2025 EGT Maks Tymoshenko (Ukraine)
# License: MIT
# Summary: Raw File Transfer With Single Byte Ranges And Last-Modified Revalidation.

import email.utils
import os
from typing import Dict, Mapping, Optional, Tuple

from .errors import NotFound, ReadFailure

CHUNK_SIZE = 64 * 1024


class UnsatisfiableRange(Exception):
    pass


def parse_range(header: Optional[str], file_size: int) -> Optional[Tuple[int, int]]:
    """
    Return Inclusive (Start, End) For A Single "bytes=" Range.
    None Means "Ignore The Header And Send Everything" (Absent, Malformed Or Multi-Range).
    Raises UnsatisfiableRange When The Range Lies Past The End Of The File.
    """
    if not header:
        return None
    header = header.strip()
    if not header.startswith("bytes="):
        return None
    ranges = header[len("bytes="):].strip()
    if "," in ranges or "-" not in ranges:
        return None

    first, last = (part.strip() for part in ranges.split("-", 1))
    try:
        if first == "":
            # Suffix Range: Last N Bytes
            length = int(last)
            if length < 0:
                return None
            if length == 0 or file_size == 0:
                raise UnsatisfiableRange(ranges)
            return max(0, file_size - length), file_size - 1
        start = int(first)
        end = int(last) if last else file_size - 1
    except ValueError:
        return None

    if start < 0 or end < start:
        return None
    if start >= file_size:
        raise UnsatisfiableRange(ranges)
    return start, min(end, file_size - 1)


def not_modified_since(header: Optional[str], mtime: float) -> bool:
    """True If The Client Copy (If-Modified-Since) Is At Least As New As The File."""
    if not header:
        return False
    try:
        since = email.utils.parsedate_to_datetime(header)
    except (TypeError, ValueError, IndexError, OverflowError):
        return False
    if since is None:
        return False
    return int(mtime) <= since.timestamp()


def copy_range(src, out, remaining: int) -> None:
    while remaining > 0:
        chunk = src.read(min(CHUNK_SIZE, remaining))
        if not chunk:
            break
        out.write(chunk)
        remaining -= len(chunk)


def send_file(
    out,
    filepath: str,
    content_type: str,
    request_headers: Mapping[str, str],
    extra_headers: Optional[Dict[str, str]] = None,
) -> None:
    """
    Stream A File To The Writer.
    Supports Range (206/416) And If-Modified-Since (304); Everything Else Is A Full 200.
    """
    try:
        st = os.stat(filepath)
    except (OSError, ValueError) as exc:
        raise NotFound() from exc

    file_size = st.st_size
    last_modified = email.utils.formatdate(st.st_mtime, usegmt=True)
    extra = dict(extra_headers or {})

    if not_modified_since(request_headers.get("If-Modified-Since"), st.st_mtime):
        out.send_response(304)
        out.send_header("Last-Modified", last_modified)
        for key, value in extra.items():
            out.send_header(key, value)
        out.end_headers()
        return

    try:
        byte_range = parse_range(request_headers.get("Range"), file_size)
    except UnsatisfiableRange:
        out.send_response(416)
        out.send_header("Content-Range", f"bytes */{file_size}")
        out.send_header("Content-Length", "0")
        out.end_headers()
        return

    try:
        f = open(filepath, "rb")
    except OSError as exc:
        raise ReadFailure(str(exc)) from exc

    with f:
        if byte_range is None:
            start, length = 0, file_size
            out.send_response(200)
        else:
            start, end = byte_range
            length = end - start + 1
            out.send_response(206)
            out.send_header("Content-Range", f"bytes {start}-{end}/{file_size}")

        out.send_header("Content-Type", content_type)
        out.send_header("Content-Length", str(length))
        out.send_header("Last-Modified", last_modified)
        out.send_header("Accept-Ranges", "bytes")
        for key, value in extra.items():
            out.send_header(key, value)
        out.end_headers()

        if start:
            f.seek(start)
        copy_range(f, out, length)
