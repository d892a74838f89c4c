# Folder Server v.0.1.0
# Copyright (C) 2025 EGT Maks Tymoshenko (Ukraine)
# License: MIT
# Summary: URL Path Normalization And Serve Root Containment.

import os
import posixpath
from typing import Tuple
from urllib.parse import quote

from .errors import NotFound


def normalize_request_path(url_path: str) -> str:
    """
    Return Cleaned Relative Path ("" For Root) With "." And ".." Resolved.
    Cleaning Happens Against A Rooted Path, So ".." Cannot Climb Above "/".
    """
    cleaned = posixpath.normpath("/" + url_path)
    return cleaned.lstrip("/")


def is_within_root(root: str, full: str) -> bool:
    root_norm = os.path.normpath(root)
    try:
        return os.path.commonpath([root_norm, os.path.normpath(full)]) == root_norm
    except ValueError:
        # Different Drives On Windows
        return False


def resolve_request_path(root: str, url_path: str) -> Tuple[str, str]:
    """
    Map A Decoded URL Path To (Absolute Filesystem Path, Relative Path).
    Raises NotFound If The Result Would Leave The Serve Root.
    """
    if "\x00" in url_path:
        raise NotFound()
    rel = normalize_request_path(url_path)
    full = os.path.normpath(os.path.join(root, *rel.split("/"))) if rel else os.path.normpath(root)
    if not is_within_root(root, full):
        raise NotFound()
    return full, rel


def parent_url_path(rel: str) -> str:
    """Return "" At Root (No Parent Link), "/" For Top-Level Entries, Else "/Parent"."""
    if rel == "":
        return ""
    parent = posixpath.dirname(rel)
    return "/" + parent if parent else "/"


def url_path(rel: str) -> str:
    """Return Public URL Path For A Relative Path, Always Rooted At "/"."""
    return "/" + rel.lstrip("/")


def quote_url(path: str) -> str:
    """Percent-Encode The On-Disk Bytes, So Names That Are Not Valid UTF-8 Still Round-Trip."""
    return quote(os.fsencode(path), safe="/")
