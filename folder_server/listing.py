# Folder Server v.0.1.0
# Copyright (C) 2025 EGT Maks Tymoshenko (Ukraine)
# License: MIT
# Summary: Directory Reading, Entry Classification And Sorting For The Listing Grid.

import logging
import os
import posixpath
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .content_types import content_type_for, file_extension, is_image_type, is_video_type
from .errors import ReadFailure
from .paths import parent_url_path, url_path

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryDescriptor:
    """One Grid Cell: A File Or Directory Directly Under The Listed Folder."""

    name: str
    is_dir: bool
    size: int
    mtime: float
    path: str
    content_type: str = ""
    is_image: bool = False
    is_video: bool = False
    extension: str = ""

    @property
    def is_media(self) -> bool:
        return self.is_image or self.is_video


@dataclass
class ListingModel:
    title: str
    current_path: str
    parent_path: str
    entries: List[EntryDescriptor] = field(default_factory=list)


def sort_key(entry: EntryDescriptor) -> Tuple[bool, str]:
    # Directories First, Then Case-Insensitive Name
    return (not entry.is_dir, entry.name.lower())


def sort_entries(entries: Iterable[EntryDescriptor]) -> List[EntryDescriptor]:
    return sorted(entries, key=sort_key)


def describe_entry(dir_entry: os.DirEntry, rel: str) -> Optional[EntryDescriptor]:
    """Return Descriptor, Or None If The Entry Cannot Be Stat'ed (Broken Link, Race)."""
    try:
        st = dir_entry.stat()
        is_dir = dir_entry.is_dir()
    except OSError as exc:
        log.debug("Skipping %s: %s", dir_entry.path, exc)
        return None

    name = dir_entry.name
    entry_rel = posixpath.join(rel, name) if rel else name
    if is_dir:
        return EntryDescriptor(
            name=name,
            is_dir=True,
            size=st.st_size,
            mtime=st.st_mtime,
            path=url_path(entry_rel),
        )

    ctype = content_type_for(name)
    return EntryDescriptor(
        name=name,
        is_dir=False,
        size=st.st_size,
        mtime=st.st_mtime,
        path=url_path(entry_rel),
        content_type=ctype,
        is_image=is_image_type(ctype),
        is_video=is_video_type(ctype),
        extension=file_extension(name),
    )


def list_entries(directory: str, rel: str) -> List[EntryDescriptor]:
    """
    Read Direct Children Of Directory (Non-Recursive) And Return Them Sorted.
    Unreadable Directory -> ReadFailure; Unstat-able Children Are Omitted.
    """
    try:
        with os.scandir(directory) as it:
            raw = list(it)
    except OSError as exc:
        raise ReadFailure(str(exc)) from exc

    entries: List[EntryDescriptor] = []
    for dir_entry in raw:
        entry = describe_entry(dir_entry, rel)
        if entry is not None:
            entries.append(entry)
    return sort_entries(entries)


def build_listing(directory: str, rel: str) -> ListingModel:
    """Return Render-Ready Model For The Directory At Rel ("" For Root)."""
    entries = list_entries(directory, rel)
    return ListingModel(
        title="Index of /" + rel,
        current_path="/" + rel,
        parent_path=parent_url_path(rel),
        entries=entries,
    )


def media_neighbours(directory: str, rel_dir: str, name: str) -> Tuple[Optional[EntryDescriptor], Optional[EntryDescriptor]]:
    """
    Return (Previous, Next) Image/Video Siblings Of Name In Listing Order.
    A Folder That Cannot Be Read Simply Yields No Neighbours.
    """
    try:
        entries = list_entries(directory, rel_dir)
    except ReadFailure:
        return None, None

    media = [e for e in entries if e.is_media]
    names = [e.name for e in media]
    if name not in names:
        return None, None
    idx = names.index(name)
    prev_entry = media[idx - 1] if idx > 0 else None
    next_entry = media[idx + 1] if idx < len(media) - 1 else None
    return prev_entry, next_entry
