# Folder Server v.0.1.0
# Copyright (C) 2025 EGT Maks Tymoshenko (Ukraine)
# License: MIT
# Summary: Extension To MIME Type And Extension To Icon Lookup Tables.

import mimetypes
import os
from typing import Optional

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Media Types Pinned Ahead Of The Registry So Classification Does Not Drift With The Python Version.
FALLBACK_CONTENT_TYPES = {
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".ogg": "video/ogg",
    ".m4v": "video/x-m4v",
    ".mkv": "video/webm",
    ".mov": "video/quicktime",
    ".mp3": "audio/mpeg",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}

FILE_ICONS = {
    ".pdf": "\U0001F4C4",
    ".doc": "\U0001F4DD",
    ".docx": "\U0001F4DD",
    ".xls": "\U0001F4CA",
    ".xlsx": "\U0001F4CA",
    ".txt": "\U0001F4C4",
    ".zip": "\U0001F5DC\uFE0F",
    ".rar": "\U0001F5DC\uFE0F",
    ".7z": "\U0001F5DC\uFE0F",
    ".mp3": "\U0001F3B5",
    ".wav": "\U0001F3B5",
    ".ogg": "\U0001F3B5",
    ".flac": "\U0001F3B5",
    ".exe": "\u2699\uFE0F",
    ".msi": "\u2699\uFE0F",
    ".js": "\U0001F4BB",
    ".py": "\U0001F4BB",
    ".php": "\U0001F4BB",
    ".html": "\U0001F4BB",
    ".css": "\U0001F4BB",
    ".go": "\U0001F4BB",
    ".java": "\U0001F4BB",
}
DEFAULT_FILE_ICON = "\U0001F4C4"

FILE_ICON_CLASSES = {
    ".pdf": "icon-pdf",
    ".doc": "icon-doc",
    ".docx": "icon-doc",
    ".xls": "icon-xls",
    ".xlsx": "icon-xls",
    ".txt": "icon-txt",
    ".zip": "icon-zip",
    ".rar": "icon-zip",
    ".7z": "icon-zip",
    ".mp3": "icon-mp3",
    ".wav": "icon-mp3",
    ".ogg": "icon-mp3",
}
DEFAULT_FILE_ICON_CLASS = "icon-generic"

# Built-In Table Only, So Results Do Not Depend On The Host's mime.types.
_REGISTRY = mimetypes.MimeTypes()


def file_extension(path: str) -> str:
    """Return Lowercased Extension Including The Dot, Or An Empty String."""
    return os.path.splitext(path)[1].lower()


def registry_lookup(ext: str) -> Optional[str]:
    if not ext:
        return None
    ctype, _encoding = _REGISTRY.guess_type("file" + ext, strict=False)
    return ctype


def content_type_for(path: str) -> str:
    """
    Return MIME Type For A File Path; Never Empty.
    Media Table, Then The Built-In Registry, Then application/octet-stream.
    """
    ext = file_extension(path)
    if ext in FALLBACK_CONTENT_TYPES:
        return FALLBACK_CONTENT_TYPES[ext]
    return registry_lookup(ext) or DEFAULT_CONTENT_TYPE


def is_image_type(content_type: str) -> bool:
    return content_type.startswith("image/")


def is_video_type(content_type: str) -> bool:
    return content_type.startswith("video/")


def is_media_type(content_type: str) -> bool:
    return is_image_type(content_type) or is_video_type(content_type)


def file_icon(ext: str) -> str:
    return FILE_ICONS.get(ext.lower(), DEFAULT_FILE_ICON)


def file_icon_class(ext: str) -> str:
    return FILE_ICON_CLASSES.get(ext.lower(), DEFAULT_FILE_ICON_CLASS)
