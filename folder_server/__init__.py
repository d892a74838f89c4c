# Folder Server v.0.1.0
# Copyright (C) 2025 EGT Maks Tymoshenko (Ukraine)
# License: MIT
# Summary: Local Static File Server With A Directory Grid, Lazy Image Thumbnails And An Inline Image/Video Viewer.

__version__ = "0.1.0"
