# Folder Server v.0.1.0
# Copyright (C) 2025 EGT Maks Tymoshenko (Ukraine)
# License: MIT
# Summary: Per-Request Routing: Thumbnails, Directory Grid, Media Viewer Or Raw File.

import logging
import os
import stat
import time
from typing import Mapping, Optional, Protocol
from urllib.parse import parse_qs, unquote_to_bytes, urlsplit

from . import transfer
from .content_types import content_type_for, is_media_type
from .errors import FolderServerError, NotFound, ReadFailure, RenderFailure
from .listing import build_listing
from .pages import THUMBNAIL_PREFIX, build_media_view, render_listing_page, render_media_viewer
from .paths import resolve_request_path

log = logging.getLogger(__name__)

THUMBNAIL_CACHE_CONTROL = "public, max-age=86400"


class ResponseWriter(Protocol):
    """What The Router Needs From A Response; The HTTP Handler Provides It."""

    headers_sent: bool

    def send_response(self, code: int) -> None: ...

    def send_header(self, keyword: str, value: str) -> None: ...

    def end_headers(self) -> None: ...

    def write(self, data: bytes) -> None: ...

    def send_error(self, code: int, message: Optional[str] = None) -> None: ...


class StatusRecorder:
    """Writer Wrapper Remembering The First Status Code Written Through It."""

    def __init__(self, inner: ResponseWriter) -> None:
        self.inner = inner
        self.status: Optional[int] = None

    @property
    def headers_sent(self) -> bool:
        return self.inner.headers_sent

    def _record(self, code: int) -> None:
        if self.status is None:
            self.status = code

    def send_response(self, code: int) -> None:
        self._record(code)
        self.inner.send_response(code)

    def send_error(self, code: int, message: Optional[str] = None) -> None:
        self._record(code)
        self.inner.send_error(code, message)

    def send_header(self, keyword: str, value: str) -> None:
        self.inner.send_header(keyword, value)

    def end_headers(self) -> None:
        self.inner.end_headers()

    def write(self, data: bytes) -> None:
        self.inner.write(data)


class Router:
    """
    Routes One Request Against A Fixed Serve Root:
      - /_thumbnail/Path   → Original Bytes With A 24h Cache Header
      - /Path (Folder)     → Directory Grid
      - /Path?view=media   → Viewer Page (Images And Videos Only)
      - /Path              → Raw File
    Holds No Per-Request State; One Instance Serves All Threads.
    """

    def __init__(self, root: str, verbose: bool = False) -> None:
        self.root = os.path.abspath(root)
        self.verbose = verbose

    def handle(self, out: ResponseWriter, method: str, raw_path: str, headers: Mapping[str, str]) -> Optional[int]:
        """Dispatch And, In Verbose Mode, Log Method, Path, Status And Duration. Returns The Status."""
        start = time.monotonic()
        recorder = StatusRecorder(out)
        path_only = urlsplit(raw_path).path
        if self.verbose:
            log.info("Received request: %s %s", method, path_only)
        try:
            self.dispatch(recorder, raw_path, headers)
        finally:
            if self.verbose:
                log.info(
                    "Served request: %s %s, Status: %s, Duration: %.3fs",
                    method, path_only, recorder.status or 200, time.monotonic() - start,
                )
        return recorder.status

    def dispatch(self, out: ResponseWriter, raw_path: str, headers: Mapping[str, str]) -> None:
        parsed = urlsplit(raw_path)
        path_only = os.fsdecode(unquote_to_bytes(parsed.path))
        query = parse_qs(parsed.query)

        try:
            if path_only.startswith(THUMBNAIL_PREFIX + "/"):
                self.send_thumbnail(out, path_only[len(THUMBNAIL_PREFIX):], headers)
                return

            full, rel = resolve_request_path(self.root, path_only)
            try:
                st = os.stat(full)
            except (OSError, ValueError) as exc:
                raise NotFound() from exc

            if stat.S_ISDIR(st.st_mode):
                self.send_dir(out, full, rel)
                return

            content_type = content_type_for(full)
            if is_media_type(content_type) and query.get("view", [""])[0] == "media":
                self.send_media_viewer(out, full, rel, content_type)
                return

            transfer.send_file(out, full, content_type, headers)
        except ConnectionError as exc:
            log.debug("Client went away during %s: %s", path_only, exc)
        except FolderServerError as exc:
            self.fail(out, exc, path_only)
        except OSError as exc:
            # Read Error After Streaming Started
            self.fail(out, ReadFailure(str(exc)), path_only)

    def fail(self, out: ResponseWriter, exc: FolderServerError, path_only: str) -> None:
        if out.headers_sent:
            # Bytes Already Sent Cannot Be Taken Back; Response Stays Truncated
            log.warning("Response for %s truncated: %s", path_only, exc.message)
            return
        if exc.status >= 500:
            log.warning("%s failed: %s", path_only, exc.message)
        out.send_error(exc.status, exc.message)

    # ---------- Thumbnails ----------

    def send_thumbnail(self, out: ResponseWriter, rel_path: str, headers: Mapping[str, str]) -> None:
        """No Resizing: The Original File With A Client Cache Hint."""
        full, _rel = resolve_request_path(self.root, rel_path)
        if not os.path.isfile(full):
            raise NotFound()
        transfer.send_file(
            out, full, content_type_for(full), headers,
            extra_headers={"Cache-Control": THUMBNAIL_CACHE_CONTROL},
        )

    # ---------- Directory Listing ----------

    def send_dir(self, out: ResponseWriter, directory: str, rel: str) -> None:
        model = build_listing(directory, rel)
        try:
            page = render_listing_page(model)
        except Exception as exc:
            log.exception("Rendering listing for /%s failed", rel)
            raise RenderFailure(str(exc)) from exc
        self.send_html(out, page)

    # ---------- Media Viewer Via ?view=media ----------

    def send_media_viewer(self, out: ResponseWriter, filepath: str, rel: str, content_type: str) -> None:
        view = build_media_view(filepath, rel, content_type)
        try:
            page = render_media_viewer(view)
        except Exception as exc:
            log.exception("Rendering viewer for /%s failed", rel)
            raise RenderFailure(str(exc)) from exc
        self.send_html(out, page)

    def send_html(self, out: ResponseWriter, page: str) -> None:
        body = page.encode("utf-8", "replace")
        out.send_response(200)
        out.send_header("Content-Type", "text/html; charset=utf-8")
        out.send_header("Content-Length", str(len(body)))
        out.end_headers()
        out.write(body)
