# Folder Server v.0.1.0
# Copyright (C) 2025 EGT Maks Tymoshenko (Ukraine)
# License: MIT
# Summary: HTML Pages: Directory Grid With Lazy Thumbnails And The Single-File Media Viewer.

import html
import json
import os
import posixpath
from dataclasses import dataclass
from typing import List, Optional

from .content_types import file_icon, file_icon_class, is_image_type, is_video_type
from .errors import NotFound
from .formatting import format_date, format_file_size, format_timestamp, shorten_path_display
from .listing import EntryDescriptor, ListingModel, media_neighbours
from .paths import quote_url

THUMBNAIL_PREFIX = "/_thumbnail"
MEDIA_VIEW_QUERY = "view=media"

# 1x1 Transparent PNG Shown Until The Real Thumbnail Scrolls Into View.
PLACEHOLDER_PIXEL = (
    "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

FOLDER_GLYPH = "\U0001F4C1"
VIDEO_GLYPH = "\U0001F3AC"
IMAGE_GLYPH = "\U0001F5BC\uFE0F"


def esc(value: str) -> str:
    # Undecodable Filename Bytes Show As U+FFFD
    value = value.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
    return html.escape(value, quote=True)


def js_string(value: str) -> str:
    """Return A JS String Literal Safe To Embed Inside A <script> Block."""
    return json.dumps(value).replace("</", "<\\/")


def media_view_url(path: str) -> str:
    return quote_url(path) + "?" + MEDIA_VIEW_QUERY


def thumbnail_url(path: str) -> str:
    return THUMBNAIL_PREFIX + quote_url(path)


# ---------------------- PAGE SHELL ----------------------

def wrap_html(title: str, body: str) -> str:
    """
    Wrap Body Into Full HTML + CSS.
    Shared By The Listing Grid And The Media Viewer.
    """
    style = """
    <style>
        *, *::before, *::after {
            box-sizing: border-box;
        }
        :root {
            color-scheme: dark;
        }
        body {
            margin: 0;
            padding: 0;
            background-color: #1F1F1F;
            color: #eee;
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
            overflow-x: hidden;
        }
        a {
            color: inherit;
            text-decoration: none;
        }
        .container {
            max-width: 1200px;
            margin: 0 auto;
            padding: 20px;
        }
        header {
            display: flex;
            flex-wrap: wrap;
            justify-content: space-between;
            align-items: center;
            gap: 10px;
            background-color: #2a2a2a;
            padding: 16px 20px;
            margin-bottom: 20px;
            border-radius: 8px;
        }
        h1 {
            margin: 0;
            font-size: 22px;
            font-weight: 500;
            word-break: break-word;
        }
        .path-nav, .path-display {
            font-size: 14px;
            color: #9aa0a6;
            margin-top: 6px;
            word-break: break-all;
        }
        .path-nav a {
            color: #a5c9ff;
        }
        .back-link {
            display: flex;
            align-items: center;
            padding: 10px;
            background-color: #2a2a2a;
            border-radius: 8px;
            margin-bottom: 15px;
            font-weight: 500;
        }
        .back-arrow {
            margin-right: 10px;
            font-size: 20px;
        }
        .files-grid {
            display: grid;
            grid-template-columns: repeat(auto-fill, minmax(200px, 1fr));
            gap: 15px;
        }
        .file-card {
            background-color: #2a2a2a;
            border-radius: 8px;
            overflow: hidden;
            transition: transform 0.2s, box-shadow 0.2s;
        }
        .file-card:hover {
            transform: translateY(-5px);
            box-shadow: 0 5px 15px rgba(0,0,0,0.4);
        }
        .thumbnail {
            height: 150px;
            background-color: #333;
            position: relative;
            overflow: hidden;
            display: flex;
            justify-content: center;
            align-items: center;
        }
        .thumbnail img {
            max-width: 100%;
            max-height: 100%;
            object-fit: contain;
        }
        .directory .thumbnail {
            background-color: #23324a;
        }
        .icon {
            width: 60px;
            height: 60px;
            display: inline-flex;
            justify-content: center;
            align-items: center;
        }
        .directory-icon {
            font-size: 60px;
        }
        .file-thumbnail {
            font-size: 50px;
            color: #9aa0a6;
            text-align: center;
            line-height: 150px;
        }
        .file-info {
            padding: 10px;
        }
        .file-name {
            font-weight: 500;
            margin-bottom: 5px;
            word-break: break-word;
            font-size: 14px;
        }
        .file-meta {
            font-size: 12px;
            color: #9aa0a6;
        }
        .play-icon {
            position: absolute;
            top: 50%;
            left: 50%;
            transform: translate(-50%, -50%);
            width: 50px;
            height: 50px;
            background-color: rgba(0, 0, 0, 0.7);
            border-radius: 50%;
            display: flex;
            justify-content: center;
            align-items: center;
        }
        .play-icon:before {
            content: '';
            width: 0;
            height: 0;
            border-top: 10px solid transparent;
            border-left: 20px solid white;
            border-bottom: 10px solid transparent;
            margin-left: 5px;
        }
        .icon-pdf { color: #e74c3c; }
        .icon-doc { color: #3498db; }
        .icon-xls { color: #2ecc71; }
        .icon-txt { color: #95a5a6; }
        .icon-zip { color: #f39c12; }
        .icon-mp3 { color: #9b59b6; }
        .lazy-load {
            opacity: 0;
            transition: opacity 0.3s ease-in;
        }
        .lazy-loaded {
            opacity: 1;
        }
        .media-container {
            background-color: #000;
            display: flex;
            justify-content: center;
            align-items: center;
            margin-bottom: 20px;
            border-radius: 8px;
            overflow: hidden;
        }
        .media-container img, .media-container video {
            max-width: 100%;
            max-height: 80vh;
            display: block;
        }
        .controls {
            display: flex;
            flex-wrap: wrap;
            gap: 10px;
            padding: 10px;
            margin-bottom: 20px;
            background-color: #2a2a2a;
            border-radius: 8px;
        }
        .button {
            display: inline-block;
            padding: 8px 16px;
            background-color: #3a3a3a;
            color: #eee;
            border: none;
            border-radius: 4px;
            font-size: 14px;
            cursor: pointer;
        }
        .button:hover {
            background-color: #4a4a4a;
        }
        .button.disabled {
            opacity: 0.4;
            cursor: default;
        }
        .popup-button {
            background-color: #1f6fb5;
        }
        .download-button {
            background-color: #b56f00;
        }
        .metadata {
            background-color: #2a2a2a;
            padding: 15px;
            border-radius: 8px;
        }
        .metadata p {
            margin: 5px 0;
            font-size: 14px;
        }
        @media (max-width: 768px) {
            .files-grid {
                grid-template-columns: repeat(auto-fill, minmax(150px, 1fr));
            }
            .thumbnail {
                height: 120px;
            }
            .file-thumbnail {
                line-height: 120px;
            }
        }
    </style>
    """
    head = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{esc(title)}</title>
    {style}
</head>
<body>
"""
    tail = "</body></html>"
    return head + body + tail


# ---------------------- LISTING PAGE ----------------------

LAZY_LOAD_SCRIPT = """
<script>
(function() {
  var placeholder = '%(placeholder)s';
  var fallback = function(img) {
    img.onerror = null;
    img.src = placeholder;
    var box = img.parentNode;
    if (box) box.innerHTML = '<div class="file-thumbnail">%(image_glyph)s</div>';
  };
  var reveal = function(img) {
    img.onerror = function() { fallback(img); };
    img.onload = function() { img.classList.add('lazy-loaded'); };
    img.src = img.getAttribute('data-src');
  };
  var start = function() {
    var images = [].slice.call(document.querySelectorAll('img.lazy-load'));
    if (images.length === 0) return;
    if ('IntersectionObserver' in window) {
      var observer = new IntersectionObserver(function(entries) {
        entries.forEach(function(entry) {
          if (!entry.isIntersecting) return;
          observer.unobserve(entry.target);
          reveal(entry.target);
        });
      });
      images.forEach(function(img) { observer.observe(img); });
      return;
    }
    // Older Browsers: Poll Visibility On Scroll/Resize
    var busy = false;
    var check = function() {
      if (busy) return;
      busy = true;
      setTimeout(function() {
        images = images.filter(function(img) {
          var rect = img.getBoundingClientRect();
          var visible = rect.top <= window.innerHeight && rect.bottom >= 0 &&
            getComputedStyle(img).display !== 'none';
          if (visible) reveal(img);
          return !visible;
        });
        if (images.length === 0) {
          document.removeEventListener('scroll', check);
          window.removeEventListener('resize', check);
          window.removeEventListener('orientationchange', check);
        }
        busy = false;
      }, 200);
    };
    document.addEventListener('scroll', check);
    window.addEventListener('resize', check);
    window.addEventListener('orientationchange', check);
    check();
  };
  if (document.readyState === 'loading') {
    document.addEventListener('DOMContentLoaded', start);
  } else {
    start();
  }
})();
</script>
""" % {"placeholder": PLACEHOLDER_PIXEL, "image_glyph": IMAGE_GLYPH}


def render_breadcrumb(current_path: str) -> str:
    """Return Clickable Path Segments, Root First."""
    parts = [p for p in current_path.split("/") if p]
    crumbs = ["<a href='/'>/</a>"]
    acc = ""
    for i, part in enumerate(parts):
        acc = acc + "/" + part
        if i > 0:
            crumbs.append(" / ")
        crumbs.append(f"<a href='{quote_url(acc)}'>{esc(part)}</a>")
    return "".join(crumbs)


def render_entry(entry: EntryDescriptor) -> str:
    name = esc(entry.name)

    if entry.is_dir:
        return (
            "<div class='file-card directory'>"
            f"<a href='{quote_url(entry.path)}'>"
            f"<div class='thumbnail'><div class='icon directory-icon'>{FOLDER_GLYPH}</div></div>"
            f"<div class='file-info'><div class='file-name'>{name}</div><div class='file-meta'>Directory</div></div>"
            "</a></div>"
        )

    size = format_file_size(entry.size)

    if entry.is_image:
        return (
            "<div class='file-card'>"
            f"<a href='{media_view_url(entry.path)}'>"
            "<div class='thumbnail'>"
            f"<img src='{PLACEHOLDER_PIXEL}' data-src='{thumbnail_url(entry.path)}' alt='{name}' class='lazy-load'>"
            "</div>"
            f"<div class='file-info'><div class='file-name'>{name}</div><div class='file-meta'>Image · {size}</div></div>"
            "</a></div>"
        )

    if entry.is_video:
        return (
            "<div class='file-card'>"
            f"<a href='{media_view_url(entry.path)}'>"
            f"<div class='thumbnail video-thumbnail'><div class='file-thumbnail icon-video'>{VIDEO_GLYPH}</div><div class='play-icon'></div></div>"
            f"<div class='file-info'><div class='file-name'>{name}</div><div class='file-meta'>Video · {size}</div></div>"
            "</a></div>"
        )

    return (
        "<div class='file-card'>"
        f"<a href='{quote_url(entry.path)}'>"
        f"<div class='thumbnail'><div class='file-thumbnail {file_icon_class(entry.extension)}'>{file_icon(entry.extension)}</div></div>"
        f"<div class='file-info'><div class='file-name'>{name}</div><div class='file-meta'>{size} · {format_date(entry.mtime)}</div></div>"
        "</a></div>"
    )


def render_listing_page(model: ListingModel) -> str:
    """Return The Directory Grid Page For A Listing Model. Touches No Files."""
    body_parts: List[str] = []
    body_parts.append("<div class='container'>")
    body_parts.append(
        "<header><div>"
        f"<h1>{esc(model.title)}</h1>"
        f"<div class='path-nav'>{render_breadcrumb(model.current_path)}</div>"
        "</div></header>"
    )

    if model.parent_path:
        body_parts.append(
            f"<a href='{quote_url(model.parent_path)}' class='back-link'><span class='back-arrow'>←</span> Parent Directory</a>"
        )

    body_parts.append("<div class='files-grid'>")
    for entry in model.entries:
        body_parts.append(render_entry(entry))
    body_parts.append("</div>")
    body_parts.append("</div>")
    body_parts.append(LAZY_LOAD_SCRIPT)

    return wrap_html(model.title, "".join(body_parts))


# ---------------------- MEDIA VIEWER ----------------------

@dataclass(frozen=True)
class MediaViewModel:
    name: str
    file_path: str
    parent_path: str
    is_image: bool
    is_video: bool
    content_type: str
    size: str
    mod_time: str
    display_path: str = ""
    prev_path: Optional[str] = None
    next_path: Optional[str] = None


def build_media_view(filepath: str, rel: str, content_type: str) -> MediaViewModel:
    """Stat The File And Collect Everything The Viewer Shows. Missing File -> NotFound."""
    try:
        st = os.stat(filepath)
    except (OSError, ValueError) as exc:
        raise NotFound() from exc

    rel_dir = posixpath.dirname(rel)
    name = os.path.basename(filepath)
    prev_entry, next_entry = media_neighbours(os.path.dirname(filepath), rel_dir, name)

    return MediaViewModel(
        name=name,
        file_path="/" + rel,
        parent_path="/" + rel_dir,
        is_image=is_image_type(content_type),
        is_video=is_video_type(content_type),
        content_type=content_type,
        size=format_file_size(st.st_size),
        mod_time=format_timestamp(st.st_mtime),
        display_path=shorten_path_display("/" + rel),
        prev_path=prev_entry.path if prev_entry else None,
        next_path=next_entry.path if next_entry else None,
    )


# The Pop-Out Window Starts From The Main Player's Position
# And Pauses The Main Player When It Is Closed.
POPOUT_SCRIPT = """
<script>
(function() {
  var btn = document.getElementById('popupBtn');
  var mainVideo = document.getElementById('videoPlayer');
  if (!btn || !mainVideo) return;
  var videoSrc = %(src)s;
  var contentType = %(ctype)s;
  var title = %(title)s;
  btn.addEventListener('click', function() {
    var width = 800;
    var height = 500;
    var left = (screen.width - width) / 2;
    var top = (screen.height - height) / 2;
    var popup = window.open('', 'folder-server-popout',
      'width=' + width + ',height=' + height + ',top=' + top + ',left=' + left);
    if (!popup) return;
    var doc = popup.document;
    doc.open();
    doc.write('<!DOCTYPE html><html lang="en"><head><meta charset="utf-8"><title></title>' +
      '<style>body { margin: 0; background-color: #000; overflow: hidden; }' +
      ' video { width: 100%%; height: 100vh; }</style></head><body></body></html>');
    doc.close();
    doc.title = title;
    var video = doc.createElement('video');
    video.id = 'popupVideo';
    video.controls = true;
    video.autoplay = true;
    var source = doc.createElement('source');
    source.src = videoSrc;
    source.type = contentType;
    video.appendChild(source);
    doc.body.appendChild(video);
    var startAt = mainVideo.currentTime;
    var seek = function() { video.currentTime = startAt; };
    if (video.readyState >= 1) {
      seek();
    } else {
      video.addEventListener('loadedmetadata', seek, { once: true });
    }
    var pauseMain = function() {
      if (!mainVideo.paused) mainVideo.pause();
    };
    popup.addEventListener('beforeunload', pauseMain);
    popup.addEventListener('pagehide', pauseMain);
  });
})();
</script>
"""


def render_nav_button(label: str, path: Optional[str]) -> str:
    if path:
        return f"<a class='button' href='{media_view_url(path)}'>{label}</a>"
    return f"<span class='button disabled'>{label}</span>"


def render_media_viewer(view: MediaViewModel) -> str:
    """Return The Single-File Viewer Page. Touches No Files."""
    name = esc(view.name)
    file_url = quote_url(view.file_path)

    body_parts: List[str] = []
    body_parts.append(
        "<header><div>"
        f"<h1>{name}</h1>"
        f"<div class='path-display'>{esc(view.display_path)}</div>"
        "</div>"
        f"<div><a href='{quote_url(view.parent_path)}' class='button'>Back to directory</a></div>"
        "</header>"
    )
    body_parts.append("<div class='container'>")

    body_parts.append("<div class='media-container'>")
    if view.is_image:
        body_parts.append(f"<img src='{file_url}' alt='{name}'>")
    elif view.is_video:
        body_parts.append("<video id='videoPlayer' controls>")
        body_parts.append(f"<source src='{file_url}' type='{esc(view.content_type)}'>")
        body_parts.append("Your browser does not support the video tag.")
        body_parts.append("</video>")
    body_parts.append("</div>")

    body_parts.append("<div class='controls'>")
    body_parts.append(render_nav_button("Previous", view.prev_path))
    body_parts.append(render_nav_button("Next", view.next_path))
    if view.is_video:
        body_parts.append("<button id='popupBtn' type='button' class='button popup-button'>Pop-out Player</button>")
    body_parts.append(f"<a href='{file_url}' download class='button download-button'>Download</a>")
    body_parts.append("</div>")

    body_parts.append(
        "<div class='metadata'>"
        f"<p><strong>File name:</strong> {name}</p>"
        f"<p><strong>File size:</strong> {esc(view.size)}</p>"
        f"<p><strong>Last modified:</strong> {esc(view.mod_time)}</p>"
        f"<p><strong>Content type:</strong> {esc(view.content_type)}</p>"
        "</div>"
    )
    body_parts.append("</div>")

    if view.is_video:
        body_parts.append(
            POPOUT_SCRIPT % {
                "src": js_string(file_url),
                "ctype": js_string(view.content_type),
                "title": js_string(view.name),
            }
        )

    return wrap_html(view.name, "".join(body_parts))
