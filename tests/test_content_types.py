# Tests for extension to MIME type and icon lookups.

import pytest

from folder_server import content_types
from folder_server.content_types import (
    DEFAULT_CONTENT_TYPE,
    FALLBACK_CONTENT_TYPES,
    content_type_for,
    file_extension,
    file_icon,
    file_icon_class,
    is_media_type,
)


class TestContentTypeFor:
    def test_mkv_is_webm(self):
        assert content_type_for("movie.mkv") == "video/webm"

    def test_ogg_is_video(self):
        assert content_type_for("/a/b/c.ogg") == "video/ogg"

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("photo.jpg", "image/jpeg"),
            ("photo.JPEG", "image/jpeg"),
            ("shot.PNG", "image/png"),
            ("anim.gif", "image/gif"),
            ("clip.mp4", "video/mp4"),
            ("song.mp3", "audio/mpeg"),
            ("page.html", "text/html"),
        ],
    )
    def test_common_types(self, name, expected):
        assert content_type_for(name) == expected

    @pytest.mark.parametrize("name", ["README", "archive.zzqq", "trailingdot.", "", ".hidden"])
    def test_unknown_is_octet_stream(self, name):
        assert content_type_for(name) == DEFAULT_CONTENT_TYPE

    def test_registry_used_for_other_extensions(self, monkeypatch):
        monkeypatch.setattr(content_types, "registry_lookup", lambda ext: "text/x-custom" if ext == ".abc" else None)
        assert content_type_for("thing.abc") == "text/x-custom"
        assert content_type_for("thing.def") == DEFAULT_CONTENT_TYPE

    def test_media_table_wins_over_registry(self, monkeypatch):
        monkeypatch.setattr(content_types, "registry_lookup", lambda ext: "application/x-other")
        for ext, expected in FALLBACK_CONTENT_TYPES.items():
            assert content_type_for("file" + ext.upper()) == expected

    def test_never_empty(self):
        for name in ["a", "a.b", "a.tar.gz", "x.json", "y.7z", "z.webp"]:
            assert content_type_for(name)


class TestClassification:
    def test_media_prefixes(self):
        assert is_media_type("image/png")
        assert is_media_type("video/webm")
        assert not is_media_type("audio/mpeg")
        assert not is_media_type("application/octet-stream")

    def test_file_extension_lowercases(self):
        assert file_extension("/x/Y.TXT") == ".txt"
        assert file_extension("noext") == ""


class TestIcons:
    @pytest.mark.parametrize(
        "ext,css",
        [
            (".pdf", "icon-pdf"),
            (".docx", "icon-doc"),
            (".xls", "icon-xls"),
            (".txt", "icon-txt"),
            (".7z", "icon-zip"),
            (".wav", "icon-mp3"),
            (".flac", "icon-generic"),
            (".unknown", "icon-generic"),
            ("", "icon-generic"),
        ],
    )
    def test_icon_classes(self, ext, css):
        assert file_icon_class(ext) == css

    def test_icon_glyphs(self):
        assert file_icon(".py") == file_icon(".java")
        assert file_icon(".zip") == file_icon(".rar")
        assert file_icon(".nope") == content_types.DEFAULT_FILE_ICON
        assert file_icon(".PDF") == file_icon(".pdf")
