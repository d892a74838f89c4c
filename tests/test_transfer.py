# Tests for the raw file transfer primitive: full body, byte ranges, revalidation.

import email.utils
import os

import pytest

from folder_server import transfer
from folder_server.errors import NotFound
from folder_server.transfer import UnsatisfiableRange, not_modified_since, parse_range, send_file

DATA = bytes(range(200)) * 1000  # 200 000 bytes, spans several chunks


@pytest.fixture
def blob(tmp_path):
    path = tmp_path / "blob.bin"
    path.write_bytes(DATA)
    return str(path)


class TestParseRange:
    @pytest.mark.parametrize(
        "header,expected",
        [
            (None, None),
            ("", None),
            ("bytes=0-9", (0, 9)),
            ("bytes=10-", (10, 99)),
            ("bytes=-10", (90, 99)),
            ("bytes=-500", (0, 99)),
            ("bytes=50-5000", (50, 99)),
            ("bytes= 5 - 6 ", (5, 6)),
            ("items=0-9", None),
            ("bytes=0-1,5-6", None),
            ("bytes=abc-", None),
            ("bytes=9-3", None),
            ("bytes=", None),
        ],
    )
    def test_cases(self, header, expected):
        assert parse_range(header, 100) == expected

    @pytest.mark.parametrize("header,size", [("bytes=100-", 100), ("bytes=-0", 100), ("bytes=-5", 0), ("bytes=0-", 0)])
    def test_unsatisfiable(self, header, size):
        with pytest.raises(UnsatisfiableRange):
            parse_range(header, size)


class TestNotModifiedSince:
    def test_newer_and_older(self):
        mtime = 1_700_000_000.5
        assert not_modified_since(email.utils.formatdate(mtime + 60, usegmt=True), mtime)
        assert not_modified_since(email.utils.formatdate(mtime, usegmt=True), mtime)
        assert not not_modified_since(email.utils.formatdate(mtime - 60, usegmt=True), mtime)

    def test_garbage_is_ignored(self):
        assert not not_modified_since("yesterday-ish", 0)
        assert not not_modified_since(None, 0)


class TestSendFile:
    def test_full_body(self, writer, blob):
        send_file(writer, blob, "application/octet-stream", {})
        assert writer.status == 200
        assert writer.headers["Content-Type"] == "application/octet-stream"
        assert writer.headers["Content-Length"] == str(len(DATA))
        assert writer.headers["Accept-Ranges"] == "bytes"
        assert "Last-Modified" in writer.headers
        assert bytes(writer.body) == DATA

    def test_extra_headers(self, writer, blob):
        send_file(writer, blob, "image/png", {}, extra_headers={"Cache-Control": "public, max-age=86400"})
        assert writer.headers["Cache-Control"] == "public, max-age=86400"

    def test_range(self, writer, blob):
        send_file(writer, blob, "video/mp4", {"Range": "bytes=70000-140009"})
        assert writer.status == 206
        assert writer.headers["Content-Range"] == f"bytes 70000-140009/{len(DATA)}"
        assert writer.headers["Content-Length"] == "70010"
        assert bytes(writer.body) == DATA[70000:140010]

    def test_suffix_range(self, writer, blob):
        send_file(writer, blob, "video/mp4", {"Range": "bytes=-3"})
        assert writer.status == 206
        assert bytes(writer.body) == DATA[-3:]

    def test_unsatisfiable_range(self, writer, blob):
        send_file(writer, blob, "video/mp4", {"Range": f"bytes={len(DATA)}-"})
        assert writer.status == 416
        assert writer.headers["Content-Range"] == f"bytes */{len(DATA)}"
        assert writer.body == b""

    def test_not_modified(self, writer, blob):
        since = email.utils.formatdate(os.path.getmtime(blob) + 5, usegmt=True)
        send_file(writer, blob, "text/plain", {"If-Modified-Since": since}, extra_headers={"Cache-Control": "x"})
        assert writer.status == 304
        assert writer.headers["Cache-Control"] == "x"
        assert writer.body == b""

    def test_missing_file(self, writer, tmp_path):
        with pytest.raises(NotFound):
            send_file(writer, str(tmp_path / "nope"), "text/plain", {})
        assert writer.status is None

    def test_streams_in_chunks(self, writer, blob, monkeypatch):
        sizes = []
        real_write = writer.write

        def spy(data):
            sizes.append(len(data))
            real_write(data)

        monkeypatch.setattr(writer, "write", spy)
        send_file(writer, blob, "application/octet-stream", {})
        assert max(sizes) <= transfer.CHUNK_SIZE
        assert sum(sizes) == len(DATA)
