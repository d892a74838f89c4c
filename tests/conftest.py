# Shared fixtures: a served tree on disk and an in-memory response writer.

import pytest

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)
JPEG_BYTES = b"\xff\xd8\xff\xe0" + bytes(range(256)) * 4
MP4_BYTES = b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 500


class RecordingWriter:
    """Stands in for the HTTP handler: keeps status, headers and body in memory."""

    def __init__(self):
        self.status = None
        self.headers = {}
        self.body = bytearray()
        self.headers_sent = False
        self.errors = []

    def send_response(self, code):
        self.status = code

    def send_header(self, keyword, value):
        self.headers[keyword] = value

    def end_headers(self):
        self.headers_sent = True

    def write(self, data):
        self.body += data

    def send_error(self, code, message=None):
        self.status = code
        self.errors.append((code, message))
        self.body += (message or "").encode("utf-8")
        self.headers_sent = True

    @property
    def text(self):
        return self.body.decode("utf-8")


@pytest.fixture
def writer():
    return RecordingWriter()


@pytest.fixture
def served_root(tmp_path):
    """
    served/
      Alpha/inner.txt
      My Photos/cat 1.jpg
      zeta/
      A.jpg  b.png  clip.mp4  notes.txt
    secret.txt lives next to served/, outside the root.
    """
    root = tmp_path / "served"
    root.mkdir()
    (root / "Alpha").mkdir()
    (root / "Alpha" / "inner.txt").write_text("inner")
    (root / "My Photos").mkdir()
    (root / "My Photos" / "cat 1.jpg").write_bytes(JPEG_BYTES)
    (root / "zeta").mkdir()
    (root / "A.jpg").write_bytes(JPEG_BYTES)
    (root / "b.png").write_bytes(PNG_BYTES)
    (root / "clip.mp4").write_bytes(MP4_BYTES)
    (root / "notes.txt").write_text("hello notes")
    (tmp_path / "secret.txt").write_text("top secret")
    return root
