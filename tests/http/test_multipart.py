import io

import pytest

from graph_transport._http._multipart import build_multipart
from graph_transport._http._uploadable import UploadableIO
from graph_transport.models.errors import EncodingError


def split_parts(body: bytes, boundary: str) -> list[bytes]:
    delimiter = f"--{boundary}".encode()
    assert body.endswith(delimiter + b"--\r\n")
    chunks = body.split(delimiter)
    # leading empty chunk and the closing "--\r\n"
    assert chunks[0] == b""
    assert chunks[-1] == b"--\r\n"
    return [chunk[len(b"\r\n") : -len(b"\r\n")] for chunk in chunks[1:-1]]


class FailingStream(io.RawIOBase):
    def read(self, size=-1):
        raise OSError("disk went away")


class TestBuildMultipart:
    def test_scalar_and_upload(self, png_bytes: bytes):
        multipart = build_multipart(
            {
                "message": "hello world",
                "source": UploadableIO(png_bytes, "image/png", "cat.png"),
            }
        )

        assert multipart.content_type == (
            f"multipart/form-data; boundary={multipart.boundary}"
        )
        parts = split_parts(multipart.body, multipart.boundary)
        assert len(parts) == 2

        message_headers, message_body = parts[0].split(b"\r\n\r\n", 1)
        assert message_headers == b'Content-Disposition: form-data; name="message"'
        assert b"Content-Type" not in message_headers
        assert message_body == b"hello world"

        source_headers, source_body = parts[1].split(b"\r\n\r\n", 1)
        assert source_headers == (
            b'Content-Disposition: form-data; name="source"; filename="cat.png"\r\n'
            b"Content-Type: image/png"
        )
        assert source_body == png_bytes

    def test_non_string_scalars_are_json(self, png_bytes: bytes):
        multipart = build_multipart(
            {
                "published": False,
                "targeting": {"countries": ["US"]},
                "source": UploadableIO(png_bytes),
            }
        )
        parts = split_parts(multipart.body, multipart.boundary)
        assert parts[0].endswith(b"\r\n\r\nfalse")
        assert parts[1].endswith(b'\r\n\r\n{"countries":["US"]}')

    def test_identical_uploads_are_distinct_parts(self, png_bytes: bytes):
        multipart = build_multipart(
            {
                "first": UploadableIO(png_bytes, "image/png", "a.png"),
                "second": UploadableIO(png_bytes, "image/png", "a.png"),
            }
        )
        assert len(split_parts(multipart.body, multipart.boundary)) == 2

    def test_header_values_escaped(self, png_bytes: bytes):
        multipart = build_multipart(
            {
                'we"ird': "x",
                "source": UploadableIO(png_bytes, filename='a"b\r\nc.png'),
            }
        )
        parts = split_parts(multipart.body, multipart.boundary)
        assert len(parts) == 2
        assert parts[0].startswith(b'Content-Disposition: form-data; name="we%22ird"\r\n')
        assert b'filename="a%22b%0D%0Ac.png"\r\n' in parts[1]

    def test_fresh_boundary_per_build(self):
        first = build_multipart({"a": "1"})
        second = build_multipart({"a": "1"})
        assert first.boundary != second.boundary

    def test_boundary_not_in_content(self, png_bytes: bytes):
        upload = UploadableIO(png_bytes)
        multipart = build_multipart({"source": upload})
        parts = split_parts(multipart.body, multipart.boundary)
        assert all(multipart.boundary.encode() not in part for part in parts)

    def test_file_stream_closed_after_read(self, png_file):
        multipart = build_multipart({"source": UploadableIO(png_file)})
        assert multipart.body.count(b'filename="cat.png"') == 1

    def test_failing_stream(self):
        upload = UploadableIO(FailingStream(), filename="broken.bin")
        with pytest.raises(EncodingError):
            build_multipart({"source": upload})

    def test_text_stream(self):
        upload = UploadableIO(io.StringIO("not bytes"), filename="notes.txt")
        with pytest.raises(EncodingError):
            build_multipart({"source": upload})

    def test_consumed_upload(self, png_bytes: bytes):
        upload = UploadableIO(png_bytes)
        build_multipart({"source": upload})
        with pytest.raises(EncodingError):
            build_multipart({"source": upload})
