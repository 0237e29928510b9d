import uuid
from typing import Any, Mapping, NamedTuple

from .._utils._params import serialize_param
from ..models.errors import EncodingError, InvalidUploadSource
from ._uploadable import UploadableIO

CRLF = b"\r\n"


class MultipartBody(NamedTuple):
    body: bytes
    boundary: str
    content_type: str


def _read_upload(name: str, value: UploadableIO) -> bytes:
    stream = value.open_stream()
    try:
        data = stream.read()
    except (OSError, ValueError) as e:
        raise EncodingError(f"Failed reading upload for {name!r}: {e}") from e
    finally:
        if value.owns_stream:
            stream.close()
    if not isinstance(data, (bytes, bytearray)):
        raise EncodingError(
            f"Upload for {name!r} did not produce bytes; open files in binary mode"
        )
    return bytes(data)


def _quote(value: str) -> str:
    return value.replace('"', "%22").replace("\r", "%0D").replace("\n", "%0A")


def _part_headers(name: str, value: Any) -> bytes:
    disposition = f'Content-Disposition: form-data; name="{_quote(name)}"'
    if isinstance(value, UploadableIO):
        return (
            f'{disposition}; filename="{_quote(value.filename)}"\r\n'
            f"Content-Type: {value.content_type}\r\n"
        ).encode("utf-8")
    return f"{disposition}\r\n".encode("utf-8")


def build_multipart(params: Mapping[Any, Any]) -> MultipartBody:
    """Build a ``multipart/form-data`` body from scalar and upload params.

    Parts follow the mapping's insertion order. Upload values become file
    parts with ``filename`` and ``Content-Type``; everything else becomes a
    plain field whose value is serialized like a query string value.

    Every upload stream is read completely before the body is returned.

    Raises:
        EncodingError: if a stream fails mid-read or a value cannot be
            serialized.
    """
    parts: list[tuple[bytes, bytes]] = []
    for key, value in params.items():
        name = str(key)
        if isinstance(value, UploadableIO):
            try:
                content = _read_upload(name, value)
            except InvalidUploadSource as e:
                raise EncodingError(e.message) from e
        else:
            content = serialize_param(value).encode("utf-8")
        parts.append((_part_headers(name, value), content))

    boundary = uuid.uuid4().hex
    while any(boundary.encode("ascii") in content for _, content in parts):
        boundary = uuid.uuid4().hex
    delimiter = f"--{boundary}".encode("ascii")

    chunks: list[bytes] = []
    for headers, content in parts:
        chunks.extend([delimiter, CRLF, headers, CRLF, content, CRLF])
    chunks.extend([delimiter, b"--", CRLF])

    return MultipartBody(
        body=b"".join(chunks),
        boundary=boundary,
        content_type=f"multipart/form-data; boundary={boundary}",
    )
