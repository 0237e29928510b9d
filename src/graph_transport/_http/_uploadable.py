import io
import mimetypes
import os
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

import httpx

from ..models.errors import InvalidUploadSource

DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_FILENAME = "upload"

UploadSource = Union[bytes, bytearray, str, Path, BinaryIO]


class UploadableIO:
    """A binary payload destined for one part of a multipart request.

    Wraps a byte buffer, a file path or an open binary file object. Two
    instances never compare equal, even over identical bytes: each one is
    encoded as its own part. The payload is consumed exactly once, by the
    multipart encoder.

    Args:
        source: ``bytes``, a path (``str`` or ``Path``) or a binary file-like
            object.
        content_type: MIME type of the payload. Guessed from the filename
            when omitted, falling back to ``application/octet-stream``.
        filename: name reported to the server. Defaults to the basename of the
            path or file object.

    Raises:
        InvalidUploadSource: if the path does not point to a readable file or
            the source type is not supported.
    """

    def __init__(
        self,
        source: UploadSource,
        content_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> None:
        self._path: Optional[Path] = None
        self._io: Optional[BinaryIO] = None
        self._consumed = False

        if isinstance(source, (bytes, bytearray)):
            self._io = io.BytesIO(bytes(source))
        elif isinstance(source, (str, Path)):
            path = Path(source)
            if not path.is_file() or not os.access(path, os.R_OK):
                raise InvalidUploadSource(f"Cannot read upload file: {source}")
            self._path = path
        elif hasattr(source, "read"):
            self._io = source
        else:
            raise InvalidUploadSource(
                f"Unsupported upload source type: {type(source).__name__}"
            )

        self._filename = filename or self._default_filename(source)
        self._content_type = (
            content_type
            or mimetypes.guess_type(self._filename)[0]
            or DEFAULT_CONTENT_TYPE
        )

    @classmethod
    def from_url(
        cls,
        url: str,
        content_type: Optional[str] = None,
        filename: Optional[str] = None,
        *,
        client: Optional[httpx.Client] = None,
    ) -> "UploadableIO":
        """Download a remote payload and wrap it for upload.

        The response's ``Content-Type`` is used when no explicit content type
        is given; the last URL path segment is the default filename.

        Raises:
            InvalidUploadSource: if the download fails or returns an error status.
        """
        owns_client = client is None
        client = client or httpx.Client(follow_redirects=True)
        try:
            response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise InvalidUploadSource(f"Cannot fetch upload from {url}: {e}") from e
        finally:
            if owns_client:
                client.close()

        if content_type is None:
            header = response.headers.get("Content-Type")
            content_type = header.split(";")[0].strip() if header else None
        if filename is None:
            filename = httpx.URL(url).path.rstrip("/").rsplit("/", 1)[-1] or None
        return cls(response.content, content_type=content_type, filename=filename)

    @staticmethod
    def _default_filename(source: Any) -> str:
        if isinstance(source, (str, Path)):
            return Path(source).name
        name = getattr(source, "name", None)
        if isinstance(name, str) and name:
            return os.path.basename(name)
        return DEFAULT_FILENAME

    @property
    def owns_stream(self) -> bool:
        """True when the stream is created here and should be closed after reading."""
        return self._path is not None

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def filename(self) -> str:
        return self._filename

    def open_stream(self) -> BinaryIO:
        """Return the payload stream. May only be called once."""
        if self._consumed:
            raise InvalidUploadSource(
                f"Upload {self._filename!r} has already been consumed"
            )
        self._consumed = True

        if self._path is not None:
            try:
                return self._path.open("rb")
            except OSError as e:
                raise InvalidUploadSource(
                    f"Cannot read upload file: {self._path}"
                ) from e
        assert self._io is not None
        return self._io

    def __repr__(self) -> str:
        return (
            f"UploadableIO(filename={self._filename!r}, "
            f"content_type={self._content_type!r})"
        )


def is_uploadable(value: Any) -> bool:
    return isinstance(value, UploadableIO)
