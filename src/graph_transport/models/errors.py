from httpx import TransportError


class GraphTransportError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidUploadSource(GraphTransportError):
    """Raised when an uploadable value's backing source cannot produce bytes.

    Raised either when the ``UploadableIO`` is constructed (unsupported source
    type, missing file, failed download) or when its stream is first opened.
    """


class EncodingError(GraphTransportError):
    """Raised when a parameter value cannot be serialized for the wire.

    Always raised before the adapter sends anything, so no partial request
    ever leaves the process.
    """


__all__ = [
    "GraphTransportError",
    "InvalidUploadSource",
    "EncodingError",
    "TransportError",
]
