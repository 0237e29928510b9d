from .errors import EncodingError, GraphTransportError, InvalidUploadSource, TransportError

__all__ = [
    "EncodingError",
    "GraphTransportError",
    "InvalidUploadSource",
    "TransportError",
]
