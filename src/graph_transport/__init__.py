"""Outbound HTTP layer for the Facebook Graph API.

Builds requests, encodes their parameters (form-encoded, JSON or multipart)
and sends them through a configurable middleware pipeline backed by httpx.
"""

from ._config import ServerConfig, TransportConfig, configure, get_config
from ._http import (
    GraphRequest,
    HTTPAdapter,
    HTTPResponse,
    MultipartRequest,
    RequestEnv,
    TransportPipeline,
    UploadableIO,
    UrlEncodedRequest,
    build_multipart,
)
from ._services import HTTPService
from ._utils import encode_params, transport_options
from .models.errors import (
    EncodingError,
    GraphTransportError,
    InvalidUploadSource,
    TransportError,
)

__all__ = [
    "EncodingError",
    "GraphRequest",
    "GraphTransportError",
    "HTTPAdapter",
    "HTTPResponse",
    "HTTPService",
    "InvalidUploadSource",
    "MultipartRequest",
    "RequestEnv",
    "ServerConfig",
    "TransportConfig",
    "TransportError",
    "TransportPipeline",
    "UploadableIO",
    "UrlEncodedRequest",
    "build_multipart",
    "configure",
    "encode_params",
    "get_config",
    "transport_options",
]
