from ._multipart import MultipartBody, build_multipart
from ._pipeline import (
    HTTPAdapter,
    Middleware,
    MultipartRequest,
    RequestEnv,
    TransportPipeline,
    UrlEncodedRequest,
)
from ._request import GraphRequest
from ._response import HTTPResponse
from ._uploadable import UploadableIO, is_uploadable

__all__ = [
    "GraphRequest",
    "HTTPAdapter",
    "HTTPResponse",
    "Middleware",
    "MultipartBody",
    "MultipartRequest",
    "RequestEnv",
    "TransportPipeline",
    "UploadableIO",
    "UrlEncodedRequest",
    "build_multipart",
    "is_uploadable",
]
