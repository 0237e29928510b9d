"""Transport pipeline: request middleware terminating in a network adapter.

A request travels through the pipeline as a ``RequestEnv``. Each middleware
receives the env and a ``call_next`` handler, may return a modified copy of
the env to ``call_next``, and returns the resulting ``httpx.Response``. The
last handler is an adapter that actually sends the request.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol

import httpx

from .._utils._params import encode_params
from .._utils._ssl_context import (
    get_httpx_client_kwargs,
    timeout_from_request_option,
)
from ..models.errors import EncodingError
from ._multipart import build_multipart
from ._uploadable import is_uploadable

CONTENT_TYPE = "Content-Type"
FORM_URLENCODED = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class RequestEnv:
    method: str
    url: httpx.URL
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: Any = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def with_body(self, body: Any, content_type: Optional[str] = None) -> "RequestEnv":
        headers = httpx.Headers(self.headers)
        if content_type is not None:
            headers[CONTENT_TYPE] = content_type
        return replace(self, body=body, headers=headers)


Handler = Callable[[RequestEnv], httpx.Response]


class Middleware(Protocol):
    def __call__(self, env: RequestEnv, call_next: Handler) -> httpx.Response: ...


class Adapter(Protocol):
    def __call__(self, env: RequestEnv) -> httpx.Response: ...

    def close(self) -> None: ...


AdapterFactory = Callable[[Mapping[str, Any]], Adapter]


class MultipartRequest:
    """Encodes mapping bodies that contain uploads as ``multipart/form-data``."""

    def __call__(self, env: RequestEnv, call_next: Handler) -> httpx.Response:
        if isinstance(env.body, Mapping) and any(
            is_uploadable(value) for value in env.body.values()
        ):
            multipart = build_multipart(env.body)
            env = env.with_body(multipart.body, multipart.content_type)
        return call_next(env)


class UrlEncodedRequest:
    """Encodes any remaining mapping body as a form-encoded string."""

    def __call__(self, env: RequestEnv, call_next: Handler) -> httpx.Response:
        if isinstance(env.body, Mapping):
            content_type = None if CONTENT_TYPE in env.headers else FORM_URLENCODED
            env = env.with_body(encode_params(env.body), content_type)
        return call_next(env)


class HTTPAdapter:
    """Terminal handler sending requests with an ``httpx.Client``.

    Honors the ``ssl``, ``proxy`` and ``request`` transport options when it
    creates its client, and merges the ``headers`` option into every request.
    The ``params`` option is merged into the URL by the caller. An
    ``httpx.Client`` passed as ``parallel_manager`` is used as is and left
    open, so several callers can share one connection pool.
    """

    def __init__(self, options: Mapping[str, Any]) -> None:
        self._options = options
        shared_client = options.get("parallel_manager")
        self._owns_client = shared_client is None
        self._client: httpx.Client = shared_client or httpx.Client(
            **get_httpx_client_kwargs(options)
        )

    def __call__(self, env: RequestEnv) -> httpx.Response:
        if isinstance(env.body, Mapping):
            raise EncodingError(
                "Request body is still a mapping; the pipeline has no request encoder"
            )
        content = env.body.encode("utf-8") if isinstance(env.body, str) else env.body

        extra: dict[str, Any] = {}
        timeout = timeout_from_request_option(self._options.get("request"))
        if timeout is not None and not self._owns_client:
            extra["timeout"] = timeout

        headers = httpx.Headers(self._options.get("headers") or {})
        headers.update(env.headers)

        request = self._client.build_request(
            env.method.upper(),
            env.url,
            headers=headers,
            content=content,
            **extra,
        )
        return self._client.send(request)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class TransportPipeline:
    """An immutable chain of middleware ending in an adapter.

    ``use`` and ``with_adapter`` return new pipelines; an existing pipeline is
    never changed, so it is safe to share between threads.
    """

    __slots__ = ("_middleware", "_adapter")

    def __init__(
        self,
        middleware: Iterable[Middleware] = (),
        adapter: AdapterFactory = HTTPAdapter,
    ) -> None:
        object.__setattr__(self, "_middleware", tuple(middleware))
        object.__setattr__(self, "_adapter", adapter)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("TransportPipeline is immutable")

    @classmethod
    def default(cls, adapter: AdapterFactory = HTTPAdapter) -> "TransportPipeline":
        return cls((MultipartRequest(), UrlEncodedRequest()), adapter)

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        return self._middleware

    @property
    def adapter(self) -> AdapterFactory:
        return self._adapter

    def use(self, *middleware: Middleware) -> "TransportPipeline":
        return type(self)(self._middleware + middleware, self._adapter)

    def with_adapter(self, adapter: AdapterFactory) -> "TransportPipeline":
        return type(self)(self._middleware, adapter)

    def send(self, env: RequestEnv) -> httpx.Response:
        adapter = self._adapter(env.options)
        try:
            handler: Handler = adapter
            for middleware in reversed(self._middleware):
                handler = _bind(middleware, handler)
            return handler(env)
        finally:
            adapter.close()

    def __repr__(self) -> str:
        names = ", ".join(type(m).__name__ for m in self._middleware)
        adapter = getattr(self._adapter, "__name__", self._adapter)
        return f"TransportPipeline([{names}], adapter={adapter!r})"


def _bind(middleware: Middleware, call_next: Handler) -> Handler:
    def handler(env: RequestEnv) -> httpx.Response:
        return middleware(env, call_next)

    return handler
