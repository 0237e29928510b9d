import json
from logging import getLogger
from typing import Any, Mapping, Optional

import httpx

from .._config import TransportConfig, get_config
from .._http._pipeline import RequestEnv, TransportPipeline
from .._http._request import GraphRequest
from .._http._response import HTTPResponse
from .._utils._options import transport_options
from .._utils._params import encode_params, to_json


class HTTPService:
    """Executes ``GraphRequest``s through a transport pipeline.

    The service performs a single pass per call. It does not retry, and it
    does not interpret status codes: a 4xx or 5xx comes back as an ordinary
    ``HTTPResponse``. Network failures surface as the ``httpx.TransportError``
    raised by the adapter, unchanged.

    Args:
        config: transport configuration. Defaults to the process-wide
            configuration at the time the service is created.
    """

    def __init__(self, config: Optional[TransportConfig] = None) -> None:
        self._logger = getLogger("graph_transport")
        self._config = config or get_config()

    @property
    def config(self) -> TransportConfig:
        return self._config

    def request(
        self,
        verb: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        /,
        **options: Any,
    ) -> HTTPResponse:
        """Build a ``GraphRequest`` with this service's config and send it.

        ``params`` is positional so that the ``params`` transport option (extra
        query parameters) can still be passed as a keyword.

        Examples:
            >>> service = HTTPService()
            >>> service.request("get", "/me", {"fields": "id,name"})
            >>> service.request("post", "/me/feed", {"message": "hi"}, format="json")
        """
        pipeline = options.pop("pipeline", None)
        request = GraphRequest.create(
            verb, path, params, options, config=self._config
        )
        return self.make_request(request, pipeline=pipeline)

    def make_request(
        self,
        request: GraphRequest,
        pipeline: Optional[TransportPipeline] = None,
    ) -> HTTPResponse:
        """Send ``request`` and normalize the result.

        Args:
            request: the call to make.
            pipeline: overrides the ``builder`` option and the configured
                default pipeline for this call only.

        Raises:
            EncodingError: if the params cannot be serialized. Nothing is sent.
            httpx.TransportError: on connection, timeout, TLS or DNS failure.
        """
        options = transport_options({**self._config.http_options, **request.options})
        pipeline = pipeline or self._pipeline_for(options)

        env = RequestEnv(
            method=request.verb,
            url=self._build_url(request, options),
            options=options,
        )
        if request.verb != "get" and request.is_json:
            # the whole params mapping becomes one JSON document
            env = env.with_body(to_json(dict(request.post_params)), "application/json")
        elif request.verb != "get":
            env = env.with_body(dict(request.post_params))

        self._logger.debug(
            f"{request.verb.upper()}: {request.path} params: {dict(request.params)!r}"
        )
        response = pipeline.send(env)
        self._logger.debug(f"Response: {response.status_code} {env.url}")
        return HTTPResponse.from_httpx(response)

    def _pipeline_for(self, options: Mapping[str, Any]) -> TransportPipeline:
        if options.get("builder") is not None:
            return options["builder"]
        if options.get("builder_class") is not None:
            return options["builder_class"].default()
        return self._config.pipeline

    def _build_url(self, request: GraphRequest, options: Mapping[str, Any]) -> httpx.URL:
        server = options.get("url") or request.server
        path, _, path_query = request.path.partition("?")
        url = httpx.URL(f"{str(server).rstrip('/')}{path}")
        # request params win over the ``params`` option on key collisions
        query = "&".join(
            part
            for part in (
                path_query,
                encode_params({**(options.get("params") or {}), **request.get_params}),
            )
            if part
        )
        if query:
            url = url.copy_with(query=query.encode("ascii"))
        return url
