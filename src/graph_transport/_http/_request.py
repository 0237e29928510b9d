from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional

from ._uploadable import is_uploadable

if TYPE_CHECKING:
    from .._config import TransportConfig

VERBS = ("get", "post", "put", "delete")

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class GraphRequest:
    """One outbound call: verb, resolved server, path, params and options.

    Any verb rewriting the remote API expects (e.g. tunnelling DELETE through
    POST with a ``method`` param) is the caller's job and must already be done.
    """

    verb: str
    server: str
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        verb = self.verb.lower()
        if verb not in VERBS:
            raise ValueError(f"Unsupported HTTP verb: {self.verb}")
        object.__setattr__(self, "verb", verb)
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @classmethod
    def create(
        cls,
        verb: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
        *,
        config: Optional["TransportConfig"] = None,
    ) -> "GraphRequest":
        """Build a request, resolving its server from the configuration.

        Recognized options: ``use_ssl`` (default ``True``), ``beta`` and
        ``video`` for the variant hosts, ``format="json"`` to send the body
        as JSON, and ``api_version`` to override the configured version.
        """
        from .._config import get_config

        config = config or get_config()
        options = dict(options or {})
        server = config.servers.server_url(
            use_ssl=options.get("use_ssl", True),
            video=bool(options.get("video")),
            beta=bool(options.get("beta")),
        )
        version = options.get("api_version", config.api_version)
        return cls(
            verb=verb,
            server=server,
            path=versioned_path(path, version),
            params=params or {},
            options=options,
        )

    @property
    def is_json(self) -> bool:
        return self.options.get("format") == "json"

    @property
    def get_params(self) -> Mapping[str, Any]:
        return self.params if self.verb == "get" else _EMPTY

    @property
    def post_params(self) -> Mapping[str, Any]:
        return _EMPTY if self.verb == "get" else self.params

    @property
    def has_uploads(self) -> bool:
        return any(is_uploadable(value) for value in self.params.values())


def versioned_path(path: str, version: Optional[str]) -> str:
    path = path if path.startswith("/") else f"/{path}"
    if not version:
        return path
    prefix = f"/{version.strip('/')}"
    if path == prefix or path.startswith(f"{prefix}/"):
        return path
    return f"{prefix}{path}"
