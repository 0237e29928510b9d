import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ._http._pipeline import TransportPipeline


class ServerConfig(BaseModel):
    """Hostnames used to reach the Graph API.

    Some services (beta tier, video uploads) live on variant hosts. When
    talking through a proxy such as ``fbproxy.mycompany.com``, set
    ``host_path_matcher`` to ``r"\\.fbproxy"`` and ``beta_replace`` to
    ``".beta.fbproxy"``.
    """

    model_config = ConfigDict(frozen=True)

    graph_server: str = "graph.facebook.com"
    dialog_host: str = "www.facebook.com"
    host_path_matcher: str = r"\.facebook"
    video_replace: str = "-video.facebook"
    beta_replace: str = ".beta.facebook"

    def server_url(
        self, *, use_ssl: bool = True, video: bool = False, beta: bool = False
    ) -> str:
        scheme = "https" if use_ssl else "http"
        uri = f"{scheme}://{self.graph_server}"
        if video:
            uri = re.sub(self.host_path_matcher, self.video_replace, uri)
        if beta:
            uri = re.sub(self.host_path_matcher, self.beta_replace, uri)
        return uri

    def dialog_url(self, *, use_ssl: bool = True) -> str:
        return f"{'https' if use_ssl else 'http'}://{self.dialog_host}"


class TransportConfig(BaseModel):
    """Process-wide transport configuration.

    Instances are frozen. Set the default once at startup with ``configure``;
    services read it when they are constructed, so later changes never affect
    requests already in flight.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    servers: ServerConfig = Field(default_factory=ServerConfig)
    http_options: dict[str, Any] = Field(default_factory=dict)
    pipeline: TransportPipeline = Field(default_factory=TransportPipeline.default)
    api_version: Optional[str] = None


_default_config = TransportConfig()


def get_config() -> TransportConfig:
    return _default_config


def configure(**changes: Any) -> TransportConfig:
    """Replace the process default with a copy of it carrying ``changes``.

    Examples:
        >>> configure(api_version="v2.8", http_options={"request": {"timeout": 10}})
    """
    global _default_config
    _default_config = TransportConfig.model_validate(
        {**dict(_default_config), **changes}
    )
    return _default_config


def reset_config() -> None:
    """Restore the built-in defaults. Intended for tests."""
    global _default_config
    _default_config = TransportConfig()
