from graph_transport._config import (
    ServerConfig,
    configure,
    get_config,
    reset_config,
)
from graph_transport._http._pipeline import (
    MultipartRequest,
    TransportPipeline,
    UrlEncodedRequest,
)
from graph_transport._services._http_service import HTTPService


class TestServerConfig:
    def test_defaults(self):
        servers = ServerConfig()
        assert servers.server_url() == "https://graph.facebook.com"
        assert servers.dialog_url() == "https://www.facebook.com"

    def test_beta_and_video(self):
        servers = ServerConfig()
        assert (
            servers.server_url(video=True, beta=True)
            == "https://graph-video.beta.facebook.com"
        )


class TestConfigure:
    def test_default_pipeline(self):
        pipeline = get_config().pipeline
        assert [type(m) for m in pipeline.middleware] == [
            MultipartRequest,
            UrlEncodedRequest,
        ]

    def test_configure_replaces_default(self):
        before = get_config()
        after = configure(api_version="v2.8")

        assert get_config() is after
        assert after.api_version == "v2.8"
        assert before.api_version is None
        assert after.servers == before.servers

    def test_service_snapshots_config(self):
        service = HTTPService()
        configure(pipeline=TransportPipeline(), http_options={"proxy": "http://p"})

        assert service.config.http_options == {}
        assert len(service.config.pipeline.middleware) == 2
        assert HTTPService().config.http_options == {"proxy": "http://p"}

    def test_reset(self):
        configure(api_version="v9.9")
        reset_config()
        assert get_config().api_version is None
        assert get_config().servers == ServerConfig()
