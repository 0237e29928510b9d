import os
import ssl
from typing import Any, Mapping, Union

import httpx


def expand_path(path):
    """Expand environment variables and user home directory in path."""
    if not path:
        return path
    # Expand environment variables like $HOME
    path = os.path.expandvars(path)
    # Expand user home directory ~
    path = os.path.expanduser(path)
    return path


def create_ssl_context(ca_file=None, ca_path=None):
    if ca_file or ca_path:
        return ssl.create_default_context(
            cafile=expand_path(ca_file), capath=expand_path(ca_path)
        )

    # Try truststore first (system certificates)
    try:
        import truststore

        return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    except ImportError:
        # Fallback to manual certificate configuration
        import certifi

        ssl_cert_file = expand_path(os.environ.get("SSL_CERT_FILE"))
        requests_ca_bundle = expand_path(os.environ.get("REQUESTS_CA_BUNDLE"))
        ssl_cert_dir = expand_path(os.environ.get("SSL_CERT_DIR"))

        return ssl.create_default_context(
            cafile=ssl_cert_file or requests_ca_bundle or certifi.where(),
            capath=ssl_cert_dir,
        )


def verify_from_ssl_option(
    ssl_option: Union[Mapping[str, Any], bool, None],
) -> Union[ssl.SSLContext, bool]:
    """Translate the ``ssl`` transport option into httpx's ``verify`` argument.

    Accepts ``{"verify": False}`` to disable verification, ``{"ca_file": ...,
    "ca_path": ...}`` for a custom bundle, or a ready ``ssl.SSLContext`` under
    ``"context"``.
    """
    if isinstance(ssl_option, bool):
        return create_ssl_context() if ssl_option else False
    ssl_option = ssl_option or {}
    if ssl_option.get("verify") is False:
        return False
    if ssl_option.get("context") is not None:
        return ssl_option["context"]
    return create_ssl_context(ssl_option.get("ca_file"), ssl_option.get("ca_path"))


def proxy_from_option(proxy_option: Union[Mapping[str, Any], str, None]) -> str | None:
    if proxy_option is None or isinstance(proxy_option, str):
        return proxy_option
    return proxy_option.get("uri")


def timeout_from_request_option(
    request_option: Mapping[str, Any] | None,
) -> httpx.Timeout | None:
    """Build an ``httpx.Timeout`` from ``{"timeout": ..., "open_timeout": ...}``."""
    if not request_option:
        return None
    timeout = request_option.get("timeout")
    open_timeout = request_option.get("open_timeout", timeout)
    if timeout is None and open_timeout is None:
        return None
    return httpx.Timeout(timeout, connect=open_timeout)


def get_httpx_client_kwargs(options: Mapping[str, Any]) -> dict[str, Any]:
    """Client kwargs (SSL, proxy, timeout) for the given transport options."""
    client_kwargs: dict[str, Any] = {
        "verify": verify_from_ssl_option(options.get("ssl")),
    }
    proxy = proxy_from_option(options.get("proxy"))
    if proxy:
        client_kwargs["proxy"] = proxy
    timeout = timeout_from_request_option(options.get("request"))
    if timeout is not None:
        client_kwargs["timeout"] = timeout
    return client_kwargs
