from typing import Any, Mapping

# Transport knobs the adapter understands. Every other key is a request-level
# option (format, beta, video, use_ssl, ...) and is dropped before dispatch.
VALID_TRANSPORT_OPTIONS = frozenset(
    {
        "request",
        "proxy",
        "ssl",
        "builder",
        "url",
        "parallel_manager",
        "params",
        "headers",
        "builder_class",
    }
)


def transport_options(options: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: value
        for key, value in options.items()
        if key in VALID_TRANSPORT_OPTIONS
    }
