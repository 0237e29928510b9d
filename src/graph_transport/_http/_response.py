from dataclasses import dataclass, field

import httpx


@dataclass(frozen=True)
class HTTPResponse:
    """Normalized result of one call.

    ``headers`` is an ``httpx.Headers`` so lookups are case-insensitive while
    the raw casing sent by the server is kept. The body is the raw text;
    decoding JSON is left to the caller, as is deciding whether a non-2xx
    status is a failure.
    """

    status: int
    body: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "HTTPResponse":
        return cls(
            status=int(response.status_code),
            body=response.text,
            headers=httpx.Headers(response.headers),
        )
