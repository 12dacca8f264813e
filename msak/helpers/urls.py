"""Measurement URL construction.

Every measurement URL carries the client identification and protocol options
in its query string. Server-issued URLs (from discovery) already carry an
access token; the options are merged into their existing query rather than
replacing it.
"""

from __future__ import annotations

from urllib.parse import urlsplit, parse_qsl, urlencode, urlunsplit

from ..errors import ConfigError
from ..state import EndpointPair, TestConfig
from ..config.defaults import LIBRARY_NAME, LIBRARY_VERSION
from ..config.protocol import DOWNLOAD_PATH, UPLOAD_PATH


def build_query_params(config: TestConfig, client_name: str, client_version: str) -> list[tuple[str, str]]:
    """Return the ordered query parameters sent with every measurement URL."""
    params = [
        ("client_name", client_name),
        ("client_version", client_version),
        ("client_library_name", LIBRARY_NAME),
        ("client_library_version", LIBRARY_VERSION),
        ("streams", str(config.streams)),
        ("cc", config.cc),
        ("duration", str(config.duration_ms)),
    ]
    if config.byte_limit > 0:
        params.append(("bytes", str(config.byte_limit)))
    params.extend(config.metadata.items())
    return params


def with_query(url: str, params: list[tuple[str, str]]) -> str:
    """Merge ``params`` into the query string of ``url``.

    Keys already present in ``url`` are overwritten; other existing keys
    (such as an access token) are kept in place.
    """
    parts = urlsplit(url)
    new_keys = {key for key, _ in params}
    query_items = [(key, value) for key, value in parse_qsl(parts.query, keep_blank_values=True) if key not in new_keys]
    merged: dict[str, str] = {}
    for key, value in params:
        merged[key] = value
    query_items.extend(merged.items())
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query_items), parts.fragment))


def make_url_pair(server: str, scheme: str, params: list[tuple[str, str]]) -> EndpointPair:
    """Build the download/upload URLs for an explicit ``host[:port]``."""
    host = server.strip().rstrip("/")
    if not host or "/" in host or "?" in host:
        raise ConfigError(f"server must be given as host[:port], got {server!r}")
    query = urlencode(params)
    return EndpointPair(
        download_url=urlunsplit((scheme, host, DOWNLOAD_PATH, query, "")),
        upload_url=urlunsplit((scheme, host, UPLOAD_PATH, query, "")),
    )


__all__ = ["build_query_params", "with_query", "make_url_pair"]
