"""Resolved download/upload URL pair."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from ..errors import ConfigError
from ..config.defaults import SUPPORTED_SCHEMES
from .enums import StreamRole


def _check_url(label: str, url: str) -> None:
    parts = urlsplit(url)
    if parts.scheme not in SUPPORTED_SCHEMES or not parts.netloc:
        raise ConfigError(f"{label} URL must be an absolute ws:// or wss:// URL, got {url!r}")


@dataclass(frozen=True)
class EndpointPair:
    """Fully-qualified URLs, already carrying protocol options and tokens."""

    download_url: str
    upload_url: str

    def __post_init__(self) -> None:
        _check_url("download", self.download_url)
        _check_url("upload", self.upload_url)

    def url_for(self, role: StreamRole) -> str:
        if role is StreamRole.DOWNLOAD:
            return self.download_url
        return self.upload_url


__all__ = ["EndpointPair"]
