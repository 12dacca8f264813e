"""Measurement client: resolves a server, then runs download and upload."""

from __future__ import annotations

import time
import logging
from collections.abc import Callable

from ..errors import ConfigError
from ..locate import LocateClient
from ..streams.sockets import Connector
from ..helpers import with_query, make_url_pair, build_query_params
from ..config.defaults import LIBRARY_NAME, LIBRARY_VERSION
from ..state import EndpointPair, PhaseResult, SessionReport, StreamRole, TestConfig
from .phase import PhaseRunner
from .locator import Locator
from .callbacks import Callbacks

logger = logging.getLogger(__name__)


class Client:
    """Runs throughput measurements against one server at a time.

    Args:
        client_name: Identifies the integrating application to the server.
        client_version: Version of the integrating application.
        config: Test parameters shared by both phases.
        download_callbacks: Hooks for the download phase.
        upload_callbacks: Hooks for the upload phase.
        locator: Discovery collaborator; defaults to the public locate
            service.
        connector: Replaces ``websockets.connect`` for every stream.
    """

    def __init__(
        self,
        client_name: str,
        client_version: str,
        *,
        config: TestConfig | None = None,
        download_callbacks: Callbacks | None = None,
        upload_callbacks: Callbacks | None = None,
        locator: Locator | None = None,
        connector: Connector | None = None,
        now_fn: Callable[[], float] = time.perf_counter,
    ) -> None:
        if not isinstance(client_name, str) or not client_name:
            raise ConfigError("client_name is required")
        if not isinstance(client_version, str) or not client_version:
            raise ConfigError("client_version is required")
        self.client_name = client_name
        self.client_version = client_version
        self.config = config or TestConfig()
        self.download_callbacks = download_callbacks or Callbacks()
        self.upload_callbacks = upload_callbacks or Callbacks()
        self._locator = locator
        self._connector = connector
        self._now = now_fn
        self._locate_cache: list[EndpointPair] = []

    @property
    def locator(self) -> Locator:
        if self._locator is None:
            self._locator = LocateClient()
        return self._locator

    def query_params(self) -> list[tuple[str, str]]:
        return build_query_params(self.config, self.client_name, self.client_version)

    async def resolve_endpoints(self, server: str | None = None) -> EndpointPair:
        """Return the URL pair to measure against.

        With ``server`` (``host[:port]``) the URLs are built locally.
        Otherwise the next cached discovery result is used, querying the
        locate service first when the cache is empty.

        Raises:
            ConfigError: ``server`` is not a valid host.
            DiscoveryError: Discovery failed or returned nothing usable.
        """
        params = self.query_params()
        if server:
            return make_url_pair(server, self.config.scheme, params)

        if not self._locate_cache:
            identity = [
                ("client_name", self.client_name),
                ("client_version", self.client_version),
                ("client_library_name", LIBRARY_NAME),
                ("client_library_version", LIBRARY_VERSION),
            ]
            self._locate_cache = list(await self.locator.discover(identity, self.config.scheme))
        pair = self._locate_cache.pop(0)
        return EndpointPair(
            download_url=with_query(pair.download_url, params),
            upload_url=with_query(pair.upload_url, params),
        )

    async def start(self, server: str | None = None) -> SessionReport:
        """Resolve a server once and run the download phase, then upload."""
        endpoints = await self.resolve_endpoints(server)
        download = await self.download(endpoints.download_url)
        upload = await self.upload(endpoints.upload_url)
        return SessionReport(download=download, upload=upload)

    async def download(self, url: str) -> PhaseResult:
        return await self._run_phase(StreamRole.DOWNLOAD, url, self.download_callbacks)

    async def upload(self, url: str) -> PhaseResult:
        return await self._run_phase(StreamRole.UPLOAD, url, self.upload_callbacks)

    async def _run_phase(self, role: StreamRole, url: str, callbacks: Callbacks) -> PhaseResult:
        logger.debug("Starting %s phase against %s", role.value, url.split("?")[0])
        runner = PhaseRunner(
            role,
            url,
            self.config,
            callbacks,
            connector=self._connector,
            now_fn=self._now,
        )
        return await runner.run()


__all__ = ["Client"]
