"""Fetching source documents over HTTP.

Every source is a static document behind a plain GET. ``SourceClient`` wraps
an httpx client with a retry transport, an optional rate limit shared by all
of its requests and an optional hishel cache.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from devicebridge.config.storage import get_storage_config
from devicebridge.domain.errors import SourceFormatError

if TYPE_CHECKING:
    from types import TracebackType

    from devicebridge.config.http_resilience import CacheConfig, ResilienceConfig, RetryPolicy

log = logging.getLogger(__name__)


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


class SourceClient:
    """Async client for one source.

    ``transport`` replaces the network underneath the retry layer, which is how
    tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )
        retry_transport = RetryTransport(transport=transport, retry=build_retry(config.retry))
        headers = {"User-Agent": config.user_agent, **config.headers}
        storage = _build_storage(config.cache)
        if storage is None or config.cache is None:
            self._client = httpx.AsyncClient(
                transport=retry_transport,
                timeout=config.timeout_seconds,
                headers=headers,
                follow_redirects=True,
            )
        else:
            self._client = AsyncCacheClient(
                transport=retry_transport,
                timeout=config.timeout_seconds,
                headers=headers,
                follow_redirects=True,
                storage=storage,
                policy=FilterPolicy(
                    response_filters=[_MinimumBodyFilter(config.cache.min_body_bytes)]
                ),
            )

    async def __aenter__(self) -> SourceClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch(self, url: str) -> httpx.Response:
        """GET ``url``; non-2xx responses raise ``httpx.HTTPStatusError``."""

        if self._limiter is None:
            response = await self._client.get(url)
        else:
            async with self._limiter:
                response = await self._client.get(url)
        log.debug("GET %s -> %s", url, response.status_code)
        response.raise_for_status()
        return response


class _MinimumBodyFilter(BaseFilter[HishelCacheResponse]):
    """Keeps truncated or empty documents out of the cache."""

    def __init__(self, min_bytes: int) -> None:
        self._min_bytes = min_bytes

    def needs_body(self) -> bool:
        return True

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:  # noqa: ARG002
        if body is None:
            return True
        return len(body) >= self._min_bytes


def _build_storage(config: CacheConfig | None) -> AsyncSqliteStorage | None:
    if config is None or not config.enabled:
        return None

    if config.backend == "sqlite":
        database_path = str(config.sqlite_path or get_storage_config().http_cache_path())
    elif config.backend == "memory":
        database_path = ":memory:"
    else:
        msg = f"Unsupported cache backend: {config.backend}"
        raise ValueError(msg)
    return AsyncSqliteStorage(database_path=database_path, default_ttl=config.ttl_seconds)


async def fetch_text(
    config: ResilienceConfig,
    url: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Body text of the source document at ``url``.

    Raises ``httpx.HTTPError`` when the fetch fails and ``SourceFormatError``
    when the server answers with an empty document.
    """

    async with SourceClient(config, transport=transport) as client:
        response = await client.fetch(url)
    text = response.text
    if not text.strip():
        raise SourceFormatError(f"empty document at {url}", source_name=config.name)
    log.info("Fetched %s (%s bytes) for %s", url, len(response.content), config.name)
    return text


__all__ = ["SourceClient", "build_retry", "fetch_text"]
