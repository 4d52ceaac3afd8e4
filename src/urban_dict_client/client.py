"""Urban Dictionary API client with a cache-aside layer."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote, urlencode

import httpx
import structlog

from urban_dict_core.constants import (
    AUTOCOMPLETE_ENDPOINT,
    DEFAULT_BASE_URL,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_TTL_MS,
    DEFINE_ENDPOINT,
    RANDOM_ENDPOINT,
)
from urban_dict_core.exceptions import CacheError, ConfigurationError, UpstreamError
from urban_dict_core.models import AutocompleteSuggestion, DefinitionRecord, UpstreamRecord

if TYPE_CHECKING:
    from urban_dict_core.config.settings import Settings
    from urban_dict_core.interfaces.cache import CacheClient

logger = structlog.get_logger()

Params = Sequence[tuple[str, str | int]]

M = TypeVar("M", bound=UpstreamRecord)


class DefinitionClient:
    """Fetches definitions and autocomplete suggestions, caching raw responses.

    Every public query goes through :meth:`request`: the response for a URL is
    read from ``cache`` first and only fetched upstream on a miss, after which
    it is stored for ``ttl_ms`` milliseconds.

    Neither ``cache`` nor ``http`` is owned by the client; whoever created them
    closes them. Without ``http`` a short-lived ``httpx.AsyncClient`` is opened
    per upstream call.
    """

    def __init__(
        self,
        cache: CacheClient,
        *,
        ttl_ms: int = DEFAULT_TTL_MS,
        instance_id: str = "",
        base_url: str = DEFAULT_BASE_URL,
        http: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        single_flight: bool = False,
    ) -> None:
        if cache is None:
            msg = "A cache store is required"
            raise ConfigurationError(msg)
        if ttl_ms <= 0:
            msg = f"ttl_ms must be positive, got {ttl_ms}"
            raise ConfigurationError(msg)
        self._cache = cache
        self._ttl_ms = ttl_ms
        self._instance_id = instance_id
        self._base_url = base_url.rstrip("/")
        self._http = http
        self._timeout = timeout
        self._single_flight = single_flight
        self._inflight: dict[str, asyncio.Task[Any]] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        cache: CacheClient,
        http: httpx.AsyncClient | None = None,
    ) -> DefinitionClient:
        """Build a client from application settings and a ready cache store."""
        return cls(
            cache,
            ttl_ms=settings.cache_ttl_ms,
            instance_id=settings.instance_id,
            base_url=settings.base_url,
            http=http,
            timeout=settings.http_timeout_seconds,
            single_flight=settings.single_flight,
        )

    @property
    def cache(self) -> CacheClient:
        """The cache store responses are kept in."""
        return self._cache

    @property
    def ttl_ms(self) -> int:
        """Lifetime of a cached response in milliseconds."""
        return self._ttl_ms

    @property
    def instance_id(self) -> str:
        """Cache key namespace of this client."""
        return self._instance_id

    @property
    def base_url(self) -> str:
        """Upstream API root."""
        return self._base_url

    # ------------------------------------------------------------------
    # Cache-aside request path
    # ------------------------------------------------------------------

    def build_url(self, endpoint: str, params: Params | None = None) -> str:
        """Build the upstream URL; parameter order is preserved."""
        if not endpoint:
            msg = "endpoint must be a non-empty string"
            raise ValueError(msg)
        query = urlencode([(name, str(value)) for name, value in params or ()], quote_via=quote)
        return f"{self._base_url}/{endpoint}?{query}"

    def cache_key(self, endpoint: str, params: Params | None = None) -> str:
        """Return the cache key used for a request."""
        return self._key_for_url(self.build_url(endpoint, params))

    def _key_for_url(self, url: str) -> str:
        """Namespace a URL with the instance id, if any."""
        if not self._instance_id:
            return url
        return f"{self._instance_id}:{url}"

    async def request(self, endpoint: str, params: Params | None = None) -> Any:  # noqa: ANN401
        """Return the JSON response for an endpoint, from cache when possible."""
        url = self.build_url(endpoint, params)
        key = self._key_for_url(url)

        cached = await self._cache_get(key)
        if cached:
            logger.debug("cache_hit", key=key)
            return self._decode_cached(key, cached)

        logger.debug("cache_miss", key=key)
        if not self._single_flight:
            return await self._fetch_and_store(url, key)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._fetch_and_store(url, key))
            self._inflight[key] = task
            task.add_done_callback(lambda done: self._forget_inflight(key, done))
        return await asyncio.shield(task)

    async def invalidate(self, endpoint: str, params: Params | None = None) -> None:
        """Drop the cached response for a request."""
        key = self.cache_key(endpoint, params)
        try:
            await self._cache.delete(key)
        except CacheError:
            raise
        except Exception as exc:
            raise CacheError(f"Cache delete failed: {exc}", key=key) from exc

    async def _fetch_and_store(self, url: str, key: str) -> Any:  # noqa: ANN401
        """Fetch once upstream, write the resolved JSON back, return it."""
        data = await self._fetch(url)
        await self._cache_set(key, json.dumps(data))
        logger.debug("cache_stored", key=key, ttl_ms=self._ttl_ms)
        return data

    async def _fetch(self, url: str) -> Any:  # noqa: ANN401
        """GET the URL and decode the JSON body."""
        try:
            if self._http is not None:
                response = await self._http.get(url)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("upstream_request_failed", url=url, status_code=status)
            raise UpstreamError(
                f"Upstream returned HTTP {status}", url=url, status_code=status
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("upstream_request_failed", url=url, error=str(exc))
            raise UpstreamError(f"Upstream request failed: {exc}", url=url) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(
                "Upstream returned a non-JSON body",
                url=url,
                status_code=response.status_code,
            ) from exc

    async def _cache_get(self, key: str) -> str | None:
        try:
            return await self._cache.get(key)
        except CacheError:
            raise
        except Exception as exc:
            raise CacheError(f"Cache read failed: {exc}", key=key) from exc

    async def _cache_set(self, key: str, value: str) -> None:
        try:
            await self._cache.set(key, value, self._ttl_ms)
        except CacheError:
            raise
        except Exception as exc:
            raise CacheError(f"Cache write failed: {exc}", key=key) from exc

    def _decode_cached(self, key: str, cached: str) -> Any:  # noqa: ANN401
        try:
            return json.loads(cached)
        except ValueError as exc:
            logger.warning("cache_corrupt_entry", key=key)
            raise CacheError("Cached value is not valid JSON", key=key) from exc

    def _forget_inflight(self, key: str, task: asyncio.Task[Any]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    # ------------------------------------------------------------------
    # Query methods
    # ------------------------------------------------------------------

    async def random(self) -> list[DefinitionRecord]:
        """Fetch a page of random definitions."""
        return await self._records(RANDOM_ENDPOINT, None, "list", DefinitionRecord)

    async def define(self, term: str | None = None) -> list[DefinitionRecord]:
        """Fetch definitions for a term; no term falls back to :meth:`random`."""
        if not term:
            return await self.random()
        return await self._records(DEFINE_ENDPOINT, [("term", term)], "list", DefinitionRecord)

    async def autocomplete(self, term: str) -> list[AutocompleteSuggestion]:
        """Fetch autocomplete suggestions for a (partial) term."""
        return await self._records(
            AUTOCOMPLETE_ENDPOINT, [("term", term)], "results", AutocompleteSuggestion
        )

    async def _records(
        self,
        endpoint: str,
        params: Params | None,
        field: str,
        model: type[M],
    ) -> list[M]:
        """Request an endpoint and shape one list field of the response."""
        response = await self.request(endpoint, params)
        items = response.get(field) if isinstance(response, dict) else None
        if not items:
            return []
        if not isinstance(items, list) or not all(isinstance(item, Mapping) for item in items):
            # Drop the entry so the next call refetches instead of failing for a whole TTL
            await self.invalidate(endpoint, params)
            logger.warning("upstream_unexpected_shape", endpoint=endpoint, field=field)
            raise UpstreamError(
                f"Unexpected '{field}' shape in {endpoint} response",
                url=self.build_url(endpoint, params),
            )
        return [model.from_upstream(item) for item in items]
