"""HTTP client with retries and a small TTL cache for dashboard data."""

import asyncio
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)


class HttpClientError(Exception):
    """Raised when a request fails or returns unusable data."""

    pass


class HttpClient:
    """JSON GET client backed by a retrying requests session.

    Responses are cached in memory per URL and query parameters for the TTL
    given on each call.
    """

    def __init__(
        self,
        timeout: float = 15.0,
        retries: int = 3,
        backoff: float = 0.5,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.timeout = timeout
        self.clock = clock
        self.session = session or self._build_session(retries, backoff)
        self._cache: Dict[str, Tuple[float, Any]] = {}
        self._cache_lock = threading.Lock()

    @staticmethod
    def _build_session(retries: int, backoff: float) -> requests.Session:
        session = requests.Session()

        # Retry strategy for 429, 500, 502, 503, 504
        retry_strategy = Retry(
            total=retries,
            backoff_factor=backoff,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update(
            {"User-Agent": "BoatSafe/1.0 (Marine Forecast Dashboard)"}
        )
        return session

    @classmethod
    def from_settings(cls, settings: Any) -> "HttpClient":
        return cls(
            timeout=settings.http_timeout_seconds,
            retries=settings.http_retries,
            backoff=settings.http_backoff,
        )

    @staticmethod
    def _cache_key(url: str, params: Optional[Dict[str, Any]]) -> str:
        if not params:
            return url
        query = "&".join(f"{k}={params[k]}" for k in sorted(params))
        return f"{url}?{query}"

    def fetch_json(
        self,
        url: str,
        cache_ttl: Optional[float] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Fetch and decode a JSON document, serving from cache while fresh.

        Raises:
            HttpClientError: On network errors, HTTP error status or invalid JSON
        """
        key = self._cache_key(url, params)
        now = self.clock()

        with self._cache_lock:
            self._evict_expired(now)
            cached = self._cache.get(key)
        if cached and cache_ttl:
            logger.debug(f"Cache hit for {key}")
            return cached[1]

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise HttpClientError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            raise HttpClientError(f"Invalid JSON from {url}: {e}") from e

        if cache_ttl:
            with self._cache_lock:
                self._cache[key] = (now + cache_ttl, data)
        return data

    async def get(
        self,
        url: str,
        cache_ttl: Optional[float] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Asynchronous fetch_json; the blocking request runs in a worker thread."""
        return await asyncio.to_thread(self.fetch_json, url, cache_ttl, params)

    def _evict_expired(self, now: float) -> None:
        expired = [key for key, (expires, _) in self._cache.items() if now >= expires]
        for key in expired:
            del self._cache[key]

    def clear_cache(self) -> None:
        with self._cache_lock:
            self._cache.clear()
