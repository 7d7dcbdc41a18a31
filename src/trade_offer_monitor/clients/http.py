# -*- coding: utf-8 -*-
"""Async HTTP client with retries and rate-limit handling."""

from __future__ import annotations

import asyncio
import random
import uuid
from typing import Any, Callable, Dict, Optional

import aiohttp
import structlog
from structlog.contextvars import bound_contextvars

from trade_offer_monitor.config import Settings
from trade_offer_monitor.exceptions import FeedAPIError, RateLimitError


class AsyncHttpClient:
    """Async JSON GET client for the record feeds, with retries and 429 handling.

    If no aiohttp session is injected, the client creates and owns one; close
    it with aclose() or use the client as an async context manager.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (uses settings.feed timeout and retries).
            session: Optional shared aiohttp session.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.feed.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    @staticmethod
    def _backoff_delay(attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        return min(4.0, 0.25 * (2**attempt)) + random.uniform(0.0, 0.15)

    @staticmethod
    def _retry_after(response: aiohttp.ClientResponse) -> Optional[float]:
        header = response.headers.get("Retry-After")
        if not header:
            return None
        try:
            return float(header)
        except ValueError:
            return None

    async def _get_once(self, url: str, params: Dict[str, Any]) -> tuple[bool, Any]:
        """Single GET attempt.

        Returns:
            (True, parsed JSON) on success, (False, Retry-After seconds or None) on 429.
        """
        session = await self._get_session()
        async with session.get(url, params=params) as response:
            if response.status == 429:
                return False, self._retry_after(response)
            response.raise_for_status()
            return True, await response.json()

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """GET a feed URL and return its parsed JSON.

        Failed attempts (connection errors, timeouts, non-2xx, 429) are retried up to
        settings.feed.max_retries times in total. A 429 waits for Retry-After when
        the feed sends one; everything else backs off exponentially. No wait
        follows the last attempt.

        Raises:
            RateLimitError: If every attempt was rate limited.
            FeedAPIError: If the request still fails after the last attempt.
        """
        attempts = self._settings.feed.max_retries
        last_error: Optional[Exception] = None
        retry_after: Optional[float] = None
        rate_limited = 0

        with bound_contextvars(http_url=url, http_request_id=uuid.uuid4().hex[:12]):
            for attempt in range(attempts):
                is_last = attempt + 1 == attempts
                with bound_contextvars(http_attempt=attempt + 1):
                    try:
                        ok, value = await self._get_once(url, params or {})
                    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                        last_error = e
                        self._logger.debug(
                            "http_get_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                            http_status_code=getattr(e, "status", None),
                        )
                        if not is_last:
                            await asyncio.sleep(self._backoff_delay(attempt))
                        continue

                    if ok:
                        return value
                    rate_limited += 1
                    retry_after = value
                    self._logger.warning(
                        "http_get_rate_limited",
                        http_retry_after_seconds=retry_after,
                    )
                    if not is_last:
                        wait = retry_after if retry_after and retry_after > 0 else None
                        await asyncio.sleep(wait or self._backoff_delay(attempt))

            if rate_limited == attempts:
                self._logger.error("http_get_rate_limit_exhausted", http_attempts=attempts)
                raise RateLimitError(url=url, retry_after=retry_after)

            status_code = getattr(last_error, "status", None)
            self._logger.error(
                "http_get_failed",
                http_status_code=status_code,
                http_attempts=attempts,
                rate_limited_attempts=rate_limited,
                error_type=type(last_error).__name__ if last_error else None,
            )
            raise FeedAPIError(
                f"GET {url} failed after {attempts} attempts",
                url=url,
                status_code=status_code,
                cause=last_error,
            ) from last_error
