"""Direct HTTP probing of platform profile URLs.

Sends a single HEAD request to a profile URL and reads the status code
as an existence signal. Only used when the heuristics are uncertain, and
always subject to the shared rate limiter and the probe cache.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable, Optional

import httpx

from ..cache import ProbeCache
from ..models import ProbeMethod, ProbeResult
from ..platforms import UNRELIABLE_HTTP_PLATFORMS, Platform
from ..rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 85
DEFAULT_TIMEOUT_SECONDS = 3.0
DEFAULT_MAX_PER_BATCH = 5
USER_AGENT = "Mozilla/5.0 (compatible; handlecheck/1.0)"


class DirectProbe:
    """Profile-URL existence checks over plain HTTP status codes."""

    def __init__(
        self,
        rate_limiter: RateLimiter,
        cache: ProbeCache,
        *,
        confidence_threshold: int = DEFAULT_CONFIDENCE_THRESHOLD,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_per_batch: int = DEFAULT_MAX_PER_BATCH,
    ):
        self.rate_limiter = rate_limiter
        self.cache = cache
        self.confidence_threshold = confidence_threshold
        self.timeout = timeout
        self.max_per_batch = max_per_batch

    @staticmethod
    def can_probe(platform: Platform) -> bool:
        """Whether a status-code check can adjudicate this platform at all."""
        return platform not in UNRELIABLE_HTTP_PLATFORMS and platform.info.probe_url is not None

    async def probe(
        self,
        platform: Platform | str,
        handle: str,
        heuristic_confidence: int,
    ) -> Optional[ProbeResult]:
        """
        Check whether a profile exists.

        Returns:
            ProbeResult, or None when the platform is unsupported, the
            heuristic is already decisive, the rate budget is exhausted, or
            the request failed.
        """
        platform = Platform.parse(platform)

        if platform in UNRELIABLE_HTTP_PLATFORMS:
            logger.debug(f"Skipping HTTP check for {platform}/{handle}: status codes unreliable")
            return None

        if heuristic_confidence >= self.confidence_threshold:
            logger.debug(
                f"Skipping HTTP check for {platform}/{handle}: heuristics confident ({heuristic_confidence}%)"
            )
            return None

        cached = self.cache.get(platform, handle)
        if cached is not None:
            logger.debug(f"Using cached probe result for {platform}/{handle}")
            return replace(cached, method=ProbeMethod.CACHED)

        url = platform.probe_url(handle)
        if not url:
            logger.debug(f"Platform {platform} not supported for direct HTTP checks")
            return None

        # Reserve the slot at issue time so concurrent evaluations cannot overshoot
        if not self.rate_limiter.acquire():
            logger.warning(f"Probe rate limit exhausted, skipping HTTP check for {platform}/{handle}")
            return None

        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=False) as client:
                resp = await client.head(url, headers={"User-Agent": USER_AGENT})
        except (httpx.HTTPError, OSError) as e:
            logger.warning(f"HTTP check failed for {platform}/{handle}: {e}")
            return None

        exists, confidence = self.interpret_status(resp.status_code, platform)
        result = ProbeResult(
            platform=platform,
            handle=handle,
            exists=exists,
            confidence=confidence,
            method=ProbeMethod.HTTP_CHECK,
            checked_at=datetime.now(timezone.utc),
            status_code=resp.status_code,
        )
        self.cache.put(platform, handle, result)

        logger.info(
            f"HTTP check for {platform}/{handle}: {resp.status_code} -> "
            f"{'EXISTS' if exists else 'AVAILABLE'} ({confidence}% confidence)"
        )
        return result

    @staticmethod
    def interpret_status(status_code: int, platform: Platform) -> tuple[bool, int]:
        """Map an HTTP status to (exists, confidence)."""
        if status_code == 200:
            return True, 90
        if status_code == 404:
            # Banned or reserved handles also 404 on some platforms
            return False, 70 if platform.reserves_handles else 80
        if status_code in (301, 302, 403):
            # Login redirects and forbidden pages are treated as existing
            return True, 85
        # 429 and anything unexpected: assume taken
        return True, 50

    async def probe_many(
        self,
        handle: str,
        platforms: Iterable[tuple[Platform | str, int]],
    ) -> list[ProbeResult]:
        """
        Probe the uncertain platforms from (platform, heuristic_confidence) pairs.

        Probes run sequentially in the given order, capped by the free
        rate-limit slots and `max_per_batch`.
        """
        uncertain = [
            (Platform.parse(platform), confidence)
            for platform, confidence in platforms
            if confidence < self.confidence_threshold
        ]
        candidates = [(p, c) for p, c in uncertain if self.can_probe(p)]
        if not candidates:
            logger.debug(f"No uncertain probe-able platforms for {handle}; skipping HTTP checks")
            return []

        slots = self.rate_limiter.available_slots()
        to_check = candidates[: min(slots, self.max_per_batch)]
        logger.info(
            f"Checking {len(to_check)}/{len(candidates)} uncertain platforms for {handle} "
            f"({slots} rate limit slots available)"
        )

        results: list[ProbeResult] = []
        for platform, confidence in to_check:
            result = await self.probe(platform, handle, confidence)
            if result is not None:
                results.append(result)
        return results
