"""
Paid third-party handle verification.

Wraps an external username-availability API. One request is sent per
covered platform (concurrently; the provider meters these itself, not the
local probe rate limiter) and each answer is normalised and passed through
a reliability filter. Answers the provider itself only guessed at are
marked untrusted so callers fall back to cheaper tiers.
"""

import asyncio
import logging
import re
from typing import Any, Iterable, Optional
from urllib.parse import quote

import aiohttp

from ..errors import ProviderError
from ..models import ThirdPartyVerdict
from ..platforms import Platform

logger = logging.getLogger(__name__)

TRUSTED_CONFIDENCE = 95
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_PROVIDER_PLATFORMS: tuple[Platform, ...] = (
    Platform.INSTAGRAM,
    Platform.TIKTOK,
    Platform.TWITTER,
    Platform.YOUTUBE,
)

DIAGNOSTIC_KEYS = ("debug", "message", "detection_method")

_RATE_LIMITED = re.compile(r"rate[ _-]?limit|too many requests|\b(?:status|http|code)\W*429\b")
# Status numbers only count next to a status word
_SERVER_ERROR = re.compile(
    r"server[ _-]?error|internal error|\b(?:status|http|code)\W*5\d\d\b|\b5xx\b"
)
_EARLY_DETECTION = re.compile(r"early[ _-]?detection")


class ThirdPartyVerifier:
    """
    Client for the external verification provider.

    The tier is only active when both an API key and a base URL are set;
    otherwise `verify` returns no answers and callers skip it.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        platforms: Iterable[Platform | str] = DEFAULT_PROVIDER_PLATFORMS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.api_key = (api_key or "").strip()
        self.base_url = (base_url or "").strip().rstrip("/")
        self.platforms = frozenset(Platform.parse(p) for p in platforms)
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.api_key and self.base_url)

    def supports(self, platform: Platform | str) -> bool:
        return Platform.parse(platform) in self.platforms

    async def verify(self, handle: str, platforms: Iterable[Platform | str]) -> list[ThirdPartyVerdict]:
        """
        Ask the provider about `handle` on each covered platform.

        Returns:
            One verdict per platform the provider answered; failed or
            unsupported platforms are omitted. Untrusted verdicts are
            included with `trusted=False`.
        """
        if not self.is_configured():
            logger.debug("Verification provider not configured; skipping")
            return []

        targets: list[Platform] = []
        for platform in platforms:
            platform = Platform.parse(platform)
            if platform in self.platforms and platform not in targets:
                targets.append(platform)
        if not targets:
            return []

        async with aiohttp.ClientSession() as session:
            answers = await asyncio.gather(
                *(self._verify_one(session, handle, platform) for platform in targets)
            )

        return [answer for answer in answers if answer is not None]

    async def _verify_one(
        self,
        session: Any,
        handle: str,
        platform: Platform,
    ) -> Optional[ThirdPartyVerdict]:
        try:
            payload = await self._fetch(session, handle, platform)
        except ProviderError as e:
            logger.warning(f"Verification provider failed for {platform}/{handle}: {e}")
            return None
        except asyncio.TimeoutError:
            logger.warning(f"Verification provider timeout for {platform}/{handle}")
            return None
        except aiohttp.ClientError as e:
            logger.warning(f"Verification provider unreachable for {platform}/{handle}: {e}")
            return None

        verdict = self.normalize(platform, payload)
        if not verdict.trusted:
            logger.warning(
                f"Discarding provider verdict for {platform}/{handle}: {verdict.rejection_reason}"
            )
        return verdict

    async def _fetch(self, session: Any, handle: str, platform: Platform) -> dict:
        url = f"{self.base_url}/{platform.value}?username={quote(handle)}"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with session.get(url, headers=headers, timeout=timeout) as resp:
            if resp.status != 200:
                try:
                    body = await resp.text()
                except ValueError:
                    body = ""
                raise ProviderError(resp.status, "Unexpected provider status", (body or "")[:200])
            try:
                data = await resp.json()
            except ValueError as e:
                # JSONDecodeError and UnicodeDecodeError are both ValueErrors
                raise ProviderError(resp.status, "Malformed provider response", str(e)[:200]) from e
        if not isinstance(data, dict):
            raise ProviderError(200, "Provider response is not a JSON object")
        return data

    @classmethod
    def normalize(cls, platform: Platform, payload: dict) -> ThirdPartyVerdict:
        """Turn a raw provider answer into a verdict with a trust decision."""
        available = payload.get("available")
        nested = payload.get("data")
        if available is None and isinstance(nested, dict):
            available = nested.get("available")
        if not isinstance(available, bool):
            available = None

        reason = cls.rejection_reason(available, cls.diagnostic_text(payload))
        if reason:
            return ThirdPartyVerdict(
                platform=platform,
                available=available,
                confidence=0,
                trusted=False,
                rejection_reason=reason,
            )
        return ThirdPartyVerdict(
            platform=platform,
            available=available,
            confidence=TRUSTED_CONFIDENCE,
            trusted=True,
        )

    @staticmethod
    def diagnostic_text(payload: dict) -> str:
        """Collect the provider's diagnostic fields into one lower-cased string."""
        parts: list[str] = []

        def collect(value: Any) -> None:
            if value is None:
                return
            if isinstance(value, dict):
                for item in value.values():
                    collect(item)
            elif isinstance(value, (list, tuple)):
                for item in value:
                    collect(item)
            else:
                parts.append(str(value))

        sources = [payload]
        if isinstance(payload.get("data"), dict):
            sources.append(payload["data"])
        for source in sources:
            for key in DIAGNOSTIC_KEYS:
                collect(source.get(key))

        return " ".join(parts).lower()

    @staticmethod
    def rejection_reason(available: Optional[bool], diagnostic: str) -> Optional[str]:
        """Return why an answer cannot be trusted, or None if it can."""
        if available is None:
            return "no_answer"
        if _RATE_LIMITED.search(diagnostic):
            return "rate_limited"
        if _SERVER_ERROR.search(diagnostic):
            return "server_error"
        # Any early-detection tag means the provider guessed from surface signals
        if _EARLY_DETECTION.search(diagnostic):
            return "early_detection"
        return None
