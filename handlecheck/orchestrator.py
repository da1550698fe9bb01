"""Cascading availability check across heuristic, probe and provider tiers."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .cache import ProbeCache
from .config import Config, validate_config
from .errors import ConfigurationError, HandleCheckError
from .heuristics import HandleScorer
from .models import (
    AggregateResult,
    HandleQuery,
    HeuristicVerdict,
    PlatformVerdict,
    ProbeMethod,
    ProbeResult,
    ThirdPartyVerdict,
    VerdictSource,
)
from .platforms import DEFAULT_PLATFORMS, Platform
from .rate_limiter import RateLimiter
from .verification import DirectProbe, ThirdPartyVerifier

logger = logging.getLogger(__name__)

PROVIDER_FACTOR = "Confirmed by verification provider"


def merge_verdict(
    platform: Platform,
    handle: str,
    heuristic: HeuristicVerdict,
    third_party: Optional[ThirdPartyVerdict] = None,
    probe: Optional[ProbeResult] = None,
) -> PlatformVerdict:
    """
    Combine the tier outcomes for one platform into a final verdict.

    A trusted provider answer wins outright, then a probe result, then
    the heuristic floor. Untrusted provider answers are ignored.
    """
    common = {
        "platform": platform,
        "handle": platform.display_handle(handle),
        "registration_url": platform.registration_url,
        "profile_url": platform.profile_url(handle),
    }

    if third_party is not None and third_party.trusted and third_party.available is not None:
        return PlatformVerdict(
            available=third_party.available,
            confidence=third_party.confidence,
            factors=(PROVIDER_FACTOR,),
            source=VerdictSource.THIRD_PARTY,
            **common,
        )

    if probe is not None:
        if probe.method == ProbeMethod.CACHED:
            factor = f"Recent profile check returned HTTP {probe.status_code}"
        else:
            factor = f"Profile page returned HTTP {probe.status_code}"
        return PlatformVerdict(
            available=not probe.exists,
            confidence=probe.confidence,
            factors=(factor,),
            source=VerdictSource.DIRECT_PROBE,
            **common,
        )

    return PlatformVerdict(
        available=heuristic.available,
        confidence=heuristic.confidence,
        factors=heuristic.factors,
        source=VerdictSource.HEURISTIC,
        **common,
    )


def overall_score(verdicts: Iterable[PlatformVerdict]) -> int:
    """Percentage of platforms on which the handle is available."""
    verdicts = list(verdicts)
    if not verdicts:
        return 0
    available = sum(1 for v in verdicts if v.available)
    return int(round(100 * available / len(verdicts)))


class HandleOrchestrator:
    """Decides which tiers to consult per platform and merges their answers."""

    def __init__(
        self,
        scorer: HandleScorer,
        direct_probe: Optional[DirectProbe] = None,
        verifier: Optional[ThirdPartyVerifier] = None,
        *,
        confidence_threshold: int = 85,
        default_platforms: Iterable[Platform | str] = DEFAULT_PLATFORMS,
    ):
        self.scorer = scorer
        self.direct_probe = direct_probe
        self.verifier = verifier
        self.confidence_threshold = confidence_threshold
        self.default_platforms = tuple(Platform.parse(p) for p in default_platforms)

    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        rate_limiter: Optional[RateLimiter] = None,
        cache: Optional[ProbeCache] = None,
    ) -> "HandleOrchestrator":
        """
        Wire all tiers from configuration; pass shared limiter/cache to reuse them.

        Raises:
            ConfigurationError: If the configuration fails validation
        """
        problems = validate_config(config)
        if problems:
            raise ConfigurationError("; ".join(problems))

        rate_limiter = rate_limiter or RateLimiter(
            max_requests=config.probe_rate_max_requests,
            window_seconds=config.probe_rate_window_seconds,
        )
        cache = cache or ProbeCache(ttl_seconds=config.probe_cache_ttl_hours * 3600)
        scorer = HandleScorer(
            weights=config.heuristic_weights,
            decision_threshold=config.decision_threshold,
            extra_brands=config.extra_brands,
            extra_reserved_words=config.extra_reserved_words,
            extra_common_words=config.extra_common_words,
        )
        direct_probe = DirectProbe(
            rate_limiter,
            cache,
            confidence_threshold=config.refine_confidence_threshold,
            timeout=config.probe_timeout,
            max_per_batch=config.probe_max_per_batch,
        )
        verifier = ThirdPartyVerifier(
            api_key=config.social_provider_api_key,
            base_url=config.social_provider_url,
            platforms=config.social_provider_platforms,
            timeout=config.social_provider_timeout,
        )
        return cls(
            scorer,
            direct_probe,
            verifier,
            confidence_threshold=config.refine_confidence_threshold,
            default_platforms=config.default_platforms,
        )

    def _resolve_platforms(self, platforms: Optional[Iterable[Platform | str]]) -> list[Platform]:
        resolved: list[Platform] = []
        for platform in platforms if platforms is not None else self.default_platforms:
            platform = Platform.parse(platform)
            if platform not in resolved:
                resolved.append(platform)
        return resolved

    async def _consult_provider(
        self,
        base_handle: str,
        platforms: list[Platform],
    ) -> dict[Platform, ThirdPartyVerdict]:
        """Trusted provider verdicts keyed by platform (empty when the tier is off)."""
        if self.verifier is None or not self.verifier.is_configured():
            return {}
        covered = [p for p in platforms if self.verifier.supports(p)]
        if not covered:
            return {}

        try:
            answers = await self.verifier.verify(base_handle, covered)
        except (HandleCheckError, OSError) as e:
            logger.warning(f"Verification provider unavailable for {base_handle}: {e}")
            return {}

        return {
            answer.platform: answer
            for answer in answers
            if answer.trusted and answer.available is not None
        }

    async def evaluate_all(
        self,
        base_handle: str,
        platforms: Optional[Iterable[Platform | str]] = None,
    ) -> AggregateResult:
        """
        Evaluate a handle across platforms.

        Args:
            base_handle: Handle already validated by the caller
            platforms: Platforms to check (defaults to the configured set)

        Returns:
            AggregateResult with verdicts in platform priority order
        """
        targets = self._resolve_platforms(platforms)

        # Heuristics first, so the refinement gate sees the offline baseline
        heuristics = {
            platform: self.scorer.evaluate_query(HandleQuery(base_handle, platform))
            for platform in targets
        }

        third_party = await self._consult_provider(base_handle, targets)

        probes: dict[Platform, ProbeResult] = {}
        uncertain = [
            (platform, heuristics[platform].confidence)
            for platform in targets
            if platform not in third_party
            and heuristics[platform].confidence < self.confidence_threshold
        ]
        if uncertain and self.direct_probe is not None:
            for result in await self.direct_probe.probe_many(base_handle, uncertain):
                probes[result.platform] = result

        verdicts = [
            merge_verdict(
                platform,
                base_handle,
                heuristics[platform],
                third_party.get(platform),
                probes.get(platform),
            )
            for platform in targets
        ]
        verdicts.sort(key=lambda v: v.platform.priority)

        result = AggregateResult(
            base_handle=base_handle,
            platforms=tuple(verdicts),
            overall_score=overall_score(verdicts),
        )
        logger.info(
            f"Evaluated {base_handle} on {len(verdicts)} platforms: "
            f"{len(result.available_platforms)} available "
            f"({len(third_party)} provider, {len(probes)} probed)"
        )
        return result
