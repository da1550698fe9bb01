"""Data models for handle availability checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from .platforms import Platform


class ProbeMethod(str, Enum):
    """How a direct probe result was obtained."""

    HTTP_CHECK = "http_check"
    CACHED = "cached"


class VerdictSource(str, Enum):
    """Tier that produced the final per-platform verdict."""

    HEURISTIC = "heuristic"
    DIRECT_PROBE = "direct_probe"
    THIRD_PARTY = "third_party"


@dataclass(frozen=True)
class HandleQuery:
    """A single handle evaluated on a single platform."""

    base_handle: str
    platform: Platform


@dataclass(frozen=True)
class HeuristicVerdict:
    """Offline estimate of whether a handle is taken."""

    taken_score: int  # 0-100, higher = more likely taken
    confidence: int  # 0-100
    factors: tuple[str, ...] = ()
    decision_threshold: int = 50

    @property
    def available(self) -> bool:
        return self.taken_score < self.decision_threshold


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a direct HTTP check against a profile URL."""

    platform: Platform
    handle: str
    exists: bool
    confidence: int
    method: ProbeMethod
    checked_at: datetime
    status_code: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": self.platform.value,
            "handle": self.handle,
            "exists": self.exists,
            "confidence": self.confidence,
            "method": self.method.value,
            "checked_at": self.checked_at.isoformat(),
            "status_code": self.status_code,
        }


@dataclass(frozen=True)
class ThirdPartyVerdict:
    """Normalized answer from the paid verification provider."""

    platform: Platform
    available: Optional[bool]
    confidence: int
    trusted: bool
    rejection_reason: Optional[str] = None


@dataclass(frozen=True)
class PlatformVerdict:
    """Final per-platform availability verdict."""

    platform: Platform
    handle: str
    available: bool
    confidence: int
    factors: tuple[str, ...]
    registration_url: str
    profile_url: str
    source: VerdictSource = VerdictSource.HEURISTIC

    def to_dict(self) -> dict[str, Any]:
        return {
            "platform": self.platform.value,
            "handle": self.handle,
            "available": self.available,
            "confidence": self.confidence,
            "factors": list(self.factors),
            "registration_url": self.registration_url,
            "profile_url": self.profile_url,
            "source": self.source.value,
        }


@dataclass(frozen=True)
class AggregateResult:
    """Verdicts for one base handle across platforms."""

    base_handle: str
    platforms: tuple[PlatformVerdict, ...] = field(default_factory=tuple)
    overall_score: int = 0

    @property
    def available_platforms(self) -> list[PlatformVerdict]:
        return [v for v in self.platforms if v.available]

    def to_dict(self) -> dict[str, Any]:
        return {
            "base_handle": self.base_handle,
            "platforms": [v.to_dict() for v in self.platforms],
            "overall_score": self.overall_score,
        }
