"""
Social handle availability checks.

Estimates whether a username is free on each platform with a three-tier
cascade: offline heuristics, rate-limited direct profile probes, and an
optional paid verification provider.
"""

from .models import AggregateResult, PlatformVerdict
from .orchestrator import HandleOrchestrator
from .platforms import Platform

__all__ = [
    "AggregateResult",
    "HandleOrchestrator",
    "Platform",
    "PlatformVerdict",
]
