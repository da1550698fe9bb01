"""Network verification tiers."""

from .direct_probe import DirectProbe
from .third_party import ThirdPartyVerifier

__all__ = [
    "DirectProbe",
    "ThirdPartyVerifier",
]
