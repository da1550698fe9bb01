"""Offline scoring of how likely a social handle is already taken."""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import Iterable, Optional

from rapidfuzz.distance import Levenshtein

from ..models import HandleQuery, HeuristicVerdict
from ..platforms import Platform
from . import wordlists

DEFAULT_WEIGHTS: dict[str, float] = {
    "length": 0.30,
    "dictionary": 0.20,
    "names": 0.15,
    "brands": 0.15,
    "reserved": 0.10,
    "patterns": 0.05,
    "entropy": 0.05,  # inverted
    "affixes": 0.05,
    "special_chars": 0.05,  # subtracted
    "leet": 0.05,
    "geographic": 0.05,
    "professional": 0.05,
    "pronounceability": 0.05,
    "repeating": 0.03,
}

DEFAULT_DECISION_THRESHOLD = 50
SHORT_HANDLE_MAX_LENGTH = 3
MAX_ENTROPY_BITS = 5.17  # log2 of the alphanumeric alphabet
MAX_FACTORS = 3

_NUMBER_RUN = re.compile(r"123|456|789|012|234|345|678|890")
_LETTER_RUN = re.compile(r"abc|bcd|cde|def|xyz|wxy|vwx")
_YEAR_SUFFIX = re.compile(r"_(19|20)\d{2}$|[0-9]{4}$")
_NUMBER_SUFFIX = re.compile(r"[0-9]{1,3}$")
_TRIPLE_CHAR = re.compile(r"(.)\1{2,}")
_TWO_CHAR_CYCLE = re.compile(r"^(..)\1+$")
_LEET_PATTERNS = [re.compile(p) for p in (r"3", r"0", r"1", r"4", r"7", r"\$", r"pr0", r"n00b", r"h4x", r"pwn", r"xxx")]


class HandleScorer:
    """Scores handles for taken-likelihood using weighted lexical signals.

    Pure and deterministic: the same handle and platform always produce
    the same verdict, which is what lets it act as the offline floor
    beneath the network tiers.
    """

    def __init__(
        self,
        weights: Optional[dict[str, float]] = None,
        decision_threshold: int = DEFAULT_DECISION_THRESHOLD,
        extra_brands: Iterable[str] = (),
        extra_reserved_words: Iterable[str] = (),
        extra_common_words: Iterable[str] = (),
    ):
        self.weights = dict(DEFAULT_WEIGHTS)
        if weights:
            self.weights.update({k: float(v) for k, v in weights.items() if k in DEFAULT_WEIGHTS})
        self.decision_threshold = decision_threshold
        self.brands = wordlists.BRANDS | {b.lower() for b in extra_brands}
        self.reserved_words = wordlists.RESERVED_WORDS | {w.lower() for w in extra_reserved_words}
        self.common_words = wordlists.COMMON_WORDS | {w.lower() for w in extra_common_words}

    def evaluate(self, handle: str, platform: Platform | str) -> HeuristicVerdict:
        """Score a handle on a platform."""
        platform = Platform.parse(platform)
        clean = (handle or "").strip().lower()
        length = len(clean)

        signals = self.compute_signals(clean)

        taken = 0.0
        for name, value in signals.items():
            weight = self.weights.get(name, 0.0)
            if name == "entropy":
                taken += (100 - value) * weight
            elif name == "special_chars":
                taken -= value * weight
            else:
                taken += value * weight

        taken *= platform.competitiveness
        taken = max(0.0, min(100.0, taken))

        # Very short handles are near-certainly taken whatever the platform
        if length <= SHORT_HANDLE_MAX_LENGTH:
            taken = max(taken, signals["length"])

        taken_score = int(round(taken))
        confidence = min(100, abs(self.decision_threshold - taken_score) * 2)
        available = taken_score < self.decision_threshold

        factors = self._select_factors(signals, length, available)

        return HeuristicVerdict(
            taken_score=taken_score,
            confidence=confidence,
            factors=tuple(factors),
            decision_threshold=self.decision_threshold,
        )

    def evaluate_query(self, query: HandleQuery) -> HeuristicVerdict:
        return self.evaluate(query.base_handle, query.platform)

    def compute_signals(self, clean: str) -> dict[str, float]:
        """Return every sub-score (0-100) for a lower-cased handle."""
        return {
            "length": self._score_length(len(clean)),
            "dictionary": self._score_dictionary(clean),
            "names": self._score_names(clean),
            "brands": self._score_brands(clean),
            "reserved": self._score_reserved(clean),
            "patterns": self._score_patterns(clean),
            "entropy": self._score_entropy(clean),
            "affixes": self._score_affixes(clean),
            "special_chars": self._score_special_chars(clean),
            "leet": self._score_leet(clean),
            "geographic": self._score_geographic(clean),
            "professional": self._score_professional(clean),
            "pronounceability": self._score_pronounceability(clean),
            "repeating": self._score_repeating(clean),
        }

    def _select_factors(self, signals: dict[str, float], length: int, available: bool) -> list[str]:
        """Pick the strongest explanatory reasons, strong evidence first."""
        strong: list[tuple[float, str]] = []

        def add(name: str, reason: str) -> None:
            strong.append((signals[name] * self.weights.get(name, 0.0), reason))

        if signals["length"] > 80:
            add("length", f"Very short handle ({length} chars)")
        elif signals["length"] < 20:
            add("length", f"Long handle ({length} chars)")
        if signals["dictionary"] > 70:
            add("dictionary", "Common dictionary word")
        if signals["names"] > 80:
            add("names", "Contains common name")
        if signals["brands"] > 90:
            add("brands", "Tech brand or company name")
        if signals["reserved"] > 95:
            add("reserved", "Reserved or system word")
        if signals["patterns"] > 80:
            add("patterns", "Keyboard or sequential pattern")
        if signals["entropy"] > 80:
            add("entropy", "High randomness (gibberish)")
        if signals["affixes"] > 70:
            add("affixes", "Common prefix/suffix pattern")
        if signals["special_chars"] > 50:
            add("special_chars", "Contains numbers/underscores")
        if signals["leet"] > 70:
            add("leet", "L33t speak or gaming style")
        if signals["geographic"] > 80:
            add("geographic", "City or country name")
        if signals["professional"] > 70:
            add("professional", "Professional or business term")
        if signals["pronounceability"] > 70:
            add("pronounceability", "Easy to pronounce/remember")
        if signals["repeating"] > 80:
            add("repeating", "Repeating pattern")

        # sorted() is stable, so equal strengths keep signal order
        factors = [reason for _, reason in sorted(strong, key=lambda item: -item[0])]

        if available:
            if length >= 10:
                factors.append("Good length for availability")
            if signals["special_chars"] > 30:
                factors.append("Unique character combination")

        return factors[:MAX_FACTORS]

    @staticmethod
    def _score_length(length: int) -> float:
        if length <= 3:
            return 95
        if length <= 4:
            return 85
        if length <= 5:
            return 70
        if length <= 6:
            return 55
        if length <= 7:
            return 40
        if length <= 9:
            return 25
        if length <= 12:
            return 15
        return 5

    def _score_dictionary(self, handle: str) -> float:
        if handle in self.common_words:
            return 85
        for word in self.common_words:
            if len(word) >= 3 and word in handle:
                return 60
        return 0

    @staticmethod
    def _score_names(handle: str) -> float:
        if handle in wordlists.FIRST_NAMES:
            return 99
        if handle in wordlists.LAST_NAMES:
            return 95

        for first in wordlists.FIRST_NAMES:
            if not handle.startswith(first):
                continue
            remainder = handle[len(first):]
            if remainder[:1] in ("_", "."):
                remainder = remainder[1:]
            if remainder in wordlists.LAST_NAMES:
                return 80

        for name in wordlists.FIRST_NAMES:
            if len(name) >= 4 and name in handle:
                return 50
        return 0

    def _score_brands(self, handle: str) -> float:
        if handle in self.brands:
            return 100
        if handle and any(brand in handle for brand in self.brands):
            return 90
        for brand in self.brands:
            if len(brand) >= 5 and Levenshtein.distance(handle, brand, score_cutoff=2) <= 2:
                return 85
        return 0

    def _score_reserved(self, handle: str) -> float:
        return 100 if handle in self.reserved_words else 0

    @staticmethod
    def _score_patterns(handle: str) -> float:
        if any(pattern in handle for pattern in wordlists.KEYBOARD_PATTERNS):
            return 90
        if _NUMBER_RUN.search(handle):
            return 85
        if _LETTER_RUN.search(handle):
            return 85
        return 0

    @staticmethod
    def _score_entropy(handle: str) -> float:
        """Shannon entropy normalised to 0-100."""
        if not handle:
            return 0
        total = len(handle)
        entropy = 0.0
        for count in Counter(handle).values():
            p = count / total
            entropy -= p * math.log2(p)
        return min(100.0, (entropy / MAX_ENTROPY_BITS) * 100)

    @staticmethod
    def _score_affixes(handle: str) -> float:
        if any(handle.startswith(prefix) for prefix in wordlists.PREFIXES):
            return 75
        if any(handle.endswith(suffix) for suffix in wordlists.SUFFIXES):
            return 75
        if _YEAR_SUFFIX.search(handle):
            return 60
        if _NUMBER_SUFFIX.search(handle):
            return 65
        return 0

    @staticmethod
    def _score_special_chars(handle: str) -> float:
        digits = sum(1 for ch in handle if "0" <= ch <= "9")
        score = 0
        if digits:
            score += 30
        if "_" in handle:
            score += 25
        special = sum(1 for ch in handle if ch in "_.-")
        score += min(30, special * 15)
        if digits >= 3:
            score += 20
        return min(100, score)

    @staticmethod
    def _score_leet(handle: str) -> float:
        matches = sum(1 for pattern in _LEET_PATTERNS if pattern.search(handle))
        return min(100, matches * 20)

    @staticmethod
    def _score_geographic(handle: str) -> float:
        if handle in wordlists.GEO_TERMS:
            return 95
        if any(term in handle for term in wordlists.GEO_TERMS):
            return 70
        return 0

    @staticmethod
    def _score_professional(handle: str) -> float:
        if handle in wordlists.PROFESSIONAL_TERMS:
            return 90
        if any(len(term) >= 4 and term in handle for term in wordlists.PROFESSIONAL_TERMS):
            return 65
        return 0

    @staticmethod
    def _score_pronounceability(handle: str) -> float:
        vowels = sum(1 for ch in handle if ch in "aeiou")
        consonants = sum(1 for ch in handle if ch in "bcdfghjklmnpqrstvwxyz")
        total = vowels + consonants
        if total == 0:
            return 0
        ratio = vowels / total
        # English-like band
        if 0.3 <= ratio <= 0.5:
            return 75
        return 30

    @staticmethod
    def _score_repeating(handle: str) -> float:
        if _TRIPLE_CHAR.search(handle):
            return 85
        if len(handle) <= 6 and _TWO_CHAR_CYCLE.match(handle):
            return 75
        return 0
