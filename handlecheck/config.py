"""Configuration management for handlecheck."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from .heuristics.scorer import DEFAULT_DECISION_THRESHOLD, DEFAULT_WEIGHTS
from .platforms import DEFAULT_PLATFORMS, Platform
from .verification.third_party import DEFAULT_PROVIDER_PLATFORMS

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Application configuration loaded from environment."""

    # Verification provider (optional, tier skipped when key or URL missing)
    social_provider_api_key: str = ""
    social_provider_url: str = ""
    social_provider_platforms: list[Platform] = field(
        default_factory=lambda: list(DEFAULT_PROVIDER_PLATFORMS)
    )
    social_provider_timeout: float = 10.0

    # Direct probes
    probe_rate_window_seconds: float = 60.0
    probe_rate_max_requests: int = 10
    probe_cache_ttl_hours: float = 24.0
    probe_timeout: float = 3.0
    probe_max_per_batch: int = 5

    # Refinement gate: tiers 2 and 3 only run below this heuristic confidence
    refine_confidence_threshold: int = 85

    default_platforms: list[Platform] = field(default_factory=lambda: list(DEFAULT_PLATFORMS))

    log_level: str = "INFO"
    config_dir: Path = field(default_factory=lambda: Path("./config"))

    # Heuristics (override via config/heuristics.yaml)
    heuristic_weights: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    decision_threshold: int = DEFAULT_DECISION_THRESHOLD
    extra_brands: list[str] = field(default_factory=list)
    extra_reserved_words: list[str] = field(default_factory=list)
    extra_common_words: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.config_dir = Path(self.config_dir)

    @property
    def provider_enabled(self) -> bool:
        return bool(self.social_provider_api_key.strip() and self.social_provider_url.strip())


def _parse_platforms(raw: Optional[str], default) -> list[Platform]:
    """Parse a comma-separated platform list, skipping unknown names."""
    if not raw or not raw.strip():
        return list(default)
    platforms: list[Platform] = []
    for name in raw.split(","):
        name = name.strip()
        if not name:
            continue
        try:
            platform = Platform.parse(name)
        except ValueError:
            logger.warning(f"Ignoring unknown platform in configuration: {name}")
            continue
        if platform not in platforms:
            platforms.append(platform)
    return platforms or list(default)


def _load_heuristics(config_dir: Path) -> dict:
    """Load heuristic overrides from config/heuristics.yaml (optional)."""
    path = Path(config_dir or ".") / "heuristics.yaml"
    if not path.exists():
        return {}

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Failed to parse heuristics.yaml: %s", exc)
        return {}

    def _coerce_weights(raw) -> dict[str, float]:
        weights = dict(DEFAULT_WEIGHTS)
        if not isinstance(raw, dict):
            return weights
        for name, value in raw.items():
            if name not in DEFAULT_WEIGHTS:
                logger.warning("Unknown heuristic weight in heuristics.yaml: %s", name)
                continue
            try:
                weights[name] = float(value)
            except (TypeError, ValueError):
                continue
        return weights

    def _coerce_words(raw) -> list[str]:
        if not isinstance(raw, (list, tuple, set)):
            return []
        return [str(word).strip().lower() for word in raw if str(word or "").strip()]

    def _coerce_threshold(raw, default: int) -> int:
        try:
            return int(raw)
        except (TypeError, ValueError):
            return default

    handle_cfg = data.get("handle", {}) if isinstance(data, dict) else {}
    if not isinstance(handle_cfg, dict):
        handle_cfg = {}

    return {
        "heuristic_weights": _coerce_weights(handle_cfg.get("weights")),
        "decision_threshold": _coerce_threshold(
            handle_cfg.get("decision_threshold"), DEFAULT_DECISION_THRESHOLD
        ),
        "extra_brands": _coerce_words(handle_cfg.get("brands")),
        "extra_reserved_words": _coerce_words(handle_cfg.get("reserved_words")),
        "extra_common_words": _coerce_words(handle_cfg.get("common_words")),
    }


def load_config() -> Config:
    """Load configuration from environment variables."""
    load_dotenv()

    config_dir = Path(os.getenv("CONFIG_DIR", "./config"))
    heuristics = _load_heuristics(config_dir)

    return Config(
        social_provider_api_key=os.getenv("SOCIAL_PROVIDER_API_KEY", ""),
        social_provider_url=os.getenv("SOCIAL_PROVIDER_URL", ""),
        social_provider_platforms=_parse_platforms(
            os.getenv("SOCIAL_PROVIDER_PLATFORMS"), DEFAULT_PROVIDER_PLATFORMS
        ),
        social_provider_timeout=float(os.getenv("SOCIAL_PROVIDER_TIMEOUT", "10")),
        probe_rate_window_seconds=float(os.getenv("PROBE_RATE_WINDOW_SECONDS", "60")),
        probe_rate_max_requests=int(os.getenv("PROBE_RATE_MAX_REQUESTS", "10")),
        probe_cache_ttl_hours=float(os.getenv("PROBE_CACHE_TTL_HOURS", "24")),
        probe_timeout=float(os.getenv("PROBE_TIMEOUT", "3")),
        probe_max_per_batch=int(os.getenv("PROBE_MAX_PER_BATCH", "5")),
        refine_confidence_threshold=int(os.getenv("REFINE_CONFIDENCE_THRESHOLD", "85")),
        default_platforms=_parse_platforms(os.getenv("DEFAULT_PLATFORMS"), DEFAULT_PLATFORMS),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        config_dir=config_dir,
        heuristic_weights=heuristics.get("heuristic_weights", dict(DEFAULT_WEIGHTS)),
        decision_threshold=heuristics.get("decision_threshold", DEFAULT_DECISION_THRESHOLD),
        extra_brands=heuristics.get("extra_brands", []),
        extra_reserved_words=heuristics.get("extra_reserved_words", []),
        extra_common_words=heuristics.get("extra_common_words", []),
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of error messages."""
    errors: list[str] = []

    if config.probe_rate_max_requests <= 0:
        errors.append("PROBE_RATE_MAX_REQUESTS must be positive")
    if config.probe_rate_window_seconds <= 0:
        errors.append("PROBE_RATE_WINDOW_SECONDS must be positive")
    if config.probe_cache_ttl_hours <= 0:
        errors.append("PROBE_CACHE_TTL_HOURS must be positive")
    if config.probe_timeout <= 0:
        errors.append("PROBE_TIMEOUT must be positive")
    if config.probe_max_per_batch <= 0:
        errors.append("PROBE_MAX_PER_BATCH must be positive")
    if config.social_provider_timeout <= 0:
        errors.append("SOCIAL_PROVIDER_TIMEOUT must be positive")
    if not 0 <= config.refine_confidence_threshold <= 100:
        errors.append("REFINE_CONFIDENCE_THRESHOLD must be between 0 and 100")
    if not 0 <= config.decision_threshold <= 100:
        errors.append("handle.decision_threshold must be between 0 and 100")

    key = (config.social_provider_api_key or "").strip()
    url = (config.social_provider_url or "").strip()
    if key and not url:
        errors.append("SOCIAL_PROVIDER_API_KEY is set but SOCIAL_PROVIDER_URL is missing")
    if url and not key:
        # Tier simply stays off without a key.
        logger.info("SOCIAL_PROVIDER_URL set without SOCIAL_PROVIDER_API_KEY; provider verification disabled")

    return errors
