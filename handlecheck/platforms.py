"""Supported social platforms and their per-platform constants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class PlatformInfo:
    """Static data attached to a platform."""

    profile_url: str
    registration_url: str
    handle_format: str = "{handle}"
    probe_url: Optional[str] = None  # None = no direct HTTP check
    competitiveness: float = 1.0
    unreliable_over_http: bool = False  # 200 for both existing and missing profiles
    reserves_handles: bool = False  # 404 may still mean banned/reserved


class Platform(str, Enum):
    """Closed set of platforms, declared in display priority order."""

    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    TWITTER = "twitter"
    YOUTUBE = "youtube"
    LINKEDIN = "linkedin"
    FACEBOOK = "facebook"
    SNAPCHAT = "snapchat"
    PINTEREST = "pinterest"
    DISCORD = "discord"
    GITHUB = "github"
    REDDIT = "reddit"
    TWITCH = "twitch"
    MEDIUM = "medium"

    @classmethod
    def parse(cls, value: "Platform | str") -> "Platform":
        """Resolve a platform from an enum member or a case-insensitive name."""
        if isinstance(value, Platform):
            return value
        name = (value or "").strip().lower()
        for entry in cls:
            if entry.value == name:
                return entry
        raise ValueError(f"Unsupported platform: {value!r}")

    @property
    def info(self) -> PlatformInfo:
        return PLATFORM_INFO[self]

    @property
    def priority(self) -> int:
        return _PRIORITY[self]

    @property
    def competitiveness(self) -> float:
        return self.info.competitiveness

    @property
    def unreliable_over_http(self) -> bool:
        return self.info.unreliable_over_http

    @property
    def reserves_handles(self) -> bool:
        return self.info.reserves_handles

    @property
    def registration_url(self) -> str:
        return self.info.registration_url

    def profile_url(self, handle: str) -> str:
        return self.info.profile_url.format(handle=handle)

    def probe_url(self, handle: str) -> Optional[str]:
        template = self.info.probe_url
        if not template:
            return None
        return template.format(handle=handle)

    def display_handle(self, handle: str) -> str:
        return self.info.handle_format.format(handle=handle)

    def __str__(self) -> str:
        return self.value


PLATFORM_INFO: dict[Platform, PlatformInfo] = {
    Platform.INSTAGRAM: PlatformInfo(
        profile_url="https://www.instagram.com/{handle}/",
        registration_url="https://www.instagram.com/accounts/emailsignup/",
        handle_format="@{handle}",
        competitiveness=1.2,
        unreliable_over_http=True,  # "Page isn't available" served with 200
        reserves_handles=True,
    ),
    Platform.TIKTOK: PlatformInfo(
        profile_url="https://www.tiktok.com/@{handle}",
        registration_url="https://www.tiktok.com/signup",
        handle_format="@{handle}",
        competitiveness=1.2,
        unreliable_over_http=True,  # 200 or 403 inconsistently
        reserves_handles=True,
    ),
    Platform.TWITTER: PlatformInfo(
        profile_url="https://twitter.com/{handle}",
        registration_url="https://twitter.com/i/flow/signup",
        handle_format="@{handle}",
        probe_url="https://twitter.com/{handle}",
        competitiveness=1.2,
    ),
    Platform.YOUTUBE: PlatformInfo(
        profile_url="https://www.youtube.com/@{handle}",
        registration_url="https://accounts.google.com/signup",
        handle_format="@{handle}",
        probe_url="https://www.youtube.com/@{handle}",
    ),
    Platform.LINKEDIN: PlatformInfo(
        profile_url="https://www.linkedin.com/in/{handle}",
        registration_url="https://www.linkedin.com/signup",
        probe_url="https://www.linkedin.com/in/{handle}",
    ),
    Platform.FACEBOOK: PlatformInfo(
        profile_url="https://facebook.com/{handle}",
        registration_url="https://www.facebook.com/r.php",
        unreliable_over_http=True,  # error page served with 200
    ),
    Platform.SNAPCHAT: PlatformInfo(
        profile_url="https://snapchat.com/add/{handle}",
        registration_url="https://accounts.snapchat.com/accounts/signup",
        competitiveness=0.8,
    ),
    Platform.PINTEREST: PlatformInfo(
        profile_url="https://pinterest.com/{handle}",
        registration_url="https://www.pinterest.com/join/",
        competitiveness=0.8,
    ),
    Platform.DISCORD: PlatformInfo(
        profile_url="https://discord.gg/{handle}",
        registration_url="https://discord.com/register",
        competitiveness=0.8,
    ),
    Platform.GITHUB: PlatformInfo(
        profile_url="https://github.com/{handle}",
        registration_url="https://github.com/signup",
        probe_url="https://github.com/{handle}",
    ),
    Platform.REDDIT: PlatformInfo(
        profile_url="https://www.reddit.com/user/{handle}",
        registration_url="https://www.reddit.com/register/",
        handle_format="u/{handle}",
        probe_url="https://www.reddit.com/user/{handle}",
    ),
    Platform.TWITCH: PlatformInfo(
        profile_url="https://www.twitch.tv/{handle}",
        registration_url="https://www.twitch.tv/signup",
        probe_url="https://www.twitch.tv/{handle}",
    ),
    Platform.MEDIUM: PlatformInfo(
        profile_url="https://medium.com/@{handle}",
        registration_url="https://medium.com/m/signin",
        handle_format="@{handle}",
        probe_url="https://medium.com/@{handle}",
    ),
}

_PRIORITY: dict[Platform, int] = {platform: index for index, platform in enumerate(Platform)}

DEFAULT_PLATFORMS: tuple[Platform, ...] = (
    Platform.INSTAGRAM,
    Platform.TIKTOK,
    Platform.TWITTER,
    Platform.YOUTUBE,
    Platform.LINKEDIN,
    Platform.FACEBOOK,
    Platform.SNAPCHAT,
    Platform.PINTEREST,
    Platform.DISCORD,
)

UNRELIABLE_HTTP_PLATFORMS: frozenset[Platform] = frozenset(
    platform for platform, info in PLATFORM_INFO.items() if info.unreliable_over_http
)
