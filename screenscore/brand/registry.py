# Copyright (c) 2026 Screenscore
# SPDX-License-Identifier: MIT

"""
Brand profiles and the brand registry.

Profiles are static reference data. The registry is an immutable mapping
from brand name to profile whose iteration order is the order profiles
were registered; identification relies on that order to break ties.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Union

from screenscore.measure.colorspace import normalize_hex


@dataclass(frozen=True, slots=True)
class BrandProfile:
    """
    Visual identity of a known brand.

    Attributes:
        name: Registry key (lowercase)
        display_name: Human-readable name
        primary, secondary, accent: Identity colors as hex strings
        keywords: Literal terms searched case-insensitively in free text
        patterns: Regular expressions searched case-insensitively in free text
        font_family: Primary brand typeface
        industry, website: Descriptive metadata
    """
    name: str
    display_name: str
    primary: str
    secondary: str
    accent: str
    keywords: tuple[str, ...] = ()
    patterns: tuple[str, ...] = ()
    font_family: str = "system-ui"
    industry: str = ""
    website: str = ""
    _compiled: tuple[re.Pattern, ...] = field(
        default=(), init=False, repr=False, compare=False,
    )

    def __post_init__(self) -> None:
        """Normalize colors and compile patterns."""
        if not self.name:
            raise ValueError("Brand name cannot be empty")
        object.__setattr__(self, "name", self.name.lower())
        for attr in ("primary", "secondary", "accent"):
            object.__setattr__(self, attr, normalize_hex(getattr(self, attr)))
        try:
            compiled = tuple(re.compile(p, re.IGNORECASE) for p in self.patterns)
        except re.error as e:
            raise ValueError(f"Invalid pattern for brand {self.name!r}: {e}") from e
        object.__setattr__(self, "_compiled", compiled)

    @property
    def colors(self) -> tuple[str, str, str]:
        """(primary, secondary, accent)."""
        return (self.primary, self.secondary, self.accent)

    @property
    def compiled_patterns(self) -> tuple[re.Pattern, ...]:
        return self._compiled

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "display_name": self.display_name,
            "colors": {
                "primary": self.primary,
                "secondary": self.secondary,
                "accent": self.accent,
            },
            "keywords": list(self.keywords),
            "patterns": list(self.patterns),
            "font_family": self.font_family,
            "industry": self.industry,
            "website": self.website,
        }

    @classmethod
    def from_dict(cls, data: dict) -> BrandProfile:
        """Deserialize from dictionary."""
        colors = data["colors"]
        return cls(
            name=data["name"],
            display_name=data.get("display_name", data["name"]),
            primary=colors["primary"],
            secondary=colors["secondary"],
            accent=colors["accent"],
            keywords=tuple(data.get("keywords", ())),
            patterns=tuple(data.get("patterns", ())),
            font_family=data.get("font_family", "system-ui"),
            industry=data.get("industry", ""),
            website=data.get("website", ""),
        )


class BrandRegistry(Mapping):
    """
    Read-only, ordered mapping of brand name → BrandProfile.

    Safe to share between threads: nothing mutates it after construction.
    ``with_profile`` returns a new registry instead of modifying this one.
    """

    __slots__ = ("_profiles",)

    def __init__(self, profiles: tuple[BrandProfile, ...] | list[BrandProfile] = ()) -> None:
        table: dict[str, BrandProfile] = {}
        for profile in profiles:
            if profile.name in table:
                raise ValueError(f"Duplicate brand profile: {profile.name!r}")
            table[profile.name] = profile
        self._profiles = MappingProxyType(table)

    def __getitem__(self, name: str) -> BrandProfile:
        return self._profiles[name.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    def __repr__(self) -> str:
        return f"BrandRegistry({list(self._profiles)})"

    def colors_for(self, name: str) -> tuple[str, str, str]:
        """Identity colors of a brand, or KeyError if unknown."""
        return self[name].colors

    def with_profile(self, profile: BrandProfile) -> BrandRegistry:
        """
        A new registry with ``profile`` added.

        Replacing an existing brand keeps its original position.
        """
        profiles = [profile if p.name == profile.name else p for p in self._profiles.values()]
        if profile.name not in self._profiles:
            profiles.append(profile)
        return BrandRegistry(profiles)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"brands": [p.to_dict() for p in self._profiles.values()]}

    @classmethod
    def from_dict(cls, data: dict) -> BrandRegistry:
        """Deserialize from dictionary."""
        return cls([BrandProfile.from_dict(b) for b in data.get("brands", [])])


def load_registry(path: Union[str, Path]) -> BrandRegistry:
    """
    Load a registry from a JSON file shaped like ``{"brands": [...]}``.

    Raises:
        FileNotFoundError: The file does not exist
        ValueError: The document is not valid JSON or a profile is malformed
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid brand registry {path}: {e}") from e
    try:
        return BrandRegistry.from_dict(data)
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed brand profile in {path}: {e}") from e


# =============================================================================
# Default registry
# =============================================================================

DEFAULT_PROFILES = (
    BrandProfile(
        name="toss",
        display_name="Toss",
        primary="#0064FF",
        secondary="#F5F7FA",
        accent="#FF6B35",
        keywords=(
            "toss", "토스", "viva republica", "비바리퍼블리카",
            "송금", "간편결제", "토스페이", "toss pay",
            "투자", "증권", "주식", "stock", "securities",
        ),
        patterns=(
            r"toss",
            r"토스",
            r"viva.?republica",
            r"#0064ff",
            r"toss.?face",
        ),
        font_family="Toss Face",
        industry="Fintech",
        website="https://toss.im",
    ),
    BrandProfile(
        name="kakao",
        display_name="Kakao",
        primary="#FEE500",
        secondary="#191919",
        accent="#FF6B35",
        keywords=(
            "kakao", "카카오", "kakaobank", "카카오뱅크",
            "kakaotalk", "카카오톡", "kakaopay", "카카오페이",
        ),
        patterns=(
            r"kakao",
            r"카카오",
            r"#fee500",
            r"kakaoregular",
        ),
        font_family="KakaoRegular",
        industry="Technology",
        website="https://www.kakaocorp.com",
    ),
    BrandProfile(
        name="naver",
        display_name="NAVER",
        primary="#03C75A",
        secondary="#F7F9FA",
        accent="#1EC800",
        keywords=(
            "naver", "네이버", "line", "라인",
            "naver pay", "네이버페이", "webtoon", "웹툰",
        ),
        patterns=(
            r"naver",
            r"네이버",
            r"#03c75a",
            r"noto.?sans",
        ),
        font_family="Noto Sans KR",
        industry="Technology",
        website="https://www.navercorp.com",
    ),
)

DEFAULT_REGISTRY = BrandRegistry(DEFAULT_PROFILES)
