"""Draining-activity catalog and free-text classification.

Rates are the fraction of pool depleted per 30-minute session. Variable-ratio
reinforcement (infinite scroll, loot boxes) sits at the top of the table;
functional apps sit at zero.

Classification turns a free-text app name into a DrainActivity tag. The
lookup order is fixed: custom mapping, exact key, keyword pattern, default.
Pattern order matters because some keywords are substrings of other apps'
names ("shorts" must win over "youtube").
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from pool_engine.models.enums import ActivityCategory, DrainActivity, Resolution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepletionRate:
    """Catalog entry for one draining activity."""

    rate: float
    label: str
    category: ActivityCategory
    mechanism: str


@dataclass(frozen=True)
class Classification:
    """Result of resolving a free-text name to a catalog tag."""

    activity: DrainActivity
    resolution: Resolution

    @property
    def is_default(self) -> bool:
        return self.resolution == Resolution.DEFAULT


_A = DrainActivity
_C = ActivityCategory

DEPLETION_RATES: dict[DrainActivity, DepletionRate] = {
    # Maximum variable-ratio reinforcement
    _A.TIKTOK: DepletionRate(0.14, "TikTok", _C.SOCIAL, "Variable ratio + infinite scroll"),
    _A.YOUTUBE_SHORTS: DepletionRate(0.13, "YouTube Shorts", _C.SOCIAL, "Variable ratio short-form"),
    _A.INSTAGRAM_REELS: DepletionRate(0.13, "Instagram Reels", _C.SOCIAL, "Variable ratio short-form"),
    _A.INSTAGRAM: DepletionRate(0.11, "Instagram", _C.SOCIAL, "Variable rewards + social comparison"),
    _A.SNAPCHAT: DepletionRate(0.11, "Snapchat", _C.SOCIAL, "Streaks + ephemeral content"),
    # High variable ratio
    _A.TWITTER: DepletionRate(0.09, "Twitter/X", _C.SOCIAL, "Variable ratio, lower sensory intensity"),
    _A.REDDIT: DepletionRate(0.09, "Reddit", _C.SOCIAL, "Variable content quality"),
    _A.FACEBOOK: DepletionRate(0.09, "Facebook", _C.SOCIAL, "News feed algorithm"),
    # Gaming
    _A.GAMING_GACHA: DepletionRate(0.12, "Gacha/Loot box games", _C.GAMING, "Gambling mechanics"),
    _A.GAMING_MMO: DepletionRate(0.11, "MMO/Multiplayer", _C.GAMING, "Sustained unpredictable rewards"),
    _A.GAMING_COMPETITIVE: DepletionRate(0.10, "Competitive games", _C.GAMING, "Win/loss cycling"),
    _A.GAMING_STORY: DepletionRate(0.06, "Story-based games", _C.GAMING, "Predictable arcs, natural endpoints"),
    _A.GAMING_PUZZLE: DepletionRate(0.05, "Puzzle games", _C.GAMING, "Skill-based, satisfying completion"),
    # Passive consumption
    _A.NETFLIX: DepletionRate(0.07, "Netflix/Streaming", _C.VIDEO, "Auto-play extends sessions"),
    _A.YOUTUBE: DepletionRate(0.06, "YouTube (long-form)", _C.VIDEO, "Recommendation algorithm"),
    _A.TV_STANDARD: DepletionRate(0.04, "Standard TV", _C.VIDEO, "Natural endpoints, predictable"),
    # Notification-driven communication
    _A.EMAIL: DepletionRate(0.09, "Email", _C.COMMUNICATION, "Micro-gambling per notification"),
    _A.SLACK: DepletionRate(0.08, "Slack/Teams", _C.COMMUNICATION, "Notification-driven checking"),
    _A.DISCORD: DepletionRate(0.08, "Discord", _C.COMMUNICATION, "Chat + notifications"),
    _A.MESSAGES: DepletionRate(0.05, "Messages/SMS", _C.COMMUNICATION, "Lower frequency notifications"),
    # Work: cognitive fatigue rather than a reward crash
    _A.FOCUSED_WORK: DepletionRate(0.06, "Focused work", _C.WORK, "Cognitive fatigue"),
    _A.MEETINGS: DepletionRate(0.04, "Video meetings", _C.WORK, "Video call fatigue"),
    # Neutral / restorative
    _A.READING_BOOK: DepletionRate(0.02, "Book reading", _C.RESTORATIVE, "Restorative attention"),
    _A.MUSIC_PASSIVE: DepletionRate(0.01, "Music (passive)", _C.NEUTRAL, "Mood regulation"),
    _A.UTILITY: DepletionRate(0.00, "Utility apps", _C.NEUTRAL, "Functional, no reward loop"),
}

# Ordered keyword table. First activity with any keyword contained in the
# lowercased name wins.
DEPLETION_PATTERNS: tuple[tuple[DrainActivity, tuple[str, ...]], ...] = (
    (_A.TIKTOK, ("tiktok",)),
    (_A.INSTAGRAM, ("instagram", "ig")),
    (_A.INSTAGRAM_REELS, ("reels",)),
    (_A.YOUTUBE_SHORTS, ("shorts",)),
    (_A.YOUTUBE, ("youtube",)),
    (_A.TWITTER, ("twitter", "x.com")),
    (_A.FACEBOOK, ("facebook", "fb")),
    (_A.REDDIT, ("reddit",)),
    (_A.SNAPCHAT, ("snapchat", "snap")),
    (_A.NETFLIX, ("netflix",)),
    (_A.DISCORD, ("discord",)),
    (_A.SLACK, ("slack",)),
    (_A.MESSAGES, ("messages", "imessage", "whatsapp", "telegram", "signal")),
    (_A.EMAIL, ("gmail", "mail", "outlook", "email")),
    (_A.GAMING_MMO, ("wow", "final fantasy", "mmo", "mmorpg")),
    (_A.GAMING_GACHA, ("genshin", "gacha", "fate", "summoners")),
    (_A.GAMING_COMPETITIVE, ("league", "valorant", "fortnite", "apex", "overwatch", "cod", "pubg")),
    (_A.GAMING_STORY, ("zelda", "god of war", "witcher", "rpg")),
    (_A.GAMING_PUZZLE, ("wordle", "sudoku", "candy crush", "puzzle")),
)

_KEYS: dict[str, DrainActivity] = {a.value: a for a in DrainActivity}


def activity_from_key(key: str | DrainActivity) -> DrainActivity | None:
    """Look up a DrainActivity by its catalog key; None if unknown."""
    if isinstance(key, DrainActivity):
        return key
    return _KEYS.get(str(key).strip().lower())


def classify_activity(
    name: str | None,
    custom_mappings: Mapping[str, str | DrainActivity] | None = None,
    patterns: tuple[tuple[DrainActivity, tuple[str, ...]], ...] = DEPLETION_PATTERNS,
) -> Classification:
    """Resolve a free-text app or activity name to a catalog tag.

    Args:
        name: App name as the user or screen-time feed reported it.
        custom_mappings: Optional user overrides, lowercased name → catalog key.
            A mapping to an unknown key resolves to UTILITY.
        patterns: Ordered keyword table (injectable for tuning).

    Returns:
        Classification with the tag and how it was found. Never raises;
        unrecognized names resolve to UTILITY with Resolution.DEFAULT.
    """
    lower_name = (name or "").strip().lower()
    if not lower_name:
        return Classification(DrainActivity.UTILITY, Resolution.DEFAULT)

    if custom_mappings:
        lowered = {k.strip().lower(): v for k, v in custom_mappings.items()}
        if lower_name in lowered:
            mapped = activity_from_key(lowered[lower_name])
            if mapped is None:
                logger.warning(
                    "Custom mapping for %r points at unknown key %r; using utility",
                    name,
                    lowered[lower_name],
                )
                mapped = DrainActivity.UTILITY
            return Classification(mapped, Resolution.CUSTOM_MAPPING)

    exact = _KEYS.get(lower_name)
    if exact is not None:
        return Classification(exact, Resolution.EXACT)

    for activity, keywords in patterns:
        if any(kw in lower_name for kw in keywords):
            return Classification(activity, Resolution.PATTERN)

    logger.debug("No catalog match for %r; treating as utility", name)
    return Classification(DrainActivity.UTILITY, Resolution.DEFAULT)
