"""Enumerations and model constants for the pool engine.

Catalog tags live here so downstream calculations branch on enum members,
never on free-text names. Scalar constants are grouped by the component that
consumes them.
"""

from enum import Enum, IntEnum, auto


class ActivityCategory(Enum):
    """Broad category of a draining activity."""

    SOCIAL = "social"
    GAMING = "gaming"
    VIDEO = "video"
    COMMUNICATION = "communication"
    WORK = "work"
    RESTORATIVE = "restorative"
    NEUTRAL = "neutral"


class DrainActivity(Enum):
    """Catalogued draining activities. Values are the lowercase catalog keys."""

    TIKTOK = "tiktok"
    YOUTUBE_SHORTS = "youtube_shorts"
    INSTAGRAM_REELS = "instagram_reels"
    INSTAGRAM = "instagram"
    SNAPCHAT = "snapchat"
    TWITTER = "twitter"
    REDDIT = "reddit"
    FACEBOOK = "facebook"
    GAMING_GACHA = "gaming_gacha"
    GAMING_MMO = "gaming_mmo"
    GAMING_COMPETITIVE = "gaming_competitive"
    GAMING_STORY = "gaming_story"
    GAMING_PUZZLE = "gaming_puzzle"
    NETFLIX = "netflix"
    YOUTUBE = "youtube"
    TV_STANDARD = "tv_standard"
    EMAIL = "email"
    SLACK = "slack"
    DISCORD = "discord"
    MESSAGES = "messages"
    FOCUSED_WORK = "focused_work"
    MEETINGS = "meetings"
    READING_BOOK = "reading_book"
    MUSIC_PASSIVE = "music_passive"
    UTILITY = "utility"


class RecoveryActivity(Enum):
    """Catalogued recharging activities. Values are the catalog type keys."""

    COLD_SHOWER_1MIN = "cold_shower_1min"
    COLD_SHOWER_2MIN = "cold_shower_2min"
    COLD_PLUNGE_30SEC = "cold_plunge_30sec"
    COLD_PLUNGE_1MIN = "cold_plunge_1min"
    COLD_EXPOSURE_EXTENDED = "cold_exposure_extended"
    SUNLIGHT_SUNNY_5MIN = "sunlight_sunny_5min"
    SUNLIGHT_SUNNY_10MIN = "sunlight_sunny_10min"
    SUNLIGHT_OVERCAST_15MIN = "sunlight_overcast_15min"
    SUNLIGHT_OVERCAST_30MIN = "sunlight_overcast_30min"
    MEDITATION_5MIN = "meditation_5min"
    MEDITATION_10MIN = "meditation_10min"
    MEDITATION_15MIN = "meditation_15min"
    MEDITATION_20MIN = "meditation_20min"
    YOGA_NIDRA_30MIN = "yoga_nidra_30min"
    NATURE_WALK_15MIN = "nature_walk_15min"
    NATURE_WALK_30MIN = "nature_walk_30min"
    FOREST_BATHING_1HR = "forest_bathing_1hr"
    FOREST_BATHING_2HR = "forest_bathing_2hr"
    SOCIAL_INPERSON_15MIN = "social_inperson_15min"
    SOCIAL_INPERSON_30MIN = "social_inperson_30min"
    SOCIAL_DEEP_CONVERSATION = "social_deep_conversation"
    SOCIAL_DIGITAL = "social_digital"
    BOREDOM_15MIN = "boredom_15min"
    BOREDOM_30MIN = "boredom_30min"
    EXERCISE_WALK_30MIN = "exercise_walk_30min"
    EXERCISE_MODERATE_30MIN = "exercise_moderate_30min"
    EXERCISE_HIIT_20MIN = "exercise_hiit_20min"
    EXERCISE_STRENGTH_30MIN = "exercise_strength_30min"
    EXERCISE_SKILLED_30MIN = "exercise_skilled_30min"


class SleepQuality(Enum):
    """Sleep architecture tier. Values match the host app's stored keys."""

    HIGH_REM = "highREM"
    NORMAL_REM = "normalREM"
    LOW_REM = "lowREM"
    FRAGMENTED = "fragmented"
    CONSOLIDATED = "consolidated"


class DysregulationTier(IntEnum):
    """Chronic tolerance tier, ordered from least to most dysregulated."""

    HEALTHY = 0
    MILD = 1
    MODERATE = 2
    SEVERE = 3


class ScreenTimeTrend(Enum):
    """Direction of the user's screen time over recent weeks."""

    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"


class EffortTier(IntEnum):
    """Habit ordering tier derived from the current pool level."""

    HIGH = auto()
    MODERATE = auto()
    LOW = auto()


class PoolStatus(IntEnum):
    """Advisory status band for a pool level."""

    HEALTHY = auto()
    CAUTION = auto()
    WARNING = auto()
    CRITICAL = auto()
    DANGER = auto()


class Resolution(IntEnum):
    """How a catalog lookup was satisfied.

    DEFAULT and UNRESOLVED mean the catalog guessed or gave up. Every other
    member means the activity was found or explicitly overridden.
    """

    EXACT = auto()
    CUSTOM_MAPPING = auto()
    PATTERN = auto()
    LEGACY = auto()
    OVERRIDE = auto()
    DEFAULT = auto()
    UNRESOLVED = auto()


# ---------------------------------------------------------------------------
# Sleep fill / morning level
# ---------------------------------------------------------------------------
SLEEP_BUCKET_MIN_HOURS = 3
SLEEP_BUCKET_MAX_HOURS = 9
DEFAULT_SLEEP_HOURS = 7.0

# Residual satisfaction from finishing yesterday's habits
YESTERDAY_COMPLETE_BONUS = 0.10

# Streak momentum: each threshold reached adds the bonus once
STREAK_BONUS_THRESHOLDS = (7, 21, 60)
STREAK_BONUS_PER_THRESHOLD = 0.05

# Nobody starts the day at zero
MORNING_FLOOR = 0.20

# ---------------------------------------------------------------------------
# Depletion / crash
# ---------------------------------------------------------------------------
DEPLETION_REFERENCE_MINUTES = 30.0  # catalog rates are per 30 minutes
REPETITION_AMPLIFICATION = 0.3  # per prior session of the same activity today
CRASH_FRACTION = 0.35
CRASH_RECOVERY_MINUTES = 60.0

# ---------------------------------------------------------------------------
# Pool state calculator
# ---------------------------------------------------------------------------
MICRO_RECOVERY_PER_HOUR = 0.005
POOL_FLOOR = 0.0
NOMINAL_CAPACITY = 1.0

# ---------------------------------------------------------------------------
# Capacity expansion
# ---------------------------------------------------------------------------
MIN_SESSIONS_PER_WEEK = 3
CAPACITY_LOOKBACK_WEEKS = 8
CAPACITY_MAX_CEILING = 0.25
DAYS_PER_WEEK = 7

# ---------------------------------------------------------------------------
# Dysregulation scoring
# ---------------------------------------------------------------------------
# (minutes strictly above, points), first match wins
SCREEN_TIME_SCORE_BANDS = ((360, 3), (240, 2), (120, 1))
FLAGGED_APP_CATEGORIES = frozenset({"social", "gaming_gacha", "gaming_mmo"})
ANHEDONIA_POINTS = 3
BOREDOM_INTOLERANCE_POINTS = 1
COMPULSIVE_USE_POINTS = 2
FLAGGED_CATEGORY_POINTS = 1
TREND_POINTS = 1

# (minimum score, tier), first match wins
DYSREGULATION_CUT_POINTS = (
    (7, DysregulationTier.SEVERE),
    (4, DysregulationTier.MODERATE),
    (2, DysregulationTier.MILD),
)

# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------
HIGH_EFFORT_THRESHOLD = 0.70
MODERATE_EFFORT_THRESHOLD = 0.50
TWO_MINUTE_THRESHOLD = 0.30
DEFAULT_RESISTANCE = 5.0
MID_RESISTANCE = 5.0
MAX_RECOVERY_SUGGESTIONS = 3
