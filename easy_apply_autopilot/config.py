"""Configuration and pacing profiles for the application autopilot"""

import base64
import binascii
import logging
from dataclasses import dataclass, field, replace

logger = logging.getLogger(__name__)

# ========================================
# PACING TIERS
# ========================================
# All delays are in milliseconds (ms).
# Every DOM-mutating action is followed by one of these before the next read.

VERY_SHORT = "very_short"
SHORT = "short"
MEDIUM = "medium"
LONG = "long"
VERY_LONG = "very_long"

DEFAULT_DELAYS_MS = {
    VERY_SHORT: 1000,
    SHORT: 5000,
    MEDIUM: 10000,
    LONG: 7000,  # also the default tier
    VERY_LONG: 15000,
}

# Storage key for each tier's override
DELAY_STORE_KEYS = {
    VERY_SHORT: "veryShortDelay",
    SHORT: "shortDelay",
    MEDIUM: "mediumDelay",
    LONG: "longDelay",
    VERY_LONG: "veryLongDelay",
}

# ========================================
# SPEED PROFILES
# ========================================
# Multipliers applied to every tier after storage overrides.
# - dev_test: 40-50% faster
# - super_dev: 70-80% faster, floored at MIN_DELAY_MS
SPEED_PROFILES = {
    "default": 1.0,
    "dev_test": 0.55,
    "super_dev": 0.25,
}

MIN_DELAY_MS = 25

# ========================================
# LIMITS
# ========================================
DAILY_LIMIT = 20
MAX_STEPS = 50  # loop iterations per attempt before giving up

# Settings that must be positive integers whatever their source
POSITIVE_INT_SETTINGS = ("daily_limit", "max_steps")
DROPDOWN_SURFACED_OPTIONS = 5
TRUNCATION_MARKER = "..."

# ========================================
# INFERENCE
# ========================================
PLAN_STANDARD = "free"
PLAN_PREMIUM = "pro"
DEFAULT_GEMINI_MODEL = "gemma-3-27b-it"
GEMINI_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)
PREMIUM_API_URL = "https://qerds.com/tools/tgs/api/ai"
INFERENCE_TIMEOUT_SECONDS = 60

# ========================================
# FILES
# ========================================
DEFAULT_STORE_PATH = "autopilot_store.json"
RESULTS_LOG_PATH = "log.jsonl"
DEBUG_UNRESOLVED_PATH = "debug_unresolved.jsonl"
BROWSER_DATA_DIR = "./browser_data"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings. Build with load_settings()."""

    delays_ms: dict = field(default_factory=lambda: dict(DEFAULT_DELAYS_MS))
    daily_limit: int = DAILY_LIMIT
    max_steps: int = MAX_STEPS
    plan_type: str = PLAN_STANDARD
    gemini_model: str = DEFAULT_GEMINI_MODEL
    access_token: str = None
    api_token: str = None

    @property
    def is_premium(self):
        return self.plan_type.lower() == PLAN_PREMIUM


def _as_positive_int(value, default):
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def decode_api_token(encoded):
    """Decode the base64-stored premium API token. Returns None if unusable."""
    if not encoded:
        return None
    try:
        return base64.b64decode(encoded, validate=True).decode("utf-8") or None
    except (binascii.Error, UnicodeDecodeError, ValueError):
        logger.warning("Stored API token is not valid base64 - ignoring it")
        return None


def scale_delays(delays_ms, speed):
    """Apply a speed profile multiplier to every tier"""
    if speed not in SPEED_PROFILES:
        raise ValueError(f"Unknown speed profile: {speed}")
    factor = SPEED_PROFILES[speed]
    return {
        tier: max(MIN_DELAY_MS, int(ms * factor)) for tier, ms in delays_ms.items()
    }


def load_settings(store, speed=None, **overrides):
    """
    Read settings from the key-value store, falling back to defaults for
    anything missing or unparsable. Keyword overrides (e.g. from the CLI)
    win over stored values.
    """
    keys = list(DELAY_STORE_KEYS.values()) + [
        "dailyLimit",
        "maxSteps",
        "planType",
        "geminiModel",
        "accessToken",
        "apiToken",
    ]
    stored = store.get(keys)

    delays = {
        tier: _as_positive_int(stored.get(DELAY_STORE_KEYS[tier]), default)
        for tier, default in DEFAULT_DELAYS_MS.items()
    }
    if speed:
        delays = scale_delays(delays, speed)

    settings = Settings(
        delays_ms=delays,
        daily_limit=_as_positive_int(stored.get("dailyLimit"), DAILY_LIMIT),
        max_steps=_as_positive_int(stored.get("maxSteps"), MAX_STEPS),
        plan_type=str(stored.get("planType") or PLAN_STANDARD),
        gemini_model=str(stored.get("geminiModel") or DEFAULT_GEMINI_MODEL),
        access_token=stored.get("accessToken") or None,
        api_token=decode_api_token(stored.get("apiToken")),
    )

    overrides = {k: v for k, v in overrides.items() if v is not None}
    for key in POSITIVE_INT_SETTINGS:
        if key in overrides:
            value = _as_positive_int(overrides[key], None)
            if value is None:
                logger.warning(f"Ignoring non-positive {key} override: {overrides[key]!r}")
                del overrides[key]
            else:
                overrides[key] = value
    if overrides:
        settings = replace(settings, **overrides)
    return settings
