"""Keysmith -- password generation utilities.

Core functions for building character pools, sampling passwords,
estimating their strength, and keeping a short history of recent results.
"""

import logging
import re
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


# ── Character categories ───────────────────────────────────────────────────

UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
DIGITS = "0123456789"
SYMBOLS = "!@#$%^&*()_+[]{}|;:,.<>?/~`-="

CATEGORIES = {
    "uppercase": UPPERCASE,
    "lowercase": LOWERCASE,
    "digits": DIGITS,
    "symbols": SYMBOLS,
}

AMBIGUOUS = "0O1lI"

DEFAULT_LENGTH = 16
MAX_HISTORY = 5
EXPORT_FILENAME = "password_history.txt"


# ── Errors ─────────────────────────────────────────────────────────────────


class KeysmithError(Exception):
    """Base exception for keysmith errors."""


class InvalidConfigError(KeysmithError, ValueError):
    """Raised when a generation config violates its contract."""


# ── Configuration & results ────────────────────────────────────────────────


@dataclass
class GenerationConfig:
    """What to generate: a length and the enabled character categories."""

    length: int = DEFAULT_LENGTH
    uppercase: bool = True
    lowercase: bool = True
    digits: bool = True
    symbols: bool = True
    exclude_ambiguous: bool = False

    def __post_init__(self):
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise InvalidConfigError(f"length must be an integer, got {self.length!r}")
        if self.length < 1:
            raise InvalidConfigError("length must be at least 1")

    @property
    def categories(self) -> list[str]:
        """Enabled category names, in canonical order."""
        return [name for name in CATEGORIES if getattr(self, name)]


@dataclass(frozen=True)
class GeneratedPassword:
    text: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


# ── Charset building ───────────────────────────────────────────────────────


def build_charset(config: GenerationConfig) -> str:
    """Return the pool of characters eligible for sampling.

    Category sequences are concatenated as-is, so a character shared by two
    categories would be weighted twice.  An empty string means nothing can
    be generated.
    """
    pool = "".join(CATEGORIES[name] for name in config.categories)
    if config.exclude_ambiguous:
        pool = "".join(ch for ch in pool if ch not in AMBIGUOUS)
    return pool


# ── Password sampling ──────────────────────────────────────────────────────


def sample_password(config: GenerationConfig, rng=None) -> str:
    """Sample a password of ``config.length`` characters.

    The first ``min(categories, length)`` characters are drawn round-robin
    from the enabled categories so each is represented when length allows;
    the rest come from the whole pool.  The result is shuffled.

    *rng* is any object with ``choice`` and ``randrange`` (a
    :class:`random.Random` works); defaults to :class:`secrets.SystemRandom`.
    Returns ``""`` when the pool is empty.
    """
    pool = build_charset(config)
    if not pool:
        logger.warning("No characters available: enable at least one category")
        return ""

    rng = rng or secrets.SystemRandom()
    sets = [CATEGORIES[name] for name in config.categories]
    required = min(len(sets), config.length)

    chars = []
    for i in range(required):
        group = sets[i % len(sets)]
        ch = rng.choice(group)
        # Category sets are unfiltered, so redraw ambiguous picks here
        while config.exclude_ambiguous and ch in AMBIGUOUS:
            ch = rng.choice(group)
        chars.append(ch)

    chars.extend(rng.choice(pool) for _ in range(config.length - required))

    # Fisher-Yates shuffle
    for i in range(len(chars) - 1, 0, -1):
        j = rng.randrange(i + 1)
        chars[i], chars[j] = chars[j], chars[i]

    logger.debug(
        "Sampled %d characters (%d guaranteed) from a pool of %d",
        len(chars), required, len(pool),
    )
    return "".join(chars)


def generate(config: GenerationConfig, rng=None) -> GeneratedPassword | None:
    """Generate a timestamped password, or ``None`` if the pool is empty."""
    text = sample_password(config, rng)
    if not text:
        return None
    return GeneratedPassword(text)


def generate_password(
    length: int = DEFAULT_LENGTH,
    *,
    uppercase: bool = True,
    lowercase: bool = True,
    digits: bool = True,
    symbols: bool = True,
    exclude_ambiguous: bool = False,
    rng=None,
) -> str:
    """Generate a password string from keyword flags.

    Raises :class:`InvalidConfigError` for a length below 1.
    """
    config = GenerationConfig(
        length=length,
        uppercase=uppercase,
        lowercase=lowercase,
        digits=digits,
        symbols=symbols,
        exclude_ambiguous=exclude_ambiguous,
    )
    return sample_password(config, rng)


# ── Strength analysis ──────────────────────────────────────────────────────

_WEAK_PREFIX = re.compile(r"^(?:password|1234|qwerty|admin)", re.IGNORECASE)
_REPEAT_RUN = re.compile(r"(.)\1{2,}")

LABELS = [(80, "Strong"), (60, "Medium"), (30, "Weak")]


def _label_for(score: int) -> str:
    for threshold, label in LABELS:
        if score >= threshold:
            return label
    return "Very weak"


def score_strength(password: str) -> dict:
    """Estimate password strength for display.

    Returns a dict with keys:
        score        -- int 0-100
        label        -- "Very weak", "Weak", "Medium" or "Strong"
        length       -- int
        char_classes -- dict[str, bool]  (lowercase, uppercase, digits, symbols)
    """
    classes = {
        "lowercase": bool(re.search(r"[a-z]", password)),
        "uppercase": bool(re.search(r"[A-Z]", password)),
        "digits":    bool(re.search(r"[0-9]", password)),
        "symbols":   bool(re.search(r"[^A-Za-z0-9]", password)),
    }

    if not password:
        return {"score": 0, "label": "Very weak", "length": 0, "char_classes": classes}

    # Negative for short passwords; only the final score is clamped
    score = min(40, (len(password) - 6) * 3.33)
    score += sum(classes.values()) * 15

    if _REPEAT_RUN.search(password):
        score -= 10

    if _WEAK_PREFIX.match(password):
        score = 5

    score = max(0, min(100, round(score)))

    return {
        "score": score,
        "label": _label_for(score),
        "length": len(password),
        "char_classes": classes,
    }


evaluate = score_strength


# ── History ────────────────────────────────────────────────────────────────


class PasswordHistory:
    """Most-recent-first list of generated passwords, capped at *capacity*."""

    def __init__(self, capacity: int = MAX_HISTORY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: list[GeneratedPassword] = []

    def push(self, entry: GeneratedPassword | None) -> None:
        if entry is None or not entry.text:
            return
        self._entries.insert(0, entry)
        del self._entries[self.capacity:]

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self):
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def export(self) -> str:
        """Render the history as text, one ``password    (timestamp)`` line each."""
        return "\n".join(
            f"{e.text}    ({e.created_at.astimezone():%Y-%m-%d %H:%M:%S})"
            for e in self._entries
        )
