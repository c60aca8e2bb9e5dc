"""SM-2 style review scheduling applied after a quiz answer.

The vocabulary store owns the records; these helpers only compute the
values it should persist.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence

from .models import (
    SRS_RATINGS,
    SRSRating,
    VocabularyEntry,
    ensure_aware,
    round_half_up,
    utcnow,
)

DEFAULT_EASE_FACTOR = 2.5
DEFAULT_INTERVAL = 1
MIN_EASE_FACTOR = 1.3

INTERVAL_MODIFIERS: Dict[str, float] = {
    "again": 0.0,
    "hard": 0.8,
    "good": 1.0,
    "easy": 1.3,
}

EASE_ADJUSTMENTS: Dict[str, float] = {
    "again": -0.2,
    "hard": -0.15,
    "good": 0.0,
    "easy": 0.15,
}

# Intervals (days) for a first review or a card still at one day.
_FIRST_INTERVALS: Dict[str, int] = {"hard": 1, "good": 3, "easy": 4}


@dataclass(frozen=True)
class SRSUpdate:
    ease_factor: float
    interval: int
    next_review_at: datetime
    review_count: int
    last_reviewed_at: datetime


def calculate_srs(
    entry: VocabularyEntry,
    rating: SRSRating,
    *,
    now: Optional[datetime] = None,
) -> SRSUpdate:
    """Compute the next ease factor, interval and review date for ``entry``."""
    if rating not in SRS_RATINGS:
        raise ValueError(f"Unknown SRS rating '{rating}'.")
    moment = ensure_aware(now) if now is not None else utcnow()
    ease = entry.ease_factor if entry.ease_factor is not None else (
        DEFAULT_EASE_FACTOR
    )
    interval = entry.interval if entry.interval is not None else (
        DEFAULT_INTERVAL
    )

    new_ease = max(MIN_EASE_FACTOR, ease + EASE_ADJUSTMENTS[rating])

    if rating == "again":
        new_interval = 1
    elif entry.review_count == 0 or interval <= 1:
        new_interval = _FIRST_INTERVALS[rating]
    else:
        new_interval = max(
            1,
            round_half_up(interval * new_ease * INTERVAL_MODIFIERS[rating]),
        )

    return SRSUpdate(
        ease_factor=round(new_ease, 2),
        interval=new_interval,
        next_review_at=moment + timedelta(days=new_interval),
        review_count=entry.review_count + 1,
        last_reviewed_at=moment,
    )


def format_interval(days: float) -> str:
    if days < 1:
        return "< 1 day"
    if days == 1:
        return "1 day"
    if days < 7:
        return f"{int(days)} days"
    if days < 30:
        return _plural(round_half_up(days / 7), "week")
    if days < 365:
        return _plural(round_half_up(days / 30), "month")
    return _plural(round_half_up(days / 365), "year")


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}" if value == 1 else f"{value} {unit}s"


def next_review_preview(
    entry: VocabularyEntry, *, now: Optional[datetime] = None
) -> Dict[str, str]:
    """Return the human-readable next interval for every rating."""
    return {
        rating: format_interval(calculate_srs(entry, rating, now=now).interval)
        for rating in SRS_RATINGS
    }


def is_due_for_review(
    entry: VocabularyEntry, *, now: Optional[datetime] = None
) -> bool:
    if entry.next_review_at is None:
        return True
    moment = ensure_aware(now) if now is not None else utcnow()
    return moment >= entry.next_review_at


def sort_by_review_priority(
    entries: Sequence[VocabularyEntry],
) -> List[VocabularyEntry]:
    """Unscheduled entries first (oldest created first), then by due date."""
    unscheduled = [e for e in entries if e.next_review_at is None]
    scheduled = [e for e in entries if e.next_review_at is not None]
    unscheduled.sort(key=_created_key)
    scheduled.sort(key=lambda e: e.next_review_at)
    return unscheduled + scheduled


def _created_key(entry: VocabularyEntry) -> tuple[bool, datetime]:
    # Entries without a creation date sort after dated ones.
    if entry.created_at is None:
        return (True, datetime.min.replace(tzinfo=timezone.utc))
    return (False, entry.created_at)
