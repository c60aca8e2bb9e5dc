"""Review-priority scoring and question selection."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from ..models import VocabularyEntry, ensure_aware, utcnow

logger = logging.getLogger(__name__)

NEVER_REVIEWED_DAYS = 999.0
PRIORITY_NOISE = 0.2

_ONE_DAY = timedelta(days=1)


def score_priority(
    entry: VocabularyEntry,
    now: datetime,
    *,
    rng: Optional[random.Random] = None,
    noise_scale: float = PRIORITY_NOISE,
) -> float:
    """Return how urgently ``entry`` needs review; larger is more urgent.

    Days since the last review (999 when never reviewed) are divided by
    ``review_count + 1`` and a uniform jitter in ``[0, noise_scale)`` is
    added so repeated sessions do not always produce the same order.
    """
    if entry.last_reviewed_at is not None:
        days = (ensure_aware(now) - entry.last_reviewed_at) / _ONE_DAY
    else:
        days = NEVER_REVIEWED_DAYS
    review_factor = 1.0 / (entry.review_count + 1)
    noise = 0.0
    if noise_scale:
        noise = (rng or random.Random()).random() * noise_scale
    return days * review_factor + noise


def select_questions(
    vocabulary: Sequence[VocabularyEntry],
    count: int,
    *,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    noise_scale: float = PRIORITY_NOISE,
) -> List[VocabularyEntry]:
    """Pick the ``count`` entries with the highest review priority.

    Every entry is scored once against the same ``now``. Fewer entries than
    requested simply yield a shorter list. Deterministic when ``seed`` (or a
    seeded ``rng``) is provided.
    """
    if count <= 0 or not vocabulary:
        return []
    rng = rng or random.Random(seed)
    moment = ensure_aware(now) if now is not None else utcnow()
    scored = [
        (score_priority(e, moment, rng=rng, noise_scale=noise_scale), e)
        for e in vocabulary
    ]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    selected = [entry for _, entry in scored[:count]]
    logger.debug(
        "Selected %d of %d entries",
        len(selected),
        len(vocabulary),
        extra={"selected_ids": [e.id for e in selected]},
    )
    return selected
