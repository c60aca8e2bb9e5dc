import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .models import (
    SRS_RATINGS,
    QuizAnswer,
    QuizInputMode,
    QuizMode,
    QuizQuestion,
    QuizSession,
    VocabularyEntry,
)


class DeckFormatError(ValueError):
    """Raised when a deck or session file cannot be decoded."""


def read_jsonl(path: Path) -> List[dict]:
    data: List[dict] = []
    try:
        with Path(path).open("r", encoding="utf-8") as fh:
            for lineno, line in enumerate(fh, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    data.append(json.loads(line))
                except json.JSONDecodeError as exc:
                    raise DeckFormatError(
                        f"{path}:{lineno}: invalid JSON ({exc.msg})"
                    ) from exc
    except UnicodeDecodeError as exc:
        raise DeckFormatError(f"{path}: not valid UTF-8 text") from exc
    return data


def write_jsonl(path: Path, records: Sequence[dict]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as fh:
        for rec in records:
            fh.write(json.dumps(rec, ensure_ascii=False))
            fh.write("\n")


def _parse_datetime(value: Any, field: str) -> Optional[datetime]:
    if value in (None, ""):
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as exc:
        raise DeckFormatError(
            f"Invalid timestamp for '{field}': {value!r}"
        ) from exc


def _require_object(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DeckFormatError(
            f"{what} must be a JSON object, found {type(value).__name__}"
        )
    return value


def _require_list(value: Any, what: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DeckFormatError(
            f"'{what}' must be a JSON array, found {type(value).__name__}"
        )
    return value


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def entry_from_dict(data: Dict[str, Any]) -> VocabularyEntry:
    """Build a :class:`VocabularyEntry` from a deck record.

    ``id``, ``term`` and ``meaning`` are required; everything else is
    optional.
    """
    data = _require_object(data, "Vocabulary record")
    missing = [k for k in ("id", "term", "meaning") if not data.get(k)]
    if missing:
        raise DeckFormatError(
            "Vocabulary record missing field(s): " + ", ".join(missing)
        )
    try:
        review_count = int(data.get("review_count", 0) or 0)
        ease = data.get("ease_factor")
        interval = data.get("interval")
        return VocabularyEntry(
            id=str(data["id"]),
            term=str(data["term"]),
            meaning=str(data["meaning"]),
            example=str(data["example"]) if data.get("example") else None,
            last_reviewed_at=_parse_datetime(
                data.get("last_reviewed_at"), "last_reviewed_at"
            ),
            review_count=review_count,
            ease_factor=float(ease) if ease is not None else None,
            interval=int(interval) if interval is not None else None,
            next_review_at=_parse_datetime(
                data.get("next_review_at"), "next_review_at"
            ),
            created_at=_parse_datetime(data.get("created_at"), "created_at"),
            tags=tuple(str(t) for t in data.get("tags") or ()),
        )
    except DeckFormatError:
        raise
    except (TypeError, ValueError) as exc:
        raise DeckFormatError(
            f"Invalid vocabulary record {data.get('id')!r}: {exc}"
        ) from exc


def entry_to_dict(entry: VocabularyEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "term": entry.term,
        "meaning": entry.meaning,
        "example": entry.example,
        "last_reviewed_at": _format_datetime(entry.last_reviewed_at),
        "review_count": entry.review_count,
        "ease_factor": entry.ease_factor,
        "interval": entry.interval,
        "next_review_at": _format_datetime(entry.next_review_at),
        "created_at": _format_datetime(entry.created_at),
        "tags": list(entry.tags),
    }


def question_to_dict(question: QuizQuestion) -> Dict[str, Any]:
    return {
        "entry": entry_to_dict(question.entry),
        "mode": question.mode.value,
        "choices": list(question.choices),
        "correct_index": question.correct_index,
    }


def question_from_dict(data: Dict[str, Any]) -> QuizQuestion:
    data = _require_object(data, "Question record")
    try:
        return QuizQuestion(
            entry=entry_from_dict(data.get("entry") or {}),
            mode=QuizMode(data.get("mode", QuizMode.TERM_TO_MEANING.value)),
            choices=tuple(str(c) for c in data.get("choices") or ()),
            correct_index=int(data.get("correct_index", -1)),
        )
    except DeckFormatError:
        raise
    except (TypeError, ValueError) as exc:
        raise DeckFormatError(f"Invalid question record: {exc}") from exc


def session_to_dict(
    session: QuizSession,
    *,
    input_mode: Optional[QuizInputMode] = None,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "started_at": _format_datetime(session.started_at),
        "current_index": session.current_index,
        "questions": [question_to_dict(q) for q in session.questions],
        "answers": [
            {
                "question_index": a.question_index,
                "selected_index": a.selected_index,
                "answered_at": _format_datetime(a.answered_at),
                "rating": a.rating,
            }
            for a in session.answers
        ],
    }
    if input_mode is not None:
        data["input_mode"] = QuizInputMode(input_mode).value
    return data


def session_from_dict(data: Dict[str, Any]) -> QuizSession:
    data = _require_object(data, "Session record")
    started_at = _parse_datetime(data.get("started_at"), "started_at")
    if started_at is None:
        raise DeckFormatError("Session record missing 'started_at'.")
    input_mode = data.get("input_mode")
    if input_mode is not None and input_mode not in {
        m.value for m in QuizInputMode
    }:
        raise DeckFormatError(f"Unknown input_mode {input_mode!r}.")
    answers: List[QuizAnswer] = []
    for raw in _require_list(data.get("answers"), "answers"):
        raw = _require_object(raw, "Answer record")
        answered_at = _parse_datetime(raw.get("answered_at"), "answered_at")
        if answered_at is None:
            raise DeckFormatError("Answer record missing 'answered_at'.")
        rating = raw.get("rating")
        if rating is not None and rating not in SRS_RATINGS:
            raise DeckFormatError(f"Unknown SRS rating {rating!r}.")
        try:
            answers.append(
                QuizAnswer(
                    question_index=int(raw["question_index"]),
                    selected_index=int(raw["selected_index"]),
                    answered_at=answered_at,
                    rating=rating,
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise DeckFormatError(f"Invalid answer record: {exc}") from exc
    questions = tuple(
        question_from_dict(q)
        for q in _require_list(data.get("questions"), "questions")
    )
    try:
        current_index = int(data.get("current_index", len(answers)))
    except (TypeError, ValueError) as exc:
        raise DeckFormatError(f"Invalid current_index: {exc}") from exc
    return QuizSession(
        questions=questions,
        started_at=started_at,
        current_index=current_index,
        answers=answers,
    )


def load_deck(path: Path) -> List[VocabularyEntry]:
    return [entry_from_dict(record) for record in read_jsonl(path)]


def load_session(path: Path) -> QuizSession:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise DeckFormatError(f"{path}: not valid UTF-8 text") from exc
    except json.JSONDecodeError as exc:
        raise DeckFormatError(f"{path}: invalid JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise DeckFormatError(f"{path}: expected a JSON object")
    return session_from_dict(data)


def write_session(
    path: Path,
    session: QuizSession,
    *,
    input_mode: Optional[QuizInputMode] = None,
) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(
        json.dumps(
            session_to_dict(session, input_mode=input_mode),
            ensure_ascii=False,
            indent=2,
        )
        + "\n",
        encoding="utf-8",
    )
