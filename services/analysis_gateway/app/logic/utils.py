import json
import math
import time
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..schemas.analysis import ComplaintSnapshot, ReportStats

M = TypeVar("M", bound=BaseModel)

SECONDS_PER_DAY = 60 * 60 * 24


def extract_json(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Recover a JSON object embedded in free text.

    Takes everything between the first '{' and the last '}' and parses it.
    Returns None when there is no candidate, the candidate is not valid JSON,
    or the top level is not an object. Never raises.
    """
    if not text:
        return None
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        data = json.loads(text[start:end + 1])
    except (ValueError, RecursionError):
        return None
    return data if isinstance(data, dict) else None


def merge_with_fallback(model_cls: Type[M], parsed: Optional[Dict[str, Any]], fallback: M) -> M:
    """Overlay parsed fields on a fallback result.

    Unknown keys and nulls are dropped; any field that fails validation keeps
    the fallback's value, so the result always has the full shape.
    """
    if parsed is None:
        return fallback
    base = fallback.model_dump(by_alias=True)
    candidate = dict(base)
    candidate.update({k: v for k, v in parsed.items() if k in base and v is not None})
    try:
        return model_cls.model_validate(candidate)
    except ValidationError as exc:
        for err in exc.errors():
            if err["loc"] and err["loc"][0] in base:
                candidate[err["loc"][0]] = base[err["loc"][0]]
    try:
        return model_cls.model_validate(candidate)
    except ValidationError:
        return fallback


def snapshot_excerpt(snapshot: ComplaintSnapshot, limit: int) -> str:
    if snapshot.ai_summary:
        return snapshot.ai_summary
    return (snapshot.description or "")[:limit]


def _to_timestamp(created_at: Any) -> Optional[float]:
    # Firestore JSON ({_seconds}/{seconds}), epoch seconds or ms, or ISO-8601
    if isinstance(created_at, dict):
        created_at = created_at.get("_seconds", created_at.get("seconds"))
    if isinstance(created_at, bool) or created_at is None:
        return None
    if isinstance(created_at, (int, float)):
        if not math.isfinite(created_at):
            return None
        return created_at / 1000 if created_at > 1e12 else float(created_at)
    if isinstance(created_at, str):
        try:
            return _to_timestamp(float(created_at))
        except ValueError:
            pass
        try:
            parsed = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.timestamp()
    return None


def days_pending(created_at: Any, now: Optional[float] = None) -> int:
    """Whole days since creation; 0 when the timestamp is missing or unreadable."""
    ts = _to_timestamp(created_at)
    if ts is None:
        return 0
    now = time.time() if now is None else now
    return max(0, int((now - ts) // SECONDS_PER_DAY))


def count_status(complaints: List[ComplaintSnapshot], status: str) -> int:
    return sum(1 for c in complaints if c.status == status)


def complaint_stats(complaints: List[ComplaintSnapshot]) -> ReportStats:
    return ReportStats(
        total=len(complaints),
        resolved=count_status(complaints, "Resolved"),
        pending=count_status(complaints, "Pending"),
        in_progress=count_status(complaints, "In Progress"),
    )


def category_counts(complaints: List[ComplaintSnapshot]) -> Counter:
    return Counter(c.category for c in complaints if c.category)


def top_category(complaints: List[ComplaintSnapshot]) -> Optional[Tuple[str, int]]:
    # Ties go to the category seen first
    counts = category_counts(complaints)
    if not counts:
        return None
    return counts.most_common(1)[0]
