"""Conversation timeline for a blog post.

A blog's history is stored as two independent append-only lists: the
versions (revisions of the post) and the feedback events (reactions to
whatever version the user was looking at). Nothing links a feedback event to
a version, so the history view has to put them back together by time.

Given the versions newest first, version ``i`` was the current one during
its attribution window::

    (versions[i].timestamp, versions[i - 1].timestamp]

with no upper bound for the newest version. A feedback event belongs to the
first window, scanning newest to oldest, that contains its timestamp. Events
recorded at or before the oldest version's timestamp have no window and are
clamped to the oldest version so that no feedback disappears from the view.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence

from blogcraft.core.logging import get_logger
from blogcraft.domains.blogs.entities import BlogPost, FeedbackEvent, Version

logger = get_logger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def coerce_timestamp(value: Any) -> datetime:
    """Best-effort conversion of a stored timestamp to an aware UTC datetime.

    Naive datetimes are taken as UTC, numbers as POSIX seconds and strings as
    ISO-8601 (``Z`` suffix allowed) or POSIX seconds. Anything else resolves to
    the epoch, which places it before every well-formed timestamp.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, bool):
        return EPOCH

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return EPOCH
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return EPOCH

    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return coerce_timestamp(datetime.fromisoformat(text))
        except ValueError:
            pass
        try:
            return coerce_timestamp(float(text))
        except ValueError:
            return EPOCH

    return EPOCH


@dataclass
class TimelineEntry:
    """One version together with the feedback given while it was current"""

    version: Version
    number: int
    is_latest: bool
    feedback: List[FeedbackEvent] = field(default_factory=list)

    @property
    def content(self) -> str:
        return self.version.content

    @property
    def user_prompt(self) -> Optional[str]:
        return self.version.user_prompt

    @property
    def ai_response(self) -> Optional[str]:
        return self.version.ai_response

    @property
    def feedback_text(self) -> Optional[str]:
        return self.version.feedback_text

    @property
    def timestamp(self) -> datetime:
        return coerce_timestamp(self.version.timestamp)


def _attribute(instant: datetime, version_times: Sequence[datetime]) -> int:
    """Index of the version whose window holds ``instant``, clamped to the oldest"""
    upper: Optional[datetime] = None
    for index, lower in enumerate(version_times):
        if instant > lower and (upper is None or instant <= upper):
            return index
        upper = lower
    return len(version_times) - 1


def reconcile(
    versions: Sequence[Version],
    feedback: Sequence[FeedbackEvent],
) -> List[TimelineEntry]:
    """Attribute feedback events to versions and build the timeline.

    ``versions`` must be ordered newest first; ``feedback`` may be in any
    order. Returns one entry per version, in the order given, each holding
    its feedback in chronological order (ties keep their input order).
    """
    if not versions:
        if feedback:
            logger.warning(
                "No versions to attribute feedback to, %d event(s) left out of the timeline",
                len(feedback),
            )
        return []

    version_times = [coerce_timestamp(v.timestamp) for v in versions]
    total = len(versions)
    entries = [
        TimelineEntry(version=version, number=total - index, is_latest=index == 0)
        for index, version in enumerate(versions)
    ]

    placed = sorted(
        ((coerce_timestamp(event.timestamp), position, event) for position, event in enumerate(feedback)),
        key=lambda item: (item[0], item[1]),
    )
    for instant, _position, event in placed:
        entries[_attribute(instant, version_times)].feedback.append(event)

    return entries


def build_timeline(blog: BlogPost) -> List[TimelineEntry]:
    """Timeline for a blog whose versions are held newest first"""
    return reconcile(blog.versions, blog.feedback)
