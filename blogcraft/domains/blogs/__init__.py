from blogcraft.domains.blogs.entities import (
    APPROVAL_MARKER, BlogPost, FeedbackEvent, FeedbackPolarity, Version
)
from blogcraft.domains.blogs.timeline import TimelineEntry, build_timeline, coerce_timestamp, reconcile

__all__ = [
    "APPROVAL_MARKER", "BlogPost", "FeedbackEvent", "FeedbackPolarity", "Version",
    "TimelineEntry", "build_timeline", "coerce_timestamp", "reconcile",
]
