"""
commit_buckets.py
Classify commit timestamps into four local time-of-day buckets.

    morning  06:00-11:59
    daytime  12:00-17:59
    evening  18:00-23:59
    night    00:00-05:59
"""

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Iterable, Optional, Union

MORNING = "morning"
DAYTIME = "daytime"
EVENING = "evening"
NIGHT = "night"

BUCKET_ORDER = (MORNING, DAYTIME, EVENING, NIGHT)


@dataclass(frozen=True)
class BucketCounts:
    morning: int = 0
    daytime: int = 0
    evening: int = 0
    night: int = 0

    @property
    def total(self) -> int:
        return self.morning + self.daytime + self.evening + self.night

    def get(self, bucket: str) -> int:
        return getattr(self, bucket)


def bucket_for_hour(hour: int) -> str:
    if 6 <= hour < 12:
        return MORNING
    elif 12 <= hour < 18:
        return DAYTIME
    elif 18 <= hour < 24:
        return EVENING
    else:
        return NIGHT


def parse_commit_datetime(value: Union[str, datetime]) -> datetime:
    """Parse an ISO-8601 committedDate. Naive values are taken as UTC.

    Raises ValueError for anything that is not a timestamp.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value:
        date_str = value
        if date_str.endswith('Z'):
            date_str = date_str[:-1] + '+00:00'
        dt = datetime.fromisoformat(date_str)
    else:
        raise ValueError(f"malformed commit timestamp: {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def local_hour(value: Union[str, datetime], tz: Optional[tzinfo] = None) -> int:
    dt = parse_commit_datetime(value)
    # astimezone(None) converts to the host's local zone
    return dt.astimezone(tz).hour


def aggregate(timestamps: Iterable[Union[str, datetime]], tz: Optional[tzinfo] = None) -> BucketCounts:
    counts = {b: 0 for b in BUCKET_ORDER}
    for ts in timestamps:
        counts[bucket_for_hour(local_hour(ts, tz))] += 1
    return BucketCounts(**counts)
