"""
Timestamp normalisation shared by response models
"""

from datetime import datetime, timezone
from typing import Optional


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive timestamps

    Every timestamp is written in UTC. SQLite hands it back without an
    offset, Postgres with one.
    """
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
