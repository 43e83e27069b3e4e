"""
Session heartbeat decomposition.

The collection protocol caps a single session_duration report at 60 seconds,
so a session of N seconds is reported as ceil(N / 60) heartbeats.
"""

from typing import Any, Optional

from countly_bulk.models.event import Number, coerce_number

HEARTBEAT_SECONDS = 60


def coerce_seconds(seconds: Any) -> int:
    """Coerce a duration to a non-negative int, truncating toward zero.

    Missing or unparseable values (booleans included) count as 0.
    """
    if not seconds or isinstance(seconds, bool):
        return 0
    try:
        value = int(seconds) if isinstance(seconds, int) else int(float(seconds))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(value, 0)


def coerce_timestamp(timestamp: Any) -> Optional[Number]:
    """Numeric start timestamp, or None when missing, zero or not a number."""
    return coerce_number(timestamp) or None


def split_session(seconds: Any, timestamp: Optional[Any] = None) -> list[dict[str, Any]]:
    """Split a session into heartbeat fragments of at most 60 seconds each.

    When a numeric start timestamp is given, heartbeat i is stamped at
    timestamp + (i + 1) * 60, including the final partial one.
    """
    remaining = coerce_seconds(seconds)
    start = coerce_timestamp(timestamp)
    beats: list[dict[str, Any]] = []
    for i in range(-(-remaining // HEARTBEAT_SECONDS)):
        if remaining <= 0:
            break
        beat: dict[str, Any] = {"session_duration": min(remaining, HEARTBEAT_SECONDS)}
        if start:
            beat["timestamp"] = start + (i + 1) * HEARTBEAT_SECONDS
        beats.append(beat)
        remaining -= HEARTBEAT_SECONDS
    return beats
