"""
countly-bulk — per-user request encoder for Countly bulk collection.

Turns user actions (sessions, events, views, ratings, crashes, conversions,
custom property changes) into request payloads for a bulk transport.
"""

__version__ = "0.1.0"

from countly_bulk.user import BulkUser
from countly_bulk.transport import MemoryQueue, RequestSink
from countly_bulk.properties import CustomProperties
from countly_bulk.session import split_session
from countly_bulk.errors import CountlyBulkError, ScriptError
from countly_bulk.models.event import Event
from countly_bulk.models.user import UserConfig, UserDetails

__all__ = [
    "BulkUser",
    "MemoryQueue",
    "RequestSink",
    "CustomProperties",
    "split_session",
    "CountlyBulkError",
    "ScriptError",
    "Event",
    "UserConfig",
    "UserDetails",
]
