"""
BulkUser — encodes one user's actions into Countly requests.

Usage:
    queue = MemoryQueue()
    user = queue.add_user(device_id="my_device_id")
    user.begin_session({"_os": "Android"}, 150, 1000).add_event({"key": "Test", "count": 1})
    user.custom_increment("login_count").custom_push_unique("category", "IT").custom_save()
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from countly_bulk.models.event import Event, rating_event, view_event
from countly_bulk.models.user import USER_DETAIL_FIELDS, UserConfig, UserDetails
from countly_bulk.properties import CustomProperties
from countly_bulk.query import pick, prepare_query
from countly_bulk.session import coerce_timestamp, split_session
from countly_bulk.transport import RequestSink

logger = logging.getLogger(__name__)


class BulkUser:
    """Per-user request encoder.

    Every action builds its request fragment and hands it to `server`, then
    returns the same instance so calls can be chained. Instances are not
    thread-safe; callers must serialize calls on one instance.

    A missing device_id or server is logged and leaves the instance unusable:
    its actions do nothing.
    """

    def __init__(
        self,
        server: Optional[RequestSink],
        device_id: Optional[str],
        *,
        country_code: Optional[str] = None,
        city: Optional[str] = None,
        ip_address: Optional[str] = None,
    ):
        self._server = server
        self._device_id = device_id
        self._country_code = country_code
        self._city = city
        self._ip_address = ip_address
        self._session_start: Any = 0
        self._custom = CustomProperties()
        self._usable = True

        if not device_id:
            logger.error("device_id is missing")
            self._usable = False
        elif server is None:
            logger.error("server instance is missing")
            self._usable = False

    @classmethod
    def from_config(cls, server: Optional[RequestSink], config: UserConfig) -> "BulkUser":
        return cls(
            server,
            config.device_id,
            country_code=config.country_code,
            city=config.city,
            ip_address=config.ip_address,
        )

    @property
    def usable(self) -> bool:
        return self._usable

    @property
    def device_id(self) -> Optional[str]:
        return self._device_id

    @property
    def session_start(self) -> Any:
        """Start timestamp of the last session begun with a timestamp, 0 if none."""
        return self._session_start

    @property
    def pending_custom(self) -> dict[str, Any]:
        return copy.deepcopy(self._custom.pending)

    # --- sessions ---

    def begin_session(
        self,
        metrics: Optional[dict[str, Any]] = None,
        seconds: Any = 0,
        timestamp: Optional[Any] = None,
    ) -> "BulkUser":
        """Report a whole session: begin marker plus one heartbeat per started minute.

        metrics: device/platform descriptor (_os, _os_version, _device, ...), sent as is.
        seconds: how long the session lasted.
        timestamp: when the session started. Non-numeric values are left out.
        """
        if not self._check_usable("begin_session"):
            return self

        query: dict[str, Any] = {"begin_session": 1}
        if metrics is not None:
            query["metrics"] = metrics
        query = self._prepare(query)
        if self._country_code:
            query["country_code"] = self._country_code
        if self._city:
            query["city"] = self._city
        start = coerce_timestamp(timestamp)
        if start:
            query["timestamp"] = start

        bulk = [query]
        bulk.extend(self._prepare(beat) for beat in split_session(seconds, start))
        if start:
            self._session_start = start
        self._server.add_bulk_request(bulk)  # type: ignore[union-attr]
        return self

    # --- events and reports ---

    def add_event(self, event: Union[Event, Mapping[str, Any]]) -> "BulkUser":
        """Report a custom event (key, count, sum, dur, timestamp, segmentation)."""
        if not self._check_usable("add_event"):
            return self
        self._server.add_event(self._device_id, event)  # type: ignore[union-attr]
        return self

    def user_details(self, user: Union[UserDetails, Mapping[str, Any]]) -> "BulkUser":
        """Report user data. Fields outside the user details set are dropped."""
        if not self._check_usable("user_details"):
            return self
        if isinstance(user, UserDetails):
            details = user.to_fragment()
        else:
            details = pick(user, USER_DETAIL_FIELDS)
        self._submit({"user_details": details})
        return self

    def report_conversion(
        self,
        campaign_id: Optional[str] = None,
        campaign_user_id: Optional[str] = None,
        timestamp: Optional[Any] = None,
    ) -> "BulkUser":
        """Report a campaign conversion. Defaults to the session start time."""
        if not self._check_usable("report_conversion"):
            return self
        query = self._prepare()
        if campaign_id:
            query["campaign_id"] = campaign_id
        if campaign_user_id:
            query["campaign_user"] = campaign_user_id
        if timestamp or self._session_start:
            query["timestamp"] = timestamp or self._session_start
        self._server.add_request(query)  # type: ignore[union-attr]
        return self

    def report_view(
        self,
        view_name: Any,
        platform: Any = None,
        timestamp: Optional[Any] = None,
        duration: Any = None,
        landing: bool = False,
        exit: bool = False,
        bounce: bool = False,
    ) -> "BulkUser":
        if not self._check_usable("report_view"):
            return self
        event = view_event(view_name, platform, duration, landing=landing, exit=exit, bounce=bounce)
        self._submit({"events": [event.to_fragment()]}, timestamp)
        return self

    def report_rating(
        self,
        rating: Any,
        platform: Any = None,
        app_version: Any = None,
        timestamp: Optional[Any] = None,
    ) -> "BulkUser":
        if not self._check_usable("report_rating"):
            return self
        event = rating_event(rating, platform, app_version)
        self._submit({"events": [event.to_fragment()]}, timestamp)
        return self

    def report_crash(self, crash: dict[str, Any], timestamp: Optional[Any] = None) -> "BulkUser":
        """Report a crash. The descriptor (_os, _app_version, _error, ...) is sent unchanged."""
        if not self._check_usable("report_crash"):
            return self
        self._submit({"crash": crash}, timestamp)
        return self

    # --- custom properties ---

    def custom_set(self, key: str, value: Any) -> "BulkUser":
        return self._change_custom("custom_set", self._custom.set, key, value)

    def custom_set_once(self, key: str, value: Any = None) -> "BulkUser":
        return self._change_custom("custom_set_once", self._custom.set_once, key, value)

    def custom_increment(self, key: str) -> "BulkUser":
        return self._change_custom("custom_increment", self._custom.increment, key, 1)

    def custom_increment_by(self, key: str, value: Any) -> "BulkUser":
        return self._change_custom("custom_increment_by", self._custom.increment, key, value)

    def custom_multiply(self, key: str, value: Any) -> "BulkUser":
        return self._change_custom("custom_multiply", self._custom.multiply, key, value)

    def custom_max(self, key: str, value: Any) -> "BulkUser":
        return self._change_custom("custom_max", self._custom.max, key, value)

    def custom_min(self, key: str, value: Any) -> "BulkUser":
        return self._change_custom("custom_min", self._custom.min, key, value)

    def custom_push(self, key: str, value: Any) -> "BulkUser":
        return self._change_custom("custom_push", self._custom.push, key, value)

    def custom_push_unique(self, key: str, value: Any) -> "BulkUser":
        return self._change_custom("custom_push_unique", self._custom.push_unique, key, value)

    def custom_pull(self, key: str, value: Any) -> "BulkUser":
        return self._change_custom("custom_pull", self._custom.pull, key, value)

    def custom_save(self) -> "BulkUser":
        """Send all pending custom property changes, even when there are none."""
        if not self._check_usable("custom_save"):
            return self
        self._submit({"user_details": {"custom": self._custom.flush()}})
        return self

    # --- helpers ---

    def _change_custom(self, action: str, change: Any, key: str, value: Any) -> "BulkUser":
        if self._check_usable(action):
            change(key, value)
        return self

    def _prepare(self, query: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        return prepare_query(self._device_id, query, self._ip_address)  # type: ignore[arg-type]

    def _submit(self, query: dict[str, Any], timestamp: Optional[Any] = None) -> None:
        prepared = self._prepare(query)
        if timestamp:
            prepared["timestamp"] = timestamp
        self._server.add_request(prepared)  # type: ignore[union-attr]

    def _check_usable(self, action: str) -> bool:
        if not self._usable:
            logger.warning("%s ignored: user is missing device_id or server", action)
        return self._usable

    def __repr__(self) -> str:
        return f"BulkUser(device_id={self._device_id!r}, usable={self._usable})"
