"""
Event models — custom events and the built-in view / star rating events.
"""

import math
from typing import Any, Optional, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

VIEW_EVENT_KEY = "[CLY]_view"
RATING_EVENT_KEY = "[CLY]_star_rating"

Number = Union[int, float]
_NUMBER: TypeAdapter[Number] = TypeAdapter(Number)


class Event(BaseModel):
    key: str
    count: int = 1
    sum: Optional[Number] = None
    dur: Optional[Number] = None
    timestamp: Optional[Number] = None
    segmentation: Optional[dict[str, Any]] = None

    def to_fragment(self) -> dict[str, Any]:
        """Serialize without the optional fields that were never given."""
        return self.model_dump(exclude_none=True)


def coerce_number(value: Any) -> Optional[Number]:
    """Numeric value or numeric string as a number; anything else is None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = _NUMBER.validate_python(value)
    except ValidationError:
        return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return number


def view_event(
    view_name: Any,
    platform: Any,
    duration: Any = None,
    landing: bool = False,
    exit: bool = False,
    bounce: bool = False,
) -> Event:
    """[CLY]_view event. start/exit/bounce flags are only present when set."""
    segmentation: dict[str, Any] = {"name": view_name, "visit": 1, "segment": platform}
    if landing:
        segmentation["start"] = 1
    if exit:
        segmentation["exit"] = 1
    if bounce:
        segmentation["bounce"] = 1
    return Event(key=VIEW_EVENT_KEY, dur=coerce_number(duration), segmentation=segmentation)


def rating_event(rating: Any, platform: Any, app_version: Any) -> Event:
    return Event(
        key=RATING_EVENT_KEY,
        segmentation={"rating": rating, "app_version": app_version, "platform": platform},
    )
