"""
Action scripts — JSON documents describing users and the actions to replay.

    {
      "users": [
        {
          "device_id": "d1",
          "ip_address": "10.0.0.1",
          "actions": [
            {"action": "begin_session", "args": {"seconds": 150, "timestamp": 1000}},
            {"action": "custom_increment", "args": {"key": "logins"}},
            {"action": "custom_save"}
          ]
        }
      ]
    }
"""

import inspect
import json
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ValidationError, field_validator

from countly_bulk.errors import ScriptError
from countly_bulk.models.user import UserConfig
from countly_bulk.transport import MemoryQueue
from countly_bulk.user import BulkUser

ACTIONS = frozenset({
    "begin_session",
    "add_event",
    "user_details",
    "report_conversion",
    "report_view",
    "report_rating",
    "report_crash",
    "custom_set",
    "custom_set_once",
    "custom_increment",
    "custom_increment_by",
    "custom_multiply",
    "custom_max",
    "custom_min",
    "custom_push",
    "custom_push_unique",
    "custom_pull",
    "custom_save",
})


class ScriptAction(BaseModel):
    action: str
    args: dict[str, Any] = {}

    @field_validator("action")
    @classmethod
    def _known_action(cls, value: str) -> str:
        if value not in ACTIONS:
            raise ValueError(f"unknown action {value!r}")
        return value


class ScriptUser(UserConfig):
    actions: list[ScriptAction] = []


class Script(BaseModel):
    users: list[ScriptUser]


def parse_script(data: Any) -> Script:
    try:
        return Script.model_validate(data)
    except ValidationError as e:
        raise ScriptError(f"Invalid action script: {e.error_count()} error(s)", details={"errors": e.errors()})


def load_script(path: Union[str, Path]) -> Script:
    try:
        data = json.loads(Path(path).read_text())
    except FileNotFoundError:
        raise ScriptError(f"Script not found: {path}", code="script_not_found")
    except json.JSONDecodeError as e:
        raise ScriptError(f"Script is not valid JSON: {e}")
    return parse_script(data)


def replay(script: Script, queue: Optional[MemoryQueue] = None) -> MemoryQueue:
    """Run every user's actions in order, then pack buffered events into requests."""
    queue = queue if queue is not None else MemoryQueue()
    for entry in script.users:
        user = BulkUser.from_config(queue, entry)
        for step in entry.actions:
            method = getattr(user, step.action)
            try:
                inspect.signature(method).bind(**step.args)
            except TypeError as e:
                raise ScriptError(
                    f"Bad arguments for {step.action} ({entry.device_id}): {e}",
                    details={"device_id": entry.device_id, "action": step.action},
                )
            method(**step.args)
    queue.flush_events()
    return queue
