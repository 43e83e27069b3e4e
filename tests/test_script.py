"""Action script loading and replay."""

import json

import pytest

from countly_bulk import ScriptError
from countly_bulk.script import load_script, parse_script, replay

SCRIPT = {
    "users": [
        {
            "device_id": "d1",
            "ip_address": "10.0.0.1",
            "actions": [
                {"action": "begin_session", "args": {"metrics": {"_os": "Android"}, "seconds": 70, "timestamp": 1000}},
                {"action": "add_event", "args": {"event": {"key": "purchase", "sum": 3}}},
                {"action": "custom_increment", "args": {"key": "logins"}},
                {"action": "custom_save"},
            ],
        },
        {"device_id": "d2", "actions": [{"action": "report_conversion", "args": {"campaign_id": "c1"}}]},
    ]
}


def test_replay_produces_requests():
    queue = replay(parse_script(SCRIPT))
    requests = queue.requests
    assert [r["device_id"] for r in requests] == ["d1", "d1", "d1", "d1", "d2", "d1"]
    assert requests[0]["begin_session"] == 1
    assert [r.get("session_duration") for r in requests[1:3]] == [60, 10]
    assert requests[3]["user_details"] == {"custom": {"logins": {"$inc": 1}}}
    assert requests[4] == {"device_id": "d2", "campaign_id": "c1"}
    assert requests[5] == {"device_id": "d1", "events": [{"key": "purchase", "sum": 3}]}


def test_unknown_action_rejected():
    with pytest.raises(ScriptError) as exc:
        parse_script({"users": [{"device_id": "d1", "actions": [{"action": "delete_user"}]}]})
    assert exc.value.code == "script_error"
    assert exc.value.details["errors"]


def test_missing_device_id_rejected():
    with pytest.raises(ScriptError):
        parse_script({"users": [{"actions": []}]})


def test_bad_arguments_rejected():
    script = parse_script({"users": [{"device_id": "d1", "actions": [{"action": "custom_set", "args": {"nope": 1}}]}]})
    with pytest.raises(ScriptError) as exc:
        replay(script)
    assert exc.value.details == {"device_id": "d1", "action": "custom_set"}


def test_load_script_from_file(tmp_path):
    path = tmp_path / "script.json"
    path.write_text(json.dumps(SCRIPT))
    assert len(load_script(path).users) == 2


def test_load_script_missing_file(tmp_path):
    with pytest.raises(ScriptError) as exc:
        load_script(tmp_path / "missing.json")
    assert exc.value.code == "script_not_found"


def test_load_script_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(ScriptError):
        load_script(path)


def test_errors_inside_actions_are_not_reported_as_bad_arguments():
    script = parse_script({"users": [{"device_id": "d1", "actions": [{"action": "user_details", "args": {"user": 5}}]}]})
    with pytest.raises(TypeError):
        replay(script)


def test_string_timestamp_from_script_is_coerced():
    script = parse_script({"users": [{"device_id": "d1", "actions": [
        {"action": "begin_session", "args": {"seconds": 30, "timestamp": "1000"}},
    ]}]})
    requests = replay(script).requests
    assert [r.get("timestamp") for r in requests] == [1000, 1060]
