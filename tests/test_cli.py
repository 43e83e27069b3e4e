"""CLI commands."""

import json

from click.testing import CliRunner

from countly_bulk.cli.main import main
from countly_bulk.cli.replay import request_kind


def write_script(tmp_path, data) -> str:
    path = tmp_path / "script.json"
    path.write_text(json.dumps(data))
    return str(path)


def test_replay_json_output(tmp_path):
    script = write_script(tmp_path, {
        "users": [{"device_id": "d1", "actions": [
            {"action": "report_rating", "args": {"rating": 5, "platform": "iOS", "app_version": "1.0"}},
        ]}],
    })
    result = CliRunner().invoke(main, ["replay", script, "--json"])
    assert result.exit_code == 0, result.output
    requests = json.loads(result.output)
    assert requests[0]["events"][0]["key"] == "[CLY]_star_rating"


def test_replay_table_output(tmp_path):
    script = write_script(tmp_path, {
        "users": [{"device_id": "d1", "actions": [{"action": "begin_session", "args": {"seconds": 61}}]}],
    })
    result = CliRunner().invoke(main, ["replay", script])
    assert result.exit_code == 0, result.output
    assert "Requests (3 total)" in result.output
    assert "heartbeat" in result.output


def test_replay_invalid_script_exits_1(tmp_path):
    script = write_script(tmp_path, {"users": [{"device_id": "d1", "actions": [{"action": "bogus"}]}]})
    result = CliRunner().invoke(main, ["replay", script])
    assert result.exit_code == 1


def test_heartbeats_json():
    result = CliRunner().invoke(main, ["heartbeats", "150", "--timestamp", "1000", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [
        {"session_duration": 60, "timestamp": 1060},
        {"session_duration": 60, "timestamp": 1120},
        {"session_duration": 30, "timestamp": 1180},
    ]


def test_heartbeats_table():
    result = CliRunner().invoke(main, ["heartbeats", "90"])
    assert result.exit_code == 0, result.output
    assert "Heartbeats for 90s" in result.output


def test_request_kind():
    assert request_kind({"device_id": "d", "begin_session": 1}) == "begin_session"
    assert request_kind({"device_id": "d", "session_duration": 60}) == "heartbeat"
    assert request_kind({"device_id": "d", "campaign_id": "c"}) == "conversion"
    assert request_kind({"device_id": "d"}) == "other"
