"""Basic unit tests for the countly-bulk package."""

from countly_bulk import (
    BulkUser,
    CountlyBulkError,
    MemoryQueue,
    ScriptError,
    __version__,
)


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert BulkUser is not None
    assert MemoryQueue is not None


def test_error_hierarchy():
    assert issubclass(ScriptError, CountlyBulkError)


def test_error_attributes():
    err = CountlyBulkError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    err_with_details = ScriptError("bad script", details={"line": 3})
    assert err_with_details.code == "script_error"
    assert err_with_details.details == {"line": 3}
