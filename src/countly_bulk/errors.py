"""
countly-bulk error types.

The encoder itself never raises; these cover the tooling layer
(script loading and replay).
"""

from typing import Any, Optional


class CountlyBulkError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ScriptError(CountlyBulkError):
    def __init__(self, message: str, code: str = "script_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)
