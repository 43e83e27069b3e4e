"""
Custom user property accumulator.

Changes to a user's custom properties are collected locally and sent as one
user_details.custom patch on flush.
"""

from typing import Any

LIST_OPERATORS = frozenset({"$push", "$pull", "$addToSet"})


class CustomProperties:
    """Pending custom property changes for one user, merged per key.

    A key holds either a plain value (from `set`) or a modifier document such
    as ``{"$inc": 2}`` or ``{"$push": ["a", "b"]}``. Switching a key from one
    shape to the other replaces its previous entry entirely. Scalar operators
    keep only the last value given; list operators append in call order.
    """

    def __init__(self) -> None:
        self._document: dict[str, Any] = {}
        self._modifier_keys: set[str] = set()

    @property
    def pending(self) -> dict[str, Any]:
        return self._document

    def __len__(self) -> int:
        return len(self._document)

    def set(self, key: str, value: Any) -> None:
        self._document[key] = value
        self._modifier_keys.discard(key)

    def set_once(self, key: str, value: Any = None) -> None:
        # Only the presence flag is recorded; `value` is not sent.
        self._modify(key, "$setOnce", 1)

    def increment(self, key: str, value: Any = 1) -> None:
        self._modify(key, "$inc", value)

    def multiply(self, key: str, value: Any) -> None:
        self._modify(key, "$mul", value)

    def max(self, key: str, value: Any) -> None:
        self._modify(key, "$max", value)

    def min(self, key: str, value: Any) -> None:
        self._modify(key, "$min", value)

    def push(self, key: str, value: Any) -> None:
        self._modify(key, "$push", value)

    def push_unique(self, key: str, value: Any) -> None:
        self._modify(key, "$addToSet", value)

    def pull(self, key: str, value: Any) -> None:
        self._modify(key, "$pull", value)

    def flush(self) -> dict[str, Any]:
        """Return the accumulated document and start a new, empty one."""
        document = self._document
        self._document = {}
        self._modifier_keys = set()
        return document

    def _modify(self, key: str, operator: str, value: Any) -> None:
        if key not in self._modifier_keys:
            self._document[key] = {}
            self._modifier_keys.add(key)
        entry = self._document[key]
        if operator in LIST_OPERATORS:
            entry.setdefault(operator, []).append(value)
        else:
            entry[operator] = value
