"""
Query preparation — stamps fragments with the owning user's identity.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional


def prepare_query(
    device_id: str,
    query: Optional[Mapping[str, Any]] = None,
    ip_address: Optional[str] = None,
) -> dict[str, Any]:
    """Return a copy of `query` carrying device_id and, if configured, ip_address.

    Values already present in `query` win over the defaults.
    """
    prepared = dict(query or {})
    if not prepared.get("device_id"):
        prepared["device_id"] = device_id
    if ip_address and not prepared.get("ip_address"):
        prepared["ip_address"] = ip_address
    return prepared


def pick(source: Mapping[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    """Retrieve only the listed keys that `source` actually has."""
    return {field: source[field] for field in fields if field in source}
