"""
Conflict payload normalization

Backends report unavailable lines in three shapes:

    {"unavailable":      [{"resourceId", "variationLabel", "requested", "available"}]}
    {"unavailableItems": [{"itemName", "variation", "requested", "available"}]}
    {"conflictingItems": [{"name", "variation"}]}

All of them become a list of UnavailableLine.
"""

from typing import Any, Dict, List, Optional

from .models import UnavailableLine

CONFLICT_KEYS = ("unavailable", "unavailableItems", "conflictingItems")


class MalformedConflictPayload(ValueError):
    """The payload does not carry a recognizable unavailable list"""
    pass


def _first(entry: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if entry.get(key) is not None:
            return entry[key]
    return None


def _as_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _variation_label(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, dict):
        color = value.get("color")
        if isinstance(color, dict):
            color = color.get("name")
        parts = [str(p) for p in (color, value.get("size")) if p]
        if parts:
            return ", ".join(parts)
        return str(value.get("motif") or "")
    return str(value)


def normalize_line(entry: Dict[str, Any]) -> UnavailableLine:
    if not isinstance(entry, dict):
        raise MalformedConflictPayload(f"Unavailable entry must be an object, got {type(entry).__name__}")
    resource_id = _first(entry, "resourceId", "resource_id", "itemId", "item_id")
    return UnavailableLine(
        resource_id=str(resource_id) if resource_id is not None else None,
        name=_first(entry, "name", "itemName", "item_name"),
        variation_label=_variation_label(
            _first(entry, "variationLabel", "variation_label", "variation")
        ),
        requested_qty=_as_int(_first(entry, "requested", "requestedQty", "requested_qty")),
        available_qty=_as_int(_first(entry, "available", "availableQty", "available_qty")),
    )


def has_conflict_list(payload: Any) -> bool:
    return isinstance(payload, dict) and any(key in payload for key in CONFLICT_KEYS)


def normalize_unavailable(payload: Any) -> List[UnavailableLine]:
    """
    Extract unavailable lines from any supported payload shape

    Raises:
        MalformedConflictPayload: payload is not an object, has none of the
            known keys, or the list under the key is not a list of objects
    """
    if not isinstance(payload, dict):
        raise MalformedConflictPayload(f"Expected a JSON object, got {type(payload).__name__}")

    for key in CONFLICT_KEYS:
        if key in payload:
            entries = payload[key]
            if entries is None:
                return []
            if not isinstance(entries, list):
                raise MalformedConflictPayload(f"'{key}' must be a list")
            return [normalize_line(entry) for entry in entries]

    raise MalformedConflictPayload(
        f"Payload has none of the expected keys: {', '.join(CONFLICT_KEYS)}"
    )
