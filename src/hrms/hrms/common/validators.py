from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    text = optional_text(value)
    if text is None:
        raise ValidationError(f"{field_name} is required")
    return text


def require_json_object(payload: Any) -> dict:
    """Request bodies are JSON objects; a missing body counts as empty."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def optional_text(value: Any) -> Optional[str]:
    """Normalize optional text input: None, "" and whitespace all become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_float(value: Any, field_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def parse_coordinates(latitude: Any, longitude: Any) -> Optional[tuple[float, float]]:
    """Validate an optional latitude/longitude pair from request input.

    Returns None when neither value is given.
    """
    if latitude in (None, "") and longitude in (None, ""):
        return None
    if latitude in (None, "") or longitude in (None, ""):
        raise ValidationError("Latitude and longitude must be provided together")

    lat = _as_float(latitude, "Latitude")
    lng = _as_float(longitude, "Longitude")
    if not -90.0 <= lat <= 90.0:
        raise ValidationError("Latitude must be between -90 and 90")
    if not -180.0 <= lng <= 180.0:
        raise ValidationError("Longitude must be between -180 and 180")
    return lat, lng
