"""Converts FormatProfile values to and from the persisted JSON shape."""

from typing import Any

from linelist.grammar.compiler import CANONICAL_PATTERNS
from linelist.grammar.models import ComponentSpec, FormatProfile
from linelist.profiles.exceptions import ProfileDecodeError


def profile_to_dict(profile: FormatProfile) -> dict[str, Any]:
    """Serialize every component (enabled or not) for persistence."""
    return {
        "components": [
            {
                "id": c.id,
                "name": c.name,
                "enabled": c.enabled,
                "order": c.order,
                "pattern": c.pattern,
                "example": c.example,
            }
            for c in profile.components
        ],
        "separator": profile.separator,
        "allowVariableSeparators": profile.allow_variable_separators,
    }


def profile_from_dict(data: Any) -> FormatProfile:
    """Build a FormatProfile from its persisted JSON shape.

    Raises:
        ProfileDecodeError: on any shape violation.
    """
    if not isinstance(data, dict):
        raise ProfileDecodeError("Profile must be an object")
    raw_components = data.get("components")
    if not isinstance(raw_components, list):
        raise ProfileDecodeError("'components' must be a list")
    components = [_build_component(item, i) for i, item in enumerate(raw_components)]

    separator = data.get("separator", "-")
    if not isinstance(separator, str):
        raise ProfileDecodeError("'separator' must be a string")
    allow_variable = data.get("allowVariableSeparators", True)
    if not isinstance(allow_variable, bool):
        raise ProfileDecodeError("'allowVariableSeparators' must be a boolean")

    return FormatProfile(
        components=tuple(components),
        separator=separator,
        allow_variable_separators=allow_variable,
    )


def submission_config(profile: FormatProfile) -> dict[str, Any]:
    """Grammar configuration sent to the extraction backend.

    Only enabled components are sent, ranked, with canonical patterns applied.
    """
    return {
        "components": [
            {
                "id": c.id,
                "name": c.name,
                "order": c.order,
                "pattern": CANONICAL_PATTERNS.get(c.id, c.pattern),
            }
            for c in profile.enabled_components
        ],
        "separator": profile.separator,
        "allowVariableSeparators": profile.allow_variable_separators,
    }


def _build_component(raw: Any, index: int) -> ComponentSpec:
    if not isinstance(raw, dict):
        raise ProfileDecodeError(f"Component at index {index} must be an object")
    component_id = raw.get("id")
    if not component_id or not isinstance(component_id, str):
        raise ProfileDecodeError(f"Component at index {index}: 'id' must be a non-empty string")
    order = raw.get("order", index + 1)
    if isinstance(order, bool) or not isinstance(order, int) or order < 1:
        raise ProfileDecodeError(
            f"Component '{component_id}': 'order' must be an integer >= 1"
        )
    pattern = raw.get("pattern", "")
    if not isinstance(pattern, str):
        raise ProfileDecodeError(f"Component '{component_id}': 'pattern' must be a string")
    return ComponentSpec(
        id=component_id,
        name=str(raw.get("name") or ""),
        enabled=bool(raw.get("enabled", False)),
        order=order,
        pattern=pattern,
        example=str(raw.get("example") or ""),
    )
