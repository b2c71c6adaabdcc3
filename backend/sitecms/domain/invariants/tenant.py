import re
from typing import Any, Dict

from sitecms.domain.exceptions import ValidationError

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def assert_tenant_slug(slug: Any) -> None:
    if not isinstance(slug, str) or not 2 <= len(slug) <= 63 or not SLUG_RE.match(slug):
        raise ValidationError(
            {"slug": "Lowercase letters, digits and single hyphens (2-63 chars)"}
        )


def assert_tenant_attributes(data: Dict[str, Any]) -> None:
    errors: Dict[str, str] = {}

    if "name" in data and (not isinstance(data["name"], str) or not data["name"].strip()):
        errors["name"] = "Required non-empty string"

    for key in ("primary_color", "secondary_color"):
        if key in data and not (isinstance(data[key], str) and COLOR_RE.match(data[key])):
            errors[key] = "Must be a hex color like #1e40af"

    if "logo" in data and data["logo"] is not None and not isinstance(data["logo"], str):
        errors["logo"] = "Must be a string"

    if "is_active" in data and not isinstance(data["is_active"], bool):
        errors["is_active"] = "Must be a boolean"

    if errors:
        raise ValidationError(errors)
