from typing import Any, Dict

from sitecms.domain.exceptions import ValidationError
from ._fields import require_text, require_items

SECTION_TYPES = (
    "hero",
    "features",
    "about",
    "gallery",
    "contact",
    "testimonials",
    "cta",
    "stats",
)
DEFAULT_SECTION_TYPE = "hero"

PAGE_SLUG_MAX = 100


def _hero(props, errors):
    require_text(props, "title", errors)


def _features(props, errors):
    require_text(props, "heading", errors)
    require_items(props, "features", ("icon", "title", "description"), errors)


def _about(props, errors):
    require_text(props, "heading", errors)
    require_text(props, "content", errors)


def _stats(props, errors):
    require_text(props, "heading", errors)
    require_items(props, "stats", ("value", "label"), errors)


def _cta(props, errors):
    for key in ("heading", "description", "buttonText", "buttonLink"):
        require_text(props, key, errors)


PROPS_RULES = {
    "hero": _hero,
    "features": _features,
    "about": _about,
    "stats": _stats,
    "cta": _cta,
}


def assert_section_payload(section_type: str, payload: Any) -> None:
    """
    Validates section props for the given section type.

    Types without an entry in PROPS_RULES accept any object.
    Extra keys are always allowed; renderers ignore what they do not know.
    """
    if section_type not in SECTION_TYPES:
        raise ValidationError(
            {"section_type": f"Must be one of: {', '.join(SECTION_TYPES)}"}
        )

    if not isinstance(payload, dict):
        raise ValidationError({"payload": "Must be an object"})

    errors: Dict[str, str] = {}
    rule = PROPS_RULES.get(section_type)
    if rule:
        rule(payload, errors)

    if errors:
        raise ValidationError(errors)


def assert_section_attributes(attributes: Dict[str, Any]) -> None:
    errors: Dict[str, str] = {}

    if "position" in attributes:
        position = attributes["position"]
        if isinstance(position, bool) or not isinstance(position, int) or position < 1:
            errors["position"] = "Must be a positive integer"

    if "enabled" in attributes and not isinstance(attributes["enabled"], bool):
        errors["enabled"] = "Must be a boolean"

    if "page_slug" in attributes:
        page_slug = attributes["page_slug"]
        if not isinstance(page_slug, str) or not page_slug or len(page_slug) > PAGE_SLUG_MAX:
            errors["page_slug"] = "Must be a non-empty string"

    if errors:
        raise ValidationError(errors)
