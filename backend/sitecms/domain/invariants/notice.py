from typing import Any, Dict

from sitecms.domain.exceptions import ValidationError
from ._fields import require_text, optional_text


def assert_notice_payload(payload: Any) -> None:
    if not isinstance(payload, dict):
        raise ValidationError({"payload": "Must be an object"})

    errors: Dict[str, str] = {}
    require_text(payload, "title", errors)
    require_text(payload, "description", errors)
    optional_text(payload, "fileUrl", errors)

    if errors:
        raise ValidationError(errors)


def assert_notice_attributes(attributes: Dict[str, Any]) -> None:
    if "pinned" in attributes and not isinstance(attributes["pinned"], bool):
        raise ValidationError({"pinned": "Must be a boolean"})
