from typing import Any, Dict, Mapping


def require_text(payload: Mapping[str, Any], key: str, errors: Dict[str, str]) -> None:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        errors[key] = "Required non-empty string"


def optional_text(payload: Mapping[str, Any], key: str, errors: Dict[str, str]) -> None:
    value = payload.get(key)
    if value is not None and not isinstance(value, str):
        errors[key] = "Must be a string"


def require_items(
    payload: Mapping[str, Any],
    key: str,
    item_keys: tuple,
    errors: Dict[str, str],
) -> None:
    items = payload.get(key)
    if not isinstance(items, list):
        errors[key] = "Required list"
        return

    for index, item in enumerate(items):
        if not isinstance(item, dict):
            errors[f"{key}[{index}]"] = "Must be an object"
            continue
        for item_key in item_keys:
            if not isinstance(item.get(item_key), str):
                errors[f"{key}[{index}].{item_key}"] = "Required string"
