import re
from typing import Any, Dict

from sitecms.domain.exceptions import ValidationError
from ._fields import require_text, optional_text

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

LEAD_SOURCES = ("website", "phone", "referral", "event", "social", "other")
LEAD_STATUSES = ("new", "contacted", "qualified", "enrolled", "lost")


def assert_lead(data: Dict[str, Any]) -> None:
    errors: Dict[str, str] = {}

    require_text(data, "first_name", errors)
    require_text(data, "last_name", errors)
    require_text(data, "email", errors)
    if "email" not in errors and not EMAIL_RE.match(data["email"].strip()):
        errors["email"] = "Invalid email address"

    for key in ("phone", "grade_interest", "message"):
        optional_text(data, key, errors)

    if data.get("source") is not None and data["source"] not in LEAD_SOURCES:
        errors["source"] = f"Must be one of: {', '.join(LEAD_SOURCES)}"

    if errors:
        raise ValidationError(errors)


def assert_lead_status(status: Any) -> None:
    if status not in LEAD_STATUSES:
        raise ValidationError(
            {"status": f"Must be one of: {', '.join(LEAD_STATUSES)}"}
        )
