# sitecms/domain/exceptions.py
from typing import Any, Dict, Optional


class ContentError(Exception):
    """Base class for every error the content engine surfaces to callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": type(self).__name__, "message": self.message}


class NotFound(ContentError):
    def __init__(self, entity_type: str, entity_id: Optional[str]):
        super().__init__(f"{entity_type} not found: {entity_id}")
        self.entity_type = entity_type
        self.entity_id = entity_id


class IllegalTransition(ContentError):
    """
    Raised when an action is not allowed from the unit's current state.

    Carries the current (environment, status) so the caller can
    resynchronize its view without another read.
    """

    def __init__(self, *, unit_id: str, action: str, environment: str, status: str):
        super().__init__(
            f"Cannot {action} unit {unit_id} in state ({environment}, {status})"
        )
        self.unit_id = unit_id
        self.action = action
        self.environment = environment
        self.status = status

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["action"] = self.action
        data["current"] = {"environment": self.environment, "status": self.status}
        return data


class Conflict(ContentError):
    """Lost a compare-and-set race; re-read and retry."""


class DuplicateSlug(ContentError):
    def __init__(self, slug: str):
        super().__init__(f"Tenant slug already in use: {slug}")
        self.slug = slug


class ValidationError(ContentError):
    def __init__(self, fields: Dict[str, str], message: str = "Validation failed"):
        super().__init__(message)
        self.fields = fields

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["fields"] = self.fields
        return data
