from datetime import datetime, timezone
from typing import Optional, Tuple
from flask import request
from dateutil.parser import parse
from sitecms.domain.exceptions import Conflict, ValidationError


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def read_preconditions() -> Tuple[Optional[int], Optional[datetime]]:
    """
    Read optimistic-lock preconditions from the request headers.

    - If-Match: the unit `version` the client last saw
    - If-Unmodified-Since: the unit `updated_at` the client last saw
    """
    expected_version = None
    unmodified_since = None

    if_match = request.headers.get("If-Match")
    if if_match:
        try:
            expected_version = int(if_match.strip().strip('"'))
        except ValueError:
            raise ValidationError({"If-Match": "Must be an integer version"})

    client_ts = request.headers.get("If-Unmodified-Since")
    if client_ts:
        try:
            unmodified_since = normalize_ts(parse(client_ts))
        except (ValueError, OverflowError):
            raise ValidationError({"If-Unmodified-Since": "Invalid timestamp"})

    return expected_version, unmodified_since


def enforce_optimistic_lock(
    entity,
    *,
    expected_version: Optional[int] = None,
    unmodified_since: Optional[datetime] = None,
) -> None:
    """
    Compare the caller's view of the entity with its committed state.
    Raises Conflict if the entity has been modified since.
    """
    if expected_version is not None and entity.version != expected_version:
        raise Conflict(
            f"Version mismatch: expected {expected_version}, found {entity.version}"
        )

    if unmodified_since is not None and entity.updated_at is not None:
        if normalize_ts(entity.updated_at).replace(microsecond=0) > unmodified_since:
            raise Conflict("Conflict detected. Resource has been modified.")
