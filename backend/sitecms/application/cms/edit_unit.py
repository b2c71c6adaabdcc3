# sitecms/application/cms/edit_unit.py
from datetime import datetime
from typing import Any, Dict, Optional
from flask import current_app
from sitecms.models.content_unit import ContentUnit, Section
from sitecms.domain.exceptions import ValidationError
from sitecms.domain.invariants.content import assert_lifecycle_state
from sitecms.domain.invariants.notice import assert_notice_payload, assert_notice_attributes
from sitecms.domain.invariants.section import assert_section_payload
from sitecms.domain.lifecycle.content import (
    DRAFT,
    PENDING_APPROVAL,
    assert_editable,
)
from sitecms.utils.audit import log_action
from sitecms.utils.optimistic_lock import enforce_optimistic_lock
from sitecms.utils.transaction import transactional
from .create_unit import SECTION_ATTRIBUTES, NOTICE_ATTRIBUTES, apply_section_attributes
from .locking import require_unit


ALLOWED_EDIT_FIELDS = {
    "section": {"payload"} | SECTION_ATTRIBUTES,
    "notice": {"payload"} | NOTICE_ATTRIBUTES,
}


def edit_unit(
    *,
    unit_id: str,
    data: Dict[str, Any],
    tenant_id: Optional[str] = None,
    actor_id: Optional[str] = None,
    expected_version: Optional[int] = None,
    unmodified_since: Optional[datetime] = None,
) -> ContentUnit:
    """
    Edit a sandbox unit.

    Design rules:
    - `payload` is a shallow patch merged into the current payload
    - Only whitelisted fields for the unit type are accepted
    - Live units are never edited in place (see revise_unit)
    - Editing a unit under review sends it back to draft, so an approver
      never approves content other than what was submitted
    """
    with transactional():
        unit = require_unit(unit_id=unit_id, tenant_id=tenant_id)
        enforce_optimistic_lock(
            unit,
            expected_version=expected_version,
            unmodified_since=unmodified_since,
        )
        assert_editable(unit_id=unit.id, state=unit.state)

        allowed = ALLOWED_EDIT_FIELDS[unit.unit_type]
        fields = [field for field in data if field in allowed]
        if not fields:
            raise ValidationError({"fields": "No valid fields provided for update"})

        payload = dict(unit.payload or {})
        patch = data.get("payload")
        if patch is not None:
            if not isinstance(patch, dict):
                raise ValidationError({"payload": "Must be an object"})
            payload.update(patch)

        attributes = {field: data[field] for field in fields if field != "payload"}

        if isinstance(unit, Section):
            apply_section_attributes(unit, attributes)
            assert_section_payload(unit.section_type, payload)
        else:
            assert_notice_attributes(attributes)
            assert_notice_payload(payload)
            if "pinned" in attributes:
                unit.pinned = attributes["pinned"]

        # Reassign so the JSON column is flagged dirty
        unit.payload = payload
        unit.updated_by = actor_id

        reset = unit.status == PENDING_APPROVAL
        if reset:
            unit.status = DRAFT

        assert_lifecycle_state(unit)

        log_action(
            tenant_id=unit.tenant_id,
            actor_id=actor_id,
            action=f"{unit.unit_type}.edit",
            entity_type=unit.unit_type,
            entity_id=unit.id,
            payload={"fields": sorted(fields), "returned_to_draft": reset},
        )

    if reset:
        current_app.logger.info("Edited %s %s under review; returned to draft", unit.unit_type, unit.id)
    return unit
