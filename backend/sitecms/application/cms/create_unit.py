# sitecms/application/cms/create_unit.py
import copy
from typing import Any, Dict, Optional
from flask import current_app
from sqlalchemy import func
from sitecms.extensions import db
from sitecms.models.content_unit import UNIT_MODELS, Section, Notice, ContentUnit
from sitecms.models.tenant import Tenant
from sitecms.domain.exceptions import NotFound, ValidationError
from sitecms.domain.invariants.content import assert_lifecycle_state
from sitecms.domain.invariants.section import (
    DEFAULT_SECTION_TYPE,
    assert_section_payload,
    assert_section_attributes,
)
from sitecms.domain.invariants.notice import assert_notice_payload, assert_notice_attributes
from sitecms.domain.lifecycle.content import INITIAL_STATE
from sitecms.utils.audit import log_action
from sitecms.utils.transaction import transactional


SECTION_ATTRIBUTES = {"section_type", "page_slug", "position", "enabled"}
NOTICE_ATTRIBUTES = {"pinned"}


def next_position(*, tenant_id: str, page_slug: str) -> int:
    last = (
        db.session.query(func.max(Section.position))
        .filter(Section.tenant_id == tenant_id, Section.page_slug == page_slug)
        .scalar()
    )
    return (last or 0) + 1


def apply_section_attributes(section: Section, attributes: Dict[str, Any]) -> None:
    assert_section_attributes(attributes)
    for field in SECTION_ATTRIBUTES & set(attributes):
        setattr(section, field, attributes[field])


def build_unit(
    *,
    tenant_id: str,
    unit_type: str,
    payload: Any,
    attributes: Dict[str, Any],
) -> ContentUnit:
    """Validate at the boundary and build an unsaved unit at (sandbox, draft)."""
    model = UNIT_MODELS.get(unit_type)
    if model is None:
        raise ValidationError(
            {"unit_type": f"Must be one of: {', '.join(UNIT_MODELS)}"}
        )

    allowed = SECTION_ATTRIBUTES if model is Section else NOTICE_ATTRIBUTES
    unknown = set(attributes) - allowed
    if unknown:
        raise ValidationError(
            {field: "Not a valid attribute for this unit type" for field in sorted(unknown)}
        )

    unit = model()
    unit.tenant_id = tenant_id
    unit.environment, unit.status = INITIAL_STATE
    unit.payload = copy.deepcopy(payload)

    if isinstance(unit, Section):
        apply_section_attributes(unit, attributes)
        unit.section_type = unit.section_type or DEFAULT_SECTION_TYPE
        unit.page_slug = unit.page_slug or current_app.config.get("DEFAULT_PAGE_SLUG", "home")
        if unit.enabled is None:
            unit.enabled = True
        assert_section_payload(unit.section_type, payload)
        if unit.position is None:
            unit.position = next_position(tenant_id=tenant_id, page_slug=unit.page_slug)
    elif isinstance(unit, Notice):
        assert_notice_attributes(attributes)
        assert_notice_payload(payload)
        unit.pinned = bool(attributes.get("pinned", False))

    return unit


def create_unit(
    *,
    tenant_id: str,
    unit_type: str,
    payload: Any,
    actor_id: Optional[str] = None,
    attributes: Optional[Dict[str, Any]] = None,
) -> ContentUnit:
    """
    Create a new content unit in (sandbox, draft).

    Edge cases handled:
    - Unknown tenant
    - Unknown unit type or attribute
    - Payload failing type-specific shape checks
    """
    if not db.session.get(Tenant, tenant_id):
        raise NotFound("Tenant", tenant_id)

    unit = build_unit(
        tenant_id=tenant_id,
        unit_type=unit_type,
        payload=payload,
        attributes=attributes or {},
    )
    unit.updated_by = actor_id

    with transactional():
        db.session.add(unit)
        db.session.flush()  # ensures unit.id is available

        assert_lifecycle_state(unit)

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action=f"{unit_type}.create",
            entity_type=unit_type,
            entity_id=unit.id,
            payload={"environment": unit.environment, "status": unit.status},
        )

    current_app.logger.info("Created %s %s in %s/%s", unit_type, unit.id, *INITIAL_STATE)
    return unit
