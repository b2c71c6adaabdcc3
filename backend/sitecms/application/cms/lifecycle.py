# sitecms/application/cms/lifecycle.py
from datetime import datetime
from typing import Optional
from flask import current_app
from sqlalchemy import func, select
from sitecms.extensions import db
from sitecms.models.content_unit import ContentUnit, Section
from sitecms.domain.invariants.content import assert_lifecycle_state
from sitecms.domain.lifecycle.content import LIVE, is_public, next_state
from sitecms.utils.audit import log_action
from sitecms.utils.optimistic_lock import enforce_optimistic_lock
from sitecms.utils.transaction import transactional
from .locking import lock_unit, require_unit


def _transition(
    *,
    unit_id: str,
    action: str,
    tenant_id: Optional[str],
    actor_id: Optional[str],
    expected_version: Optional[int],
    unmodified_since: Optional[datetime],
) -> ContentUnit:
    """
    Apply one state machine action as a single read-modify-write.

    Responsibilities:
    - row lock + version check (lost races surface as Conflict)
    - legality against the committed state
    - promotion side effects on approve
    - audit logging in the same transaction
    """
    with transactional():
        if action == "approve":
            _lock_superseded_first(unit_id=unit_id, tenant_id=tenant_id)

        unit = require_unit(unit_id=unit_id, tenant_id=tenant_id)
        enforce_optimistic_lock(
            unit,
            expected_version=expected_version,
            unmodified_since=unmodified_since,
        )

        from_state = unit.state
        unit.environment, unit.status = next_state(
            unit_id=unit.id,
            state=from_state,
            action=action,
        )
        unit.updated_by = actor_id

        replaced_id = None
        if action == "approve":
            replaced_id = _promote(unit)

        assert_lifecycle_state(unit)

        log_action(
            tenant_id=unit.tenant_id,
            actor_id=actor_id,
            action=f"{unit.unit_type}.{action}",
            entity_type=unit.unit_type,
            entity_id=unit.id,
            payload={
                "from": list(from_state),
                "to": list(unit.state),
                "replaced": replaced_id,
            },
        )

    current_app.logger.info(
        "%s %s: %s -> %s/%s", action, unit.id, "/".join(from_state), unit.environment, unit.status
    )
    return unit


def _lock_superseded_first(*, unit_id: str, tenant_id: Optional[str]) -> None:
    """
    Lock the live unit a revision replaces before the revision itself.

    delete_unit locks a live unit and then touches its revisions; approve
    has to take the same order or the two can deadlock each other.
    """
    stmt = select(ContentUnit.supersedes_id).where(ContentUnit.id == unit_id)
    if tenant_id is not None:
        stmt = stmt.where(ContentUnit.tenant_id == tenant_id)

    supersedes_id = db.session.execute(stmt).scalar_one_or_none()
    if supersedes_id:
        lock_unit(unit_id=supersedes_id, tenant_id=tenant_id)


def _promote(unit: ContentUnit) -> Optional[str]:
    """
    Side effects of going live.

    A revision takes the place of the live unit it supersedes; the old row
    is removed in the same commit so visitors never see both or neither.
    The revision keeps its own attributes, only the creation time carries
    over so notices keep their place in the newest-first order.
    """
    replaced_id = None
    superseded = None

    if unit.supersedes_id:
        superseded = lock_unit(unit_id=unit.supersedes_id, tenant_id=unit.tenant_id)
        unit.supersedes_id = None

    if superseded is not None and is_public(superseded.state):
        replaced_id = superseded.id
        unit.created_at = superseded.created_at
        db.session.delete(superseded)
        db.session.flush()

    if isinstance(unit, Section):
        _ensure_free_live_position(unit)

    return replaced_id


def _ensure_free_live_position(section: Section) -> None:
    """Live positions stay unique per page; a colliding section goes last."""
    taken = (
        Section.query
        .filter(
            Section.tenant_id == section.tenant_id,
            Section.page_slug == section.page_slug,
            Section.environment == LIVE,
            Section.position == section.position,
            Section.id != section.id,
        )
        .first()
    )
    if not taken:
        return

    last = (
        db.session.query(func.max(Section.position))
        .filter(
            Section.tenant_id == section.tenant_id,
            Section.page_slug == section.page_slug,
        )
        .scalar()
    )
    section.position = (last or 0) + 1


def submit_unit(
    *,
    unit_id: str,
    tenant_id: Optional[str] = None,
    actor_id: Optional[str] = None,
    expected_version: Optional[int] = None,
    unmodified_since: Optional[datetime] = None,
) -> ContentUnit:
    return _transition(
        unit_id=unit_id,
        action="submit",
        tenant_id=tenant_id,
        actor_id=actor_id,
        expected_version=expected_version,
        unmodified_since=unmodified_since,
    )


def approve_unit(
    *,
    unit_id: str,
    tenant_id: Optional[str] = None,
    actor_id: Optional[str] = None,
    expected_version: Optional[int] = None,
    unmodified_since: Optional[datetime] = None,
) -> ContentUnit:
    """Promote a pending unit to (live, published). Payload is untouched."""
    return _transition(
        unit_id=unit_id,
        action="approve",
        tenant_id=tenant_id,
        actor_id=actor_id,
        expected_version=expected_version,
        unmodified_since=unmodified_since,
    )


def reject_unit(
    *,
    unit_id: str,
    tenant_id: Optional[str] = None,
    actor_id: Optional[str] = None,
    expected_version: Optional[int] = None,
    unmodified_since: Optional[datetime] = None,
) -> ContentUnit:
    return _transition(
        unit_id=unit_id,
        action="reject",
        tenant_id=tenant_id,
        actor_id=actor_id,
        expected_version=expected_version,
        unmodified_since=unmodified_since,
    )
