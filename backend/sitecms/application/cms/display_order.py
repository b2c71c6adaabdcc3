# sitecms/application/cms/display_order.py
from typing import List, Optional
from sqlalchemy import select
from sitecms.extensions import db
from sitecms.models.content_unit import Section, Notice
from sitecms.domain.exceptions import ValidationError
from sitecms.domain.lifecycle.content import ENVIRONMENTS
from sitecms.utils.audit import log_action
from sitecms.utils.order import compact_order
from sitecms.utils.transaction import transactional
from .locking import require_unit


def reorder_sections(
    *,
    tenant_id: str,
    page_slug: str,
    environment: str,
    ordered_ids: List[str],
    actor_id: Optional[str] = None,
) -> List[Section]:
    """
    Reassign positions 1..N on one page of one environment.

    Ordering is display-only and allowed in every lifecycle state.
    `ordered_ids` must list every section on that page exactly once.
    """
    if environment not in ENVIRONMENTS:
        raise ValidationError({"environment": f"Must be one of: {', '.join(ENVIRONMENTS)}"})

    with transactional():
        sections = db.session.execute(
            select(Section)
            .where(
                Section.tenant_id == tenant_id,
                Section.page_slug == page_slug,
                Section.environment == environment,
            )
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalars().all()

        by_id = {section.id: section for section in sections}
        if len(ordered_ids) != len(set(ordered_ids)) or set(ordered_ids) != set(by_id):
            raise ValidationError(
                {"ordered_ids": "Must list every section on the page exactly once"}
            )

        ordered = [by_id[section_id] for section_id in ordered_ids]
        compact_order(ordered, order_field="position")

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="section.reorder",
            entity_type="page",
            entity_id=page_slug,
            payload={"environment": environment, "order": list(ordered_ids)},
        )

    return ordered


def set_pinned(
    *,
    unit_id: str,
    pinned: bool,
    tenant_id: Optional[str] = None,
    actor_id: Optional[str] = None,
) -> Notice:
    """Pin or unpin a notice in any lifecycle state."""
    if not isinstance(pinned, bool):
        raise ValidationError({"pinned": "Must be a boolean"})

    with transactional():
        notice = require_unit(unit_id=unit_id, tenant_id=tenant_id)
        if not isinstance(notice, Notice):
            raise ValidationError({"unit_type": "Only notices can be pinned"})

        notice.pinned = pinned

        log_action(
            tenant_id=notice.tenant_id,
            actor_id=actor_id,
            action="notice.pin" if pinned else "notice.unpin",
            entity_type="notice",
            entity_id=notice.id,
        )

    return notice
