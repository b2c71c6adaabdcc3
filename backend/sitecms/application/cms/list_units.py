# sitecms/application/cms/list_units.py
from typing import List, Optional
from sitecms.models.content_unit import ContentUnit, Section, Notice, UNIT_MODELS
from sitecms.domain.exceptions import NotFound, ValidationError
from sitecms.domain.lifecycle.content import ENVIRONMENTS, STATUSES, SANDBOX, PENDING_APPROVAL
from sitecms.utils.order import order_sections, order_notices


def list_units(
    *,
    tenant_id: str,
    environment: Optional[str] = None,
    unit_type: Optional[str] = None,
    status: Optional[str] = None,
    page_slug: Optional[str] = None,
) -> List[ContentUnit]:
    """
    CMS listing, always scoped to one tenant.

    Sections come first (by page, then position), notices after
    (pinned first, then newest first).
    """
    if environment is not None and environment not in ENVIRONMENTS:
        raise ValidationError({"environment": f"Must be one of: {', '.join(ENVIRONMENTS)}"})
    if status is not None and status not in STATUSES:
        raise ValidationError({"status": f"Must be one of: {', '.join(STATUSES)}"})
    if unit_type is not None and unit_type not in UNIT_MODELS:
        raise ValidationError({"unit_type": f"Must be one of: {', '.join(UNIT_MODELS)}"})

    units: List[ContentUnit] = []

    if unit_type in (None, "section"):
        query = _scoped(Section, tenant_id, environment, status)
        if page_slug:
            query = query.filter(Section.page_slug == page_slug)
        units.extend(order_sections(query, Section).all())

    if unit_type in (None, "notice"):
        query = _scoped(Notice, tenant_id, environment, status)
        units.extend(order_notices(query, Notice).all())

    return units


def list_pending_approvals(*, tenant_id: str) -> List[ContentUnit]:
    """Approval queue: everything currently awaiting review."""
    return list_units(
        tenant_id=tenant_id,
        environment=SANDBOX,
        status=PENDING_APPROVAL,
    )


def _scoped(model, tenant_id, environment, status):
    query = model.query.filter(model.tenant_id == tenant_id)
    if environment:
        query = query.filter(model.environment == environment)
    if status:
        query = query.filter(model.status == status)
    return query


def get_unit(*, tenant_id: str, unit_id: str) -> ContentUnit:
    unit = ContentUnit.query.filter_by(id=unit_id, tenant_id=tenant_id).first()
    if not unit:
        raise NotFound("Content unit", unit_id)
    return unit
