# sitecms/application/leads/capture.py
from typing import Any, Dict, List, Optional
from flask import current_app
from sqlalchemy import func
from sitecms.extensions import db
from sitecms.models.lead import Lead
from sitecms.domain.exceptions import NotFound
from sitecms.domain.invariants.lead import assert_lead, assert_lead_status
from sitecms.application.tenants.registry import get_tenant_by_slug
from sitecms.utils.audit import log_action
from sitecms.utils.transaction import transactional


LEAD_FIELDS = ("first_name", "last_name", "email", "phone", "grade_interest", "message")


def submit_inquiry(*, tenant_slug: str, data: Dict[str, Any]) -> Lead:
    """
    Public inquiry form submission.

    Writes only to `leads`; content units are never read or locked here.
    Status is always forced to `new`.
    """
    tenant = get_tenant_by_slug(tenant_slug)
    if tenant is None:
        raise NotFound("Tenant", tenant_slug)

    assert_lead(data)

    lead = Lead()
    lead.tenant_id = tenant.id
    for field in LEAD_FIELDS:
        value = data.get(field)
        setattr(lead, field, value.strip() if isinstance(value, str) else value)
    lead.source = data.get("source") or "website"
    lead.status = "new"

    with transactional():
        db.session.add(lead)
        db.session.flush()

        log_action(
            tenant_id=tenant.id,
            action="lead.create",
            entity_type="lead",
            entity_id=lead.id,
            payload={"source": lead.source},
        )

    current_app.logger.info("New %s lead for %s", lead.source, tenant.slug)
    return lead


def list_leads(*, tenant_id: str, status: Optional[str] = None) -> List[Lead]:
    query = Lead.query.filter(Lead.tenant_id == tenant_id)
    if status:
        assert_lead_status(status)
        query = query.filter(Lead.status == status)
    return query.order_by(Lead.created_at.desc(), Lead.id.desc()).all()


def update_lead_status(
    *,
    lead_id: str,
    status: str,
    tenant_id: str,
    actor_id: Optional[str] = None,
) -> Lead:
    assert_lead_status(status)

    lead = Lead.query.filter_by(id=lead_id, tenant_id=tenant_id).first()
    if not lead:
        raise NotFound("Lead", lead_id)

    with transactional():
        previous = lead.status
        lead.status = status

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="lead.status",
            entity_type="lead",
            entity_id=lead.id,
            payload={"from": previous, "to": status},
        )

    return lead


def lead_stats(*, tenant_id: str) -> List[Dict[str, Any]]:
    rows = (
        db.session.query(Lead.status, func.count(Lead.id))
        .filter(Lead.tenant_id == tenant_id)
        .group_by(Lead.status)
        .order_by(Lead.status)
        .all()
    )
    return [{"status": status, "count": int(count)} for status, count in rows]
