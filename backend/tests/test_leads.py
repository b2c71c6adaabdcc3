import pytest

from conftest import make_section

from sitecms.extensions import db
from sitecms.models.content_unit import ContentUnit
from sitecms.application.leads.capture import (
    submit_inquiry,
    list_leads,
    update_lead_status,
    lead_stats,
)
from sitecms.domain.exceptions import NotFound, ValidationError

INQUIRY = {
    "first_name": "Lisa",
    "last_name": "Simpson",
    "email": "lisa@example.com",
    "grade_interest": "Grade 2",
    "message": "Do you offer saxophone lessons?",
}


def test_inquiry_creates_new_website_lead(tenant):
    lead = submit_inquiry(tenant_slug="springfield", data=dict(INQUIRY, status="enrolled"))

    assert lead.tenant_id == tenant.id
    assert lead.status == "new"
    assert lead.source == "website"
    assert lead.email == "lisa@example.com"


def test_inquiry_for_unknown_school(app):
    with pytest.raises(NotFound):
        submit_inquiry(tenant_slug="nowhere", data=INQUIRY)


def test_inquiry_validation(tenant):
    with pytest.raises(ValidationError) as excinfo:
        submit_inquiry(tenant_slug="springfield", data={"first_name": "Bart", "email": "not-an-email"})

    assert set(excinfo.value.fields) == {"last_name", "email"}

    with pytest.raises(ValidationError):
        submit_inquiry(tenant_slug="springfield", data=dict(INQUIRY, source="billboard"))


def test_inquiries_do_not_touch_content(tenant):
    section = make_section(tenant)

    submit_inquiry(tenant_slug="springfield", data=INQUIRY)

    assert ContentUnit.query.count() == 1
    assert db.session.get(ContentUnit, section.id).state == ("sandbox", "draft")


def test_lead_pipeline(tenant, other_tenant):
    first = submit_inquiry(tenant_slug="springfield", data=INQUIRY)
    second = submit_inquiry(tenant_slug="springfield", data=dict(INQUIRY, first_name="Maggie"))
    submit_inquiry(tenant_slug="shelbyville", data=INQUIRY)

    update_lead_status(lead_id=first.id, status="contacted", tenant_id=tenant.id)

    assert [lead.id for lead in list_leads(tenant_id=tenant.id)] == [second.id, first.id]
    assert [lead.id for lead in list_leads(tenant_id=tenant.id, status="contacted")] == [first.id]
    assert lead_stats(tenant_id=tenant.id) == [
        {"status": "contacted", "count": 1},
        {"status": "new", "count": 1},
    ]

    with pytest.raises(NotFound):
        update_lead_status(lead_id=first.id, status="lost", tenant_id=other_tenant.id)
    with pytest.raises(ValidationError):
        update_lead_status(lead_id=first.id, status="archived", tenant_id=tenant.id)
