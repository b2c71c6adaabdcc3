from conftest import make_section, make_notice, publish

from sitecms.application.cms.display_order import reorder_sections, set_pinned
from sitecms.application.cms.edit_unit import edit_unit
from sitecms.application.cms.lifecycle import submit_unit, approve_unit
from sitecms.application.cms.revise_unit import revise_unit
from sitecms.application.public.projection import get_published, get_public_tenant
from sitecms.application.tenants.registry import update_tenant
from sitecms.domain.exceptions import NotFound, ValidationError

import pytest


def test_unknown_slug_is_empty_not_an_error(app):
    assert get_published(tenant_slug="nowhere") == []
    assert get_published(tenant_slug="nowhere", unit_type="notice") == []


def test_only_live_published_units_are_returned(tenant):
    live = publish(make_section(tenant, {"title": "Live"}))
    make_section(tenant, {"title": "Draft"})
    pending = make_notice(tenant, title="Pending")
    submit_unit(unit_id=pending.id)

    units = get_published(tenant_slug="springfield")

    assert [u.id for u in units] == [live.id]
    for unit in units:
        assert unit.environment == "live"
        assert unit.status == "published"


def test_tenant_isolation(tenant, other_tenant):
    mine = publish(make_notice(tenant, title="Ours"))
    publish(make_notice(other_tenant, title="Theirs"))

    units = get_published(tenant_slug="springfield")

    assert [u.id for u in units] == [mine.id]
    assert {u.tenant_id for u in units} == {tenant.id}


def test_notices_pinned_first_then_newest(tenant):
    oldest = publish(make_notice(tenant, title="Oldest"))
    pinned = publish(make_notice(tenant, title="Pinned", pinned=True))
    newest = publish(make_notice(tenant, title="Newest"))

    units = get_published(tenant_slug="springfield", unit_type="notice")

    assert [u.id for u in units] == [pinned.id, newest.id, oldest.id]


def test_revised_notice_keeps_its_place_in_newest_first_order(tenant):
    old = publish(make_notice(tenant, title="Old"))
    publish(make_notice(tenant, title="New"))

    draft = revise_unit(unit_id=old.id)
    edit_unit(unit_id=draft.id, data={"payload": {"description": "Corrected"}})
    submit_unit(unit_id=draft.id)
    approve_unit(unit_id=draft.id)

    units = get_published(tenant_slug="springfield", unit_type="notice")

    assert [u.payload["title"] for u in units] == ["New", "Old"]
    assert units[1].id == draft.id
    assert units[1].payload["description"] == "Corrected"


def test_pinning_a_live_notice_reorders_projection(tenant):
    oldest = publish(make_notice(tenant, title="Oldest"))
    newest = publish(make_notice(tenant, title="Newest"))

    set_pinned(unit_id=oldest.id, pinned=True)

    units = get_published(tenant_slug="springfield", unit_type="notice")
    assert [u.id for u in units] == [oldest.id, newest.id]


def test_sections_by_ascending_position(tenant):
    a = publish(make_section(tenant, {"title": "A"}))
    b = publish(make_section(tenant, {"title": "B"}))
    c = publish(make_section(tenant, {"title": "C"}))

    reorder_sections(
        tenant_id=tenant.id,
        page_slug="home",
        environment="live",
        ordered_ids=[c.id, a.id, b.id],
    )

    units = get_published(tenant_slug="springfield", unit_type="section")
    assert [u.id for u in units] == [c.id, a.id, b.id]
    assert [u.position for u in units] == [1, 2, 3]


def test_reorder_requires_every_section_once(tenant):
    a = publish(make_section(tenant))
    publish(make_section(tenant))

    with pytest.raises(ValidationError):
        reorder_sections(tenant_id=tenant.id, page_slug="home", environment="live", ordered_ids=[a.id])


def test_disabled_sections_and_page_filter(tenant):
    home = publish(make_section(tenant))
    about = publish(make_section(tenant, {}, section_type="gallery", page_slug="about"))
    hidden = make_section(tenant, {"title": "Hidden"})
    edit_unit(unit_id=hidden.id, data={"enabled": False})
    publish(hidden)

    assert [u.id for u in get_published(tenant_slug="springfield", unit_type="section", page_slug="about")] == [about.id]
    assert {u.id for u in get_published(tenant_slug="springfield", unit_type="section")} == {home.id, about.id}


def test_mixed_projection_lists_sections_then_notices(tenant):
    notice = publish(make_notice(tenant))
    section = publish(make_section(tenant))

    assert [u.id for u in get_published(tenant_slug="springfield")] == [section.id, notice.id]


def test_inactive_tenant_serves_nothing(tenant):
    publish(make_notice(tenant))
    update_tenant(tenant_id=tenant.id, data={"is_active": False})

    assert get_published(tenant_slug="springfield") == []
    with pytest.raises(NotFound):
        get_public_tenant("springfield")


def test_unknown_type_is_empty(tenant):
    publish(make_notice(tenant))
    assert get_published(tenant_slug="springfield", unit_type="banner") == []
