# sitecms/application/public/projection.py
from typing import List, Optional
from sitecms.models.content_unit import ContentUnit, Section, Notice, UNIT_MODELS
from sitecms.models.tenant import Tenant
from sitecms.domain.exceptions import NotFound
from sitecms.domain.lifecycle.content import PUBLIC_STATE
from sitecms.application.tenants.registry import get_tenant_by_slug
from sitecms.utils.order import order_sections, order_notices


def get_published(
    *,
    tenant_slug: str,
    unit_type: Optional[str] = None,
    page_slug: Optional[str] = None,
) -> List[ContentUnit]:
    """
    Public projection: what visitors of a school's site may see.

    Contract:
    - only environment=live AND status=published, for this tenant only
    - sections by ascending position (enabled ones only), notices pinned
      first then newest first
    - read-only, no locks
    - unknown slug or unknown type yields [] so the renderer can fall back
      to its placeholder page
    """
    tenant = get_tenant_by_slug(tenant_slug)
    if tenant is None or (unit_type is not None and unit_type not in UNIT_MODELS):
        return []

    units: List[ContentUnit] = []

    if unit_type in (None, "section"):
        query = _visible(Section, tenant).filter(Section.enabled.is_(True))
        if page_slug:
            query = query.filter(Section.page_slug == page_slug)
        units.extend(order_sections(query, Section).all())

    if unit_type in (None, "notice"):
        units.extend(order_notices(_visible(Notice, tenant), Notice).all())

    return units


def get_public_tenant(tenant_slug: str) -> Tenant:
    tenant = get_tenant_by_slug(tenant_slug)
    if tenant is None:
        raise NotFound("Tenant", tenant_slug)
    return tenant


def _visible(model, tenant: Tenant):
    # The single place that decides public visibility
    environment, status = PUBLIC_STATE
    return model.query.filter(
        model.tenant_id == tenant.id,
        model.environment == environment,
        model.status == status,
    )
