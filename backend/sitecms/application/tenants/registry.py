# sitecms/application/tenants/registry.py
from typing import Any, Dict, Optional
from flask import current_app
from sqlalchemy.exc import IntegrityError
from sitecms.extensions import db
from sitecms.models.tenant import Tenant
from sitecms.domain.exceptions import DuplicateSlug, NotFound, ValidationError
from sitecms.domain.invariants.tenant import assert_tenant_slug, assert_tenant_attributes
from sitecms.utils.transaction import transactional


ALLOWED_TENANT_FIELDS = {"name", "slug", "logo", "primary_color", "secondary_color", "is_active"}


def create_tenant(
    *,
    name: str,
    slug: str,
    **branding: Any,
) -> Tenant:
    """
    Provision a school.

    Edge cases handled:
    - Slug must be URL-safe
    - Duplicate slug (pre-check and unique constraint race)
    """
    unknown = set(branding) - ALLOWED_TENANT_FIELDS
    if unknown:
        raise TypeError(f"Unknown tenant attributes: {sorted(unknown)}")

    assert_tenant_slug(slug)
    assert_tenant_attributes({"name": name, **branding})

    if Tenant.query.filter_by(slug=slug).first():
        raise DuplicateSlug(slug)

    tenant = Tenant()
    tenant.name = name.strip()
    tenant.slug = slug
    for field, value in branding.items():
        setattr(tenant, field, value)

    try:
        with transactional():
            db.session.add(tenant)
    except IntegrityError as exc:
        # Lost the race against a concurrent create with the same slug
        raise DuplicateSlug(slug) from exc

    current_app.logger.info("Tenant created: %s (%s)", tenant.slug, tenant.id)
    return tenant


def get_tenant(tenant_id: str) -> Tenant:
    tenant = db.session.get(Tenant, tenant_id)
    if not tenant:
        raise NotFound("Tenant", tenant_id)
    return tenant


def get_tenant_by_slug(slug: str, *, active_only: bool = True) -> Optional[Tenant]:
    query = Tenant.query.filter_by(slug=slug)
    if active_only:
        query = query.filter_by(is_active=True)
    return query.first()


def update_tenant(*, tenant_id: str, data: Dict[str, Any]) -> Tenant:
    """
    Update branding and display attributes.

    Tenant deletion and cascades are not handled here.
    """
    tenant = get_tenant(tenant_id)

    changes = {k: v for k, v in data.items() if k in ALLOWED_TENANT_FIELDS}
    if not changes:
        raise ValidationError({"fields": "No valid fields provided for update"})

    assert_tenant_attributes(changes)

    new_slug = changes.get("slug")
    if new_slug is not None and new_slug != tenant.slug:
        assert_tenant_slug(new_slug)
        if Tenant.query.filter_by(slug=new_slug).first():
            raise DuplicateSlug(new_slug)

    try:
        with transactional():
            for field, value in changes.items():
                setattr(tenant, field, value)
    except IntegrityError as exc:
        raise DuplicateSlug(new_slug or tenant.slug) from exc

    return tenant
