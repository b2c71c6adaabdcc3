# sitecms/application/cms/locking.py
from typing import Optional
from sqlalchemy import select
from sitecms.extensions import db
from sitecms.models.content_unit import ContentUnit
from sitecms.domain.exceptions import NotFound


def lock_unit(*, unit_id: str, tenant_id: Optional[str] = None) -> Optional[ContentUnit]:
    """
    Fetch a unit with a row-level lock, refreshing any identity-mapped copy.

    populate_existing guarantees the legality checks run against the most
    recently committed row, not a stale object already in the session.
    """
    stmt = (
        select(ContentUnit)
        .where(ContentUnit.id == unit_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    if tenant_id is not None:
        stmt = stmt.where(ContentUnit.tenant_id == tenant_id)

    return db.session.execute(stmt).scalar_one_or_none()


def require_unit(*, unit_id: str, tenant_id: Optional[str] = None) -> ContentUnit:
    unit = lock_unit(unit_id=unit_id, tenant_id=tenant_id)
    if not unit:
        raise NotFound("Content unit", unit_id)
    return unit
