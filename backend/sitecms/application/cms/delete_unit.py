from typing import Optional
from flask import current_app
from sitecms.extensions import db
from sitecms.models.content_unit import ContentUnit
from sitecms.utils.audit import log_action
from sitecms.utils.transaction import transactional
from .locking import lock_unit


def delete_unit(
    *,
    unit_id: str,
    tenant_id: Optional[str] = None,
    actor_id: Optional[str] = None,
) -> None:
    """
    Hard-delete a unit in any state.

    Notes:
    - Idempotent: an absent id is not an error
    - Open revisions of the unit are detached and will simply go live
      on their own if later approved
    """
    with transactional():
        unit = lock_unit(unit_id=unit_id, tenant_id=tenant_id)
        if unit is None:
            return

        (
            ContentUnit.query
            .filter(ContentUnit.supersedes_id == unit.id)
            .update({"supersedes_id": None}, synchronize_session=False)
        )

        log_action(
            tenant_id=unit.tenant_id,
            actor_id=actor_id,
            action=f"{unit.unit_type}.delete",
            entity_type=unit.unit_type,
            entity_id=unit.id,
            payload={"environment": unit.environment, "status": unit.status},
        )

        db.session.delete(unit)

    current_app.logger.info("Deleted unit %s", unit_id)
