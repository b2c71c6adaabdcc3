from flask import g, has_app_context
from sitecms.extensions import db
from sitecms.models.audit_log import AuditLog
from typing import Optional

def _current_actor_id() -> Optional[str]:
    if not has_app_context():
        return None
    return getattr(g, "current_actor_id", None)

def log_action(
    *,
    tenant_id: Optional[str],
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    actor_id: Optional[str] = None,
    payload: dict | None = None
):
    """
    Stage an audit row in the current session.

    Callers invoke this inside their `transactional()` block so the
    entry commits (or rolls back) together with the change it records.
    """
    if not tenant_id or not entity_id:
        return  # Nothing to scope the entry to
    log = AuditLog()

    log.actor_id = actor_id or _current_actor_id()
    log.tenant_id = tenant_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)
