# sitecms/application/cms/revise_unit.py
import copy
from typing import Optional
from flask import current_app
from sitecms.extensions import db
from sitecms.models.content_unit import ContentUnit, Section, Notice
from sitecms.domain.exceptions import Conflict
from sitecms.domain.invariants.content import assert_lifecycle_state
from sitecms.domain.lifecycle.content import INITIAL_STATE, assert_revisable
from sitecms.utils.audit import log_action
from sitecms.utils.transaction import transactional
from .locking import require_unit


def revise_unit(
    *,
    unit_id: str,
    tenant_id: Optional[str] = None,
    actor_id: Optional[str] = None,
) -> ContentUnit:
    """
    Open a sandbox draft that will replace a published unit once approved.

    Published content is never edited in place. The live unit stays
    visible, untouched, until the revision is approved.
    """
    with transactional():
        live = require_unit(unit_id=unit_id, tenant_id=tenant_id)
        assert_revisable(unit_id=live.id, state=live.state)

        open_revision = ContentUnit.query.filter_by(supersedes_id=live.id).first()
        if open_revision:
            raise Conflict(
                f"Unit {live.id} already has an open revision: {open_revision.id}"
            )

        draft = type(live)()
        draft.tenant_id = live.tenant_id
        draft.environment, draft.status = INITIAL_STATE
        draft.payload = copy.deepcopy(live.payload)
        draft.supersedes_id = live.id
        draft.updated_by = actor_id

        if isinstance(live, Section):
            draft.section_type = live.section_type
            draft.page_slug = live.page_slug
            draft.position = live.position
            draft.enabled = live.enabled
        elif isinstance(live, Notice):
            draft.pinned = live.pinned

        db.session.add(draft)
        db.session.flush()

        assert_lifecycle_state(draft)

        log_action(
            tenant_id=live.tenant_id,
            actor_id=actor_id,
            action=f"{live.unit_type}.revise",
            entity_type=live.unit_type,
            entity_id=draft.id,
            payload={"supersedes": live.id},
        )

    current_app.logger.info("Opened revision %s of %s", draft.id, unit_id)
    return draft
