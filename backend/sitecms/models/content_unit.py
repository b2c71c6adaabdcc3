# sitecms/models/content_unit.py
from sitecms.extensions import db
from sitecms.domain.lifecycle.content import SANDBOX, DRAFT
from .base import BaseModel
from .tenant_mixin import TenantMixin


class ContentUnit(BaseModel, TenantMixin):
    """
    One row per content unit, whatever its lifecycle state.

    Promotion flips `environment` on this row; there is never a separate
    live copy. `version` is bumped by every UPDATE and doubles as the
    compare-and-set token for concurrent writers.
    """
    __tablename__ = "content_units"

    unit_type = db.Column(db.String(20), nullable=False, index=True)
    environment = db.Column(db.String(20), nullable=False, default=SANDBOX, index=True)
    status = db.Column(db.String(30), nullable=False, default=DRAFT, index=True)
    payload = db.Column(db.JSON, nullable=False, default=dict)

    # Set on a sandbox draft that will replace a live unit once approved
    supersedes_id = db.Column(
        db.String(36),
        db.ForeignKey("content_units.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    updated_by = db.Column(db.String(36), nullable=True)
    version = db.Column(db.Integer, nullable=False)

    __table_args__ = (
        db.Index("ix_content_units_visibility", "tenant_id", "environment", "status"),
    )

    __mapper_args__ = {
        "polymorphic_on": unit_type,
        "version_id_col": version,
    }

    @property
    def state(self):
        return (self.environment, self.status)


class Section(ContentUnit):
    section_type = db.Column(db.String(50), nullable=True)  # hero, features, about...
    page_slug = db.Column(db.String(100), nullable=True, index=True)
    position = db.Column(db.Integer, nullable=True)
    enabled = db.Column(db.Boolean, nullable=True, default=True)

    __mapper_args__ = {"polymorphic_identity": "section"}


class Notice(ContentUnit):
    pinned = db.Column(db.Boolean, nullable=True, default=False)

    __mapper_args__ = {"polymorphic_identity": "notice"}


UNIT_MODELS = {
    "section": Section,
    "notice": Notice,
}
