from sitecms.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class Lead(BaseModel, TenantMixin):
    __tablename__ = "leads"

    __table_args__ = (
        db.Index("ix_leads_tenant_status", "tenant_id", "status"),
    )

    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50), nullable=True)
    grade_interest = db.Column(db.String(100), nullable=True)
    message = db.Column(db.Text, nullable=True)

    source = db.Column(db.String(20), nullable=False, default="website")
    status = db.Column(db.String(20), nullable=False, default="new", index=True)
