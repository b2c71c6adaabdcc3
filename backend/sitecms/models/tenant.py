from sitecms.extensions import db
from .base import BaseModel

DEFAULT_PRIMARY_COLOR = "#1e40af"
DEFAULT_SECONDARY_COLOR = "#3b82f6"


class Tenant(BaseModel):
    """A school: the namespace every content unit and lead belongs to."""
    __tablename__ = "tenants"

    # Basic info
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(63), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    # Branding
    logo = db.Column(db.String(512), nullable=True)
    primary_color = db.Column(db.String(16), nullable=False, default=DEFAULT_PRIMARY_COLOR)
    secondary_color = db.Column(db.String(16), nullable=False, default=DEFAULT_SECONDARY_COLOR)
