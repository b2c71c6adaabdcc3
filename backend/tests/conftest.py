import uuid

import pytest
from flask_jwt_extended import create_access_token

from sitecms import create_app
from sitecms.extensions import db
from sitecms.application.tenants.registry import create_tenant
from sitecms.application.cms.create_unit import create_unit
from sitecms.application.cms.lifecycle import submit_unit, approve_unit


def build_test_app(tmp_path, overrides=None):
    db_path = tmp_path / f"sitecms_test_{uuid.uuid4().hex[:8]}.db"

    config = {
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_path}",
        "SQLALCHEMY_ENGINE_OPTIONS": {
            "connect_args": {"check_same_thread": False, "timeout": 15},
        },
        "JWT_SECRET_KEY": "test-jwt-secret-key-with-enough-length",
    }
    if overrides:
        config.update(overrides)

    return create_app("testing", config)


@pytest.fixture()
def app(tmp_path):
    app = build_test_app(tmp_path)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def tenant(app):
    return create_tenant(name="Springfield Academy", slug="springfield")


@pytest.fixture()
def other_tenant(app):
    return create_tenant(name="Shelbyville High", slug="shelbyville")


def auth_headers(tenant, role="editor", user_id="user-1"):
    token = create_access_token(
        identity=user_id,
        additional_claims={"tenant_id": tenant.id, "role": role},
    )
    return {
        "Authorization": f"Bearer {token}",
        "X-Tenant-ID": tenant.id,
    }


def make_section(tenant, payload=None, **attributes):
    return create_unit(
        tenant_id=tenant.id,
        unit_type="section",
        payload=payload if payload is not None else {"title": "Welcome"},
        attributes=attributes,
    )


def make_notice(tenant, title="Term dates", pinned=False):
    return create_unit(
        tenant_id=tenant.id,
        unit_type="notice",
        payload={"title": title, "description": f"{title} announced"},
        attributes={"pinned": pinned},
    )


def publish(unit):
    submit_unit(unit_id=unit.id)
    return approve_unit(unit_id=unit.id)
