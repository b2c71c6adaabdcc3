# sitecms/api/v1/cms.py
from flask import g, request, jsonify
from flask_jwt_extended import jwt_required
from sitecms.utils.decorators import tenant_required, roles_required, EDITOR_ROLES, APPROVER_ROLES
from sitecms.utils.optimistic_lock import read_preconditions
from sitecms.application.cms.create_unit import create_unit
from sitecms.application.cms.edit_unit import edit_unit
from sitecms.application.cms.lifecycle import submit_unit, approve_unit, reject_unit
from sitecms.application.cms.revise_unit import revise_unit
from sitecms.application.cms.delete_unit import delete_unit
from sitecms.application.cms.list_units import list_units, list_pending_approvals, get_unit
from sitecms.application.cms.display_order import reorder_sections, set_pinned
from sitecms.application.tenants.registry import update_tenant
from sitecms.domain.exceptions import ValidationError
from sitecms.normalizers.content_unit import normalize_unit
from sitecms.normalizers.tenant import normalize_tenant
from . import v1_bp # import the versioned blueprint


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError({"body": "Expected a JSON object"})
    return data

# ------------------------
# Content units
# ------------------------

@v1_bp.route("/cms/units", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def list_content_units():
    units = list_units(
        tenant_id=g.current_tenant.id,
        environment=request.args.get("environment"),  # sandbox | live | None
        unit_type=request.args.get("type"),
        status=request.args.get("status"),
        page_slug=request.args.get("page"),
    )
    return jsonify([normalize_unit(u, admin=True) for u in units])

@v1_bp.route("/cms/units", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def create_content_unit():
    data = _json_body()
    attributes = {k: v for k, v in data.items() if k not in ("type", "payload")}

    unit = create_unit(
        tenant_id=g.current_tenant.id,
        unit_type=data.get("type"),
        payload=data.get("payload", {}),
        actor_id=g.current_actor_id,
        attributes=attributes,
    )
    return jsonify(normalize_unit(unit, admin=True)), 201

@v1_bp.route("/cms/units/<unit_id>", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def get_content_unit(unit_id):
    unit = get_unit(tenant_id=g.current_tenant.id, unit_id=unit_id)
    return jsonify(normalize_unit(unit, admin=True))

@v1_bp.route("/cms/units/<unit_id>", methods=["PATCH"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def edit_content_unit(unit_id):
    expected_version, unmodified_since = read_preconditions()

    unit = edit_unit(
        unit_id=unit_id,
        data=_json_body(),
        tenant_id=g.current_tenant.id,
        actor_id=g.current_actor_id,
        expected_version=expected_version,
        unmodified_since=unmodified_since,
    )
    return jsonify(normalize_unit(unit, admin=True))

@v1_bp.route("/cms/units/<unit_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def delete_content_unit(unit_id):
    delete_unit(
        unit_id=unit_id,
        tenant_id=g.current_tenant.id,
        actor_id=g.current_actor_id,
    )
    return "", 204

# ------------------------
# Approval workflow
# ------------------------

def _run_action(action, unit_id):
    expected_version, unmodified_since = read_preconditions()
    unit = action(
        unit_id=unit_id,
        tenant_id=g.current_tenant.id,
        actor_id=g.current_actor_id,
        expected_version=expected_version,
        unmodified_since=unmodified_since,
    )
    return jsonify(normalize_unit(unit, admin=True))

@v1_bp.route("/cms/units/<unit_id>/submit", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def submit_content_unit(unit_id):
    return _run_action(submit_unit, unit_id)

@v1_bp.route("/cms/units/<unit_id>/approve", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required(*APPROVER_ROLES)
def approve_content_unit(unit_id):
    return _run_action(approve_unit, unit_id)

@v1_bp.route("/cms/units/<unit_id>/reject", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required(*APPROVER_ROLES)
def reject_content_unit(unit_id):
    return _run_action(reject_unit, unit_id)

@v1_bp.route("/cms/units/<unit_id>/revise", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def revise_content_unit(unit_id):
    draft = revise_unit(
        unit_id=unit_id,
        tenant_id=g.current_tenant.id,
        actor_id=g.current_actor_id,
    )
    return jsonify(normalize_unit(draft, admin=True)), 201

@v1_bp.route("/cms/approvals", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def list_approvals():
    units = list_pending_approvals(tenant_id=g.current_tenant.id)
    return jsonify([normalize_unit(u, admin=True) for u in units])

# ------------------------
# Display ordering
# ------------------------

@v1_bp.route("/cms/units/<unit_id>/pin", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def pin_notice(unit_id):
    data = _json_body()
    notice = set_pinned(
        unit_id=unit_id,
        pinned=data.get("pinned", True),
        tenant_id=g.current_tenant.id,
        actor_id=g.current_actor_id,
    )
    return jsonify(normalize_unit(notice, admin=True))

@v1_bp.route("/cms/pages/<page_slug>/order", methods=["PUT"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def reorder_page_sections(page_slug):
    data = _json_body()
    ordered_ids = data.get("ordered_ids")
    if not isinstance(ordered_ids, list):
        raise ValidationError({"ordered_ids": "Required list of section ids"})

    sections = reorder_sections(
        tenant_id=g.current_tenant.id,
        page_slug=page_slug,
        environment=data.get("environment", "sandbox"),
        ordered_ids=ordered_ids,
        actor_id=g.current_actor_id,
    )
    return jsonify([normalize_unit(s, admin=True) for s in sections])

# ------------------------
# School settings
# ------------------------

@v1_bp.route("/cms/settings", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def get_settings():
    return jsonify(normalize_tenant(g.current_tenant, admin=True))

@v1_bp.route("/cms/settings", methods=["PATCH"])
@jwt_required()
@tenant_required
@roles_required(*APPROVER_ROLES)
def update_settings():
    tenant = update_tenant(tenant_id=g.current_tenant.id, data=_json_body())
    return jsonify(normalize_tenant(tenant, admin=True))
