from flask import g, request, jsonify
from flask_jwt_extended import jwt_required
from sitecms.utils.decorators import tenant_required, roles_required, EDITOR_ROLES
from sitecms.application.leads.capture import list_leads, update_lead_status, lead_stats
from sitecms.normalizers.lead import normalize_lead
from . import v1_bp


@v1_bp.route("/cms/leads", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def list_school_leads():
    leads = list_leads(
        tenant_id=g.current_tenant.id,
        status=request.args.get("status"),
    )
    return jsonify([normalize_lead(lead) for lead in leads])

@v1_bp.route("/cms/leads/stats", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def school_lead_stats():
    return jsonify(lead_stats(tenant_id=g.current_tenant.id))

@v1_bp.route("/cms/leads/<lead_id>", methods=["PATCH"])
@jwt_required()
@tenant_required
@roles_required(*EDITOR_ROLES)
def update_school_lead(lead_id):
    data = request.get_json(silent=True) or {}
    lead = update_lead_status(
        lead_id=lead_id,
        status=data.get("status"),
        tenant_id=g.current_tenant.id,
        actor_id=g.current_actor_id,
    )
    return jsonify(normalize_lead(lead))
