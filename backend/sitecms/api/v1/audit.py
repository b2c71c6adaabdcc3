from flask import request, jsonify, g
from flask_jwt_extended import jwt_required
from sitecms.utils.decorators import tenant_required, roles_required, APPROVER_ROLES
from sitecms.utils.pagination import paginate_cursor
from sitecms.models.audit_log import AuditLog
from sitecms.normalizers.audit import normalize_audit_log
from sitecms.normalizers.pagination import normalize_pagination
from . import v1_bp

@v1_bp.route("/cms/audit", methods=["GET"])
@jwt_required()
@tenant_required
@roles_required(*APPROVER_ROLES)
def list_audit_logs():
    tenant = g.current_tenant

    # Cursor Pagination
    limit = min(request.args.get("limit", 20, type=int), 100)

    query = AuditLog.query.filter(
        AuditLog.tenant_id == tenant.id
    )

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    items, meta = paginate_cursor(
        query,
        model=AuditLog,
        limit=limit,
        cursor=request.args.get("cursor"),
    )

    return jsonify(normalize_pagination(items, normalize_audit_log, cursor=meta))
