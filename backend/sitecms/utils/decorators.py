from functools import wraps
from flask import g, jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity

EDITOR_ROLES = ("editor", "admin", "owner")
APPROVER_ROLES = ("admin", "owner")

def tenant_required(fn):
    """
    Reject tokens issued for a different school than the X-Tenant-ID one.
    Must run after @jwt_required().
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        tenant = getattr(g, "current_tenant", None)
        if not tenant:
            return jsonify({"error": "Tenant context missing"}), 400

        claims = get_jwt()
        if claims.get("tenant_id") != tenant.id:
            return jsonify({"error": "Tenant mismatch"}), 403

        g.current_actor_id = get_jwt_identity()
        return fn(*args, **kwargs)
    return wrapper

def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            claims = get_jwt()

            if claims.get("role") not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator
