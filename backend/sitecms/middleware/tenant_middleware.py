from flask import request, g, jsonify
from sitecms.extensions import db
from sitecms.models.tenant import Tenant

# Only the authenticated CMS surface is resolved by header; public
# routes carry the tenant slug in the URL instead.
TENANT_SCOPED_PREFIXES = ("/api/v1/cms/",)

def tenant_middleware(app):
    @app.before_request
    def load_tenant():
        g.current_tenant = None
        g.current_actor_id = None
        if not request.path.startswith(TENANT_SCOPED_PREFIXES):
            return None

        tenant_id = request.headers.get('X-Tenant-ID')
        if not tenant_id:
            return jsonify({"error": "X-Tenant-ID header is missing"}), 400

        tenant = db.session.get(Tenant, tenant_id)
        if not tenant or not tenant.is_active:
            return jsonify({"error": "Invalid tenant"}), 404

        # Attach tenant to global context
        g.current_tenant = tenant
        return None
