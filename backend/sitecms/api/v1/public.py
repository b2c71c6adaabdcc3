# sitecms/api/v1/public.py
from flask import request, jsonify
from sitecms.application.public.projection import get_published, get_public_tenant
from sitecms.application.leads.capture import submit_inquiry
from sitecms.normalizers.content_unit import normalize_unit
from sitecms.normalizers.tenant import normalize_tenant
from . import v1_bp

# ------------------------
# Public website (no auth, tenant by slug)
# ------------------------

@v1_bp.route("/public/<slug>", methods=["GET"])
def public_school(slug):
    return jsonify(normalize_tenant(get_public_tenant(slug)))

@v1_bp.route("/public/<slug>/sections", methods=["GET"])
def public_sections(slug):
    units = get_published(
        tenant_slug=slug,
        unit_type="section",
        page_slug=request.args.get("page"),
    )
    return jsonify([normalize_unit(u) for u in units])

@v1_bp.route("/public/<slug>/notices", methods=["GET"])
def public_notices(slug):
    units = get_published(tenant_slug=slug, unit_type="notice")
    return jsonify([normalize_unit(u) for u in units])

@v1_bp.route("/public/<slug>/inquiries", methods=["POST"])
def public_inquiry(slug):
    data = request.get_json(silent=True)
    submit_inquiry(tenant_slug=slug, data=data if isinstance(data, dict) else {})
    return jsonify({
        "success": True,
        "message": "Thank you for your inquiry! We will contact you soon."
    }), 201
