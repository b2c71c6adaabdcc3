from sitecms.models.content_unit import Section, Notice


def _iso(value):
    return value.isoformat() if value else None


def normalize_unit(unit, admin=False):
    data = {
        "id": unit.id,
        "type": unit.unit_type,
        "payload": unit.payload or {},
    }

    if isinstance(unit, Section):
        data["section_type"] = unit.section_type
        data["page_slug"] = unit.page_slug
        data["position"] = unit.position
        data["enabled"] = unit.enabled
    elif isinstance(unit, Notice):
        data["pinned"] = unit.pinned
        data["created_at"] = _iso(unit.created_at)

    if admin:
        data["tenant_id"] = unit.tenant_id
        data["environment"] = unit.environment
        data["status"] = unit.status
        data["version"] = unit.version
        data["supersedes_id"] = unit.supersedes_id
        data["updated_by"] = unit.updated_by
        data["created_at"] = _iso(unit.created_at)
        data["updated_at"] = _iso(unit.updated_at)

    return data
