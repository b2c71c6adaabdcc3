def normalize_tenant(tenant, admin=False):
    data = {
        "name": tenant.name,
        "slug": tenant.slug,
        "logo": tenant.logo,
        "primary_color": tenant.primary_color,
        "secondary_color": tenant.secondary_color,
    }

    if admin:
        data["id"] = tenant.id
        data["is_active"] = tenant.is_active

    return data
