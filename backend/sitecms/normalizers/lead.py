def normalize_lead(lead):
    return {
        "id": lead.id,
        "first_name": lead.first_name,
        "last_name": lead.last_name,
        "email": lead.email,
        "phone": lead.phone,
        "grade_interest": lead.grade_interest,
        "message": lead.message,
        "source": lead.source,
        "status": lead.status,
        "created_at": lead.created_at.isoformat() if lead.created_at else None,
    }
