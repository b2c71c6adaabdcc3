from sitecms.extensions import db

def compact_order(items, order_field="position"):
    """
    Re-assigns sequential order values (1..N) following the given item order.
    """
    for index, item in enumerate(items, start=1):
        if getattr(item, order_field) != index:
            setattr(item, order_field, index)

    db.session.flush()


def order_sections(query, model):
    """Sections display by page, then ascending position."""
    return query.order_by(
        model.page_slug.asc(),
        model.position.asc(),
        model.created_at.asc(),
    )


def order_notices(query, model):
    """Notices display pinned first, then newest first."""
    return query.order_by(
        model.pinned.desc(),
        model.created_at.desc(),
        model.id.desc(),
    )
