from __future__ import annotations

from sqlalchemy import or_

from gstradelink.app.models import Product


def sanitize_search(term: str) -> str:
    # Commas and percent signs would widen the LIKE pattern
    return term.replace(",", " ").replace("%", " ")


def active_products_query(category: str = "All", search: str = ""):
    q = Product.query.filter(Product.is_active.is_(True))

    if category and category != "All":
        q = q.filter(Product.category == category)

    if search:
        like = f"%{sanitize_search(search)}%"
        q = q.filter(
            or_(
                Product.name.ilike(like),
                Product.short_description.ilike(like),
            )
        )

    return q.order_by(Product.created_at.desc(), Product.id.desc())
