from __future__ import annotations

from flask import Blueprint, current_app, request

from gstradelink.app.content import category_label, normalize_category, normalize_search
from gstradelink.app.extensions import db
from gstradelink.app.models import Product
from gstradelink.app.common.errors import abort_json
from gstradelink.modules.catalog.queries import active_products_query

bp = Blueprint("catalog_api", __name__)


def _product_payload(p: Product) -> dict:
    payload = p.to_dict()
    payload["category_label"] = category_label(p.category)
    return payload


@bp.get("/products")
def list_products():
    """GET /api/products - Active products, newest first."""
    try:
        limit = int(request.args.get("limit", current_app.config["DEFAULT_LIMIT"]))
        offset = int(request.args.get("offset", 0))
    except ValueError:
        abort_json(400, "validation_error", "limit/offset must be integers")

    limit = max(1, min(limit, current_app.config["MAX_LIMIT"]))
    offset = max(0, offset)

    category = normalize_category(request.args.get("category"))
    search = normalize_search(request.args.get("q"))

    q = active_products_query(category, search)
    total = q.count()
    items = q.limit(limit).offset(offset).all()

    return {
        "items": [_product_payload(p) for p in items],
        "filters": {"category": category, "q": search},
        "paging": {"limit": limit, "offset": offset, "total": total},
    }, 200


@bp.get("/products/<product_id>")
def product_detail(product_id: str):
    """GET /api/products/<id> - Single product."""
    p = db.session.get(Product, product_id)
    if not p:
        abort_json(404, "not_found", "product not found")
    return _product_payload(p), 200
