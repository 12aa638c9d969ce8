"""Public marketing pages and the product catalogue."""

from datetime import date

from flask import Blueprint, abort, current_app, render_template, request
from sqlalchemy.exc import SQLAlchemyError

from gstradelink.app import content
from gstradelink.app.extensions import db
from gstradelink.app.models import Product
from gstradelink.modules.catalog.queries import active_products_query

ui_bp = Blueprint("ui", __name__)

FEATURED_LIMIT = 8


@ui_bp.get("/")
def home():
    try:
        featured = active_products_query().limit(FEATURED_LIMIT).all()
    except SQLAlchemyError:
        current_app.logger.exception("Error fetching featured products")
        featured = []

    categories = [
        {"name": c, "label": content.CATEGORY_LABELS[c], "href": content.category_href(c)}
        for c in content.PRODUCT_CATEGORIES
        if c != "All"
    ]
    return render_template(
        "pages/home.html",
        featured=featured,
        categories=categories,
        services=content.MAIN_SERVICES,
        brands=content.BRANDS,
        stats=content.STATS,
    )


@ui_bp.get("/products")
def catalog_page():
    selected = content.normalize_category(request.args.get("category"))
    search = content.normalize_search(request.args.get("q"))

    try:
        products = active_products_query(selected, search).all()
    except SQLAlchemyError:
        current_app.logger.exception("Error fetching products")
        products = []

    return render_template(
        "pages/catalog.html",
        products=products,
        chips=content.category_chips(search),
        selected_category=selected,
        active_label=content.category_label(selected),
        search=search,
        has_active_filters=selected != "All" or bool(search),
    )


@ui_bp.get("/products/<product_id>")
def product_detail(product_id: str):
    product = db.session.get(Product, product_id)
    if product is None:
        abort(404)

    return render_template(
        "pages/product_detail.html",
        product=product,
        wa_link=content.whatsapp_link(content.product_enquiry_message(product.name)),
        schema=content.product_schema(product),
        page_title=product.name,
        page_description=product.short_description
        or f"{product.category} available at GSTradeLink Bharatpur. Contact us for pricing and availability.",
    )


@ui_bp.get("/services")
def services_page():
    return render_template(
        "pages/services.html",
        services=content.MAIN_SERVICES,
        additional=content.ADDITIONAL_SERVICES,
        stats=content.STATS,
        steps=content.PROCESS_STEPS,
    )


@ui_bp.get("/contact")
def contact_page():
    today = content.HOURS[date.today().weekday()]["day"]
    return render_template(
        "pages/contact.html",
        templates=content.WA_TEMPLATES,
        hours=content.HOURS,
        today=today,
    )
