from __future__ import annotations

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for
from werkzeug.exceptions import RequestEntityTooLarge

from gstradelink.app.content import category_label
from gstradelink.app.extensions import db
from gstradelink.app.models import Product
from gstradelink.app.common.auth import admin_required, current_admin
from gstradelink.app.common.errors import PublishError
from gstradelink.modules.admin import services

bp = Blueprint("admin", __name__, url_prefix="/admin")

TABS = ("add-product", "manage-products")


def _get_product(product_id: str) -> Product:
    product = db.session.get(Product, product_id)
    if product is None:
        abort(404)
    return product


def _manage_url():
    return url_for("admin.dashboard", tab="manage-products", q=request.args.get("q") or None)


@bp.get("")
@admin_required
def dashboard():
    tab = request.args.get("tab", "add-product")
    if tab not in TABS:
        tab = "add-product"
    search = (request.args.get("q") or "").strip()
    products = services.admin_products(search) if tab == "manage-products" else []
    return render_template(
        "admin/dashboard.html",
        admin=current_admin(),
        tab=tab,
        search=search,
        products=products,
        counts=services.product_counts() if tab == "manage-products" else None,
        categories=services.category_options(),
        category_label=category_label,
    )


@bp.post("/products")
@admin_required
def publish():
    form = services.ProductForm.from_request(request.form, request.files)
    try:
        product = services.publish_product(form)
    except PublishError as err:
        flash(err.message, "error")
        return redirect(url_for("admin.dashboard"))

    flash(f'"{product.name}" published successfully!', "success")
    return redirect(url_for("admin.dashboard"))


@bp.get("/products/<product_id>/edit")
@admin_required
def edit(product_id: str):
    product = _get_product(product_id)
    return render_template(
        "admin/edit.html",
        admin=current_admin(),
        product=product,
        categories=services.category_options(),
    )


@bp.post("/products/<product_id>/edit")
@admin_required
def edit_post(product_id: str):
    product = _get_product(product_id)
    form = services.ProductForm.from_request(request.form, request.files)
    try:
        services.update_product(product, form)
    except PublishError as err:
        flash(err.message, "error")
        return redirect(url_for("admin.edit", product_id=product_id))

    flash(f'"{product.name}" updated.', "success")
    return redirect(_manage_url())


@bp.post("/products/<product_id>/toggle")
@admin_required
def toggle(product_id: str):
    product = _get_product(product_id)
    try:
        services.set_active(product, not product.is_active)
    except PublishError as err:
        flash(err.message, "error")
    else:
        flash(f'"{product.name}" is now {"visible" if product.is_active else "hidden"}.', "success")
    return redirect(_manage_url())


@bp.post("/products/<product_id>/delete")
@admin_required
def delete(product_id: str):
    product = _get_product(product_id)
    name = product.name
    try:
        services.delete_product(product)
    except PublishError as err:
        flash(err.message, "error")
    else:
        flash(f'"{name}" deleted.', "success")
    return redirect(_manage_url())


@bp.errorhandler(RequestEntityTooLarge)
def upload_too_large(err):
    # Body is over MAX_CONTENT_LENGTH, so the form was never parsed
    flash(services.IMAGE_TOO_LARGE, "error")
    if request.endpoint == "admin.edit_post":
        return redirect(url_for("admin.edit", product_id=request.view_args["product_id"]))
    return redirect(url_for("admin.dashboard"))
