"""Publishing and editing catalogue products.

Both flows upload the image first and then write the row. A failed database
write does not remove an object that was already uploaded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import FileStorage

from gstradelink.app.content import ADMIN_CATEGORIES
from gstradelink.app.extensions import db, storage
from gstradelink.app.models import Product
from gstradelink.app.common.errors import PublishError
from gstradelink.app.common.storage import ALLOWED_IMAGE_EXTENSIONS, StorageError, file_extension, object_key_for

logger = logging.getLogger(__name__)

UPLOAD_FAILED = "Image upload failed. Please try again."
SAVE_FAILED = "Could not save the product. Please try again."
IMAGE_TOO_LARGE = "Image is too large (max 5 MB)."


@dataclass
class ProductForm:
    name: str
    category: str
    description: str = ""
    image: Optional[FileStorage] = None

    @classmethod
    def from_request(cls, form, files) -> "ProductForm":
        category = (form.get("new_category") or "").strip() or (form.get("category") or "").strip()
        image = files.get("image")
        if image is not None and not image.filename:
            image = None
        return cls(
            name=(form.get("name") or "").strip(),
            category=category,
            description=(form.get("description") or "").strip(),
            image=image,
        )


def _validate_fields(form: ProductForm) -> None:
    if not form.name:
        raise PublishError("Product name is required.")
    if not form.category:
        raise PublishError("Please choose a category.")


def _read_image(image: FileStorage) -> bytes:
    ext = file_extension(image.filename)
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise PublishError("Unsupported image type. Use JPG, PNG, WEBP, GIF or SVG.")
    data = image.read()
    if not data:
        raise PublishError("The selected image is empty.")
    if len(data) > current_app.config["MAX_IMAGE_BYTES"]:
        raise PublishError(IMAGE_TOO_LARGE)
    return data


def _upload(image: FileStorage) -> str:
    """Store the image and return its public URL."""
    data = _read_image(image)
    key = object_key_for(image.filename)
    try:
        storage.upload(key, data)
    except StorageError:
        logger.exception("Product image upload failed")
        raise PublishError(UPLOAD_FAILED)
    return storage.public_url(key)


def _commit(action: str) -> None:
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Product %s failed", action)
        raise PublishError(SAVE_FAILED)


def publish_product(form: ProductForm) -> Product:
    _validate_fields(form)
    if form.image is None:
        raise PublishError("Please select an image.")

    image_url = _upload(form.image)

    product = Product(
        name=form.name,
        category=form.category,
        short_description=form.description or None,
        image_url=image_url,
        is_active=True,
    )
    db.session.add(product)
    _commit("insert")
    logger.info("Published product %s (%s)", product.id, product.name)
    return product


def update_product(product: Product, form: ProductForm) -> Product:
    _validate_fields(form)

    if form.image is not None:
        product.image_url = _upload(form.image)
    product.name = form.name
    product.category = form.category
    product.short_description = form.description or None
    _commit("update")
    return product


def set_active(product: Product, active: bool) -> Product:
    product.is_active = active
    _commit("status change")
    return product


def delete_product(product: Product) -> None:
    product_id = product.id
    db.session.delete(product)
    _commit("delete")
    logger.info("Deleted product %s", product_id)


def admin_products(search: str = "") -> list[Product]:
    q = Product.query
    if search:
        like = f"%{search.replace('%', ' ')}%"
        q = q.filter(db.or_(Product.name.ilike(like), Product.category.ilike(like)))
    return q.order_by(Product.created_at.desc(), Product.id.desc()).all()


def category_options() -> list[str]:
    """Known categories first, then any custom ones already in the table."""
    options = list(ADMIN_CATEGORIES)
    rows = db.session.query(Product.category).distinct().order_by(Product.category.asc()).all()
    for (category,) in rows:
        if category and category not in options:
            options.append(category)
    return options


def product_counts() -> dict:
    total = Product.query.count()
    active = Product.query.filter(Product.is_active.is_(True)).count()
    return {"total": total, "active": active, "inactive": total - active}
