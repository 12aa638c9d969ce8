import io
import re
from pathlib import Path

import pytest
from sqlalchemy.exc import OperationalError

from gstradelink.app.extensions import db, storage
from gstradelink.app.models import Product
from gstradelink.app.common.storage import StorageError, object_key_for

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _form(**overrides):
    data = {
        "name": "Camry EK3651",
        "category": "Kitchen & Compact Tabletop Scales",
        "new_category": "",
        "description": "Compact 5kg counter scale.",
        "image": (io.BytesIO(PNG), "camry.png"),
    }
    data.update(overrides)
    return data


def _publish(client, **overrides):
    return client.post(
        "/admin/products",
        data=_form(**overrides),
        content_type="multipart/form-data",
        follow_redirects=True,
    )


def _bucket_files(app):
    bucket = Path(app.config["STORAGE_ROOT"]) / "product-images"
    return sorted(p.name for p in bucket.iterdir()) if bucket.exists() else []


def _products(app):
    with app.app_context():
        return Product.query.all()


# PUB-001: publishing uploads the image and inserts an active row
def test_publish_creates_product(app, admin_client):
    r = _publish(admin_client)
    assert r.status_code == 200
    assert b"published successfully!" in r.data

    rows = _products(app)
    assert len(rows) == 1
    product = rows[0]
    assert product.name == "Camry EK3651"
    assert product.category == "Kitchen & Compact Tabletop Scales"
    assert product.short_description == "Compact 5kg counter scale."
    assert product.is_active is True
    assert product.created_at is not None

    files = _bucket_files(app)
    assert len(files) == 1
    assert re.fullmatch(r"\d{13}\.png", files[0])
    assert product.image_url == f"/storage/v1/object/public/product-images/{files[0]}"


# PUB-002: the stored image is served back from its public URL
def test_published_image_is_served(app, admin_client):
    _publish(admin_client)
    product = _products(app)[0]

    r = admin_client.get(product.image_url)
    assert r.status_code == 200
    assert r.data == PNG


# PUB-003: new products show up first in the public catalogue
def test_published_product_is_listed(app, admin_client, products):
    _publish(admin_client, name="Brand New Scale")
    r = admin_client.get("/api/products")
    assert r.json["items"][0]["name"] == "Brand New Scale"


# PUB-004: a new category typed by the admin wins over the select
def test_new_category_overrides_select(app, admin_client):
    _publish(admin_client, new_category="Counting Scales")
    assert _products(app)[0].category == "Counting Scales"


def test_description_is_optional(app, admin_client):
    _publish(admin_client, description="")
    assert _products(app)[0].short_description is None


# PUB-005: validation failures insert nothing and upload nothing
def test_missing_name(app, admin_client):
    r = _publish(admin_client, name="   ")
    assert b"Product name is required." in r.data
    assert _products(app) == []
    assert _bucket_files(app) == []


def test_missing_image(app, admin_client):
    data = _form()
    del data["image"]
    r = admin_client.post("/admin/products", data=data, follow_redirects=True)
    assert b"Please select an image." in r.data
    assert _products(app) == []


def test_unsupported_image_type(app, admin_client):
    r = _publish(admin_client, image=(io.BytesIO(b"MZ..."), "setup.exe"))
    assert b"Unsupported image type" in r.data
    assert _products(app) == []
    assert _bucket_files(app) == []


def test_image_too_large(app, admin_client):
    app.config["MAX_IMAGE_BYTES"] = 16
    r = _publish(admin_client)
    assert b"Image is too large" in r.data
    assert _products(app) == []


# PUB-006: storage failure stops before the insert
def test_upload_failure_inserts_nothing(app, admin_client, monkeypatch):
    def fail(key, data, bucket=None):
        raise StorageError("bucket unavailable")

    monkeypatch.setattr(storage, "upload", fail)
    r = _publish(admin_client)
    assert b"Image upload failed. Please try again." in r.data
    assert _products(app) == []


# PUB-007: an insert failure leaves the uploaded object behind
def test_insert_failure_keeps_uploaded_image(app, admin_client, monkeypatch):
    def fail():
        raise OperationalError("INSERT INTO products", {}, Exception("db down"))

    monkeypatch.setattr(db.session, "commit", fail)
    r = _publish(admin_client)
    monkeypatch.undo()

    assert b"Could not save the product. Please try again." in r.data
    assert _products(app) == []
    assert len(_bucket_files(app)) == 1


# PUB-008: only a logged-in admin can publish
def test_publish_requires_login(app, client):
    r = client.post("/admin/products", data=_form(), content_type="multipart/form-data")
    assert r.status_code == 302
    assert "/admin/login" in r.headers["Location"]
    assert _products(app) == []


def test_object_key_is_timestamp_and_extension():
    assert object_key_for("Photo.JPEG", now_ms=1717000000123) == "1717000000123.jpeg"
    assert object_key_for("noext", now_ms=5) == "5"


def test_storage_never_overwrites(app):
    with app.app_context():
        storage.upload("1.png", b"a")
        with pytest.raises(StorageError):
            storage.upload("1.png", b"b")
        assert storage.exists("1.png")


@pytest.mark.parametrize("key", ["../escape.png", "a/b.png", ""])
def test_storage_rejects_path_keys(app, key):
    with app.app_context():
        with pytest.raises(StorageError):
            storage.upload(key, b"x")
