import os
import sys
from datetime import datetime

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gstradelink.app.config import TestConfig
from gstradelink.app.factory import create_app
from gstradelink.app.extensions import db
from gstradelink.app.models import AdminUser, Product
from gstradelink.app.common import lockout
from werkzeug.security import generate_password_hash

ADMIN_EMAIL = "admin@gstradelink.com.np"
ADMIN_PASSWORD = "Scale123!"


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def app(tmp_path):
    # SQLite in memory plus a throwaway storage root per test.
    class Config(TestConfig):
        STORAGE_ROOT = str(tmp_path / "storage")

    app = create_app(Config)

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr(lockout, "_now", fake)
    return fake


@pytest.fixture()
def admin(app):
    with app.app_context():
        user = AdminUser(email=ADMIN_EMAIL, password_hash=generate_password_hash(ADMIN_PASSWORD))
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture()
def products(app):
    """Four products, newest last; the crane scale is hidden."""
    rows = [
        Product(name="Xin Yuan M-8006", category="Precision & Pocket Mini Scales",
                short_description="Pocket scale, 600g x 0.01g.", is_active=True,
                created_at=datetime(2024, 1, 1)),
        Product(name="Camry Kitchen Scale", category="Kitchen & Compact Tabletop Scales",
                short_description="5kg counter scale with LCD.", is_active=True,
                created_at=datetime(2024, 2, 1)),
        Product(name="Hidden Crane Scale", category="Heavy-Duty Hanging & Crane Scales",
                short_description="1000kg crane scale.", is_active=False,
                created_at=datetime(2024, 3, 1)),
        Product(name="Load Cell", category="Spare Part",
                short_description="Genuine replacement load cell.", is_active=True,
                created_at=datetime(2024, 4, 1)),
    ]
    with app.app_context():
        db.session.add_all(rows)
        db.session.commit()
        return {p.name: p.id for p in rows}


def login(client, email=ADMIN_EMAIL, password=ADMIN_PASSWORD, **kwargs):
    return client.post("/admin/login", data={"email": email, "password": password}, **kwargs)


@pytest.fixture()
def admin_client(client, admin):
    resp = login(client)
    assert resp.status_code == 302
    return client
