from gstradelink.app.extensions import db
from gstradelink.app.models import AdminUser, Product
from gstradelink.app.cli import DEMO_PRODUCTS
from werkzeug.security import check_password_hash


# CLI-001: seed fills an empty catalogue once
def test_seed(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed"])
    assert result.exit_code == 0
    assert f"Seeded {len(DEMO_PRODUCTS)} products." in result.output

    result = runner.invoke(args=["seed"])
    assert "nothing to seed" in result.output

    with app.app_context():
        assert Product.query.count() == len(DEMO_PRODUCTS)


# CLI-002: create-admin creates, then resets the password
def test_create_admin(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["create-admin", "Owner@GSTradeLink.com.np"], input="first-pass\nfirst-pass\n")
    assert result.exit_code == 0
    assert "Created admin owner@gstradelink.com.np." in result.output

    result = runner.invoke(args=["create-admin", "owner@gstradelink.com.np"], input="second-pass\nsecond-pass\n")
    assert "Updated admin owner@gstradelink.com.np." in result.output

    with app.app_context():
        admins = AdminUser.query.all()
        assert len(admins) == 1
        assert check_password_hash(admins[0].password_hash, "second-pass")


def test_init_db(app):
    result = app.test_cli_runner().invoke(args=["init-db"])
    assert result.exit_code == 0
    with app.app_context():
        assert db.session.query(Product).count() == 0
