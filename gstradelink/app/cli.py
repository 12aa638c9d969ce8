from __future__ import annotations

import click
from flask import Blueprint
from werkzeug.security import generate_password_hash

from gstradelink.app.extensions import db
from gstradelink.app.models import AdminUser, Product

cli_bp = Blueprint("cli", __name__, cli_group=None)

DEMO_PRODUCTS = [
    ("Xin Yuan M-8006 (600g / 0.01g)", "Precision & Pocket Mini Scales",
     "Digital pocket scale available in 600g capacity with 0.01g precision."),
    ("Xin Yuan M-8006 (3kg / 0.1g)", "Precision & Pocket Mini Scales",
     "Digital pocket scale available in 3kg capacity with 0.1g precision."),
    ("Camry EK3651 Digital Kitchen Scale", "Kitchen & Compact Tabletop Scales",
     "Compact 5kg counter scale with bright LCD display for kitchens, bakeries and retail."),
    ("SF-400 Kitchen Scale (10kg)", "Kitchen & Compact Tabletop Scales",
     "Everyday tabletop kitchen scale with tare function and 1g resolution."),
    ("Portable Luggage Scale (50kg)", "Portable & Luggage Scales",
     "Handheld hook scale with backlit display, ideal for travellers and couriers."),
    ("OCS Crane Scale (1000kg)", "Heavy-Duty Hanging & Crane Scales",
     "Heavy-duty hanging crane scale with remote control for workshops and warehouses."),
    ("Digital Bathroom Scale", "Personal Health & Bathroom Scales",
     "Tempered glass personal scale with step-on activation and auto power off."),
    ("Baby Weighing Scale (20kg)", "Personal Health & Bathroom Scales",
     "Gentle curved tray baby scale with hold function for clinics and homes."),
    ("Hand Sealer Machine (300mm)", "Packaging & Miscellaneous Equipment",
     "Impulse heat sealer for plastic bags, adjustable timer for shops and small packers."),
    ("Load Cell Replacement", "Spare Part",
     "Genuine replacement load cells for retail and platform scales."),
]


@cli_bp.cli.command("init-db")
def init_db() -> None:
    """Create tables."""
    db.create_all()
    click.echo("DB initialized (tables created).")


@cli_bp.cli.command("seed")
def seed_data() -> None:
    """Seed demo catalogue data.

    Safe to run multiple times; it will no-op if products exist.
    """
    db.create_all()
    if Product.query.count() > 0:
        click.echo("Products already exist, nothing to seed.")
        return

    db.session.add_all(
        [Product(name=name, category=category, short_description=desc, is_active=True)
         for name, category, desc in DEMO_PRODUCTS]
    )
    db.session.commit()
    click.echo(f"Seeded {Product.query.count()} products.")


@cli_bp.cli.command("create-admin")
@click.argument("email")
@click.password_option()
def create_admin(email: str, password: str) -> None:
    """Create an admin login, or reset its password if it exists."""
    email = email.strip().lower()
    db.create_all()
    admin = AdminUser.query.filter_by(email=email).first()
    if admin is None:
        admin = AdminUser(email=email, password_hash=generate_password_hash(password))
        db.session.add(admin)
        verb = "Created"
    else:
        admin.password_hash = generate_password_hash(password)
        verb = "Updated"
    db.session.commit()
    click.echo(f"{verb} admin {email}.")
