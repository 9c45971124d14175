"""
`flask --app api seed`: demo tenant with a monthly and a yearly plan.
Safe to run repeatedly; existing rows are left untouched.
"""
import logging

import click

from models import storage
from models.plan import Plan
from models.tenant import Tenant

logger = logging.getLogger(__name__)

DEMO_TENANT = {"name": "FitZone Gym", "slug": "fitzone-gym"}
DEMO_PLANS = (
    {"name": "Monthly", "price_cents": 49900, "interval": "MONTH"},
    {"name": "Yearly", "price_cents": 499000, "interval": "YEAR"},
)


def seed_demo_data() -> Tenant:
    session = storage.get_session()
    tenant = session.query(Tenant).filter(Tenant.slug == DEMO_TENANT["slug"]).first()
    if tenant is None:
        tenant = Tenant(**DEMO_TENANT)
        storage.new(tenant)

    for plan_data in DEMO_PLANS:
        exists = (
            session.query(Plan)
            .filter(Plan.tenant_id == tenant.id, Plan.name == plan_data["name"])
            .first()
        )
        if exists is None:
            storage.new(Plan(tenant_id=tenant.id, **plan_data))

    storage.save()
    return tenant


def register_commands(app):
    @app.cli.command("seed")
    def seed():
        """Seed demo tenant and plans."""
        click.echo("Seeding demo data...")
        tenant = seed_demo_data()
        logger.info("seeded tenant %s", tenant.id)
        click.echo("Seed complete.")
