import click
from flask import current_app
from sitecms.extensions import db
from sitecms.application.tenants.registry import create_tenant, get_tenant_by_slug


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (development only; use migrations elsewhere)."""
        db.create_all()
        click.echo("Database tables created")

    @app.cli.command("create-tenant")
    @click.argument("slug")
    @click.option("--name", required=True, help="School display name")
    def create_tenant_command(slug, name):
        """Provision a school."""
        tenant = create_tenant(name=name, slug=slug)
        click.echo(f"{tenant.slug}: {tenant.id}")

    @app.cli.command("seed-tenant")
    def seed_tenant():
        """Create the default demo school if it does not exist."""
        slug = current_app.config["SEED_TENANT_SLUG"]
        tenant = get_tenant_by_slug(slug, active_only=False)
        if tenant is None:
            tenant = create_tenant(name=current_app.config["SEED_TENANT_NAME"], slug=slug)
        click.echo(f"{tenant.slug}: {tenant.id}")
