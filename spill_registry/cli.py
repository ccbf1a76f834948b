"""CLI utilities."""

import json
import logging

import click
from sqlalchemy.orm import Session

from spill_registry.api.auth import get_password_hash
from spill_registry.config import settings
from spill_registry.core.errors import ReportStoreError
from spill_registry.core.report_store import ReportStore
from spill_registry.core.stats import compute_stats
from spill_registry.database import Base, SessionLocal, engine
from spill_registry import models  # noqa: F401
from spill_registry.models.user import User, UserRole
from spill_registry.schemas.report import ReportResponse
from spill_registry.seed import seed_intervenants


@click.group()
def cli():
    """Spill registry CLI."""
    logging.basicConfig(level=settings.log_level.upper())


@cli.command()
def init_db():
    """Create database tables."""
    Base.metadata.create_all(bind=engine)
    click.echo("Database tables created")


@cli.command()
@click.option("--email", required=True, prompt=True)
@click.option("--password", required=True, prompt=True, hide_input=True)
@click.option("--role", default="admin", type=click.Choice(["admin", "user"]))
def create_user(email: str, password: str, role: str):
    """Create a user account."""
    db: Session = SessionLocal()
    try:
        email = email.strip().lower()
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            click.echo(f"User {email} already exists")
            return

        user = User(
            email=email,
            hashed_password=get_password_hash(password),
            role=UserRole(role),
            is_active=True,
        )
        db.add(user)
        db.commit()
        click.echo(f"User {email} created successfully")
    finally:
        db.close()


@cli.command("seed-intervenants")
@click.argument("yaml_file", required=False)
def seed_intervenants_command(yaml_file: str):
    """Seed the intervenants directory (built-in list when no YAML file is given)."""
    seed_intervenants(yaml_file)


@cli.command()
@click.option("--limit", default=10, show_default=True, help="Number of reports to return")
def list_reports(limit: int):
    """Print the most recent reports as JSON."""
    db: Session = SessionLocal()
    try:
        reports = ReportStore(db).list(limit=limit)
        payload = [ReportResponse.model_validate(r).model_dump(mode="json") for r in reports]
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    except ReportStoreError as e:
        raise click.ClickException(f"Error fetching reports ({e.kind}): {e.message}")
    finally:
        db.close()


@cli.command()
@click.option("--year", type=int, default=None, help="Year for the monthly trend")
def stats(year: int):
    """Print report statistics as JSON."""
    db: Session = SessionLocal()
    try:
        result = compute_stats(ReportStore(db).list(), year)
        click.echo(json.dumps(result, indent=2, ensure_ascii=False))
    except ReportStoreError as e:
        raise click.ClickException(f"Error fetching stats ({e.kind}): {e.message}")
    finally:
        db.close()


if __name__ == "__main__":
    cli()
