"""
Flask CLI commands.

    flask --app wsgi seed-admin      Create the default admin account.
    flask --app wsgi generate-keys   Write a development RSA key pair.

``generate-keys`` is also installed as the standalone ``tracker-generate-keys``
script, since the application itself cannot start before keys exist.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from flask import Flask, current_app
from flask.cli import with_appcontext
from sqlalchemy import func, or_, select

from . import db
from .dto import RegisterRequest
from .models import User
from .services import build_services

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "User"


def generate_rsa_key_pair() -> tuple[bytes, bytes]:
    """Return a fresh 2048-bit RSA key pair as (private PEM, public PEM)."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


def backfill_user_names() -> int:
    """Give users with a blank first or last name the placeholder name."""
    users = db.session.scalars(
        select(User).where(
            or_(
                User.first_name.is_(None),
                func.trim(User.first_name) == "",
                User.last_name.is_(None),
                func.trim(User.last_name) == "",
            )
        )
    ).all()
    for user in users:
        if not (user.first_name or "").strip():
            user.first_name = PLACEHOLDER_NAME
        if not (user.last_name or "").strip():
            user.last_name = PLACEHOLDER_NAME
    db.session.commit()
    return len(users)


def seed_admin() -> bool:
    """
    Create the configured admin account unless it already exists.

    Returns:
        ``True`` when a new account was created.
    """
    users = build_services(db.session).users
    email = current_app.config["DEFAULT_ADMIN_EMAIL"]
    if users.exists_by_email(email):
        return False

    users.register_user(
        RegisterRequest(
            email=email,
            password=current_app.config["DEFAULT_ADMIN_PASSWORD"],
            first_name="Admin",
            last_name=PLACEHOLDER_NAME,
        )
    )
    logger.info("Default admin user seeded: %s", email)
    return True


@click.command("seed-admin")
@with_appcontext
def seed_admin_command() -> None:
    """Create the default admin user and repair blank user names."""
    repaired = backfill_user_names()
    if repaired:
        click.echo(f"Filled in names for {repaired} user(s)")

    email = current_app.config["DEFAULT_ADMIN_EMAIL"]
    if seed_admin():
        click.echo(f"Created {email}")
    else:
        click.echo(f"{email} already exists, skipping")


@click.command("generate-keys")
@click.option(
    "--directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("keys"),
    show_default=True,
    help="Where to write dev.private.pem and dev.public.pem.",
)
def generate_keys_command(directory: Path) -> None:
    """Generate a local development RSA key pair for JWT signing."""
    private_path = directory / "dev.private.pem"
    public_path = directory / "dev.public.pem"

    if private_path.exists() and public_path.exists():
        click.echo(f"Keys already exist, skipping: {private_path} / {public_path}")
        return
    if private_path.exists() != public_path.exists():
        raise click.ClickException(
            "Only one key file exists. Remove both key files and run this command again."
        )

    directory.mkdir(parents=True, exist_ok=True)
    private_pem, public_pem = generate_rsa_key_pair()
    private_path.write_bytes(private_pem)
    public_path.write_bytes(public_pem)
    click.echo(f"Generated: {private_path}")
    click.echo(f"Generated: {public_path}")


def register_commands(app: Flask) -> None:
    app.cli.add_command(seed_admin_command)
    app.cli.add_command(generate_keys_command)
