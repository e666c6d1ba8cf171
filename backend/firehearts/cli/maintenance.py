"""Flask CLI commands for schema bootstrap and upload housekeeping."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from firehearts.core.extensions import db
from firehearts.infra.storage import LocalImageStore
from firehearts.uow import SQLAlchemyReadOnlyUnitOfWork

LOGGER = logging.getLogger(__name__)


def find_orphan_images(store: LocalImageStore, referenced_urls: set[str]) -> list[str]:
    """Filenames in ``store`` that no profile image URL points to."""
    referenced = {store.filename_from_url(url) for url in referenced_urls}
    return [name for name in store.list_filenames() if name not in referenced]


@click.group("maintenance")
def maintenance_cli() -> None:
    """Database and upload-folder maintenance commands."""


@maintenance_cli.command("init-db")
@with_appcontext
def init_db_command() -> None:
    """Create every table that does not exist yet."""
    db.create_all()
    click.echo("Database schema created.")


@maintenance_cli.command("prune-images")
@click.option("--dry-run", is_flag=True, help="List orphaned files without deleting them.")
@with_appcontext
def prune_images_command(dry_run: bool) -> None:
    """Delete uploaded files that no profile references."""
    store = LocalImageStore(current_app.config["UPLOAD_FOLDER"])
    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        referenced = uow.profiles.referenced_image_urls()

    orphans = find_orphan_images(store, referenced)
    if not orphans:
        click.echo("No orphaned images.")
        return

    removed = 0
    for name in orphans:
        if dry_run:
            click.echo(f"would delete {name}")
            continue
        try:
            store.delete(name)
        except OSError as exc:
            LOGGER.warning("prune.delete_failed", extra={"image_file": name})
            click.echo(f"failed {name}: {exc}", err=True)
            continue
        removed += 1
        click.echo(f"deleted {name}")

    if dry_run:
        click.echo(f"{len(orphans)} orphaned image(s) found.")
    else:
        click.echo(f"{removed} of {len(orphans)} orphaned image(s) deleted.")
