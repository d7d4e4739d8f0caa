"""Command-line interface for the ArbanTv database setup.

A single command: load settings, validate the declared schema, apply it to
the configured Appwrite database and print a summary.
"""

import asyncio
from typing import NoReturn

import click
from pydantic import ValidationError

from arbantv_setup import __version__
from arbantv_setup.core.config import Settings, get_settings
from arbantv_setup.core.logging import configure_logging, get_logger
from arbantv_setup.domain.catalog import build_collections
from arbantv_setup.domain.entities.schema import CollectionDescriptor
from arbantv_setup.domain.services import (
    ApplyReport,
    Outcome,
    Pacer,
    PacingPolicy,
    SchemaApplier,
    SchemaValidator,
)
from arbantv_setup.infrastructure.schema_api import AppwriteSchemaClient, build_http_client

logger = get_logger(__name__)


async def run_setup(settings: Settings, collections: list[CollectionDescriptor]) -> ApplyReport:
    """Apply the collections to the configured database.

    Opens one HTTP client for the run and closes it when done.

    Args:
        settings: Loaded settings.
        collections: Validated collection descriptors.

    Returns:
        ApplyReport: Outcome of the run.
    """
    async with build_http_client(settings) as http:
        client = AppwriteSchemaClient(http, settings.appwrite_database_id)
        applier = SchemaApplier(
            client,
            pacer=Pacer(PacingPolicy.from_settings(settings)),
            wait_for_fields=settings.setup_wait_for_fields,
            field_ready_attempts=settings.setup_field_ready_attempts,
        )
        return await applier.apply(collections)


def _print_summary(
    settings: Settings, collections: list[CollectionDescriptor], report: ApplyReport
) -> None:
    click.echo("\n[SUCCESS] Database attributes setup completed!")
    click.echo(f"\n[INFO] Summary of {settings.app_name} collections configured:")
    for collection in collections:
        click.echo(f"  - {collection.name}: {collection.summary}")

    click.echo(
        f"\n[INFO] Attributes: {report.count_fields(Outcome.CREATED)} created, "
        f"{report.count_fields(Outcome.SKIPPED)} skipped, "
        f"{report.count_fields(Outcome.FAILED)} failed"
    )
    click.echo(
        f"[INFO] Indexes: {report.count_indexes(Outcome.CREATED)} created, "
        f"{report.count_indexes(Outcome.SKIPPED)} skipped, "
        f"{report.count_indexes(Outcome.FAILED)} failed"
    )

    if report.has_errors:
        click.echo("\n[WARN] Some collections or items were not applied. Fix the errors above and re-run.")
    else:
        click.echo(f"\n[SUCCESS] Your {settings.app_name} database schema is ready!")


@click.command()
@click.version_option(version=__version__, prog_name="arbantv-setup")
def cli() -> None:
    """Create the ArbanTv collection attributes and indexes on Appwrite.

    Connection values and collection IDs are read from the environment
    (or a .env file). Re-running is safe: existing attributes and indexes
    are skipped.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        click.echo(f"[CRITICAL] Database setup failed: invalid configuration\n{e}", err=True)
        raise SystemExit(1)

    configure_logging(settings)

    click.echo(f"[START] Starting {settings.app_name} database attributes setup...")

    try:
        collections = build_collections(settings)
        SchemaValidator.ensure_valid(collections)
        report = asyncio.run(run_setup(settings, collections))
    except Exception as e:
        logger.debug("Database setup failed", exc_info=True)
        click.echo(f"[CRITICAL] Database setup failed: {e}", err=True)
        raise SystemExit(1)

    _print_summary(settings, collections, report)
    click.echo("Setup completed successfully")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `arbantv-setup` command is run
    or when using `python -m arbantv_setup`.
    """
    cli()


if __name__ == "__main__":
    main()
