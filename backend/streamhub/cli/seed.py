"""``flask seed``: demo channels, videos, likes and subscriptions."""

from __future__ import annotations

import logging
from collections.abc import Callable

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from streamhub.core.extensions import db
from streamhub.seeds import seed_data

LOGGER = logging.getLogger(__name__)

Summary = dict[str, dict[str, int]]


def _seed_or_abort(run: Callable[[], Summary], label: str) -> None:
    """Run a seeding step and print per-table counters.

    :raises click.ClickException: When the database rejects the seed; the
        session is rolled back first.
    """
    try:
        summary = run()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise click.ClickException(f"{label} failed: {exc}") from exc

    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(map(len, summary))
    for table in sorted(summary):
        counters = summary[table]
        click.echo(
            f"  {table.ljust(width)}  created={counters.get('created', 0):>2}"
            f"  existing={counters.get('existing', 0):>2}"
        )


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log each seeding stage.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Populate a development database."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    level = logging.DEBUG if verbose else logging.INFO
    for name in (seed_data.__name__, __name__):
        logging.getLogger(name).setLevel(level)


@seed_cli.command("demo")
@click.pass_context
@with_appcontext
def demo_command(ctx: click.Context) -> None:
    """Create the demo rows that are missing; existing rows are left alone."""
    verbose = bool(ctx.obj.get("verbose", False))
    _seed_or_abort(lambda: seed_data.run_all(db, verbose=verbose), "Seeding")


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop and recreate every table, then seed. Refused outside debug/testing."""
    if not (current_app.config.get("DEBUG") or current_app.config.get("TESTING")):
        raise click.UsageError("'flask seed fresh' only runs with DEBUG or TESTING enabled.")
    if not yes:
        click.confirm("Drop ALL tables and recreate them?", abort=True)

    LOGGER.info("seed.fresh.reset_schema")
    db.session.remove()
    db.drop_all()
    db.create_all()

    verbose = bool(ctx.obj.get("verbose", False))
    _seed_or_abort(lambda: seed_data.run_all(db, verbose=verbose), "Fresh seed")
