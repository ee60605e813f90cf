"""Initialize project command."""

import click

from ..db import get_data_dir, get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the gym-progress data directory and database.

    Creates the SQLite database with the members, plans, progress and
    fitness goal tables. Safe to run more than once.
    """
    data_dir = get_data_dir()
    echo_info(f"Initializing gym-progress in {data_dir}")

    db_path = get_db_path(data_dir)
    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Register a member:")
    click.echo('     gym-progress members add "Jane Doe" jane@example.com')
    click.echo()
    click.echo("  2. Assign a weekly plan:")
    click.echo("     gym-progress plans create plan.json --trainer-id 1")
    click.echo()
    click.echo("  3. Check today's workout:")
    click.echo("     gym-progress workout today 1")
