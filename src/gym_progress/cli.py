"""CLI entry point for gym-progress."""

import logging

import click

from . import __version__
from .commands import goals, init, members, plans, serve, workout


@click.group()
@click.version_option(version=__version__, prog_name="gym-progress")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
def main(log_level: str):
    """gym-progress: weekly workout plans, daily progress and fitness goals.

    Example usage:

        # Initialize the database
        gym-progress init

        # Register a member and give them a plan
        gym-progress members add "Jane Doe" jane@example.com
        gym-progress plans create plan.json --trainer-id 1

        # Check off today's exercises
        gym-progress workout today 1
        gym-progress workout toggle 1 1 "Squats"

        # Serve the JSON API
        gym-progress serve
    """
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register commands
main.add_command(init)
main.add_command(members)
main.add_command(plans)
main.add_command(workout)
main.add_command(goals)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
