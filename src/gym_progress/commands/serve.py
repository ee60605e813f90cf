"""API server command."""

import logging

import click

from ..db import get_db_path
from .base import ensure_initialized


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Restart on code changes (development only)")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool):
    """Serve the JSON API with uvicorn.

    Callers identify themselves with the X-Member-Id or X-Trainer-Id
    header, set by the session layer in front of this service.
    Interactive docs are served under /docs.

    Examples:

        gym-progress serve

        gym-progress serve --host 0.0.0.0 --port 3000
    """
    ensure_initialized(ctx)

    import uvicorn

    from ..web import create_app

    click.echo(click.style("gym-progress API", fg="green", bold=True))
    click.echo(f"  Database: {get_db_path()}")
    click.echo(f"  Listening on http://{host}:{port} (docs at /docs)")
    click.echo()

    log_level = logging.getLevelName(logging.getLogger().getEffectiveLevel()).lower()

    # The reloader imports the factory by name in a subprocess
    uvicorn.run(
        "gym_progress.web:create_app" if reload else create_app(),
        host=host,
        port=port,
        reload=reload,
        factory=reload,
        log_level=log_level,
    )
