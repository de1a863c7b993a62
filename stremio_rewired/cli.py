"""Command line tools for developing addons."""

from typing import Optional

import typer
import uvicorn

from .launch import launch as open_inspector
from .settings import get_settings, setup_logging

app = typer.Typer(
    name="stremio-rewired",
    help="A tool to help you develop Stremio addons",
    no_args_is_help=True,
    add_completion=False,
)


@app.command()
def launch(
    port: int = typer.Option(3000, "--port", "-p", min=1, max=65535, help="The port the addon is served on"),
) -> None:
    """Open the Stremio staging web app with the local addon installed."""
    settings = get_settings()
    url = open_inspector(port, settings.staging_url)
    typer.echo(url)


@app.command()
def serve(
    target: str = typer.Argument(..., help="FastAPI app import string, e.g. unity_addon.main:app"),
    host: Optional[str] = typer.Option(None, "--host", help="Server host address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", min=1, max=65535, help="Server port number"),
    open_browser: bool = typer.Option(False, "--launch", help="Open the staging inspector once started"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
) -> None:
    """Serve an addon with uvicorn."""
    settings = get_settings()
    setup_logging(settings.log_level)
    host = host or settings.host
    port = port or settings.port

    if open_browser:
        open_inspector(port, settings.staging_url)

    uvicorn.run(target, host=host, port=port, reload=reload, log_level=settings.log_level.lower())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
