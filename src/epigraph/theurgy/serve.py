"""
Theurgy Serve - Run the HTTP action endpoint.
"""

from __future__ import annotations

import logging
from typing import Optional

import click
import uvicorn

from ..api.app import create_app
from ..spec.metadata import ACTION_PATH
from .context import load_settings


@click.command()
@click.option("--host", default="127.0.0.1", envvar="EPIGRAPH_HOST", help="Bind address")
@click.option("--port", default=3000, type=int, envvar="EPIGRAPH_PORT", help="Bind port")
@click.option("--base-url", default=None, help="Public base URL (overrides EPIGRAPH_API_URL)")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, base_url: Optional[str]) -> None:
    """
    Serve the store-message action over HTTP.

    GET describes the action, POST returns the serialized transaction.
    """
    settings = load_settings(ctx, base_url=base_url)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    click.echo(f"  Action: http://{host}:{port}{ACTION_PATH}")
    click.echo(f"  Chain:  {settings.target_chain.name} ({settings.target_chain.id})")
    click.echo("")

    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())
