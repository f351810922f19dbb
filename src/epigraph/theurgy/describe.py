"""
Theurgy Describe - Print the action descriptor.
"""

from __future__ import annotations

import json
import sys

import click

from ..errors import MetadataValidationError
from ..spec.metadata import describe as describe_action
from .context import load_settings


@click.command()
@click.option(
    "--base-url",
    envvar="EPIGRAPH_API_URL",
    default="http://localhost:3000",
    help="Public base URL of the service",
)
@click.pass_context
def describe(ctx: click.Context, base_url: str) -> None:
    """Print the validated action descriptor as JSON."""
    settings = load_settings(ctx)

    try:
        descriptor = describe_action(base_url, settings)
    except MetadataValidationError as exc:
        click.secho(f"ERROR: Failed to create metadata: {exc}", fg="red")
        for line in exc.errors[1:]:
            click.echo(f"  - {line}")
        sys.exit(exc.exit_code)

    click.echo(json.dumps(descriptor.to_dict(), indent=2))
