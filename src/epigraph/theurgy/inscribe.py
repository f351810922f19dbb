"""
Theurgy Inscribe - Build and serialize a storeMessage transaction.

Produces the same ExecutionResponse the HTTP endpoint returns, without
starting a server. Nothing is signed or sent.
"""

from __future__ import annotations

import json
import sys
from typing import Optional

import click

from ..errors import EpigraphError
from ..handler import build_and_serialize
from ..settings import CHAIN_ID_FORMATS, TRANSACTION_MODES
from .context import load_settings


@click.command()
@click.argument("message", required=False)
@click.option("--now", type=int, default=None, help="Current Unix time in seconds (default: wall clock)")
@click.option(
    "--optimized/--raw",
    "optimized",
    default=None,
    help="Apply the message-derived timestamp offset (default: EPIGRAPH_OPTIMIZED_TIMESTAMP)",
)
@click.option("--chain", default=None, help="Target chain key (e.g. fuji)")
@click.option("--chain-id-format", type=click.Choice(CHAIN_ID_FORMATS), default=None)
@click.option("--mode", type=click.Choice(TRANSACTION_MODES), default=None, help="Transaction mode")
@click.pass_context
def inscribe(
    ctx: click.Context,
    message: Optional[str],
    now: Optional[int],
    optimized: Optional[bool],
    chain: Optional[str],
    chain_id_format: Optional[str],
    mode: Optional[str],
) -> None:
    """Build the unsigned transaction for MESSAGE and print it as JSON."""
    settings = load_settings(
        ctx,
        use_optimized_timestamp=optimized,
        chain=chain,
        chain_id_format=chain_id_format,
        transaction_mode=mode,
    )

    try:
        response = build_and_serialize(message, settings, now=now)
    except EpigraphError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(exc.exit_code)

    click.echo(json.dumps(response.to_dict(), indent=2))
