"""
Epigraph CLI

Command-line interface for the Epigraph store-message action.

The action is served over HTTP to wallet clients; the remaining commands
run the same builders locally for inspection and scripting.

Commands:
  serve     - Run the HTTP action endpoint
  describe  - Print the action descriptor
  inscribe  - Build and serialize a storeMessage transaction
  decipher  - Decode a serialized transaction
  info      - Show effective configuration
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from . import __version__
from .spec.metadata import ACTION_PATH
from .theurgy.context import load_settings


# ============ Banner ============


def _print_banner() -> None:
    """Print the Epigraph CLI banner."""
    border = click.style("  ◆ ═══════════════════════════════════════ ◆", fg="cyan")
    click.echo()
    click.echo(border)
    click.echo()
    click.echo(
        click.style("        E P I G R A P H", fg="bright_white", bold=True)
        + click.style(f"        v{__version__}", dim=True)
    )
    click.secho("        ─── On-chain Message Action ───", fg="cyan")
    click.echo()
    click.echo(border)
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="epigraph")
@click.option(
    "--env-file",
    default=".env",
    envvar="EPIGRAPH_ENV_FILE",
    type=click.Path(dir_okay=False),
    help="Optional .env file loaded before reading EPIGRAPH_* settings",
)
@click.pass_context
def cli(ctx: click.Context, env_file: Optional[str]) -> None:
    """Epigraph: store messages on-chain through a wallet action."""
    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.serve import serve
from .theurgy.describe import describe
from .theurgy.inscribe import inscribe
from .theurgy.decipher import decipher

cli.add_command(serve)
cli.add_command(describe)
cli.add_command(inscribe)
cli.add_command(decipher)


# ============ Info ============


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show effective configuration."""
    settings = load_settings(ctx)
    chain = settings.target_chain

    _print_banner()

    # ── Action ──
    click.secho("  Action ─────────────────────────────────", fg="cyan")
    click.echo()

    rows = [
        ("Route:      ", ACTION_PATH),
        ("Base URL:   ", settings.base_url or "derived from request"),
        ("Chain:      ", f"{chain.name} ({chain.id})"),
        ("Chain ID as:", settings.chain_id_format),
        ("Mode:       ", settings.transaction_mode),
    ]
    if settings.transaction_mode == "transfer":
        rows.append(("Recipient:  ", settings.recipient_address))
        rows.append(("Value:      ", f"{settings.transfer_value} wei"))
    else:
        rows.append(("Contract:   ", settings.contract_address))
        rows.append(("ABI:        ", settings.contract_name))
        rows.append(("Timestamp:  ", "optimized" if settings.use_optimized_timestamp else "raw"))

    for label, value in rows:
        click.echo(
            click.style(f"  {label} ", dim=True)
            + click.style(str(value), fg="bright_white")
        )

    click.echo()


# ============ Entry Points ============


def main() -> None:
    """Epigraph CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass  # Fallback: old Python or non-tty
    cli()


if __name__ == "__main__":
    main()
