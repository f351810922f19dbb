from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import click

from ..settings import Settings


def load_settings(ctx: click.Context, **overrides: Any) -> Settings:
    """Load settings for a command, exiting with a readable error if invalid."""
    env_file = (ctx.obj or {}).get("env_file")
    changes = {k: v for k, v in overrides.items() if v is not None}
    try:
        settings = Settings.from_env(Path(env_file) if env_file else None)
        if changes:
            settings = settings.with_overrides(**changes)
    except ValueError as exc:
        click.secho(f"ERROR: Invalid configuration: {exc}", fg="red")
        sys.exit(1)
    return settings
