"""Output utilities for CLI commands with clear intent.

Human-facing messages (warnings, progress) go to stderr via user_output().
Data meant for pipes (listings, tables, JSON) goes to stdout via
machine_output() or the console returned by data_console().
"""

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import click
from rich.console import Console


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a message for the operator to stderr."""
    click.echo(message, nl=nl, err=True)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Write data to stdout."""
    click.echo(message, nl=nl)


def warn(message: str) -> None:
    user_output(click.style("Warning: ", fg="yellow", bold=True) + message)


def data_console() -> Console:
    """Rich console writing to stdout.

    Off a terminal the width is fixed so piped tables are never wrapped.
    """
    if sys.stdout.isatty():
        return Console(highlight=False)
    return Console(file=sys.stdout, highlight=False, width=240)


def _serialize_for_json(obj: Any) -> Any:
    """Recursively serialize Path and datetime values for JSON."""
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {key: _serialize_for_json(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_serialize_for_json(item) for item in obj]
    return obj


def emit_json(data: Any) -> None:
    """Output JSON data to stdout in one write.

    For Pydantic models, call model.model_dump(mode='json') before passing
    them in.
    """
    machine_output(json.dumps(_serialize_for_json(data), indent=2))
