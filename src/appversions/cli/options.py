"""Reusable click options."""

import re
from collections.abc import Callable
from typing import Any

import click

from appversions.core.filters import compile_filters


def _compile_patterns(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> list[re.Pattern[str]]:
    try:
        return compile_filters(value)
    except ValueError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


def _compile_optional_pattern(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> re.Pattern[str] | None:
    if not value:
        return None
    return _compile_patterns(ctx, param, (value,))[0]


def json_option() -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    return click.option("-j", "--json", "as_json", is_flag=True, help="Output JSON.")


def filter_option(help_text: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Repeatable ``-f/--filter REGEXP`` compiled to a list of patterns."""
    return click.option(
        "-f",
        "--filter",
        "filters",
        multiple=True,
        metavar="REGEXP",
        callback=_compile_patterns,
        help=f"{help_text} Repeat to require several patterns.",
    )


def last_modified_option() -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    return click.option(
        "-m",
        "--filter-last-modified",
        "last_modified",
        metavar="REGEXP",
        callback=_compile_optional_pattern,
        help="Only snapshots whose last-modified time matches, e.g. 2024-05.",
    )
