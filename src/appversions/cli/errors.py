"""Error boundary for commands talking to object storage."""

from collections.abc import Callable
from functools import wraps
from typing import Any

from appversions.cli.output import warn
from appversions.core.storage.abc import AccessDeniedError

ACCESS_DENIED_EXIT_CODE = 1


def access_denied_message(error: AccessDeniedError) -> str:
    if error.credentials_supplied:
        return "Wrong credentials for object storage. Access denied. Abort."
    return "No credentials found for object storage. Access denied. Abort."


def storage_error_boundary(func: Callable) -> Callable:
    """Decorator turning access-denied storage errors into a warning and exit 1.

    Every other exception propagates unchanged.

    Example:
        @click.command("list-remote")
        @click.pass_obj
        @storage_error_boundary
        def list_remote_cmd(ctx: VersionsContext) -> None:
            ...
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except AccessDeniedError as e:
            warn(access_denied_message(e))
            raise SystemExit(ACCESS_DENIED_EXIT_CODE) from e

    return wrapper
