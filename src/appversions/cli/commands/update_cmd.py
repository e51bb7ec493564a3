import click

from appversions.cli.commands.generate_metadata_cmd import write_metadata_file
from appversions.cli.errors import storage_error_boundary
from appversions.cli.output import user_output
from appversions.core.application import VersionKind
from appversions.core.context import VersionsContext
from appversions.core.storage.abc import snapshot_key


@click.command("update")
@click.option("-a", "--application", help="Application whose version changed.")
@click.option("-v", "--version", "version", help="New version of the application.")
@click.option(
    "--previous",
    is_flag=True,
    help="Record the version as previous instead of promoting it to current.",
)
@click.pass_obj
@storage_error_boundary
def update_cmd(
    ctx: VersionsContext, application: str | None, version: str | None, previous: bool
) -> None:
    """Record a new version (optional) and upload this host's snapshot.

    \b
    Examples:
        # Upload the current local versions
        appversions update

        # Switch an application to a new version and upload
        appversions update -a billing -v 1.3.0
    """
    if (application is None) != (version is None):
        raise click.UsageError("--application and --version must be given together")

    registry = ctx.build_registry()
    if application is not None and version is not None:
        kind = VersionKind.PREVIOUS if previous else VersionKind.CURRENT
        registry.update(application, version, ctx.now(), kind=kind)

    path = write_metadata_file(ctx, registry)
    key = snapshot_key(ctx.config.environment_name, ctx.config.instance_id)
    ctx.store.upload(path, key)
    user_output(f"Uploaded {path.name} to {key}")
