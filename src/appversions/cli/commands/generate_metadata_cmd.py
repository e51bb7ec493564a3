import logging
from pathlib import Path

import click

from appversions.cli.output import user_output
from appversions.core.context import VersionsContext
from appversions.core.ownership import share_with_group
from appversions.core.registry import Registry

logger = logging.getLogger(__name__)


def write_metadata_file(ctx: VersionsContext, registry: Registry) -> Path:
    """Write the host snapshot to the configured temporary directory.

    Returns:
        Path of the written snapshot file
    """
    path = ctx.config.metadata_path
    document = registry.snapshot().model_dump_json(indent=2)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document + "\n", encoding="utf-8")
    share_with_group(path, ctx.config.group_ownership)
    logger.debug("Generated metadata file %s", path)
    return path


@click.command("generate-metadata-file")
@click.pass_obj
def generate_metadata_file_cmd(ctx: VersionsContext) -> None:
    """Generate the snapshot file that `update` uploads."""
    path = write_metadata_file(ctx, ctx.build_registry())
    user_output(f"Generated metadata file {path}")
