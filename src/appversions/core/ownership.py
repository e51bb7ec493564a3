"""Group ownership adjustment for files shared between deploy users."""

import logging
import os
import shutil
import stat
from pathlib import Path

logger = logging.getLogger(__name__)


def share_with_group(path: Path, group: str | None) -> None:
    """Hand a written file to ``group`` and make it group-writable.

    Metadata files are rewritten by whichever deploy user runs next, so they
    must stay writable for the shared group. Failing to adjust ownership never
    blocks persistence: errors are logged at debug level and dropped.
    """
    if not group:
        return
    try:
        shutil.chown(path, group=group)
        mode = path.stat().st_mode
        os.chmod(path, stat.S_IMODE(mode) | stat.S_IWGRP)
    except (LookupError, OSError) as e:
        logger.debug("Could not share %s with group %s: %s", path, group, e)
