"""Output directory preparation."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


class WorkspaceError(RuntimeError):
    """Output directory could not be cleaned or created."""


def prepare_output_dir(output_dir: Path, *, clean: bool = False) -> Path:
    """Create ``output_dir``; with ``clean`` remove it and its contents first."""

    if clean and output_dir.exists():
        logger.info("Clean requested, removing output directory %s", output_dir)
        try:
            if output_dir.is_dir() and not output_dir.is_symlink():
                shutil.rmtree(output_dir)
            else:
                output_dir.unlink()
        except OSError as error:
            raise WorkspaceError(
                f"Cannot clean output directory {str(output_dir)!r}: {error}",
            ) from error

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise WorkspaceError(
            f"Cannot create output directory {str(output_dir)!r}: {error}",
        ) from error
    return output_dir
