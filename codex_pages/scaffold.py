"""Create new projects and copy the packaged templates into existing ones.

``init_project`` writes a starter ``codex.yml`` into a fresh directory.
``eject_templates`` copies every file under the packaged ``_internal/``
directory into a project so it can be customised; the project copies then
take precedence over the packaged ones when rendering.
"""

from __future__ import annotations

import logging
import shutil
import typing as typ

from codex_pages._constants import PACKAGE_TEMPLATES_DIR, SCAFFOLD_CONFIG_TEMPLATE
from codex_pages.config import PROJECT_FILE
from codex_pages.errors import ProjectExistsError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

INTERNAL_DIRECTORY = "_internal"


def init_project(path: Path, *, templates_dir: Path | None = None) -> Path:
    """Create ``path`` and write a starter configuration into it.

    Parameters
    ----------
    path : Path
        Directory for the new project. It must not exist yet.
    templates_dir : Path, optional
        Replacement for the packaged templates directory.

    Returns
    -------
    Path
        The written ``codex.yml``.

    Raises
    ------
    ProjectExistsError
        If ``path`` already exists.
    """
    try:
        path.mkdir(parents=True)
    except FileExistsError as exc:
        msg = f"Path '{path}' already exists."
        raise ProjectExistsError(msg) from exc
    source = (templates_dir or PACKAGE_TEMPLATES_DIR) / SCAFFOLD_CONFIG_TEMPLATE
    target = path / PROJECT_FILE
    shutil.copyfile(source, target)
    logger.info("Created project at %s", path)
    return target


def eject_templates(root: Path, *, templates_dir: Path | None = None) -> list[Path]:
    """Copy the packaged templates into ``root/_internal``.

    Existing files are overwritten. The scaffold configuration is skipped
    because it only seeds new projects.
    """
    source_root = templates_dir or PACKAGE_TEMPLATES_DIR
    written: list[Path] = []
    for source in sorted((source_root / INTERNAL_DIRECTORY).rglob("*")):
        relative = source.relative_to(source_root)
        if not source.is_file() or relative.as_posix() == SCAFFOLD_CONFIG_TEMPLATE:
            continue
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        logger.debug("Ejected %s", relative.as_posix())
        written.append(target)
    return written


__all__ = ["INTERNAL_DIRECTORY", "eject_templates", "init_project"]
