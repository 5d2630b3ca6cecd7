"""Load project, folder and document metadata YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .helpers import (
    _as_bool,
    _as_int,
    _as_str,
    _as_str_list,
    _optional_str,
    _require_mapping,
)
from .models import (
    DEFAULT_BASE_URL,
    DEFAULT_BUILD_PATH,
    DEFAULT_PROJECT_NAME,
    DEFAULT_PYGMENTS_STYLE,
    FolderDetails,
    FrontMatter,
    ProjectConfigError,
    ProjectDetails,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

PROJECT_FILE = "codex.yml"
FOLDER_FILE = "group.yml"


def _load_yaml(text: str, *, source: str) -> dict[str, typ.Any]:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(text)
    except YAMLError as exc:
        msg = f"Could not parse YAML in {source}: {exc}"
        raise ProjectConfigError(msg) from exc
    return _require_mapping(loaded, source=source)


def load_project_details(root: Path) -> ProjectDetails:
    """Read ``codex.yml`` from ``root``.

    Parameters
    ----------
    root : Path
        Project directory.

    Returns
    -------
    ProjectDetails
        Parsed settings, or defaults when the file does not exist.

    Raises
    ------
    ProjectConfigError
        If the file exists but is not a valid mapping of settings.

    Examples
    --------
    >>> from pathlib import Path
    >>> from codex_pages.config import load_project_details
    >>> load_project_details(Path("docs")).base_url  # doctest: +SKIP
    '/'
    """
    path = root / PROJECT_FILE
    if not path.is_file():
        return ProjectDetails()
    raw = _load_yaml(path.read_text(encoding="utf-8"), source=str(path))
    return ProjectDetails(
        name=_as_str(raw.get("name"), DEFAULT_PROJECT_NAME),
        author=_optional_str(raw.get("author")),
        build_path=_as_str(raw.get("build_path"), DEFAULT_BUILD_PATH),
        repo_url=_optional_str(raw.get("repo_url")),
        project_page=_optional_str(raw.get("project_page")),
        base_url=_as_str(raw.get("base_url"), DEFAULT_BASE_URL),
        pygments_style=_as_str(raw.get("pygments_style"), DEFAULT_PYGMENTS_STYLE),
    )


def load_folder_details(folder: Path) -> FolderDetails:
    """Read ``group.yml`` from ``folder``, returning defaults when absent."""
    path = folder / FOLDER_FILE
    if not path.is_file():
        return FolderDetails()
    raw = _load_yaml(path.read_text(encoding="utf-8"), source=str(path))
    return FolderDetails(
        name=_optional_str(raw.get("name")),
        menu_position=_as_int(raw.get("menu_position"), key="menu_position"),
        menu_exclude=_as_bool(raw.get("menu_exclude"), key="menu_exclude"),
    )


def parse_frontmatter(text: str | None, *, source: str = "frontmatter") -> FrontMatter:
    """Build :class:`FrontMatter` from a YAML block; ``None`` yields defaults."""
    if text is None or not text.strip():
        return FrontMatter()
    raw = _load_yaml(text, source=source)
    return FrontMatter(
        title=_as_str(raw.get("title")),
        subtitle=_optional_str(raw.get("subtitle")),
        tags=_as_str_list(raw.get("tags"), key="tags"),
        menu_position=_as_int(raw.get("menu_position"), key="menu_position"),
        menu_exclude=_as_bool(raw.get("menu_exclude"), key="menu_exclude"),
        json_schema=_optional_str(raw.get("json_schema")),
        pdf_exclude=_as_bool(raw.get("pdf_exclude"), key="pdf_exclude"),
    )


__all__ = [
    "FOLDER_FILE",
    "PROJECT_FILE",
    "load_folder_details",
    "load_project_details",
    "parse_frontmatter",
]
