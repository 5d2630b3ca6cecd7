"""Load project, folder and document metadata for codex documentation projects.

A project directory carries an optional ``codex.yml`` with project-wide
settings, optional ``group.yml`` files describing how folders appear in the
navigation, and a YAML frontmatter block at the top of each markdown document.
This subpackage parses all three into dataclasses with documented defaults.

Examples
--------
>>> from pathlib import Path
>>> from codex_pages.config import load_project_details, parse_frontmatter
>>> details = load_project_details(Path("docs"))  # doctest: +SKIP
>>> parse_frontmatter("title: Intro\\nmenu_position: 2").menu_position
2
"""

from .loader import (
    FOLDER_FILE,
    PROJECT_FILE,
    load_folder_details,
    load_project_details,
    parse_frontmatter,
)
from .models import (
    FolderDetails,
    FrontMatter,
    ProjectConfigError,
    ProjectDetails,
    normalize_base_url,
)

__all__ = [
    "FOLDER_FILE",
    "PROJECT_FILE",
    "FolderDetails",
    "FrontMatter",
    "ProjectConfigError",
    "ProjectDetails",
    "load_folder_details",
    "load_project_details",
    "normalize_base_url",
    "parse_frontmatter",
]
