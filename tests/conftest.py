"""Shared fixtures for building throwaway documentation projects."""

from __future__ import annotations

import json
import typing as typ

import pytest

from codex_pages.project import Project
from codex_pages.renderer import RenderContext

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

ProjectFactory = typ.Callable[[typ.Mapping[str, str]], "Path"]
PageContextFactory = typ.Callable[..., RenderContext]

PATIENT_SCHEMA = {
    "type": "object",
    "properties": {
        "patientName": {"type": "string", "description": "Full legal name."},
        "allergies": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["patientName"],
}

SAMPLE_FILES: dict[str, str] = {
    "codex.yml": "name: Sample Docs\nauthor: Ada Lovelace\nbase_url: /docs/\n",
    "index.md": (
        "---\ntitle: Home\n---\n"
        "# Welcome\n\n"
        "Read the [setup guide](/guide/setup) or [Example](https://example.com).\n"
    ),
    "guide/group.yml": "name: User Guide\nmenu_position: 1\n",
    "guide/setup.md": (
        "---\ntitle: Setup\nsubtitle: Getting going\nmenu_position: 2\n"
        "tags: [install]\n---\n"
        "# Install Steps\n\n"
        "Run the installer.\n\n"
        "## Verify\n\n"
        '<CsvTable file="data.csv" />\n\n'
        '<CodeFile file="example.py" />\n'
    ),
    "guide/intro.md": "---\ntitle: Introduction\nmenu_position: 1\n---\nHello.\n",
    "guide/hidden.md": "---\ntitle: Hidden\nmenu_exclude: true\n---\nSecret.\n",
    "guide/data.csv": "name,age\nAda,36\nGrace,45\n",
    "guide/example.py": "def add(a, b):\n    return a + b\n",
    "api/record.md": (
        "---\ntitle: Patient record\njson_schema: schema.json\npdf_exclude: true\n---\n"
        "Describes a patient.\n"
    ),
    "api/schema.json": json.dumps(PATIENT_SCHEMA),
    "static/site.css": "body { margin: 0; }\n",
}


def write_files(root: Path, files: cabc.Mapping[str, str]) -> Path:
    """Write ``files`` (relative path to content) below ``root``."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_project(tmp_path: Path) -> ProjectFactory:
    """Return a factory that writes a project into ``tmp_path``."""

    def _make(files: typ.Mapping[str, str]) -> Path:
        return write_files(tmp_path / "project", files)

    return _make


@pytest.fixture
def sample_project_dir(make_project: ProjectFactory) -> Path:
    """Write the sample project used across renderer and builder tests."""
    return make_project(SAMPLE_FILES)


@pytest.fixture
def page_context(make_project: ProjectFactory) -> PageContextFactory:
    """Return a factory rendering ``page.md`` inside a minimal project.

    Extra files are written next to the page; ``config`` replaces the
    project's ``codex.yml``.
    """

    def _make(
        markdown: str,
        files: typ.Mapping[str, str] | None = None,
        *,
        config: str = "name: Test Project\n",
    ) -> RenderContext:
        root = make_project({"codex.yml": config, "page.md": markdown, **(files or {})})
        project = Project.load(root)
        document = project.get_document("page.md")
        assert document is not None, "page.md should be discovered"
        return RenderContext(project, document)

    return _make
