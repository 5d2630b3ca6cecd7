"""Common literal values used across codex_pages.

Template locations are relative paths resolved against the project directory
first and the packaged ``templates`` directory second, so a project can
override any of them by creating the same file.

Examples
--------
>>> from codex_pages import _constants
>>> _constants.COMPONENT_TEMPLATE.format(name="callout", ext="html")
'_internal/components/callout.html'
"""

from pathlib import Path

PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

ARTICLE_TEMPLATE = "_internal/templates/article.html"
CODE_TEMPLATE = "_internal/templates/code.html"
LATEX_PRELUDE_TEMPLATE = "_internal/templates/prelude.tex"
SCAFFOLD_CONFIG_TEMPLATE = "_internal/templates/scaffold_config.yml"
COMPONENT_TEMPLATE = "_internal/components/{name}.{ext}"

LATEX_BOOK_FILENAME = "main.tex"
STATIC_DIRECTORY = "static"
