"""Behaviour tests for site navigation and link rewriting.

These pytest-bdd scenarios drive ``site_navigation.feature``: they build a
temporary project with :class:`SiteBuilder` and check the generated sidebar
and links in the written HTML.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from codex_pages.project import Project
from codex_pages.site import SiteBuilder

if typ.TYPE_CHECKING:
    from conftest import ProjectFactory

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "site_navigation.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _page(scenario_state: dict[str, object], relative: str) -> BeautifulSoup:
    dist = typ.cast("Path", scenario_state["dist"])
    path = dist / relative
    assert path.is_file(), f"expected {relative} to be written"
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


@given("a project with a page excluded from the menu")
def given_excluded_page(
    make_project: ProjectFactory, scenario_state: dict[str, object]
) -> None:
    """Write a project whose drafts page opts out of the navigation."""
    scenario_state["root"] = make_project(
        {
            "index.md": "---\ntitle: Home\n---\nWelcome.\n",
            "drafts.md": "---\ntitle: Drafts\nmenu_exclude: true\n---\nWork in progress.\n",
            "about.md": "---\ntitle: About\n---\nAbout us.\n",
        }
    )


@given("a project served below a base URL")
def given_base_url(
    make_project: ProjectFactory, scenario_state: dict[str, object]
) -> None:
    """Write a project configured with ``base_url: /handbook/``."""
    scenario_state["root"] = make_project(
        {
            "codex.yml": "name: Handbook\nbase_url: /handbook/\n",
            "index.md": (
                "---\ntitle: Home\n---\n"
                "See [the policies](/policies) or [the wiki](https://wiki.example.com).\n"
            ),
            "policies.md": "---\ntitle: Policies\n---\nBe kind.\n",
        }
    )


@when("I build the site")
def when_build_site(scenario_state: dict[str, object]) -> None:
    """Build the project into its default build directory."""
    project = Project.load(typ.cast("Path", scenario_state["root"]))
    report = SiteBuilder(project).run()
    assert report.ok, f"expected a clean build, got {report.failures!r}"
    scenario_state["dist"] = project.build_dir


@then("the navigation does not list the excluded page")
def then_nav_excludes(scenario_state: dict[str, object]) -> None:
    """Verify the sidebar lists the visible pages only, sorted by title."""
    nav = _page(scenario_state, "index.html").find("nav")
    assert nav is not None, "expected a navigation sidebar"
    titles = [a.get_text() for a in nav.find_all("a", class_="nav-link")]
    assert titles == ["About", "Home"], f"unexpected navigation entries {titles!r}"


@then("the excluded page is still written to the site")
def then_excluded_written(scenario_state: dict[str, object]) -> None:
    """Verify menu exclusion does not stop the page from being published."""
    soup = _page(scenario_state, "drafts/index.html")
    assert soup.title is not None
    assert soup.title.get_text().startswith("Drafts"), "expected the drafts page title"


@then("internal links on the home page are prefixed with the base URL")
def then_internal_links(scenario_state: dict[str, object]) -> None:
    """Verify project-relative links gain the configured base URL."""
    article = _page(scenario_state, "index.html").find("article")
    assert article is not None, "expected an article element"
    link = article.find("a", string="the policies")
    assert link is not None, "expected the internal link in the article"
    assert link["href"] == "/handbook/policies", f"unexpected href {link['href']!r}"


@then("external links are left unchanged")
def then_external_links(scenario_state: dict[str, object]) -> None:
    """Verify absolute URLs are not rewritten."""
    article = _page(scenario_state, "index.html").find("article")
    assert article is not None, "expected an article element"
    link = article.find("a", string="the wiki")
    assert link is not None, "expected the external link in the article"
    assert link["href"] == "https://wiki.example.com"
