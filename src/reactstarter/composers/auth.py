"""Placeholder login/register routes under a pathless auth layout."""

from __future__ import annotations

from pathlib import Path

from reactstarter.composers.base import ComposeResult, Composer, render_template, write_new_file
from reactstarter.models import Feature


ROUTES_DIR = "src/routes"
LAYOUT = "_layout_auth"
PAGES = ("login", "register")


def apply(project_dir: Path) -> ComposeResult:
    result = ComposeResult(feature=Feature.AUTH_PAGES)
    layout_id = f"/{LAYOUT}"

    if not (project_dir / ROUTES_DIR).is_dir():
        result.warnings.append(
            f"{ROUTES_DIR} not found; the template may not use file-based routing"
        )

    write_new_file(
        project_dir,
        f"{ROUTES_DIR}/{LAYOUT}.tsx",
        render_template("auth_layout.tsx.j2", layout=layout_id),
        result,
    )

    for page in PAGES:
        write_new_file(
            project_dir,
            f"{ROUTES_DIR}/{LAYOUT}/{page}.tsx",
            render_template("auth_page.tsx.j2", layout=layout_id, route_path=f"{layout_id}/{page}"),
            result,
        )

    return result


COMPOSER = Composer(
    feature=Feature.AUTH_PAGES,
    title="Setting up authentication pages",
    apply=apply,
)
