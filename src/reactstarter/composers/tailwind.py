"""Tailwind CSS v4 through the official Vite plugin."""

from __future__ import annotations

from pathlib import Path

from reactstarter.composers.base import ComposeResult, Composer, patch_document, write_file
from reactstarter.documents import SourceDocument
from reactstarter.models import Feature


VITE_CONFIG = "vite.config.ts"
STYLESHEET = "src/index.css"

PLUGIN_MODULE = "@tailwindcss/vite"
PLUGIN_IMPORT = f"import tailwindcss from '{PLUGIN_MODULE}'"
PLUGIN_CALL = "tailwindcss()"

STYLESHEET_CONTENT = '@import "tailwindcss";\n'


def _register_plugin(document: SourceDocument) -> None:
    # Array first: if there is no plugins array the import must not be added.
    document.insert_array_item("plugins", PLUGIN_CALL)
    document.add_import(PLUGIN_IMPORT)


def apply(project_dir: Path) -> ComposeResult:
    result = ComposeResult(feature=Feature.TAILWIND)

    write_file(project_dir, STYLESHEET, STYLESHEET_CONTENT, result)
    patch_document(project_dir, VITE_CONFIG, result, _register_plugin)

    return result


COMPOSER = Composer(
    feature=Feature.TAILWIND,
    title="Setting up Tailwind CSS",
    apply=apply,
    dev_dependencies=("tailwindcss", PLUGIN_MODULE),
)
