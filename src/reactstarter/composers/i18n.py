"""
i18n composer
=============

Adds i18next with HTTP backend and browser language detection.

Files
-----
- ``locales/<lang>/translation.json``: resource maps with the keys
  ``welcome``, ``description`` and ``language``. Existing files are kept so
  translations edited by the user survive a re-run.
- ``src/i18n.ts``: library initialization, ``fallbackLng: 'en'``.
- ``src/@types/i18n.d.ts``: module augmentation giving typed keys.
- ``src/main.tsx``: imports the instance and wraps the router in
  ``<I18nextProvider>``.
"""

from __future__ import annotations

import json
from pathlib import Path

from reactstarter.composers.base import (
    ComposeResult,
    Composer,
    patch_document,
    render_template,
    write_file,
    write_new_file,
)
from reactstarter.documents import SourceDocument
from reactstarter.models import Feature


FALLBACK_LOCALE = "en"

# Keys must be identical across locales; the type augmentation is derived
# from the fallback locale.
TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "welcome": "Welcome to the React App!",
        "description": "This is a custom React starter template.",
        "language": "Language",
    },
    "tr": {
        "welcome": "React Uygulamasına Hoşgeldiniz!",
        "description": "Bu, özel bir React başlangıç şablonudur.",
        "language": "Dil",
    },
}

ENTRY_FILE = "src/main.tsx"
CONFIG_FILE = "src/i18n.ts"
TYPES_FILE = "src/@types/i18n.d.ts"

ROUTER_ELEMENT = "<RouterProvider router={router} />"
INSTANCE_IMPORT = "import i18n from './i18n'"
PROVIDER_IMPORT = "import { I18nextProvider } from 'react-i18next'"
PROVIDER_OPEN = "<I18nextProvider i18n={i18n}>"
PROVIDER_CLOSE = "</I18nextProvider>"


def locale_path(locale: str) -> str:
    return f"locales/{locale}/translation.json"


def _wrap_router(document: SourceDocument) -> None:
    document.wrap_element(ROUTER_ELEMENT, PROVIDER_OPEN, PROVIDER_CLOSE, marker="<I18nextProvider")
    document.add_import(INSTANCE_IMPORT, before="./index.css")
    document.add_import(PROVIDER_IMPORT, before="./index.css")


def apply(project_dir: Path) -> ComposeResult:
    result = ComposeResult(feature=Feature.I18N)

    locales = [FALLBACK_LOCALE, *(code for code in TRANSLATIONS if code != FALLBACK_LOCALE)]
    context = {"locales": locales, "fallback": FALLBACK_LOCALE}

    for locale in locales:
        content = json.dumps(TRANSLATIONS[locale], indent=2, ensure_ascii=False) + "\n"
        write_new_file(project_dir, locale_path(locale), content, result)

    write_file(project_dir, CONFIG_FILE, render_template("i18n.ts.j2", **context), result)
    write_file(project_dir, TYPES_FILE, render_template("i18n.d.ts.j2", **context), result)
    patch_document(project_dir, ENTRY_FILE, result, _wrap_router)

    return result


COMPOSER = Composer(
    feature=Feature.I18N,
    title="Configuring multi-language support",
    apply=apply,
    dependencies=(
        "i18next",
        "react-i18next",
        "i18next-http-backend",
        "i18next-browser-languagedetector",
    ),
)
