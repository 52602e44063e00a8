"""
TanStack Query: a shared ``QueryClient``, its provider around the router and
the devtools panel in the root route.
"""

from __future__ import annotations

from pathlib import Path

from reactstarter.composers.base import ComposeResult, Composer, patch_document
from reactstarter.documents import SourceDocument
from reactstarter.models import Feature


ENTRY_FILE = "src/main.tsx"
ROOT_ROUTE = "src/routes/__root.tsx"

ROUTER_ELEMENT = "<RouterProvider router={router} />"
OUTLET_ELEMENT = "<Outlet />"

CLIENT_IMPORT = "import { QueryClient, QueryClientProvider } from '@tanstack/react-query'"
CLIENT_DECLARATION = "const queryClient = new QueryClient()"
PROVIDER_OPEN = "<QueryClientProvider client={queryClient}>"
PROVIDER_CLOSE = "</QueryClientProvider>"

DEVTOOLS_IMPORT = "import { ReactQueryDevtools } from '@tanstack/react-query-devtools'"
DEVTOOLS_ELEMENT = "<ReactQueryDevtools initialIsOpen={false} />"


def _wrap_router(document: SourceDocument) -> None:
    document.wrap_element(
        ROUTER_ELEMENT, PROVIDER_OPEN, PROVIDER_CLOSE, marker="<QueryClientProvider"
    )
    document.add_import(CLIENT_IMPORT, before="./index.css")
    document.insert_after_imports(CLIENT_DECLARATION, marker="new QueryClient(")


def _render_devtools(document: SourceDocument) -> None:
    document.insert_after_element(OUTLET_ELEMENT, DEVTOOLS_ELEMENT, marker="<ReactQueryDevtools")
    document.add_import(DEVTOOLS_IMPORT)


def apply(project_dir: Path) -> ComposeResult:
    result = ComposeResult(feature=Feature.DATA_FETCHING)

    patch_document(project_dir, ROOT_ROUTE, result, _render_devtools)
    patch_document(project_dir, ENTRY_FILE, result, _wrap_router)

    return result


COMPOSER = Composer(
    feature=Feature.DATA_FETCHING,
    title="Setting up TanStack Query",
    apply=apply,
    dependencies=("@tanstack/react-query",),
    dev_dependencies=("@tanstack/react-query-devtools",),
)
