"""
reactstarter - React Project Scaffolding
========================================

A CLI that creates a new React project from the custom React starter
template (Vite + React + TanStack Router) and optionally wires in Tailwind
CSS, i18next, authentication page stubs and TanStack Query.

Quick Start
-----------
```bash
pip install react-starter

# Interactive mode
react-starter

# Flags
react-starter my-app --pm bun --tailwind --i18n
react-starter my-app --all
```

Example
-------
>>> from reactstarter import Feature, create_project, resolve_options
>>> options = resolve_options("my-app", features={Feature.TAILWIND})
>>> result = create_project(options)
>>> result.success
True

Architecture
------------
- ``cli``: Typer command line interface and questionary prompts
- ``resolver``: Builds validated ``ProjectOptions`` from raw input
- ``fetcher``: Shallow clone of the template, package.json rewrite
- ``installer``: Package manager invocations
- ``composers``: One module per optional feature
- ``documents``: Structured model of the source files composers edit
- ``finalizer``: Removes template leftovers, initializes git
- ``pipeline``: Runs the stages in order
- ``settings``: TOML/environment defaults
- ``models``: Pydantic models and enums

License
-------
MIT License.
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from reactstarter.errors import StarterError
from reactstarter.models import Feature, PackageManager, ProjectOptions
from reactstarter.pipeline import ScaffoldResult, Stage, create_project
from reactstarter.resolver import resolve_options


__all__ = [
    "Feature",
    "PackageManager",
    "ProjectOptions",
    "ScaffoldResult",
    "Stage",
    "StarterError",
    "__version__",
    "create_project",
    "resolve_options",
]
