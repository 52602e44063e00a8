"""
reactstarter.models - Pydantic Models for Project Options
=========================================================

This module defines the data models shared by every pipeline stage. As in
the rest of the package, Pydantic is used for validation and immutability:
``ProjectOptions`` is built once by the resolver and is frozen for the rest
of the run.

Architecture Notes
------------------
    ProjectOptions (frozen)
    ├── name: str
    ├── package_manager: PackageManager (enum)
    ├── features: frozenset[Feature]
    ├── init_git: bool
    ├── output_dir: Path
    ├── template_url: str
    └── verbose: bool

Usage Example
-------------
>>> from reactstarter.models import Feature, PackageManager, ProjectOptions
>>> options = ProjectOptions(
...     name="my-app",
...     package_manager=PackageManager.PNPM,
...     features={Feature.TAILWIND},
... )
>>> options.package_manager.add_command(["tailwindcss"], dev=True)
['pnpm', 'add', '-D', 'tailwindcss']
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reactstarter.errors import InvalidNameError


# =============================================================================
# Constants
# =============================================================================

DEFAULT_TEMPLATE_URL = "https://github.com/blntgvn42/custom-react-starter"

PROJECT_NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")


def validate_project_name(raw: str) -> str:
    """
    Normalize and validate a project name.

    The name is stripped and lowercased, then must consist only of
    lowercase letters, digits and hyphens. It becomes both the directory
    name and the ``name`` field of package.json.

    Parameters
    ----------
    raw : str
        Name as typed by the user.

    Returns
    -------
    str
        The normalized name.

    Raises
    ------
    InvalidNameError
        If the name is empty or contains other characters.

    Examples
    --------
    >>> validate_project_name("  My-App ")
    'my-app'
    """
    name = raw.strip().lower()

    if not name:
        raise InvalidNameError("Please provide a project name.")

    if not PROJECT_NAME_PATTERN.match(name):
        raise InvalidNameError(
            f"Invalid project name '{raw.strip()}'. Names may only contain "
            "lowercase letters, numbers and hyphens."
        )

    return name


# =============================================================================
# Enumerations
# =============================================================================

class PackageManager(str, Enum):
    """
    JavaScript package managers that can install the template's dependencies.

    Every manager installs the same dependency set; only the invocation
    differs. npm uses ``npm install <pkg>`` to add packages while the others
    use ``<pm> add <pkg>``.
    """

    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"
    BUN = "bun"

    @property
    def executable(self) -> str:
        """Name of the executable to invoke."""
        return self.value

    @property
    def lockfiles(self) -> tuple[str, ...]:
        """
        Lockfile names written by this package manager.

        Returns
        -------
        tuple[str, ...]
            File names relative to the project root.
        """
        lockfiles = {
            PackageManager.NPM: ("package-lock.json",),
            PackageManager.PNPM: ("pnpm-lock.yaml",),
            PackageManager.YARN: ("yarn.lock",),
            PackageManager.BUN: ("bun.lockb", "bun.lock"),
        }
        return lockfiles[self]

    def install_command(self) -> list[str]:
        """Command that installs everything declared in package.json."""
        return [self.executable, "install"]

    def add_command(self, packages: Iterable[str], *, dev: bool = False) -> list[str]:
        """
        Build the command that adds packages to the project.

        Parameters
        ----------
        packages : Iterable[str]
            npm package names, in the order they should be passed.

        dev : bool, default=False
            Save as development dependencies.

        Returns
        -------
        list[str]
            Argument vector suitable for ``subprocess.run``.

        Examples
        --------
        >>> PackageManager.NPM.add_command(["i18next"])
        ['npm', 'install', 'i18next']
        >>> PackageManager.BUN.add_command(["i18next"], dev=True)
        ['bun', 'add', '-D', 'i18next']
        """
        verb = "install" if self is PackageManager.NPM else "add"
        command = [self.executable, verb]
        if dev:
            command.append("-D")
        command.extend(packages)
        return command

    def run_command(self, script: str) -> str:
        """
        Shell line that runs a package.json script, for user-facing hints.

        npm needs the explicit ``run`` verb; the others accept the script
        name directly.
        """
        if self is PackageManager.NPM:
            return f"npm run {script}"
        return f"{self.executable} {script}"


class Feature(str, Enum):
    """
    Optional features that can be composed into the generated project.

    Attributes
    ----------
    TAILWIND : str
        Tailwind CSS v4 through the official Vite plugin.

    I18N : str
        i18next with browser language detection, English and Turkish
        resources.

    AUTH_PAGES : str
        Placeholder login and register routes under an auth layout.

    DATA_FETCHING : str
        TanStack Query client, provider and devtools.
    """

    TAILWIND = "tailwind"
    I18N = "i18n"
    AUTH_PAGES = "auth-pages"
    DATA_FETCHING = "data-fetching"

    @property
    def description(self) -> str:
        """Human-readable label for prompts and summaries."""
        descriptions = {
            Feature.TAILWIND: "Tailwind CSS",
            Feature.I18N: "i18n (i18next, English + Turkish)",
            Feature.AUTH_PAGES: "Authentication pages (login/register)",
            Feature.DATA_FETCHING: "Data fetching (TanStack Query)",
        }
        return descriptions[self]

    @classmethod
    def in_composition_order(cls, features: Iterable[Feature]) -> list[Feature]:
        """
        Sort features in the order their composers must run.

        Both the data-fetching and i18n composers wrap the router output in a
        provider; running them in a fixed order keeps the nesting stable.
        """
        wanted = set(features)
        return [feature for feature in COMPOSITION_ORDER if feature in wanted]


COMPOSITION_ORDER: tuple[Feature, ...] = (
    Feature.TAILWIND,
    Feature.DATA_FETCHING,
    Feature.I18N,
    Feature.AUTH_PAGES,
)


# =============================================================================
# Main Options Model
# =============================================================================

class ProjectOptions(BaseModel):
    """
    Validated options for a single scaffolding run.

    The model is frozen: once the resolver has built it, no stage can change
    the name, package manager or feature set.

    Attributes
    ----------
    name : str
        Project and directory name (lowercase letters, digits, hyphens).

    package_manager : PackageManager
        Manager used for every install step.

    features : frozenset[Feature]
        Features to compose after the base install.

    init_git : bool
        Reinitialize git with a single commit at the end.

    output_dir : Path
        Directory in which the project directory is created.

    template_url : str
        Git URL of the template repository.

    verbose : bool
        Show subprocess output instead of suppressing it.

    Examples
    --------
    >>> options = ProjectOptions(name="My-App")
    >>> options.name
    'my-app'
    >>> options.package_manager
    <PackageManager.PNPM: 'pnpm'>
    """

    model_config = ConfigDict(frozen=True)

    name: Annotated[str, Field(
        description="Project name (directory and package.json name)",
        max_length=214,
    )]
    package_manager: PackageManager = Field(
        default=PackageManager.PNPM,
        description="Package manager used to install dependencies",
    )
    features: frozenset[Feature] = Field(
        default_factory=frozenset,
        description="Optional features to compose",
    )
    init_git: bool = Field(
        default=True,
        description="Reinitialize git with an initial commit",
    )
    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory where the project will be created",
    )
    template_url: str = Field(
        default=DEFAULT_TEMPLATE_URL,
        description="Git URL of the template repository",
    )
    verbose: bool = Field(
        default=False,
        description="Show output of git and the package manager",
    )

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v: object) -> object:
        """Apply the project name rules (see ``validate_project_name``)."""
        if isinstance(v, str):
            return validate_project_name(v)
        return v

    @property
    def project_dir(self) -> Path:
        """
        Full path to the project directory.

        Returns
        -------
        Path
            output_dir / name
        """
        return self.output_dir / self.name

    @property
    def ordered_features(self) -> list[Feature]:
        """Enabled features in composition order."""
        return Feature.in_composition_order(self.features)

    def has(self, feature: Feature) -> bool:
        """Whether ``feature`` is enabled."""
        return feature in self.features
