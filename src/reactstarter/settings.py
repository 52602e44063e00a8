"""
reactstarter.settings - User Configuration
==========================================

Defaults for the CLI can be stored in a TOML file so that teams using a
fork of the template, or a different package manager, do not have to pass
the same flags every time.

Lookup order
------------
1. The file given with ``--config``
2. ``./react-starter.toml``
3. ``~/.config/react-starter/config.toml``

Environment variables override whatever the file says:

- ``REACT_STARTER_TEMPLATE``: template repository URL
- ``REACT_STARTER_PM``: default package manager

Example file
------------
.. code-block:: toml

    template_url = "https://github.com/acme/react-starter"
    package_manager = "bun"
    features = ["tailwind", "data-fetching"]
    init_git = false
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from reactstarter.errors import StarterError
from reactstarter.models import DEFAULT_TEMPLATE_URL, Feature, PackageManager


try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found,no-redef]


CONFIG_FILENAME = "react-starter.toml"

ENV_TEMPLATE = "REACT_STARTER_TEMPLATE"
ENV_PACKAGE_MANAGER = "REACT_STARTER_PM"


class StarterSettings(BaseModel):
    """
    Defaults applied before command-line flags.

    Attributes
    ----------
    template_url : str
        Git URL cloned for every new project.

    package_manager : PackageManager
        Manager used when ``--pm`` is not given.

    features : list[Feature]
        Features enabled in addition to the ones passed on the command line.

    init_git : bool
        Whether to create a fresh git repository by default.
    """

    template_url: str = Field(
        default=DEFAULT_TEMPLATE_URL,
        description="Template repository URL",
        min_length=1,
    )
    package_manager: PackageManager = Field(
        default=PackageManager.PNPM,
        description="Default package manager",
    )
    features: list[Feature] = Field(
        default_factory=list,
        description="Features enabled by default",
    )
    init_git: bool = Field(
        default=True,
        description="Initialize git by default",
    )

    @field_validator("package_manager", mode="before")
    @classmethod
    def lowercase_package_manager(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @classmethod
    def from_toml(cls, path: Path) -> StarterSettings:
        """
        Load settings from a TOML file.

        Parameters
        ----------
        path : Path
            Path to the TOML configuration file.

        Returns
        -------
        StarterSettings
            Validated settings.

        Raises
        ------
        StarterError
            If the file cannot be read, is not valid TOML, or has invalid
            values.
        """
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise StarterError(f"Could not read config file {path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise StarterError(f"Invalid TOML in {path}: {e}") from e

        try:
            return cls(**data)
        except ValidationError as e:
            raise StarterError(f"Invalid settings in {path}:\n{e}") from e


def default_config_paths(cwd: Path | None = None) -> list[Path]:
    """Candidate config files, most specific first."""
    cwd = cwd or Path.cwd()
    return [
        cwd / CONFIG_FILENAME,
        Path.home() / ".config" / "react-starter" / "config.toml",
    ]


def load_settings(
    config_path: Path | None = None,
    *,
    cwd: Path | None = None,
    environ: dict[str, str] | None = None,
) -> StarterSettings:
    """
    Resolve settings from file and environment.

    Parameters
    ----------
    config_path : Path | None
        Explicit config file. It must exist.

    cwd : Path | None
        Directory searched for ``react-starter.toml`` (default: cwd).

    environ : dict[str, str] | None
        Environment mapping (default: ``os.environ``).

    Returns
    -------
    StarterSettings
        Settings with environment overrides applied.

    Raises
    ------
    StarterError
        If an explicit config file is missing or any source is invalid.
    """
    environ = os.environ if environ is None else environ

    if config_path is not None:
        if not config_path.is_file():
            raise StarterError(f"Config file not found: {config_path}")
        settings = StarterSettings.from_toml(config_path)
    else:
        settings = StarterSettings()
        for candidate in default_config_paths(cwd):
            if candidate.is_file():
                settings = StarterSettings.from_toml(candidate)
                break

    overrides: dict[str, str] = {}
    if environ.get(ENV_TEMPLATE):
        overrides["template_url"] = environ[ENV_TEMPLATE]
    if environ.get(ENV_PACKAGE_MANAGER):
        overrides["package_manager"] = environ[ENV_PACKAGE_MANAGER]

    if not overrides:
        return settings

    try:
        return StarterSettings(**{**settings.model_dump(), **overrides})
    except ValidationError as e:
        raise StarterError(f"Invalid environment override:\n{e}") from e
